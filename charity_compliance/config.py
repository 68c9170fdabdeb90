"""Environment settings, level messages, and scoring configuration."""

import json
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

load_dotenv()

# --- Environment ---
LOG_LEVEL = os.getenv("COMPLIANCE_LOG_LEVEL", "WARNING")
SCORING_CONFIG_PATH = os.getenv("COMPLIANCE_SCORING_CONFIG") or None

# --- Level Messages ---
LEVEL_MESSAGES = {
    "excellent": "Your charity is fully compliant with all regulations",
    "good": "Good compliance standing with minor areas for improvement",
    "needs-attention": "Several compliance issues need your attention",
    "at-risk": "Urgent action required to meet compliance requirements",
}

# Transfer methods that need no extra documentation for overseas spend
STANDARD_TRANSFER_METHODS = frozenset({"bank_transfer", "wire_transfer"})


# --- Scoring Configuration ---
class ScoringConfig(BaseModel):
    """All domain weights, thresholds, penalties, and bonuses in one place."""

    # Domain weights (must sum to 1.0)
    safeguarding_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    overseas_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    income_weight: float = Field(default=0.3, ge=0.0, le=1.0)

    # Level thresholds (score >= threshold)
    excellent_threshold: int = 90
    good_threshold: int = 75
    needs_attention_threshold: int = 50

    # Safeguarding parameters
    expiry_warning_days: int = Field(default=30, ge=0)
    expiring_penalty: int = Field(default=10, ge=0)   # per check inside the warning window
    expired_penalty: int = Field(default=20, ge=0)    # per lapsed check

    # Overseas parameters
    unreported_penalty: int = Field(default=15, ge=0)        # per unreported high-risk activity
    sanctions_check_penalty: int = Field(default=10, ge=0)   # per missing sanctions screening

    # Income parameters
    documentation_points: int = Field(default=80, ge=0)      # awarded at 100% documented
    related_party_bonus: int = Field(default=20, ge=0)
    gift_aid_unclaimed_penalty: int = Field(default=5, ge=0)

    # Action items are raised for domains scoring below this
    action_item_threshold: int = 80

    @model_validator(mode="after")
    def _check_weights_and_thresholds(self) -> "ScoringConfig":
        total = self.safeguarding_weight + self.overseas_weight + self.income_weight
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"domain weights must sum to 1.0, got {total}")
        if not (
            self.excellent_threshold
            > self.good_threshold
            > self.needs_attention_threshold
        ):
            raise ValueError("level thresholds must be strictly descending")
        return self


SCORING = ScoringConfig()


def load_scoring_config(path: str | Path | None = None) -> ScoringConfig:
    """Read a JSON override file; keys not present keep their defaults.

    Falls back to ``COMPLIANCE_SCORING_CONFIG`` and then to ``SCORING``.
    """
    path = path or SCORING_CONFIG_PATH
    if path is None:
        return SCORING
    with open(path, encoding="utf-8") as f:
        overrides = json.load(f)
    return ScoringConfig.model_validate(overrides)
