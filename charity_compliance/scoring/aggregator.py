"""Weighted overall score and level classification."""

from __future__ import annotations

import math

from charity_compliance.config import LEVEL_MESSAGES, SCORING, ScoringConfig
from charity_compliance.models import ComplianceLevel


def round_half_up(value: float) -> int:
    """Round .5 towards +inf (Python's round() would send 2.5 to 2)."""
    return math.floor(value + 0.5)


def clamp_score(score: float) -> int:
    """Clamp into [0, 100]."""
    return int(min(100, max(0, score)))


def overall_score(
    safeguarding: int, overseas: int, income: int, config: ScoringConfig = SCORING
) -> int:
    """Weighted sum of the three domain scores."""
    return round_half_up(
        safeguarding * config.safeguarding_weight
        + overseas * config.overseas_weight
        + income * config.income_weight
    )


def classify_level(score: int, config: ScoringConfig = SCORING) -> ComplianceLevel:
    if score >= config.excellent_threshold:
        return ComplianceLevel.EXCELLENT
    elif score >= config.good_threshold:
        return ComplianceLevel.GOOD
    elif score >= config.needs_attention_threshold:
        return ComplianceLevel.NEEDS_ATTENTION
    else:
        return ComplianceLevel.AT_RISK


def level_message(level: ComplianceLevel) -> str:
    return LEVEL_MESSAGES[level.value]
