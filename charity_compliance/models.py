"""Pydantic v2 models for compliance records, reference data, and score results."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, computed_field, field_validator


class CheckType(str, Enum):
    BASIC = "basic"
    STANDARD = "standard"
    ENHANCED = "enhanced"
    ENHANCED_BARRED = "enhanced_barred"


class RoleType(str, Enum):
    EMPLOYEE = "employee"
    VOLUNTEER = "volunteer"
    TRUSTEE = "trustee"
    CONTRACTOR = "contractor"


class TransferMethod(str, Enum):
    BANK_TRANSFER = "bank_transfer"
    WIRE_TRANSFER = "wire_transfer"
    CRYPTOCURRENCY = "cryptocurrency"
    CASH_COURIER = "cash_courier"
    MONEY_SERVICE_BUSINESS = "money_service_business"
    MOBILE_MONEY = "mobile_money"
    INFORMAL_VALUE_TRANSFER = "informal_value_transfer"
    OTHER = "other"


class IncomeSource(str, Enum):
    DONATIONS_LEGACIES = "donations_legacies"
    CHARITABLE_ACTIVITIES = "charitable_activities"
    OTHER_TRADING = "other_trading"
    INVESTMENTS = "investments"
    OTHER = "other"


class ComplianceLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_ATTENTION = "needs-attention"
    AT_RISK = "at-risk"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


def as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so comparisons never mix naive and aware."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


# Upstream rows store flags as nullable booleans; null means "unset".
FlagTrue = Annotated[bool, BeforeValidator(lambda v: True if v is None else v)]
FlagFalse = Annotated[bool, BeforeValidator(lambda v: False if v is None else v)]


# --- Input records ---

class SafeguardingRecord(BaseModel):
    person_name: str
    role_type: RoleType
    dbs_check_type: CheckType
    expiry_date: datetime
    is_active: FlagFalse = True  # null means unset, which is inactive
    role_title: str = ""
    issue_date: datetime | None = None

    @field_validator("expiry_date")
    @classmethod
    def _expiry_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class OverseasActivity(BaseModel):
    country_code: str
    amount: int  # smallest reporting currency unit
    requires_reporting: FlagTrue = True
    reported_to_commission: FlagFalse = False
    sanctions_check_completed: FlagFalse = False
    activity_name: str = ""
    transfer_method: TransferMethod | None = None


class IncomeRecord(BaseModel):
    amount: int  # smallest reporting currency unit
    receipt_document_id: str | None = None
    is_related_party: FlagFalse = False
    gift_aid_eligible: FlagFalse = False
    gift_aid_claimed: FlagFalse = False
    donor_name: str | None = None
    source: IncomeSource | None = None

    @property
    def is_documented(self) -> bool:
        return bool(self.receipt_document_id)


class Country(BaseModel):
    code: str
    name: str = ""
    is_high_risk: FlagFalse = False
    sanctions_list: FlagFalse = False


class ComplianceInputs(BaseModel):
    """The three record collections for one organisation."""

    safeguarding_records: list[SafeguardingRecord] = []
    overseas_activities: list[OverseasActivity] = []
    income_records: list[IncomeRecord] = []


# --- Score results ---

class SafeguardingScore(BaseModel):
    score: int
    total_records: int = 0
    valid_records: int = 0
    expiring_records: int = 0
    expired_records: int = 0
    inactive_records: int = 0


class OverseasScore(BaseModel):
    score: int
    total_activities: int = 0
    high_risk_activities: int = 0
    unreported_activities: int = 0
    sanctions_check_required: int = 0


class IncomeScore(BaseModel):
    score: int
    total_records: int = 0
    documented_records: int = 0
    related_party_records: int = 0
    gift_aid_eligible: int = 0  # eligible but not yet claimed


class ScoreBreakdown(BaseModel):
    safeguarding: SafeguardingScore
    overseas: OverseasScore
    income: IncomeScore


class ComplianceScores(BaseModel):
    overall: int
    level: ComplianceLevel
    message: str
    breakdown: ScoreBreakdown

    @computed_field  # type: ignore[prop-decorator]
    @property
    def safeguarding(self) -> int:
        return self.breakdown.safeguarding.score

    @computed_field  # type: ignore[prop-decorator]
    @property
    def overseas(self) -> int:
        return self.breakdown.overseas.score

    @computed_field  # type: ignore[prop-decorator]
    @property
    def income(self) -> int:
        return self.breakdown.income.score


class ActionItem(BaseModel):
    category: str  # "safeguarding" | "overseas" | "income"
    priority: Priority
    title: str
    description: str
    count: int


class ScoreTrend(BaseModel):
    previous: int
    change: float
    direction: TrendDirection


class ComplianceStatistics(BaseModel):
    scores: ComplianceScores
    domain_levels: dict[str, ComplianceLevel]
    trend: ScoreTrend | None = None
    action_items: list[ActionItem] = []
    as_of: datetime
