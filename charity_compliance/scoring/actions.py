"""Action items and score trend for the compliance statistics view."""

from __future__ import annotations

from charity_compliance.config import SCORING, STANDARD_TRANSFER_METHODS, ScoringConfig
from charity_compliance.models import (
    ActionItem,
    ComplianceInputs,
    ComplianceScores,
    Priority,
    ScoreTrend,
    TrendDirection,
)

_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


def build_action_items(
    scores: ComplianceScores,
    inputs: ComplianceInputs,
    config: ScoringConfig = SCORING,
) -> list[ActionItem]:
    """Concrete follow-ups for every domain scoring under the action threshold."""
    items: list[ActionItem] = []
    breakdown = scores.breakdown

    if scores.safeguarding < config.action_item_threshold:
        expired = breakdown.safeguarding.expired_records
        expiring = breakdown.safeguarding.expiring_records
        if expired > 0:
            items.append(ActionItem(
                category="safeguarding",
                priority=Priority.HIGH,
                title="Expired DBS Checks",
                description=f"{expired} DBS check(s) have expired and need immediate renewal",
                count=expired,
            ))
        if expiring > 0:
            items.append(ActionItem(
                category="safeguarding",
                priority=Priority.MEDIUM,
                title="DBS Checks Expiring Soon",
                description=(
                    f"{expiring} DBS check(s) expire within "
                    f"{config.expiry_warning_days} days"
                ),
                count=expiring,
            ))

    if scores.overseas < config.action_item_threshold:
        risky = sum(
            1 for a in inputs.overseas_activities
            if a.transfer_method is not None
            and a.transfer_method.value not in STANDARD_TRANSFER_METHODS
        )
        if risky > 0:
            items.append(ActionItem(
                category="overseas",
                priority=Priority.HIGH,
                title="High-Risk Transfer Methods",
                description=f"{risky} transfer(s) use non-standard methods requiring documentation",
                count=risky,
            ))
        high_risk = breakdown.overseas.high_risk_activities
        if high_risk > 0:
            items.append(ActionItem(
                category="overseas",
                priority=Priority.MEDIUM,
                title="High Risk Overseas Activities",
                description=f"{high_risk} high-risk overseas activities to review and mitigate",
                count=high_risk,
            ))

    if scores.income < config.action_item_threshold:
        uncategorised = sum(1 for r in inputs.income_records if r.source is None)
        if uncategorised > 0:
            items.append(ActionItem(
                category="income",
                priority=Priority.MEDIUM,
                title="Uncategorised Income",
                description=f"{uncategorised} income record(s) need proper categorisation",
                count=uncategorised,
            ))

    # sorted() is stable, so insertion order holds within a priority
    return sorted(items, key=lambda item: _PRIORITY_ORDER[item.priority])


def score_trend(current: int, previous: int | None) -> ScoreTrend | None:
    if previous is None:
        return None

    change = round(float(current - previous), 1)
    if abs(change) < 1:
        direction = TrendDirection.STABLE
    elif change > 0:
        direction = TrendDirection.UP
    else:
        direction = TrendDirection.DOWN

    return ScoreTrend(previous=previous, change=change, direction=direction)
