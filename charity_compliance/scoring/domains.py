"""Per-domain compliance scorers for safeguarding, overseas, and income (Strategy pattern)."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta

from pydantic import BaseModel

from charity_compliance.config import SCORING, ScoringConfig
from charity_compliance.models import (
    ComplianceInputs,
    Country,
    IncomeRecord,
    IncomeScore,
    OverseasActivity,
    OverseasScore,
    SafeguardingRecord,
    SafeguardingScore,
    as_utc,
)
from charity_compliance.scoring.aggregator import clamp_score, round_half_up

logger = logging.getLogger(__name__)

CountryIndex = Mapping[str, Country]


def build_country_index(countries: Iterable[Country] | CountryIndex) -> CountryIndex:
    """Key the reference table by country code. Prebuilt indexes pass through."""
    if isinstance(countries, Mapping):
        return countries
    return {c.code: c for c in countries}


class DomainScorer(ABC):
    """Base class: each scorer reduces one domain of records to a 0-100 score."""

    name: str = ""

    def __init__(self, config: ScoringConfig = SCORING) -> None:
        self.config = config

    @abstractmethod
    def evaluate(
        self, inputs: ComplianceInputs, countries: CountryIndex, now: datetime
    ) -> BaseModel: ...


class SafeguardingScorer(DomainScorer):
    """Background-check expiry. Lapsed and soon-to-lapse checks cost points.

    No active records at all scores 0: an organisation with nobody checked
    has a safeguarding gap, not a clean record.
    """

    name = "safeguarding"

    def evaluate(
        self, inputs: ComplianceInputs, countries: CountryIndex, now: datetime
    ) -> SafeguardingScore:
        return self.score(inputs.safeguarding_records, now)

    def score(self, records: Iterable[SafeguardingRecord], now: datetime) -> SafeguardingScore:
        now = as_utc(now)
        warning_date = now + timedelta(days=self.config.expiry_warning_days)

        total = valid = expiring = expired = inactive = 0
        for record in records:
            if not record.is_active:
                inactive += 1
                continue
            total += 1
            if record.expiry_date < now:
                expired += 1
            elif record.expiry_date < warning_date:
                expiring += 1
                valid += 1  # still valid, just not for long
            else:
                valid += 1

        if total == 0:
            score = 0
        else:
            score = clamp_score(
                100
                - expiring * self.config.expiring_penalty
                - expired * self.config.expired_penalty
            )

        logger.debug(
            "safeguarding: total=%d valid=%d expiring=%d expired=%d inactive=%d -> %d",
            total, valid, expiring, expired, inactive, score,
        )
        return SafeguardingScore(
            score=score,
            total_records=total,
            valid_records=valid,
            expiring_records=expiring,
            expired_records=expired,
            inactive_records=inactive,
        )


class OverseasScorer(DomainScorer):
    """Unreported high-risk spend and unscreened sanctioned destinations.

    No overseas activity scores 100, since there is nothing to report.
    """

    name = "overseas"

    def evaluate(
        self, inputs: ComplianceInputs, countries: CountryIndex, now: datetime
    ) -> OverseasScore:
        return self.score(inputs.overseas_activities, countries)

    def score(
        self,
        activities: Iterable[OverseasActivity],
        countries: Iterable[Country] | CountryIndex,
    ) -> OverseasScore:
        index = build_country_index(countries)

        total = high_risk = unreported = sanctions_required = 0
        unknown: set[str] = set()
        for activity in activities:
            total += 1
            country = index.get(activity.country_code)
            if country is None:
                unknown.add(activity.country_code)
                continue

            if country.is_high_risk:
                high_risk += 1
                if activity.requires_reporting and not activity.reported_to_commission:
                    unreported += 1

            # Not exclusive with the high-risk branch
            if country.sanctions_list and not activity.sanctions_check_completed:
                sanctions_required += 1

        if unknown:
            logger.debug("overseas: unresolved country codes %s", sorted(unknown))

        if total == 0:
            score = 100
        else:
            score = clamp_score(
                100
                - unreported * self.config.unreported_penalty
                - sanctions_required * self.config.sanctions_check_penalty
            )

        logger.debug(
            "overseas: total=%d high_risk=%d unreported=%d sanctions=%d -> %d",
            total, high_risk, unreported, sanctions_required, score,
        )
        return OverseasScore(
            score=score,
            total_activities=total,
            high_risk_activities=high_risk,
            unreported_activities=unreported,
            sanctions_check_required=sanctions_required,
        )


class IncomeScorer(DomainScorer):
    """Receipt coverage, related-party documentation, and unclaimed Gift Aid.

    No income records scores 0: no evidence of income is treated as a gap.
    """

    name = "income"

    def evaluate(
        self, inputs: ComplianceInputs, countries: CountryIndex, now: datetime
    ) -> IncomeScore:
        return self.score(inputs.income_records)

    def score(self, records: Iterable[IncomeRecord]) -> IncomeScore:
        total = documented = related = related_documented = gift_aid_unclaimed = 0
        for record in records:
            total += 1
            if record.is_documented:
                documented += 1
            if record.is_related_party:
                related += 1
                if record.is_documented:
                    related_documented += 1
            if record.gift_aid_eligible and not record.gift_aid_claimed:
                gift_aid_unclaimed += 1

        if total == 0:
            score = 0
        else:
            score = round_half_up(self.config.documentation_points * documented / total)
            if related_documented == related:  # also true when there are none
                score += self.config.related_party_bonus
            score -= gift_aid_unclaimed * self.config.gift_aid_unclaimed_penalty
            score = clamp_score(score)

        logger.debug(
            "income: total=%d documented=%d related=%d gift_aid_unclaimed=%d -> %d",
            total, documented, related, gift_aid_unclaimed, score,
        )
        return IncomeScore(
            score=score,
            total_records=total,
            documented_records=documented,
            related_party_records=related,
            gift_aid_eligible=gift_aid_unclaimed,
        )

