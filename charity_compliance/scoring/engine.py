"""Orchestrator: runs the domain scorers and produces ComplianceScores."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime

from charity_compliance.config import SCORING, ScoringConfig
from charity_compliance.models import (
    ComplianceInputs,
    ComplianceScores,
    ComplianceStatistics,
    Country,
    ScoreBreakdown,
    as_utc,
)
from charity_compliance.scoring.actions import build_action_items, score_trend
from charity_compliance.scoring.aggregator import classify_level, level_message, overall_score
from charity_compliance.scoring.domains import (
    CountryIndex,
    IncomeScorer,
    OverseasScorer,
    SafeguardingScorer,
    build_country_index,
)

logger = logging.getLogger(__name__)


class ComplianceEngine:
    """Score an organisation's records into one overall compliance posture.

    Stateless between calls: the clock and the country reference table are
    always passed in, so the same inputs always give an equal result.
    """

    def __init__(self, config: ScoringConfig = SCORING) -> None:
        self.config = config
        self.safeguarding = SafeguardingScorer(config)
        self.overseas = OverseasScorer(config)
        self.income = IncomeScorer(config)

    def calculate(
        self,
        inputs: ComplianceInputs,
        countries: Iterable[Country] | CountryIndex,
        now: datetime,
    ) -> ComplianceScores:
        index = build_country_index(countries)
        now = as_utc(now)

        breakdown = ScoreBreakdown(
            safeguarding=self.safeguarding.evaluate(inputs, index, now),
            overseas=self.overseas.evaluate(inputs, index, now),
            income=self.income.evaluate(inputs, index, now),
        )
        overall = overall_score(
            breakdown.safeguarding.score,
            breakdown.overseas.score,
            breakdown.income.score,
            self.config,
        )
        level = classify_level(overall, self.config)

        logger.debug("overall=%d level=%s", overall, level.value)
        return ComplianceScores(
            overall=overall,
            level=level,
            message=level_message(level),
            breakdown=breakdown,
        )

    def calculate_many(
        self,
        inputs_by_org: Mapping[str, ComplianceInputs],
        countries: Iterable[Country] | CountryIndex,
        now: datetime,
    ) -> dict[str, ComplianceScores]:
        """Score several organisations against one shared country table."""
        index = build_country_index(countries)
        return {
            org_id: self.calculate(inputs, index, now)
            for org_id, inputs in inputs_by_org.items()
        }

    def statistics(
        self,
        inputs: ComplianceInputs,
        countries: Iterable[Country] | CountryIndex,
        now: datetime,
        previous_score: int | None = None,
    ) -> ComplianceStatistics:
        """Scores plus per-domain levels, trend, and prioritised action items."""
        now = as_utc(now)
        scores = self.calculate(inputs, countries, now)

        return ComplianceStatistics(
            scores=scores,
            domain_levels={
                self.safeguarding.name: classify_level(scores.safeguarding, self.config),
                self.overseas.name: classify_level(scores.overseas, self.config),
                self.income.name: classify_level(scores.income, self.config),
            },
            trend=score_trend(scores.overall, previous_score),
            action_items=build_action_items(scores, inputs, self.config),
            as_of=now,
        )
