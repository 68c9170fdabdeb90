"""Shared fixtures for compliance scoring tests.

Every test pins the clock to ``NOW``; the engine never reads the system time.
"""

from datetime import datetime, timedelta, timezone

import pytest

from charity_compliance.models import (
    CheckType,
    Country,
    IncomeRecord,
    OverseasActivity,
    RoleType,
    SafeguardingRecord,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_check():
    """Build a SafeguardingRecord expiring ``days`` from NOW."""

    def _make(days: float, **overrides) -> SafeguardingRecord:
        fields = dict(
            person_name="Test Person",
            role_type=RoleType.VOLUNTEER,
            dbs_check_type=CheckType.ENHANCED,
            expiry_date=NOW + timedelta(days=days),
        )
        fields.update(overrides)
        return SafeguardingRecord(**fields)

    return _make


@pytest.fixture
def make_activity():
    def _make(country_code: str, **overrides) -> OverseasActivity:
        fields = dict(country_code=country_code, amount=100_000)
        fields.update(overrides)
        return OverseasActivity(**fields)

    return _make


@pytest.fixture
def make_income():
    def _make(documented: bool = True, **overrides) -> IncomeRecord:
        fields = dict(
            amount=25_000,
            receipt_document_id="doc-1" if documented else None,
        )
        fields.update(overrides)
        return IncomeRecord(**fields)

    return _make


@pytest.fixture
def countries():
    """GB clean, AF high-risk, RU sanctioned, SY both."""
    return [
        Country(code="GB", name="United Kingdom"),
        Country(code="AF", name="Afghanistan", is_high_risk=True),
        Country(code="RU", name="Russia", sanctions_list=True),
        Country(code="SY", name="Syria", is_high_risk=True, sanctions_list=True),
    ]
