"""JSON snapshot loader: records, country table, and as-of time for one organisation."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError, field_validator

from charity_compliance.models import ComplianceInputs, Country, as_utc

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """The snapshot file is missing, unreadable, or malformed."""


class ComplianceSnapshot(ComplianceInputs):
    countries: list[Country] = []
    as_of: datetime | None = None
    previous_score: int | None = None

    @field_validator("as_of")
    @classmethod
    def _as_of_utc(cls, value: datetime | None) -> datetime | None:
        return None if value is None else as_utc(value)

    @property
    def inputs(self) -> ComplianceInputs:
        return ComplianceInputs(
            safeguarding_records=self.safeguarding_records,
            overseas_activities=self.overseas_activities,
            income_records=self.income_records,
        )


def parse_snapshot(data: dict) -> ComplianceSnapshot:
    try:
        return ComplianceSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"invalid snapshot: {e}") from e


def load_snapshot(path: str | Path) -> ComplianceSnapshot:
    """Read and validate a snapshot file."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotError(f"cannot read snapshot {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"snapshot {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError(f"snapshot {path} must be a JSON object")

    snapshot = parse_snapshot(data)
    logger.info(
        "loaded %s: %d safeguarding, %d overseas, %d income, %d countries",
        path.name,
        len(snapshot.safeguarding_records),
        len(snapshot.overseas_activities),
        len(snapshot.income_records),
        len(snapshot.countries),
    )
    return snapshot
