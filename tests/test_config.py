"""Tests for ScoringConfig validation and JSON overrides."""

import json

import pytest
from pydantic import ValidationError

from charity_compliance import config as config_module
from charity_compliance.config import SCORING, ScoringConfig, load_scoring_config


class TestScoringConfig:
    def test_defaults(self):
        assert SCORING.safeguarding_weight == 0.4
        assert SCORING.overseas_weight == 0.3
        assert SCORING.income_weight == 0.3
        assert SCORING.expiry_warning_days == 30
        assert SCORING.expiring_penalty == 10
        assert SCORING.expired_penalty == 20
        assert SCORING.unreported_penalty == 15
        assert SCORING.sanctions_check_penalty == 10
        assert SCORING.documentation_points == 80
        assert SCORING.related_party_bonus == 20
        assert SCORING.gift_aid_unclaimed_penalty == 5

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError, match="sum to 1.0"):
            ScoringConfig(safeguarding_weight=0.5)

    def test_negative_penalty_rejected(self):
        with pytest.raises(ValidationError):
            ScoringConfig(expired_penalty=-20)

    def test_thresholds_must_descend(self):
        with pytest.raises(ValidationError, match="descending"):
            ScoringConfig(good_threshold=95)


class TestLoadScoringConfig:
    def test_no_path_returns_default(self, monkeypatch):
        monkeypatch.setattr(config_module, "SCORING_CONFIG_PATH", None)
        assert load_scoring_config() is SCORING

    def test_partial_override(self, tmp_path):
        path = tmp_path / "scoring.json"
        path.write_text(json.dumps({"expired_penalty": 50, "expiry_warning_days": 14}))
        config = load_scoring_config(path)
        assert config.expired_penalty == 50
        assert config.expiry_warning_days == 14
        assert config.expiring_penalty == 10

    def test_env_path(self, tmp_path, monkeypatch):
        path = tmp_path / "scoring.json"
        path.write_text(json.dumps({"unreported_penalty": 25}))
        monkeypatch.setattr(config_module, "SCORING_CONFIG_PATH", str(path))
        assert load_scoring_config().unreported_penalty == 25

    def test_invalid_override(self, tmp_path):
        path = tmp_path / "scoring.json"
        path.write_text(json.dumps({"income_weight": 0.9}))
        with pytest.raises(ValidationError):
            load_scoring_config(path)
