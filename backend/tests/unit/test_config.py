"""
Unit tests for Settings.
"""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


class TestSettings:
    def test_defaults_reproduce_current_policy(self):
        settings = Settings(groq_api_key="dummy")

        weights = settings.scoring_weights
        thresholds = settings.policy_thresholds

        assert (weights.emissions, weights.compliance, weights.signals) == (0.4, 0.3, 0.3)
        assert weights.max_compliance_flags == 5
        assert (thresholds.review_threshold, thresholds.hitl_threshold) == (0.5, 0.8)

    def test_session_retention_defaults(self):
        settings = Settings(groq_api_key="dummy")

        assert settings.audit_retention_seconds == 3600
        assert settings.max_finished_audits == 50

    def test_retention_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(groq_api_key="dummy", max_finished_audits=0)

    def test_exposes_only_domain_properties(self):
        properties = {name for name, value in vars(Settings).items() if isinstance(value, property)}

        assert properties == {"scoring_weights", "policy_thresholds"}
