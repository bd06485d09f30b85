"""
Unit tests for the policy evaluator skill.

Tests the threshold bands, their inclusive lower bounds and the handling of
out-of-range scores.
"""

import math

import pytest
from pydantic import ValidationError

from skills.policy_evaluator import (
    DISPOSITION_SEVERITY,
    Disposition,
    PolicyEvaluator,
    PolicyThresholds,
    evaluate_policy,
)


class TestThresholdBands:
    @pytest.mark.parametrize(
        "score,expected",
        [
            (0.0, Disposition.APPROVED),
            (0.49999, Disposition.APPROVED),
            (0.5, Disposition.REVIEW),
            (0.515, Disposition.REVIEW),
            (0.79999, Disposition.REVIEW),
            (0.8, Disposition.HITL_TRIGGERED),
            (1.0, Disposition.HITL_TRIGGERED),
        ],
    )
    def test_band_boundaries(self, score, expected):
        assert evaluate_policy(score) == expected

    def test_never_returns_rejected(self):
        policy = PolicyEvaluator()
        scores = [i / 1000 for i in range(-100, 1101)]

        assert Disposition.REJECTED not in {policy.evaluate(s) for s in scores}

    def test_severity_is_monotonic_in_score(self):
        policy = PolicyEvaluator()
        severities = [DISPOSITION_SEVERITY[policy.evaluate(i / 1000)] for i in range(0, 1001)]

        assert severities == sorted(severities)


class TestOutOfRangeScores:
    def test_negative_score_is_approved(self):
        assert evaluate_policy(-0.3) == Disposition.APPROVED

    def test_score_above_one_triggers_hitl(self):
        assert evaluate_policy(7.5) == Disposition.HITL_TRIGGERED

    def test_nan_escalates_to_hitl(self):
        assert evaluate_policy(math.nan) == Disposition.HITL_TRIGGERED


class TestHumanReview:
    def test_only_hitl_requires_human_review(self):
        assert PolicyEvaluator.requires_human_review(Disposition.HITL_TRIGGERED) is True
        for disposition in (Disposition.APPROVED, Disposition.REVIEW, Disposition.REJECTED):
            assert PolicyEvaluator.requires_human_review(disposition) is False


class TestPolicyThresholds:
    def test_defaults(self):
        thresholds = PolicyThresholds()

        assert thresholds.review_threshold == 0.5
        assert thresholds.hitl_threshold == 0.8

    def test_review_must_be_below_hitl(self):
        with pytest.raises(ValidationError):
            PolicyThresholds(review_threshold=0.8, hitl_threshold=0.5)

    def test_custom_thresholds(self):
        policy = PolicyEvaluator(PolicyThresholds(review_threshold=0.3, hitl_threshold=0.6))

        assert policy.evaluate(0.29) == Disposition.APPROVED
        assert policy.evaluate(0.3) == Disposition.REVIEW
        assert policy.evaluate(0.6) == Disposition.HITL_TRIGGERED

    def test_disposition_values_are_wire_strings(self):
        assert Disposition.HITL_TRIGGERED.value == "HITL_Triggered"
        assert Disposition("Approved") is Disposition.APPROVED
