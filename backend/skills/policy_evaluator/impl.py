"""
Policy Evaluator - Implementation

Maps a supplier risk score to a disposition band.

Author: Supply Chain Audit Team
"""

import logging
from typing import Optional

from .definition import Disposition, PolicyThresholds

logger = logging.getLogger(__name__)


DEFAULT_THRESHOLDS = PolicyThresholds()


class PolicyEvaluator:
    """
    Threshold policy over risk scores.

    Total over any float: scores below 0 land in APPROVED, scores above 1
    in HITL_TRIGGERED, and NaN escalates to HITL_TRIGGERED. REJECTED is
    never returned here.

    Usage:
        policy = PolicyEvaluator()
        policy.evaluate(0.515)  # Disposition.REVIEW
    """

    def __init__(self, thresholds: Optional[PolicyThresholds] = None):
        self.thresholds = thresholds or DEFAULT_THRESHOLDS

    def evaluate(self, score: float) -> Disposition:
        if score < self.thresholds.review_threshold:
            return Disposition.APPROVED
        if score < self.thresholds.hitl_threshold:
            return Disposition.REVIEW
        # NaN falla ambas comparaciones y cae aqui
        return Disposition.HITL_TRIGGERED

    @staticmethod
    def requires_human_review(disposition: Disposition) -> bool:
        """True si la disposición suspende el pipeline."""
        return disposition == Disposition.HITL_TRIGGERED


def evaluate_policy(score: float, thresholds: Optional[PolicyThresholds] = None) -> Disposition:
    """Convenience function for one-off evaluation."""
    return PolicyEvaluator(thresholds=thresholds).evaluate(score)
