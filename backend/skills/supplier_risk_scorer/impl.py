"""
Supplier Risk Scorer - Implementation

Deterministic supplier risk scoring:
- Emissions clamped to [0, 1]
- Compliance flags normalized against a fixed ceiling
- External signals as the fraction of active indicators
- Weighted sum rounded half-up to 3 decimals

Author: Supply Chain Audit Team
"""

import logging
import math
from typing import Optional

from .definition import (
    SIGNAL_FIELDS,
    RiskScoreBreakdown,
    ScoringWeights,
    SignalFlags,
    SupplierProfile,
)

logger = logging.getLogger(__name__)


DEFAULT_WEIGHTS = ScoringWeights()

# Decimales conservados en el score final
SCORE_PRECISION = 3


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """Acota un valor al rango [lower, upper]. NaN se trata como lower."""
    if math.isnan(value):
        return lower
    return min(max(value, lower), upper)


def round_half_up(value: float, digits: int = SCORE_PRECISION) -> float:
    """Redondeo hacia arriba en el punto medio (round() de Python es bancario)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def count_active_signals(signals: SignalFlags) -> int:
    """Cantidad de indicadores booleanos activos."""
    return sum(1 for name in SIGNAL_FIELDS if getattr(signals, name))


class SupplierRiskScorer:
    """
    Deterministic supplier risk calculator.

    Pure and side-effect free: the same supplier and signals always yield
    the same score. Bad inputs are clamped, never rejected.

    Usage:
        scorer = SupplierRiskScorer()
        score = scorer.score(supplier, signals)

        breakdown = scorer.breakdown(supplier, signals)
        print(breakdown.emissions_score, breakdown.total)
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        """
        Initialize the scorer.

        Args:
            weights: Scoring weights (default: 0.4 / 0.3 / 0.3, 5 flags)
        """
        self.weights = weights or DEFAULT_WEIGHTS

    def breakdown(
        self,
        supplier: SupplierProfile,
        signals: SignalFlags,
    ) -> RiskScoreBreakdown:
        """
        Compute every component of the score.

        Args:
            supplier: Object exposing estimated_emissions and compliance_flags.
            signals: Object exposing the four boolean risk indicators.

        Returns:
            RiskScoreBreakdown with component scores and the rounded total.
        """
        emissions_score = clamp(float(supplier.estimated_emissions))
        compliance_score = clamp(supplier.compliance_flags / self.weights.max_compliance_flags)
        signal_count = count_active_signals(signals)
        signals_score = signal_count / len(SIGNAL_FIELDS)

        total = (
            self.weights.emissions * emissions_score
            + self.weights.compliance * compliance_score
            + self.weights.signals * signals_score
        )

        return RiskScoreBreakdown(
            emissions_score=emissions_score,
            compliance_score=compliance_score,
            signals_score=signals_score,
            signal_count=signal_count,
            total=clamp(round_half_up(total)),
        )

    def score(self, supplier: SupplierProfile, signals: SignalFlags) -> float:
        """Return only the rounded risk score in [0, 1]."""
        result = self.breakdown(supplier, signals)
        logger.debug(
            "Risk score %.3f (emissions=%.3f compliance=%.3f signals=%d/%d)",
            result.total,
            result.emissions_score,
            result.compliance_score,
            result.signal_count,
            len(SIGNAL_FIELDS),
        )
        return result.total


def calculate_risk_score(
    supplier: SupplierProfile,
    signals: SignalFlags,
    weights: Optional[ScoringWeights] = None,
) -> float:
    """
    Convenience function for one-off scoring.

    Args:
        supplier: Supplier emissions and compliance data.
        signals: External risk indicators.
        weights: Optional custom weights.

    Returns:
        Risk score rounded to 3 decimals.
    """
    return SupplierRiskScorer(weights=weights).score(supplier, signals)
