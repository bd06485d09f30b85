"""
Supplier Risk Scorer Skill

Deterministic supplier risk scoring for the supply chain auditor.
Combines emissions, compliance flags and external risk signals.
"""

from .definition import (
    SIGNAL_FIELDS,
    InvalidScoringWeightsError,
    RiskScoreBreakdown,
    ScoringError,
    ScoringWeights,
    SignalFlags,
    SupplierProfile,
)

from .impl import (
    DEFAULT_WEIGHTS,
    SCORE_PRECISION,
    SupplierRiskScorer,
    calculate_risk_score,
    clamp,
    count_active_signals,
    round_half_up,
)

__all__ = [
    # Classes
    "SupplierRiskScorer",
    # Models
    "RiskScoreBreakdown",
    "ScoringWeights",
    # Protocols
    "SignalFlags",
    "SupplierProfile",
    # Exceptions
    "InvalidScoringWeightsError",
    "ScoringError",
    # Functions
    "calculate_risk_score",
    "clamp",
    "count_active_signals",
    "round_half_up",
    # Constants
    "DEFAULT_WEIGHTS",
    "SCORE_PRECISION",
    "SIGNAL_FIELDS",
]
