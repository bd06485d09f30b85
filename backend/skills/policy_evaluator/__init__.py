"""
Policy Evaluator Skill

Threshold policy that turns supplier risk scores into dispositions.
"""

from .definition import (
    DISPOSITION_SEVERITY,
    Disposition,
    PolicyConfigurationError,
    PolicyThresholds,
)

from .impl import (
    DEFAULT_THRESHOLDS,
    PolicyEvaluator,
    evaluate_policy,
)

__all__ = [
    # Classes
    "PolicyEvaluator",
    # Models
    "Disposition",
    "PolicyThresholds",
    # Exceptions
    "PolicyConfigurationError",
    # Functions
    "evaluate_policy",
    # Constants
    "DEFAULT_THRESHOLDS",
    "DISPOSITION_SEVERITY",
]
