"""
Policy Evaluator - Data Definitions

Disposition categories and policy thresholds for supplier risk scores.

Author: Supply Chain Audit Team
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Disposition(str, Enum):
    """
    Resultado de la evaluación de política para un proveedor.

    - APPROVED: Riesgo bajo, el proveedor pasa sin intervención
    - REVIEW: Riesgo moderado, queda marcado para revisión
    - HITL_TRIGGERED: Riesgo alto, requiere decisión humana
    - REJECTED: Solo alcanzable por decisión humana tras HITL_TRIGGERED
    """
    APPROVED = "Approved"
    REVIEW = "Review"
    HITL_TRIGGERED = "HITL_Triggered"
    REJECTED = "Rejected"


# Orden de severidad de las disposiciones que produce el evaluador
DISPOSITION_SEVERITY: dict[Disposition, int] = {
    Disposition.APPROVED: 0,
    Disposition.REVIEW: 1,
    Disposition.HITL_TRIGGERED: 2,
}


class PolicyConfigurationError(ValueError):
    """Raised when policy thresholds are inconsistent."""

    def __init__(self, review_threshold: float, hitl_threshold: float):
        self.review_threshold = review_threshold
        self.hitl_threshold = hitl_threshold
        super().__init__(
            f"review_threshold ({review_threshold}) must be lower than "
            f"hitl_threshold ({hitl_threshold})"
        )


class PolicyThresholds(BaseModel):
    """
    Umbrales de la política. El límite inferior de cada banda es inclusivo:
    0.5 pertenece a REVIEW y 0.8 a HITL_TRIGGERED.
    """

    model_config = ConfigDict(frozen=True)

    review_threshold: float = Field(default=0.5, gt=0.0, le=1.0)
    hitl_threshold: float = Field(default=0.8, gt=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_order(self) -> "PolicyThresholds":
        if self.review_threshold >= self.hitl_threshold:
            raise PolicyConfigurationError(self.review_threshold, self.hitl_threshold)
        return self
