"""
Supplier Risk Scorer - Data Definitions

Pydantic models and protocols for deterministic supplier risk scoring.
The scorer only needs emissions, compliance flags and the four boolean
risk signals, so inputs are described structurally.

Author: Supply Chain Audit Team
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Los cuatro indicadores externos que cuentan para scoreSignals
SIGNAL_FIELDS: tuple[str, ...] = (
    "adverse_media",
    "regulatory_action",
    "safety_violation",
    "esg_controversies",
)


@runtime_checkable
class SupplierProfile(Protocol):
    """Datos del proveedor que intervienen en el score."""

    estimated_emissions: float
    compliance_flags: int


@runtime_checkable
class SignalFlags(Protocol):
    """Indicadores booleanos de riesgo externo."""

    adverse_media: bool
    regulatory_action: bool
    safety_violation: bool
    esg_controversies: bool


class ScoringError(Exception):
    """Base exception for the supplier risk scorer."""


class InvalidScoringWeightsError(ScoringError, ValueError):
    """Raised when scoring weights do not form a valid convex combination."""

    def __init__(self, total: float):
        self.total = total
        super().__init__(f"Scoring weights must sum to 1.0 (got {total:.4f})")


class ScoringWeights(BaseModel):
    """
    Pesos de la fórmula de riesgo.

    Los valores por defecto son la política vigente:
    0.4 emisiones, 0.3 compliance, 0.3 señales externas.
    """

    model_config = ConfigDict(frozen=True)

    emissions: float = Field(default=0.4, ge=0.0, le=1.0, description="Peso de las emisiones normalizadas.")
    compliance: float = Field(default=0.3, ge=0.0, le=1.0, description="Peso de los flags de compliance.")
    signals: float = Field(default=0.3, ge=0.0, le=1.0, description="Peso de las señales externas.")
    max_compliance_flags: int = Field(
        default=5,
        gt=0,
        description="Cantidad de flags que equivale a riesgo de compliance máximo.",
    )

    @model_validator(mode="after")
    def validate_total(self) -> "ScoringWeights":
        total = self.emissions + self.compliance + self.signals
        if abs(total - 1.0) > 1e-9:
            raise InvalidScoringWeightsError(total)
        return self


class RiskScoreBreakdown(BaseModel):
    """Contribución de cada componente al score final."""

    model_config = ConfigDict(frozen=True)

    emissions_score: float = Field(description="Emisiones acotadas a [0, 1].")
    compliance_score: float = Field(description="Flags normalizados a [0, 1].")
    signals_score: float = Field(description="Fracción de señales activas.")
    signal_count: int = Field(ge=0, le=len(SIGNAL_FIELDS))
    total: float = Field(ge=0.0, le=1.0, description="Score ponderado, redondeado a 3 decimales.")
