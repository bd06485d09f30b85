"""Modelos de dominio de la auditoría y eventos del stream de ejecución."""

from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from app.core.exceptions import DispositionOverrideError
from skills.policy_evaluator import Disposition

LogLevel = Literal["info", "warning", "error", "success"]
RunStatus = Literal["completed", "failed"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Supplier(BaseModel):
    """Proveedor descubierto. Inmutable durante toda la corrida."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    industry: str = Field(default="Unknown")
    location: str = Field(default="Unknown")
    estimated_emissions: float = Field(description="Emisiones normalizadas, nominalmente en [0, 1]")
    compliance_flags: int = Field(default=0, description="Cantidad de flags de compliance, nominalmente 0-5")


class RiskSignals(BaseModel):
    """Indicadores de riesgo externo de un proveedor."""

    model_config = ConfigDict(frozen=True)

    adverse_media: bool = False
    regulatory_action: bool = False
    safety_violation: bool = False
    esg_controversies: bool = False
    details: tuple[str, ...] = Field(default=(), description="Hallazgos en texto libre, en orden")


class AuditRecord(BaseModel):
    """Resultado de auditoría de un proveedor."""

    model_config = ConfigDict(frozen=True)

    supplier_id: str
    supplier_name: str
    risk_signals: RiskSignals
    emissions_normalized: float
    risk_score: float = Field(ge=0.0, le=1.0)
    status: Disposition
    audit_timestamp: datetime = Field(default_factory=utc_now)

    @property
    def awaiting_decision(self) -> bool:
        return self.status == Disposition.HITL_TRIGGERED

    def resolve(self, approved: bool) -> "AuditRecord":
        """Aplica la decisión del revisor. Solo válido sobre registros HITL_Triggered."""
        if not self.awaiting_decision:
            raise DispositionOverrideError(self.supplier_id, self.status.value)
        status = Disposition.APPROVED if approved else Disposition.REJECTED
        return self.model_copy(update={"status": status})


class PendingDecision(BaseModel):
    """Registro a la espera de decisión humana, ligado a un token de un solo uso."""

    model_config = ConfigDict(frozen=True)

    token: str
    run_id: str
    record: AuditRecord
    opened_at: datetime = Field(default_factory=utc_now)


# =============================================================================
# EVENTOS DEL STREAM
# =============================================================================


class LogEvent(BaseModel):
    kind: Literal["log"] = "log"
    model_config = ConfigDict(frozen=True)

    agent: str
    message: str
    level: LogLevel = "info"
    timestamp: datetime = Field(default_factory=utc_now)


class ResultSnapshot(BaseModel):
    """Registros finalizados hasta el momento, en el orden de entrada."""

    kind: Literal["snapshot"] = "snapshot"
    model_config = ConfigDict(frozen=True)

    records: tuple[AuditRecord, ...] = ()
    total_suppliers: int = 0


class DecisionRequired(BaseModel):
    kind: Literal["decision_required"] = "decision_required"
    model_config = ConfigDict(frozen=True)

    pending: PendingDecision


class ReportReady(BaseModel):
    kind: Literal["report"] = "report"
    model_config = ConfigDict(frozen=True)

    company_id: str
    report: str


class AuditCompleted(BaseModel):
    """Evento terminal de la corrida."""

    kind: Literal["completed"] = "completed"
    model_config = ConfigDict(frozen=True)

    run_id: str
    status: RunStatus
    records: tuple[AuditRecord, ...] = ()
    report: str | None = None
    error: str | None = None


AuditEvent = Annotated[
    Union[LogEvent, ResultSnapshot, DecisionRequired, ReportReady, AuditCompleted],
    Field(discriminator="kind"),
]
