from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.audit import AuditRecord, LogEvent, PendingDecision, Supplier

SessionState = Literal["running", "awaiting_decision", "completed", "failed", "cancelled"]


class DiscoverResponse(BaseModel):
    company_id: str
    suppliers: list[Supplier]
    cached: bool = False
    fallback: bool = False


class StartAuditResponse(BaseModel):
    run_id: str
    company_id: str
    supplier_count: int


class AuditStatusResponse(BaseModel):
    run_id: str
    company_id: str
    state: SessionState
    total_suppliers: int
    records: list[AuditRecord] = Field(default_factory=list)
    logs: list[LogEvent] = Field(default_factory=list)
    pending_decision: PendingDecision | None = None
    report: str | None = None
    error: str | None = None


class DecisionResponse(BaseModel):
    accepted: bool
    run_id: str
