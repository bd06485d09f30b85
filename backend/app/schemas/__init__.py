from app.schemas.audit import (
    AuditCompleted,
    AuditEvent,
    AuditRecord,
    DecisionRequired,
    LogEvent,
    LogLevel,
    PendingDecision,
    ReportReady,
    ResultSnapshot,
    RiskSignals,
    Supplier,
)
from app.schemas.requests import DecisionRequest, DiscoverRequest, StartAuditRequest
from app.schemas.responses import (
    AuditStatusResponse,
    DecisionResponse,
    DiscoverResponse,
    StartAuditResponse,
)
from skills.policy_evaluator import Disposition

__all__ = [
    "AuditCompleted",
    "AuditEvent",
    "AuditRecord",
    "AuditStatusResponse",
    "DecisionRequest",
    "DecisionRequired",
    "DecisionResponse",
    "DiscoverRequest",
    "DiscoverResponse",
    "Disposition",
    "LogEvent",
    "LogLevel",
    "PendingDecision",
    "ReportReady",
    "ResultSnapshot",
    "RiskSignals",
    "StartAuditRequest",
    "StartAuditResponse",
    "Supplier",
]
