from app.agents.audit_graph import supplier_pipeline
from app.agents.decision_gate import DecisionGate
from app.agents.engine import AuditWorkflowEngine
from app.agents.prompts import AVAILABLE_AGENTS
from app.agents.state import AuditRunContext, SupplierAuditState, SupplierStage

__all__ = [
    "AVAILABLE_AGENTS",
    "AuditRunContext",
    "AuditWorkflowEngine",
    "DecisionGate",
    "SupplierAuditState",
    "SupplierStage",
    "supplier_pipeline",
]
