"""Nodo de evaluación de política y construcción del AuditRecord."""

from typing import Literal

from langchain_core.runnables import RunnableConfig

from app.agents.state import POLICY_EVALUATOR, SupplierAuditState, SupplierStage, advance, get_run_context
from app.core.logging import AgentLogger
from app.schemas.audit import AuditRecord
from skills.policy_evaluator import Disposition, PolicyEvaluator

logger = AgentLogger("audit_graph")


async def evaluate_policy_node(state: SupplierAuditState, config: RunnableConfig) -> dict:
    run = get_run_context(config)
    supplier = state["supplier"]
    logger.node_enter("evaluate_policy", state)

    disposition = run.policy.evaluate(state["risk_score"])
    level = "success" if disposition == Disposition.APPROVED else "warning"
    run.log(POLICY_EVALUATOR, f"Status: {disposition.value}", level)

    record = AuditRecord(
        supplier_id=supplier.id,
        supplier_name=supplier.name,
        risk_signals=state["signals"],
        emissions_normalized=supplier.estimated_emissions,
        risk_score=state["risk_score"],
        status=disposition,
    )

    stage = advance(state, SupplierStage.POLICY_EVALUATED)
    logger.node_exit("evaluate_policy", f"disposition={disposition.value}")
    return {"disposition": disposition, "record": record, "stage": stage}


def route_after_policy(state: SupplierAuditState) -> Literal["await_decision", "finalize"]:
    """Solo HITL_Triggered suspende el pipeline."""
    if PolicyEvaluator.requires_human_review(state["disposition"]):
        logger.routing_decision("evaluate_policy", "await_decision", "Score above HITL threshold - human review required")
        return "await_decision"
    logger.routing_decision("evaluate_policy", "finalize", f"Disposition {state['disposition'].value} - no review needed")
    return "finalize"
