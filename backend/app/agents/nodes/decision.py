"""Nodo de suspensión HITL: único punto del sistema donde el pipeline se bloquea."""

from langchain_core.runnables import RunnableConfig

from app.agents.state import ORCHESTRATOR, SupplierAuditState, SupplierStage, advance, get_run_context
from app.core.logging import AgentLogger
from app.schemas.audit import DecisionRequired

logger = AgentLogger("audit_graph")


async def await_decision_node(state: SupplierAuditState, config: RunnableConfig) -> dict:
    run = get_run_context(config)
    record = state["record"]
    logger.node_enter("await_decision", state)

    run.log(ORCHESTRATOR, "HITL triggered. Pausing workflow for reviewer input.", "error")
    stage = advance(state, SupplierStage.AWAITING_DECISION)

    pending = run.gate.open(record, run.run_id)
    run.publish(DecisionRequired(pending=pending))
    logger.hitl_suspended(record.supplier_name, record.risk_score, pending.token)

    approved = await run.gate.wait(pending)

    resolved = record.resolve(approved)
    if approved:
        run.log(ORCHESTRATOR, f"Reviewer overrode HITL. {record.supplier_name} overridden and approved.", "success")
    else:
        run.log(ORCHESTRATOR, f"Reviewer confirmed rejection of {record.supplier_name}.", "error")
    logger.hitl_resolved(record.supplier_name, approved)

    logger.node_exit("await_decision", f"disposition={resolved.status.value}")
    return {"record": resolved, "disposition": resolved.status, "stage": stage}
