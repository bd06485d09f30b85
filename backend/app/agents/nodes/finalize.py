"""Nodo de cierre: agrega el registro al resultado y publica el snapshot."""

from langchain_core.runnables import RunnableConfig

from app.agents.state import SupplierAuditState, SupplierStage, advance, get_run_context
from app.core.logging import AgentLogger

logger = AgentLogger("audit_graph")


async def finalize_node(state: SupplierAuditState, config: RunnableConfig) -> dict:
    run = get_run_context(config)
    logger.node_enter("finalize", state)

    stage = advance(state, SupplierStage.FINALIZED)
    snapshot = run.finalize(state["record"])

    logger.node_exit("finalize", f"{len(snapshot.records)}/{snapshot.total_suppliers} suppliers finalized")
    return {"stage": stage}
