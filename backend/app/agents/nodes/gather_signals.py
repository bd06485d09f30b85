"""Nodo de recolección de señales de riesgo externas."""

from langchain_core.runnables import RunnableConfig

from app.agents.state import (
    ORCHESTRATOR,
    SIGNAL_MONITOR,
    SupplierAuditState,
    SupplierStage,
    advance,
    get_run_context,
)
from app.core.exceptions import AgentProcessingError
from app.core.logging import AgentLogger

logger = AgentLogger("audit_graph")


async def gather_signals_node(state: SupplierAuditState, config: RunnableConfig) -> dict:
    """Pide las señales al proveedor externo. Un proveedor que lanza aborta la corrida."""
    run = get_run_context(config)
    supplier = state["supplier"]
    logger.node_enter("gather_signals", state)

    run.log(ORCHESTRATOR, f"Processing {supplier.name}...")
    run.log(SIGNAL_MONITOR, f"Scanning risk signals for {supplier.name}...")

    try:
        signals = await run.signal_provider.retrieve_signals(supplier)
    except Exception as e:
        logger.error("gather_signals", e)
        raise AgentProcessingError(
            f"Signal retrieval failed for {supplier.name}",
            agent_name=SIGNAL_MONITOR,
            original_error=e,
        ) from e

    if signals.details:
        run.log(SIGNAL_MONITOR, f"Signals detected: {len(signals.details)}", "warning")

    stage = advance(state, SupplierStage.SIGNALS_GATHERED)
    logger.node_exit("gather_signals", f"{len(signals.details)} findings")
    logger.routing_decision("gather_signals", "score", "Signals ready - computing risk score")
    return {"signals": signals, "stage": stage}
