"""Nodo de cálculo del risk score determinista."""

from langchain_core.runnables import RunnableConfig

from app.agents.state import RISK_SCORER, SupplierAuditState, SupplierStage, advance, get_run_context
from app.core.logging import AgentLogger

logger = AgentLogger("audit_graph")


async def score_node(state: SupplierAuditState, config: RunnableConfig) -> dict:
    run = get_run_context(config)
    logger.node_enter("score", state)

    breakdown = run.scorer.breakdown(state["supplier"], state["signals"])
    run.log(RISK_SCORER, f"Computed risk score: {breakdown.total}")

    stage = advance(state, SupplierStage.SCORED)
    logger.node_exit(
        "score",
        f"total={breakdown.total} (emissions={breakdown.emissions_score:.3f}, "
        f"compliance={breakdown.compliance_score:.3f}, signals={breakdown.signal_count})",
    )
    return {"risk_score": breakdown.total, "stage": stage}
