"""
Grafo LangGraph del pipeline de auditoría de un proveedor.

El engine lo invoca una vez por proveedor, en orden, pasando el
AuditRunContext en config["configurable"]["run"].
"""

from langgraph.graph import END, START, StateGraph

from app.agents.nodes import (
    await_decision_node,
    evaluate_policy_node,
    finalize_node,
    gather_signals_node,
    route_after_policy,
    score_node,
)
from app.agents.state import SupplierAuditState

workflow = StateGraph(SupplierAuditState)

workflow.add_node("gather_signals", gather_signals_node)
workflow.add_node("score", score_node)
workflow.add_node("evaluate_policy", evaluate_policy_node)
workflow.add_node("await_decision", await_decision_node)  # HITL: suspende hasta la decisión
workflow.add_node("finalize", finalize_node)

# Flujo principal
workflow.add_edge(START, "gather_signals")
workflow.add_edge("gather_signals", "score")
workflow.add_edge("score", "evaluate_policy")

# Solo HITL_Triggered pasa por la espera del revisor
workflow.add_conditional_edges(
    "evaluate_policy",
    route_after_policy,
    {
        "await_decision": "await_decision",
        "finalize": "finalize",
    },
)
workflow.add_edge("await_decision", "finalize")
workflow.add_edge("finalize", END)

supplier_pipeline = workflow.compile()
