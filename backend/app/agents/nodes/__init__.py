"""Nodos del pipeline de auditoría por proveedor."""

from app.agents.nodes.decision import await_decision_node
from app.agents.nodes.finalize import finalize_node
from app.agents.nodes.gather_signals import gather_signals_node
from app.agents.nodes.policy import evaluate_policy_node, route_after_policy
from app.agents.nodes.score import score_node

__all__ = [
    "gather_signals_node",
    "score_node",
    "evaluate_policy_node",
    "route_after_policy",
    "await_decision_node",
    "finalize_node",
]
