"""
Estado del pipeline por proveedor (SupplierAuditState) y contexto de corrida.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, TypedDict

from langchain_core.runnables import RunnableConfig

from app.agents.base import ReportProvider, SignalProvider
from app.agents.decision_gate import DecisionGate
from app.core.exceptions import InvalidStageTransitionError
from app.schemas.audit import AuditRecord, LogEvent, LogLevel, ResultSnapshot, RiskSignals, Supplier
from skills.policy_evaluator import Disposition, PolicyEvaluator
from skills.supplier_risk_scorer import SupplierRiskScorer


# Componentes que firman los LogEvent del stream
ORCHESTRATOR = "Orchestrator"
DISCOVERY = "SupplierDiscoveryAgent"
SIGNAL_MONITOR = "SignalMonitor"
RISK_SCORER = "RiskScorer"
POLICY_EVALUATOR = "PolicyEvaluator"
REPORTING = "ReportingAgent"


class SupplierStage(str, Enum):
    PENDING = "Pending"
    SIGNALS_GATHERED = "SignalsGathered"
    SCORED = "Scored"
    POLICY_EVALUATED = "PolicyEvaluated"
    AWAITING_DECISION = "AwaitingDecision"
    FINALIZED = "Finalized"


# Transiciones válidas de la máquina de estados por proveedor
STAGE_TRANSITIONS: dict[SupplierStage, frozenset[SupplierStage]] = {
    SupplierStage.PENDING: frozenset({SupplierStage.SIGNALS_GATHERED}),
    SupplierStage.SIGNALS_GATHERED: frozenset({SupplierStage.SCORED}),
    SupplierStage.SCORED: frozenset({SupplierStage.POLICY_EVALUATED}),
    SupplierStage.POLICY_EVALUATED: frozenset({SupplierStage.FINALIZED, SupplierStage.AWAITING_DECISION}),
    SupplierStage.AWAITING_DECISION: frozenset({SupplierStage.FINALIZED}),
    SupplierStage.FINALIZED: frozenset(),
}


def advance(state: "SupplierAuditState", target: SupplierStage) -> SupplierStage:
    """Valida el paso al estado target y lo devuelve."""
    current = state["stage"]
    if target not in STAGE_TRANSITIONS[current]:
        raise InvalidStageTransitionError(current.value, target.value, state["supplier"].id)
    return target


class SupplierAuditState(TypedDict):
    run_id: str
    company_id: str
    supplier: Supplier
    supplier_name: str
    stage: SupplierStage
    signals: RiskSignals | None
    risk_score: float | None
    disposition: Disposition | None
    record: AuditRecord | None


def create_initial_state(run_id: str, company_id: str, supplier: Supplier) -> SupplierAuditState:
    """Crea el estado inicial para invocar el grafo de un proveedor."""
    return {
        "run_id": run_id,
        "company_id": company_id,
        "supplier": supplier,
        "supplier_name": supplier.name,
        "stage": SupplierStage.PENDING,
        "signals": None,
        "risk_score": None,
        "disposition": None,
        "record": None,
    }


@dataclass
class AuditRunContext:
    """
    Dependencias y sumidero de eventos de una corrida.

    Viaja en config["configurable"]["run"] para que los nodos del grafo
    sean funciones sin estado.
    """

    run_id: str
    company_id: str
    signal_provider: SignalProvider
    report_provider: ReportProvider
    scorer: SupplierRiskScorer
    policy: PolicyEvaluator
    gate: DecisionGate
    publish: Callable[[object], None]
    total_suppliers: int = 0
    logs: list[LogEvent] = field(default_factory=list)
    records: list[AuditRecord] = field(default_factory=list)

    def log(self, agent: str, message: str, level: LogLevel = "info") -> LogEvent:
        event = LogEvent(agent=agent, message=message, level=level)
        self.logs.append(event)
        self.publish(event)
        return event

    def finalize(self, record: AuditRecord) -> ResultSnapshot:
        """Agrega el registro final y publica el snapshot incremental."""
        self.records.append(record)
        snapshot = ResultSnapshot(records=tuple(self.records), total_suppliers=self.total_suppliers)
        self.publish(snapshot)
        return snapshot


def get_run_context(config: RunnableConfig) -> AuditRunContext:
    return config["configurable"]["run"]
