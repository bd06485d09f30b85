"""
Audit Workflow Engine.

Drives a batch of suppliers strictly in sequence through the per-supplier
LangGraph pipeline and exposes the run as an async stream of events.

Example:
    engine = AuditWorkflowEngine(signal_provider=monitor, report_provider=reporter)

    async for event in engine.start_audit("Tata Motors", suppliers):
        if event.kind == "decision_required":
            engine.submit_decision(True, token=event.pending.token)
"""

import asyncio
from collections import Counter
from typing import AsyncIterator, Optional, Sequence
from uuid import uuid4

from app.agents.audit_graph import supplier_pipeline
from app.agents.base import ReportProvider, SignalProvider
from app.agents.decision_gate import DecisionGate
from app.agents.state import ORCHESTRATOR, REPORTING, AuditRunContext, create_initial_state
from app.core.exceptions import AuditInProgressError
from app.core.logging import AgentLogger
from app.schemas.audit import (
    AuditCompleted,
    AuditEvent,
    LogEvent,
    PendingDecision,
    ReportReady,
    ResultSnapshot,
    Supplier,
)
from skills.policy_evaluator import PolicyEvaluator
from skills.supplier_risk_scorer import SupplierRiskScorer

logger = AgentLogger("engine")

# Marca de fin de la cola de eventos
_END = object()


class AuditWorkflowEngine:
    """
    Orquestador de una corrida de auditoría.

    Una sola corrida activa por instancia. Los proveedores se procesan de a
    uno y el único punto de suspensión es la espera en la DecisionGate.
    """

    def __init__(
        self,
        signal_provider: SignalProvider,
        report_provider: ReportProvider,
        scorer: Optional[SupplierRiskScorer] = None,
        policy: Optional[PolicyEvaluator] = None,
        gate: Optional[DecisionGate] = None,
    ) -> None:
        self._signal_provider = signal_provider
        self._report_provider = report_provider
        self._scorer = scorer or SupplierRiskScorer()
        self._policy = policy or PolicyEvaluator()
        self._gate = gate or DecisionGate()
        self._active_run: str | None = None

    @property
    def active_run(self) -> str | None:
        return self._active_run

    @property
    def pending_decision(self) -> PendingDecision | None:
        return self._gate.pending

    def submit_decision(self, approved: bool, token: str | None = None) -> bool:
        """Reanuda el proveedor suspendido. No-op (False) si no hay nada pendiente."""
        return self._gate.submit(approved, token)

    async def start_audit(
        self,
        company_id: str,
        suppliers: Sequence[Supplier],
        run_id: str | None = None,
        preamble: Sequence[LogEvent] = (),
    ) -> AsyncIterator[AuditEvent]:
        """
        Ejecuta la auditoría y emite sus eventos en orden.

        ``preamble`` son logs de pasos previos a la corrida (p. ej. el discovery),
        que se emiten justo después del log de inicio.

        Cerrar el iterador cancela la corrida y descarta la espera abierta.

        Raises:
            AuditInProgressError: Si la instancia ya tiene una corrida activa.
        """
        if self._active_run is not None:
            raise AuditInProgressError(self._active_run)

        run_id = run_id or uuid4().hex
        self._active_run = run_id
        queue: asyncio.Queue = asyncio.Queue()

        run = AuditRunContext(
            run_id=run_id,
            company_id=company_id,
            signal_provider=self._signal_provider,
            report_provider=self._report_provider,
            scorer=self._scorer,
            policy=self._policy,
            gate=self._gate,
            publish=queue.put_nowait,
            total_suppliers=len(suppliers),
        )
        driver = asyncio.create_task(self._drive(run, list(suppliers), queue, tuple(preamble)))

        try:
            while True:
                event = await queue.get()
                if event is _END:
                    break
                yield event
        finally:
            if not driver.done():
                driver.cancel()
            self._gate.discard()
            self._active_run = None

    async def _drive(
        self,
        run: AuditRunContext,
        suppliers: list[Supplier],
        queue: asyncio.Queue,
        preamble: tuple[LogEvent, ...],
    ) -> None:
        logger.pipeline_start(run.company_id, len(suppliers), run.run_id)
        try:
            run.log(ORCHESTRATOR, f"Starting audit for {run.company_id}...")
            for entry in preamble:
                run.log(entry.agent, entry.message, entry.level)

            for supplier in suppliers:
                await supplier_pipeline.ainvoke(
                    create_initial_state(run.run_id, run.company_id, supplier),
                    config={"configurable": {"run": run}},
                )

            run.log(REPORTING, "Generating executive summary...")
            report = await run.report_provider.generate_report(run.company_id, tuple(run.records))
            run.publish(ReportReady(company_id=run.company_id, report=report))
            run.log(REPORTING, "Report generated successfully.", "success")
            run.log(ORCHESTRATOR, "Workflow complete.", "success")

            run.publish(AuditCompleted(run_id=run.run_id, status="completed", records=tuple(run.records), report=report))
            self._log_summary(run, "completed")

        except asyncio.CancelledError:
            self._log_summary(run, "cancelled")
            raise

        except Exception as e:
            # Cualquier error inesperado es fatal: se conservan los parciales, sin reporte
            logger.error("engine", e)
            run.log(ORCHESTRATOR, "Workflow failed due to error.", "error")
            run.publish(ResultSnapshot(records=tuple(run.records), total_suppliers=run.total_suppliers))
            run.publish(
                AuditCompleted(
                    run_id=run.run_id,
                    status="failed",
                    records=tuple(run.records),
                    error=f"{type(e).__name__}: {e}",
                )
            )
            self._log_summary(run, "failed", str(e))

        finally:
            queue.put_nowait(_END)

    @staticmethod
    def _log_summary(run: AuditRunContext, status: str, error: str | None = None) -> None:
        logger.pipeline_end(
            {
                "status": status,
                "finalized": len(run.records),
                "total": run.total_suppliers,
                "by_status": dict(Counter(r.status.value for r in run.records)),
                "error": error,
            }
        )
