"""
Hosting de corridas de auditoría para la API.

Cada AuditSession consume el stream de su propio AuditWorkflowEngine en una
task de fondo, guarda los eventos en orden y los reparte a los suscriptores
SSE (replay completo + seguimiento en vivo).
"""

import asyncio
import time
from typing import AsyncIterator, Callable, Sequence
from uuid import uuid4

from app.agents.engine import AuditWorkflowEngine
from app.core.exceptions import AuditCapacityError, AuditSessionNotFoundError
from app.core.logging import get_logger
from app.schemas.audit import AuditCompleted, AuditEvent, AuditRecord, LogEvent, ReportReady, ResultSnapshot, Supplier
from app.schemas.responses import AuditStatusResponse, SessionState

logger = get_logger(__name__)


class AuditSession:
    """Una corrida hospedada: engine, task de fondo y log de eventos."""

    def __init__(
        self,
        run_id: str,
        company_id: str,
        suppliers: Sequence[Supplier],
        engine: AuditWorkflowEngine,
        preamble: Sequence[LogEvent] = (),
    ):
        self.run_id = run_id
        self.company_id = company_id
        self.suppliers = tuple(suppliers)
        self.engine = engine
        self.preamble = tuple(preamble)
        self.finished_at: float | None = None
        self.events: list[AuditEvent] = []
        self.records: tuple[AuditRecord, ...] = ()
        self.report: str | None = None
        self.error: str | None = None
        self._final_state: SessionState | None = None
        self._changed = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def finished(self) -> bool:
        return self._final_state is not None

    @property
    def state(self) -> SessionState:
        if self._final_state is not None:
            return self._final_state
        if self.engine.pending_decision is not None:
            return "awaiting_decision"
        return "running"

    def start(self) -> None:
        self._task = asyncio.create_task(self._consume(), name=f"audit-{self.run_id[:8]}")
        self._task.add_done_callback(self._on_done)

    async def _consume(self) -> None:
        # Cancelar la task cierra el stream: el engine cancela su driver y descarta la espera
        async for event in self.engine.start_audit(
            self.company_id, self.suppliers, run_id=self.run_id, preamble=self.preamble
        ):
            self._append(event)

    def _on_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            self._finish("cancelled")
        elif task.exception() is not None:
            self.error = f"{type(task.exception()).__name__}: {task.exception()}"
            logger.error(f"[AUDIT] Run {self.run_id[:8]} crashed: {self.error}")
        self._finish("failed")
        self._notify()

    def _finish(self, state: SessionState) -> None:
        # El primer estado terminal gana
        if self._final_state is None:
            self._final_state = state
            self.finished_at = time.monotonic()

    def _append(self, event: AuditEvent) -> None:
        if isinstance(event, ResultSnapshot):
            self.records = event.records
        elif isinstance(event, ReportReady):
            self.report = event.report
        elif isinstance(event, AuditCompleted):
            self.records = event.records
            self.error = event.error
            self._finish(event.status)

        self.events.append(event)
        self._notify()

    def _notify(self) -> None:
        # Despierta a los suscriptores actuales; los siguientes esperan un Event nuevo
        self._changed.set()
        self._changed = asyncio.Event()

    async def subscribe(self) -> AsyncIterator[AuditEvent]:
        """Repite los eventos ya emitidos y sigue los nuevos hasta el final de la corrida."""
        index = 0
        while True:
            changed = self._changed
            batch = self.events[index:]
            done = self.finished
            for event in batch:
                yield event
            index += len(batch)
            if done and index >= len(self.events):
                return
            if not batch:
                await changed.wait()

    def cancel(self) -> bool:
        if self._task is None or self._task.done():
            return False
        self._task.cancel()
        return True

    async def wait(self) -> None:
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    def to_status(self) -> AuditStatusResponse:
        return AuditStatusResponse(
            run_id=self.run_id,
            company_id=self.company_id,
            state=self.state,
            total_suppliers=len(self.suppliers),
            records=list(self.records),
            logs=[e for e in self.events if isinstance(e, LogEvent)],
            pending_decision=self.engine.pending_decision,
            report=self.report,
            error=self.error,
        )


class AuditSessionManager:
    """
    Registro de corridas activas y terminadas.

    Cada corrida usa un engine propio creado por ``engine_factory`` (y por lo
    tanto su propia DecisionGate). Las corridas terminadas siguen consultables
    hasta ``retention_seconds`` después de terminar; además se conservan como
    máximo ``max_finished``, descartando primero las que terminaron antes.
    """

    def __init__(
        self,
        engine_factory: Callable[[], AuditWorkflowEngine],
        max_active: int = 4,
        retention_seconds: float = 3600,
        max_finished: int = 50,
    ):
        self._engine_factory = engine_factory
        self._max_active = max_active
        self._retention_seconds = retention_seconds
        self._max_finished = max_finished
        self._sessions: dict[str, AuditSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    @property
    def active_count(self) -> int:
        return sum(1 for s in self._sessions.values() if not s.finished)

    def _evict_finished(self) -> None:
        """Descarta corridas terminadas vencidas y el exceso sobre max_finished."""
        now = time.monotonic()
        finished = sorted(
            (s for s in self._sessions.values() if s.finished_at is not None),
            key=lambda s: s.finished_at,
        )
        expired = [s for s in finished if now - s.finished_at > self._retention_seconds]
        kept = [s for s in finished if s not in expired]
        overflow = kept[: max(0, len(kept) - self._max_finished)]

        for session in expired + overflow:
            del self._sessions[session.run_id]
        if expired or overflow:
            logger.debug(f"[AUDIT] Evicted {len(expired) + len(overflow)} finished runs")

    def start(
        self,
        company_id: str,
        suppliers: Sequence[Supplier],
        preamble: Sequence[LogEvent] = (),
    ) -> AuditSession:
        self._evict_finished()
        if self.active_count >= self._max_active:
            raise AuditCapacityError(self._max_active)

        session = AuditSession(uuid4().hex, company_id, suppliers, self._engine_factory(), preamble)
        self._sessions[session.run_id] = session
        session.start()
        logger.info(f"[AUDIT] Run {session.run_id[:8]} started for '{company_id}' ({len(suppliers)} suppliers)")
        return session

    def get(self, run_id: str) -> AuditSession:
        self._evict_finished()
        session = self._sessions.get(run_id)
        if session is None:
            raise AuditSessionNotFoundError(run_id)
        return session

    def submit_decision(self, run_id: str, approved: bool, token: str | None = None) -> bool:
        return self.get(run_id).engine.submit_decision(approved, token)

    def cancel(self, run_id: str) -> bool:
        cancelled = self.get(run_id).cancel()
        if cancelled:
            logger.info(f"[AUDIT] Run {run_id[:8]} cancelled")
        return cancelled

    async def shutdown(self) -> None:
        """Cancela todas las corridas en curso (lifespan de la app)."""
        for session in self._sessions.values():
            session.cancel()
        await asyncio.gather(*(s.wait() for s in self._sessions.values()))
        self._sessions.clear()
