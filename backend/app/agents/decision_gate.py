"""
Compuerta de decisión humana (HITL).

Un único slot por instancia: a lo sumo una decisión pendiente a la vez,
resuelta por un future de un solo uso y ligada a un token emitido al abrir
el slot. Un token viejo nunca resuelve una espera posterior.

Todas las operaciones deben ejecutarse en el event loop de la corrida.
"""

import asyncio
from uuid import uuid4

from app.core.exceptions import DecisionGateBusyError
from app.core.logging import AgentLogger
from app.schemas.audit import AuditRecord, PendingDecision

logger = AgentLogger("decision_gate")


class DecisionGate:
    """Slot de decisión de capacidad 1, consumido exactamente una vez."""

    def __init__(self) -> None:
        self._pending: PendingDecision | None = None
        self._future: asyncio.Future[bool] | None = None

    @property
    def pending(self) -> PendingDecision | None:
        return self._pending

    def open(self, record: AuditRecord, run_id: str) -> PendingDecision:
        """Publica el registro como decisión pendiente y crea el future."""
        if self._pending is not None:
            raise DecisionGateBusyError(self._pending.token)

        self._future = asyncio.get_running_loop().create_future()
        self._pending = PendingDecision(token=uuid4().hex, run_id=run_id, record=record)
        logger.debug("open", f"token={self._pending.token[:8]} supplier={record.supplier_id}")
        return self._pending

    async def wait(self, pending: PendingDecision) -> bool:
        """Bloquea hasta que llegue la decisión para este token."""
        if self._pending is None or self._future is None or pending.token != self._pending.token:
            raise DecisionGateBusyError(pending.token)

        future = self._future
        try:
            return await future
        finally:
            if self._future is future:
                self._clear()

    def submit(self, approved: bool, token: str | None = None) -> bool:
        """
        Entrega la decisión del revisor.

        Devuelve False sin efecto si no hay decisión pendiente, si el token
        no corresponde a la pendiente o si ya fue resuelta.
        """
        pending = self._pending
        future = self._future
        if pending is None or future is None or future.done():
            logger.debug("submit", "No pending decision - ignored")
            return False
        if token is not None and token != pending.token:
            logger.warning(f"Stale decision token {token[:8]} ignored (pending: {pending.token[:8]})")
            return False

        future.set_result(bool(approved))
        # El slot se consume al resolver
        self._pending = None
        logger.debug("submit", f"token={pending.token[:8]} approved={approved}")
        return True

    def discard(self) -> None:
        """Descarta la espera abierta sin resolverla (cancelación de corrida)."""
        if self._future is not None and not self._future.done():
            self._future.cancel()
        self._clear()

    def _clear(self) -> None:
        self._pending = None
        self._future = None
