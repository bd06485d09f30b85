"""Endpoints de ejecución y seguimiento de auditorías."""

import json

from fastapi import APIRouter, status
from fastapi.responses import StreamingResponse

from app.agents.state import DISCOVERY
from app.api.routes.suppliers import discover_suppliers
from app.core.logging import get_logger
from app.schemas import (
    AuditStatusResponse,
    DecisionRequest,
    DecisionResponse,
    LogEvent,
    StartAuditRequest,
    StartAuditResponse,
)
from app.services import get_container

logger = get_logger(__name__)
router = APIRouter(prefix="/audits", tags=["Audits"])


def _sse_event(event_type: str, data: dict) -> str:
    """Formatea payload como evento SSE."""
    return f"event: {event_type}\ndata: {json.dumps(data, ensure_ascii=False)}\n\n"


@router.post("", response_model=StartAuditResponse, status_code=status.HTTP_202_ACCEPTED)
async def start_audit(request: StartAuditRequest) -> StartAuditResponse:
    """Inicia una corrida. Sin proveedores explícitos, se ejecuta el discovery."""
    suppliers = request.suppliers
    preamble: list[LogEvent] = []
    if suppliers is None:
        suppliers, _, _ = await discover_suppliers(request.company_id)
        preamble = [
            LogEvent(agent=DISCOVERY, message=f"Searching for suppliers of {request.company_id}..."),
            LogEvent(agent=DISCOVERY, message=f"Found {len(suppliers)} suppliers.", level="success"),
        ]

    session = get_container().sessions.start(request.company_id, suppliers, preamble)
    return StartAuditResponse(
        run_id=session.run_id,
        company_id=session.company_id,
        supplier_count=len(session.suppliers),
    )


@router.get("/{run_id}", response_model=AuditStatusResponse)
async def get_audit(run_id: str) -> AuditStatusResponse:
    return get_container().sessions.get(run_id).to_status()


@router.get("/{run_id}/stream")
async def stream_audit(run_id: str) -> StreamingResponse:
    """Repite y sigue los eventos de la corrida vía SSE."""
    session = get_container().sessions.get(run_id)

    async def _event_stream():
        async for event in session.subscribe():
            yield _sse_event(event.kind, json.loads(event.model_dump_json()))
        yield _sse_event("end", {"run_id": run_id, "state": session.state})

    return StreamingResponse(
        _event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/{run_id}/decision", response_model=DecisionResponse)
async def submit_decision(run_id: str, request: DecisionRequest) -> DecisionResponse:
    """Entrega la decisión del revisor. accepted=False si no había nada pendiente."""
    accepted = get_container().sessions.submit_decision(run_id, request.approved, request.token)
    if not accepted:
        logger.info(f"[DECISION] Run {run_id[:8]}: decision ignored (nothing pending or stale token)")
    return DecisionResponse(accepted=accepted, run_id=run_id)


@router.delete("/{run_id}", response_model=AuditStatusResponse)
async def cancel_audit(run_id: str) -> AuditStatusResponse:
    sessions = get_container().sessions
    sessions.cancel(run_id)
    session = sessions.get(run_id)
    await session.wait()
    return session.to_status()
