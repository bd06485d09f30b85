"""
Signal Monitor Agent.

This module implements the risk-signal collaborator. It asks the LLM for a
supplier's ESG risk profile and degrades to a low-risk default when the
call or the parsing fails, so the workflow engine never sees an exception.

Example:
    from app.agents.specialists import SignalMonitorAgent

    agent = SignalMonitorAgent(llm=llm_service, logger=agent_logger)
    signals = await agent.retrieve_signals(supplier)
"""

from app.agents.base import BaseAuditAgent
from app.agents.prompts import MONITOR_PROMPT
from app.core.exceptions import LLMInvocationError
from app.schemas.audit import RiskSignals, Supplier

FALLBACK_FINDING = "System unable to verify external risks. Defaulting to low risk."


def default_signals() -> RiskSignals:
    """Señales por defecto cuando no se pudo verificar el riesgo externo."""
    return RiskSignals(details=(FALLBACK_FINDING,))


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1"}
    return bool(value)


def signals_from_payload(payload: dict) -> RiskSignals:
    """Normaliza la respuesta JSON (camelCase o snake_case) a RiskSignals."""
    details = payload.get("details") or []
    if isinstance(details, str):
        details = [details]

    return RiskSignals(
        adverse_media=_as_bool(payload.get("adverseMedia", payload.get("adverse_media", False))),
        regulatory_action=_as_bool(payload.get("regulatoryAction", payload.get("regulatory_action", False))),
        safety_violation=_as_bool(payload.get("safetyViolation", payload.get("safety_violation", False))),
        esg_controversies=_as_bool(payload.get("esgControversies", payload.get("esg_controversies", False))),
        details=tuple(str(d).strip() for d in details if str(d).strip()),
    )


class SignalMonitorAgent(BaseAuditAgent):
    """Risk-signal collaborator backed by the LLM."""

    NAME: str = "monitor"

    async def retrieve_signals(self, supplier: Supplier) -> RiskSignals:
        self._log_enter({"supplier_name": supplier.name})

        try:
            payload = await self._invoke_json(
                MONITOR_PROMPT.format(
                    name=supplier.name,
                    industry=supplier.industry,
                    location=supplier.location,
                )
            )
            if not isinstance(payload, dict):
                raise LLMInvocationError("Expected a JSON object with risk flags")

            signals = signals_from_payload(payload)
            self._log_exit(f"{len(signals.details)} findings")
            return signals

        except Exception as e:
            self._log_error(e)
            self._log_exit("Monitor failed - defaulting to low risk")
            return default_signals()
