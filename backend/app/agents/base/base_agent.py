"""
Protocols and base class for the audit collaborators.

The workflow engine consumes three external collaborators (supplier
discovery, risk-signal retrieval and report generation) only through the
protocols defined here. The LLM-backed agents in ``app.agents.specialists``
are one implementation; tests inject fakes or mocks.

The design follows these principles:
- Dependency Injection: LLM and logger are injected, enabling easy testing with mocks
- Fallback values: collaborators degrade to a defined value instead of raising
- Template Method Pattern: subclasses build prompts, the base handles invocation

Example:
    class SignalMonitorAgent(BaseAuditAgent):
        NAME = "monitor"

        async def retrieve_signals(self, supplier: Supplier) -> RiskSignals:
            payload = await self._invoke_json(prompt)
            ...
"""

from abc import ABC
from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from app.agents.prompts import AUDITOR_SYSTEM_PROMPT
from app.agents.utils import parse_json_response
from app.core.exceptions import LLMInvocationError
from app.schemas.audit import AuditRecord, RiskSignals, Supplier


# =============================================================================
# PROTOCOLS (For Dependency Injection)
# =============================================================================


@runtime_checkable
class LLMProtocol(Protocol):
    """
    Protocol defining the interface for LLM services.

    Any object with an async ``ainvoke`` returning something with a
    ``content`` attribute satisfies it, including mocks for testing.
    """

    async def ainvoke(self, messages: List[BaseMessage]) -> Any:
        ...


@runtime_checkable
class LoggerProtocol(Protocol):
    """Protocol defining the interface for agent loggers."""

    def node_enter(self, node_name: str, state: dict) -> None:
        ...

    def node_exit(self, node_name: str, message: str) -> None:
        ...

    def debug(self, node_name: str, message: str) -> None:
        ...

    def error(self, node_name: str, error: Exception) -> None:
        ...


@runtime_checkable
class SupplierDiscoveryProvider(Protocol):
    """Returns the suppliers of a company. Degrades to a fixed list on failure."""

    async def discover(self, company_id: str) -> list[Supplier]:
        ...

    async def discover_with_source(self, company_id: str) -> tuple[list[Supplier], bool]:
        """Same list plus whether it came from the fixed fallback."""
        ...


@runtime_checkable
class SignalProvider(Protocol):
    """
    Returns the risk signals of a supplier.

    On internal failure it must return a default RiskSignals (all flags
    false, one explanatory finding) instead of raising.
    """

    async def retrieve_signals(self, supplier: Supplier) -> RiskSignals:
        ...


@runtime_checkable
class ReportProvider(Protocol):
    """Renders the narrative report. Degrades to explanatory text on failure."""

    async def generate_report(self, company_id: str, records: Sequence[AuditRecord]) -> str:
        ...


# =============================================================================
# BASE AGENT CLASS
# =============================================================================


class BaseAuditAgent(ABC):
    """
    Abstract base class for LLM-backed audit collaborators.

    Attributes:
        NAME: Registry name of the agent (override in subclass).
        SYSTEM_PROMPT: System prompt shared by the agent's calls.
    """

    NAME: str = "agent"
    SYSTEM_PROMPT: str = AUDITOR_SYSTEM_PROMPT

    def __init__(
        self,
        llm: LLMProtocol,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        """
        Initialize the agent.

        Args:
            llm: LLM service implementing LLMProtocol.
            logger: Optional logger implementing LoggerProtocol.
        """
        self._llm = llm
        self._logger = logger

    @property
    def node_name(self) -> str:
        """Return the node name for logging purposes."""
        return f"agent_{self.NAME}"

    # -------------------------------------------------------------------------
    # Concrete Helper Methods
    # -------------------------------------------------------------------------

    def _build_messages(self, prompt: str) -> List[BaseMessage]:
        return [
            SystemMessage(content=self.SYSTEM_PROMPT),
            HumanMessage(content=prompt),
        ]

    async def _invoke_text(self, prompt: str) -> str:
        """
        Invoke the LLM and return the raw text content.

        Raises:
            LLMInvocationError: If the model returns an empty response.
        """
        response = await self._llm.ainvoke(self._build_messages(prompt))
        text = (getattr(response, "content", "") or "").strip()
        if not text:
            raise LLMInvocationError("No response from model", details=self.node_name)
        return text

    async def _invoke_json(self, prompt: str) -> Any:
        """
        Invoke the LLM and parse its reply as JSON.

        Raises:
            LLMInvocationError: If the reply is empty or not valid JSON.
        """
        text = await self._invoke_text(prompt)
        payload = parse_json_response(text)
        if payload is None:
            raise LLMInvocationError("Model reply is not valid JSON", details=text[:200])
        return payload

    def _log_enter(self, state: Optional[dict] = None) -> None:
        if self._logger:
            self._logger.node_enter(self.node_name, state or {})

    def _log_exit(self, message: str) -> None:
        if self._logger:
            self._logger.node_exit(self.node_name, message)

    def _log_debug(self, message: str) -> None:
        if self._logger:
            self._logger.debug(self.node_name, message)

    def _log_error(self, error: Exception) -> None:
        if self._logger:
            self._logger.error(self.node_name, error)
