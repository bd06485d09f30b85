"""
Custom exceptions for the Supply Chain Compliance Auditor.

This module provides a hierarchy of exceptions for consistent error handling
across the application. All exceptions inherit from AuditBaseException.

Example:
    try:
        async for event in engine.start_audit(company_id, suppliers):
            ...
    except AuditInProgressError as e:
        logger.error(f"Audit rejected: {e}")
"""

from typing import Optional


class AuditBaseException(Exception):
    """
    Base exception class for all auditor errors.

    Attributes:
        message: Human-readable description of the error.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation with optional details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class AgentProcessingError(AuditBaseException):
    """
    Exception raised when an agent fails to process a request.

    Agents normally convert failures into fallback values; this error is
    what escapes when an agent is used without its fallback.

    Attributes:
        agent_name: Name/identifier of the agent that failed.
        original_error: The underlying exception if available.
    """

    def __init__(
        self,
        message: str,
        agent_name: str,
        original_error: Optional[Exception] = None,
        details: Optional[str] = None,
    ) -> None:
        self.agent_name = agent_name
        self.original_error = original_error

        enhanced_message = f"[Agent: {agent_name}] {message}"
        if original_error:
            enhanced_message = f"{enhanced_message} | Caused by: {type(original_error).__name__}: {str(original_error)[:200]}"

        super().__init__(enhanced_message, details)


class LLMInvocationError(AuditBaseException):
    """
    Exception raised when an LLM call returns nothing usable.

    Attributes:
        model_name: Name of the LLM model that failed.
    """

    def __init__(
        self,
        message: str,
        model_name: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.model_name = model_name

        enhanced_message = f"[LLM] {message}"
        if model_name:
            enhanced_message = f"{enhanced_message} (model: {model_name})"

        super().__init__(enhanced_message, details)


class AuditInProgressError(AuditBaseException):
    """
    Exception raised when a second run is started on a busy engine.

    Attributes:
        run_id: Identifier of the run that is still active.
    """

    def __init__(self, run_id: str, details: Optional[str] = None) -> None:
        self.run_id = run_id
        super().__init__(f"[Engine] Audit run {run_id} is still in progress", details)


class InvalidStageTransitionError(AuditBaseException):
    """
    Exception raised when a supplier moves between non-adjacent stages.

    Attributes:
        current: Stage the supplier is in.
        target: Stage that was requested.
    """

    def __init__(self, current: str, target: str, supplier_id: Optional[str] = None) -> None:
        self.current = current
        self.target = target
        self.supplier_id = supplier_id

        message = f"[Pipeline] Invalid transition {current} → {target}"
        if supplier_id:
            message = f"{message} (supplier: {supplier_id})"
        super().__init__(message)


class DispositionOverrideError(AuditBaseException):
    """
    Exception raised when a human decision is applied to a record that
    was not escalated for review.
    """

    def __init__(self, supplier_id: str, status: str) -> None:
        self.supplier_id = supplier_id
        self.status = status
        super().__init__(
            f"[Record] Supplier {supplier_id} has status {status}; "
            "only HITL_Triggered records accept a reviewer decision"
        )


class DecisionGateBusyError(AuditBaseException):
    """
    Exception raised when a decision slot is opened while another one is
    still waiting.
    """

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"[DecisionGate] Decision {token[:8]} is still pending")


class AuditSessionNotFoundError(AuditBaseException):
    """Exception raised when an API call references an unknown run."""

    def __init__(self, run_id: str) -> None:
        self.run_id = run_id
        super().__init__(f"[Sessions] Audit run '{run_id}' not found")


class AuditCapacityError(AuditBaseException):
    """Exception raised when the maximum number of concurrent runs is reached."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"[Sessions] Maximum of {limit} active audits reached")
