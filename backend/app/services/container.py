"""
Dependency Injection Container.

This module provides a centralized container for the auditor's shared
services. It holds the LLM, the agent factory and the audit session manager,
and builds fully wired workflow engines.

Example:
    from app.services.container import get_container

    container = get_container()
    engine = container.create_engine()
    async for event in engine.start_audit("Tata Motors", suppliers):
        ...
"""

from functools import lru_cache
from typing import Optional

from app.core.config import settings
from app.core.logging import AgentLogger
from app.services.llm_factory import get_agent_llm


class DependencyContainer:
    """
    Centralized container for application dependencies.

    Attributes:
        _llm: LLM override (tests). When unset each agent gets its own
            temperature-specific ChatGroq instance.
        _agent_factory: Cached AgentFactory instance.
        _sessions: Cached AuditSessionManager instance.
        _logger: Logger instance for agent tracing.
    """

    def __init__(self) -> None:
        self._llm = None
        self._agent_factory = None
        self._sessions = None
        self._logger: Optional[AgentLogger] = None

    @property
    def logger(self) -> AgentLogger:
        if self._logger is None:
            self._logger = AgentLogger("collaborators")
        return self._logger

    @property
    def agent_factory(self):
        """
        Get the AgentFactory instance.

        Returns:
            AgentFactory for creating the audit collaborators.
        """
        if self._agent_factory is None:
            # Import here to avoid circular imports
            from app.agents.agent_factory import AgentFactory

            if self._llm is not None:
                self._agent_factory = AgentFactory(llm=self._llm, logger=self.logger)
            else:
                self._agent_factory = AgentFactory(llm_provider=get_agent_llm, logger=self.logger)
        return self._agent_factory

    @property
    def discovery(self):
        return self.agent_factory.create("discovery")

    @property
    def sessions(self):
        if self._sessions is None:
            from app.services.audit_sessions import AuditSessionManager

            self._sessions = AuditSessionManager(
                engine_factory=self.create_engine,
                max_active=settings.max_active_audits,
                retention_seconds=settings.audit_retention_seconds,
                max_finished=settings.max_finished_audits,
            )
        return self._sessions

    def create_engine(self):
        """
        Build a workflow engine wired with the configured collaborators.

        Each run gets its own engine (and therefore its own decision gate).
        """
        from app.agents.engine import AuditWorkflowEngine
        from skills.policy_evaluator import PolicyEvaluator
        from skills.supplier_risk_scorer import SupplierRiskScorer

        return AuditWorkflowEngine(
            signal_provider=self.agent_factory.create("monitor"),
            report_provider=self.agent_factory.create("reporting"),
            scorer=SupplierRiskScorer(settings.scoring_weights),
            policy=PolicyEvaluator(settings.policy_thresholds),
        )

    def reset(self) -> None:
        """
        Reset all cached services.

        Useful for testing to ensure fresh instances.
        """
        self._llm = None
        self._agent_factory = None
        self._sessions = None
        self._logger = None

    def override_llm(self, mock_llm) -> None:
        """
        Override the LLM service with a mock.

        Args:
            mock_llm: Mock LLM implementation for testing.
        """
        self._llm = mock_llm
        # Reset factory to pick up new LLM
        self._agent_factory = None


@lru_cache(maxsize=1)
def get_container() -> DependencyContainer:
    """Get the singleton DependencyContainer instance."""
    return DependencyContainer()


def reset_container() -> None:
    """
    Reset the global container singleton.

    Useful for testing isolation.
    """
    get_container.cache_clear()
