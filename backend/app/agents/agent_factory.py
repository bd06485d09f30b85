"""
Agent Factory for creating the audit collaborators.

This module implements the Factory pattern for instantiating the LLM-backed
collaborators (discovery, monitor, reporting). It provides a centralized
registration mechanism and handles the dependency injection of LLM and
logger services.

Example:
    from app.agents.agent_factory import AgentFactory

    factory = AgentFactory(llm=llm_service, logger=agent_logger)
    monitor = factory.create("monitor")
    signals = await monitor.retrieve_signals(supplier)
"""

from typing import Callable, Dict, Optional, Type

from app.agents.base import BaseAuditAgent, LLMProtocol, LoggerProtocol
from app.agents.prompts import AVAILABLE_AGENTS


class AgentFactory:
    """
    Factory for creating audit collaborators by name.

    Each agent can receive its own LLM (they run at different temperatures):
    if ``llm_provider`` is given it is called with the agent name, otherwise
    every agent shares ``llm``.

    Attributes:
        _registry: Class-level mapping of agent names to agent classes.
    """

    # Import inside methods to avoid circular imports
    _registry: Dict[str, Type[BaseAuditAgent]] = {}
    _initialized: bool = False

    def __init__(
        self,
        llm: Optional[LLMProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
        llm_provider: Optional[Callable[[str], LLMProtocol]] = None,
    ) -> None:
        if llm is None and llm_provider is None:
            raise ValueError("AgentFactory needs an llm or an llm_provider")
        self._llm = llm
        self._logger = logger
        self._llm_provider = llm_provider

        if not AgentFactory._initialized:
            self._initialize_registry()

    @classmethod
    def _initialize_registry(cls) -> None:
        from app.agents.specialists import (
            ReportingAgent,
            SignalMonitorAgent,
            SupplierDiscoveryAgent,
        )

        cls._registry = {
            "discovery": SupplierDiscoveryAgent,
            "monitor": SignalMonitorAgent,
            "reporting": ReportingAgent,
        }
        cls._initialized = True

    def create(self, name: str) -> BaseAuditAgent:
        """
        Create the collaborator registered under ``name``.

        Raises:
            ValueError: If the name is not a known collaborator type.
            NotImplementedError: If the name is known but nothing is registered.
        """
        if name not in AVAILABLE_AGENTS:
            raise ValueError(f"Unknown agent: '{name}'. Valid agents are: {AVAILABLE_AGENTS}")

        agent_class = self._registry.get(name)
        if agent_class is None:
            raise NotImplementedError(
                f"No implementation registered for '{name}'. "
                f"Registered agents: {list(self._registry.keys())}"
            )

        llm = self._llm_provider(name) if self._llm_provider else self._llm
        return agent_class(llm=llm, logger=self._logger)

    @classmethod
    def register(cls, name: str, agent_class: Type[BaseAuditAgent]) -> None:
        """
        Register an agent class for a collaborator name.

        Useful for testing with fake agents.

        Raises:
            ValueError: If name is not in AVAILABLE_AGENTS.
        """
        if name not in AVAILABLE_AGENTS:
            raise ValueError(f"Cannot register unknown agent: '{name}'. Valid agents are: {AVAILABLE_AGENTS}")
        if not cls._initialized:
            cls._initialize_registry()
        cls._registry[name] = agent_class

    @classmethod
    def get_registered_agents(cls) -> list:
        if not cls._initialized:
            cls._initialize_registry()
        return list(cls._registry.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        if not cls._initialized:
            cls._initialize_registry()
        return name in cls._registry
