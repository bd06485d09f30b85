"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing the Supply Chain Compliance
Auditor. All fixtures use mocks or in-memory fakes to avoid real calls to the
LLM provider.

Usage:
    def test_example(mock_llm, test_container):
        # mock_llm is already configured as AsyncMock
        # test_container has mocked dependencies
        pass
"""

import os
import sys
from pathlib import Path

import pytest
from unittest.mock import AsyncMock, MagicMock

backend_path = Path(__file__).parent.parent
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

# Set dummy env vars to satisfy Settings validation
os.environ.setdefault("GROQ_API_KEY", "dummy_groq_key")

from app.schemas.audit import RiskSignals, Supplier  # noqa: E402


# =============================================================================
# LLM MOCK FIXTURES
# =============================================================================


@pytest.fixture
def mock_llm_response():
    """
    Factory fixture for creating mock LLM responses.

    Usage:
        def test_example(mock_llm_response):
            response = mock_llm_response('{"adverseMedia": true}')
    """
    def _create_response(content: str = "Mocked LLM response"):
        response = MagicMock()
        response.content = content
        return response
    return _create_response


@pytest.fixture
def mock_llm(mock_llm_response):
    """
    AsyncMock that simulates LLM behavior.

    The mock is pre-configured to return a default response.
    Override in individual tests as needed.
    """
    llm = AsyncMock()
    llm.ainvoke.return_value = mock_llm_response("Mocked LLM response")
    return llm


# =============================================================================
# DOMAIN FIXTURES
# =============================================================================


@pytest.fixture
def make_supplier():
    """
    Factory fixture for creating suppliers.

    Usage:
        def test_example(make_supplier):
            supplier = make_supplier("Acme", emissions=0.9, flags=3)
    """
    def _create_supplier(
        name: str = "Acme Metals",
        emissions: float = 0.5,
        flags: int = 0,
        supplier_id: str | None = None,
    ) -> Supplier:
        return Supplier(
            id=supplier_id or f"sup-{name.lower().replace(' ', '-')}",
            name=name,
            industry="Manufacturing",
            location="Pune, India",
            estimated_emissions=emissions,
            compliance_flags=flags,
        )
    return _create_supplier


@pytest.fixture
def make_signals():
    """
    Factory fixture for RiskSignals with the first ``count`` flags raised.

    Usage:
        def test_example(make_signals):
            signals = make_signals(2)  # adverse_media + regulatory_action
    """
    def _create_signals(count: int = 0, details: tuple[str, ...] | None = None) -> RiskSignals:
        flags = [i < count for i in range(4)]
        return RiskSignals(
            adverse_media=flags[0],
            regulatory_action=flags[1],
            safety_violation=flags[2],
            esg_controversies=flags[3],
            details=details if details is not None else tuple(f"finding {i + 1}" for i in range(count)),
        )
    return _create_signals


@pytest.fixture
def sample_suppliers(make_supplier):
    """
    Three suppliers. With clean signals they score 0.12 (Approved),
    0.58 (Review) and 0.7 (Review); Global Steel Co reaches HITL_Triggered
    (0.85) once two signals are raised.
    """
    return [
        make_supplier("EcoLogistics", emissions=0.3, flags=0),
        make_supplier("TechChip Solutions", emissions=1.0, flags=3),
        make_supplier("Global Steel Co", emissions=1.0, flags=5, supplier_id="sup-steel"),
    ]


# =============================================================================
# PROVIDER FAKES
# =============================================================================


class FakeSignalProvider:
    """
    In-memory SignalProvider.

    Returns ``signals_by_name[supplier.name]`` (or clean signals) and records
    every call. ``fail_on`` names a supplier whose lookup raises.
    """

    def __init__(self, signals_by_name: dict | None = None, fail_on: str | None = None):
        self.signals_by_name = signals_by_name or {}
        self.fail_on = fail_on
        self.calls: list[str] = []

    async def retrieve_signals(self, supplier: Supplier) -> RiskSignals:
        self.calls.append(supplier.name)
        if supplier.name == self.fail_on:
            raise RuntimeError(f"signal backend down for {supplier.name}")
        return self.signals_by_name.get(supplier.name, RiskSignals())


class FakeReportProvider:
    """In-memory ReportProvider that records the records it was given."""

    def __init__(self, report: str = "# Executive Summary\nAll good."):
        self.report = report
        self.calls: list[tuple[str, tuple]] = []

    async def generate_report(self, company_id, records) -> str:
        self.calls.append((company_id, tuple(records)))
        return self.report


@pytest.fixture
def make_signal_provider():
    """Factory fixture: make_signal_provider({"Acme": signals}, fail_on="Other")."""
    return FakeSignalProvider


@pytest.fixture
def make_report_provider():
    return FakeReportProvider


@pytest.fixture
def signal_provider():
    return FakeSignalProvider()


@pytest.fixture
def report_provider():
    return FakeReportProvider()


@pytest.fixture
def engine(signal_provider, report_provider):
    from app.agents.engine import AuditWorkflowEngine

    return AuditWorkflowEngine(signal_provider=signal_provider, report_provider=report_provider)


# =============================================================================
# CONTAINER FIXTURES
# =============================================================================


@pytest.fixture
def test_container(mock_llm):
    """
    DependencyContainer with mocked LLM for isolated testing.

    Usage:
        def test_example(test_container):
            agent = test_container.agent_factory.create("monitor")
    """
    from app.services.container import DependencyContainer

    container = DependencyContainer()
    container.override_llm(mock_llm)
    return container


@pytest.fixture
def test_factory(test_container):
    """AgentFactory instance with mocked dependencies."""
    return test_container.agent_factory


# =============================================================================
# LOGGER FIXTURES
# =============================================================================


@pytest.fixture
def mock_logger():
    """
    Mock logger for testing agent logging behavior.

    Usage:
        def test_example(mock_logger):
            agent = SomeAgent(llm=mock_llm, logger=mock_logger)
            mock_logger.node_enter.assert_called_once()
    """
    logger = MagicMock()
    logger.node_enter = MagicMock()
    logger.node_exit = MagicMock()
    logger.debug = MagicMock()
    logger.error = MagicMock()
    return logger


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
