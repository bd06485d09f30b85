"""
Specialists module initialization.

This module exports the LLM-backed implementations of the audit collaborators.
"""

from app.agents.specialists.discovery_agent import FALLBACK_SUPPLIERS, SupplierDiscoveryAgent
from app.agents.specialists.monitor_agent import FALLBACK_FINDING, SignalMonitorAgent, default_signals
from app.agents.specialists.reporting_agent import (
    REPORT_EMPTY_FALLBACK,
    REPORT_ERROR_FALLBACK,
    ReportingAgent,
)

__all__ = [
    "FALLBACK_FINDING",
    "FALLBACK_SUPPLIERS",
    "REPORT_EMPTY_FALLBACK",
    "REPORT_ERROR_FALLBACK",
    "ReportingAgent",
    "SignalMonitorAgent",
    "SupplierDiscoveryAgent",
    "default_signals",
]
