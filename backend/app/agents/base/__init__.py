"""
Base agents module initialization.

This module exports the collaborator protocols and the base class for
LLM-backed audit agents.
"""

from app.agents.base.base_agent import (
    BaseAuditAgent,
    LLMProtocol,
    LoggerProtocol,
    ReportProvider,
    SignalProvider,
    SupplierDiscoveryProvider,
)

__all__ = [
    "BaseAuditAgent",
    "LLMProtocol",
    "LoggerProtocol",
    "ReportProvider",
    "SignalProvider",
    "SupplierDiscoveryProvider",
]
