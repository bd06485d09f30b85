"""
Prompts module initialization.

This module exports all prompt-related constants and functions used by the
audit collaborators.
"""

from app.agents.prompts.audit_prompts import (
    # Agent configuration
    AVAILABLE_AGENTS,
    AgentType,
    # Prompts
    AUDITOR_SYSTEM_PROMPT,
    DISCOVERY_PROMPT,
    MONITOR_PROMPT,
    REPORT_PROMPT,
    # Helper functions
    is_valid_agent,
)

__all__ = [
    # Agent configuration
    "AVAILABLE_AGENTS",
    "AgentType",
    # Prompts
    "AUDITOR_SYSTEM_PROMPT",
    "DISCOVERY_PROMPT",
    "MONITOR_PROMPT",
    "REPORT_PROMPT",
    # Helper functions
    "is_valid_agent",
]
