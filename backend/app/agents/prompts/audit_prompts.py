"""
Externalized prompts for the audit collaborators.

Prompts are written in English because supplier data and the executive
report are consumed in English; variable names follow the rest of the code.

Example:
    from app.agents.prompts import DISCOVERY_PROMPT

    prompt = DISCOVERY_PROMPT.format(company_id="Tata Motors", count=5)
"""

from typing import List, Literal

# =============================================================================
# AGENT CONFIGURATION
# =============================================================================

AgentType = Literal["discovery", "monitor", "reporting"]

AVAILABLE_AGENTS: List[AgentType] = ["discovery", "monitor", "reporting"]


# =============================================================================
# SYSTEM PROMPT (Shared across all agents)
# =============================================================================

AUDITOR_SYSTEM_PROMPT: str = """You are part of a supply chain compliance auditing system.
You assess environmental, social and governance (ESG) risk of suppliers.
Follow the requested output format exactly. When JSON is requested, return ONLY JSON,
without markdown fences or commentary."""


# =============================================================================
# DISCOVERY
# =============================================================================

DISCOVERY_PROMPT: str = """Generate a realistic list of {count} key suppliers for the company "{company_id}".
For each supplier, provide:
1. Name
2. Industry (e.g., Steel, Electronics, Logistics)
3. Location (City, Country)
4. Estimated Carbon Emissions (Normalized 0.0 to 1.0, where 1.0 is very high)
5. Compliance Flags (Integer 0 to 5, representing minor past issues)

Return ONLY a JSON array of objects.
Format:
[
  {{
    "name": "Supplier Name",
    "industry": "Industry",
    "location": "Location",
    "estimatedEmissions": 0.5,
    "complianceFlags": 1
  }}
]"""


# =============================================================================
# SIGNAL MONITOR
# =============================================================================

MONITOR_PROMPT: str = """Analyze potential ESG risks for the supplier "{name}" in the "{industry}" industry located in "{location}".

Check for:
1. Adverse Media (negative news coverage)
2. Regulatory Action (fines, lawsuits)
3. Safety Violations (workplace accidents)
4. ESG Controversies (pollution, labor rights)

Based on the industry and typical risks, produce a realistic risk profile.
High emission industries (Steel, Mining) should have higher risk of ESG controversies.

Return ONLY a JSON object.
Format:
{{
  "adverseMedia": boolean,
  "regulatoryAction": boolean,
  "safetyViolation": boolean,
  "esgControversies": boolean,
  "details": ["1-2 specific headlines or findings"]
}}"""


# =============================================================================
# REPORTING
# =============================================================================

REPORT_PROMPT: str = """Generate an Executive ESG Risk Report for "{company_id}".

Data:
{summary}

Structure:
1. **Executive Summary**: High-level overview of the supply chain risk.
2. **Risk Drivers**: Main contributors to risk (specific high-risk suppliers, common industry issues).
3. **Supplier Classification**: Breakdown of Approved vs Review vs HITL vs Rejected.
4. **Policy Recommendations**: Actionable steps for the company.

Format: Markdown. Use bolding and bullet points effectively."""


def is_valid_agent(name: str) -> bool:
    """
    Check if a name is a registered collaborator type.

    Example:
        >>> is_valid_agent("monitor")
        True
    """
    return name in AVAILABLE_AGENTS
