"""
Reporting Agent.

This module implements the report collaborator: it renders an executive
ESG risk report in Markdown from the finalized audit records.

Example:
    from app.agents.specialists import ReportingAgent

    agent = ReportingAgent(llm=llm_service, logger=agent_logger)
    report = await agent.generate_report("Tata Motors", records)
"""

import json
from typing import Sequence

from app.agents.base import BaseAuditAgent
from app.agents.prompts import REPORT_PROMPT
from app.core.config import settings
from app.schemas.audit import AuditRecord

REPORT_EMPTY_FALLBACK = "Report generation failed."
REPORT_ERROR_FALLBACK = "## Error Generating Report\nCould not generate the executive summary at this time."


def summarize_records(records: Sequence[AuditRecord], max_findings: int) -> str:
    """Resumen compacto de los registros para incluir en el prompt."""
    summary = [
        {
            "name": r.supplier_name,
            "score": r.risk_score,
            "status": r.status.value,
            "risks": list(r.risk_signals.details[:max_findings]),
        }
        for r in records
    ]
    return json.dumps(summary, indent=2, ensure_ascii=False)


class ReportingAgent(BaseAuditAgent):
    """Report collaborator backed by the LLM."""

    NAME: str = "reporting"

    async def generate_report(self, company_id: str, records: Sequence[AuditRecord]) -> str:
        self._log_enter({"company_id": company_id, "records": len(records)})

        prompt = REPORT_PROMPT.format(
            company_id=company_id,
            summary=summarize_records(records, settings.report_max_findings),
        )

        try:
            response = await self._llm.ainvoke(self._build_messages(prompt))
        except Exception as e:
            self._log_error(e)
            self._log_exit("Report failed - returning error notice")
            return REPORT_ERROR_FALLBACK

        report = (getattr(response, "content", "") or "").strip()
        if not report:
            self._log_exit("Empty report from model")
            return REPORT_EMPTY_FALLBACK

        self._log_exit(f"Generated {len(report)} chars")
        return report
