"""
Unit tests for ReportingAgent.
"""

import json

import pytest

from app.agents.specialists import REPORT_EMPTY_FALLBACK, REPORT_ERROR_FALLBACK, ReportingAgent
from app.agents.specialists.reporting_agent import summarize_records
from app.schemas.audit import AuditRecord, RiskSignals
from skills.policy_evaluator import Disposition


@pytest.fixture
def records():
    return [
        AuditRecord(
            supplier_id="sup-1",
            supplier_name="Global Steel Co",
            risk_signals=RiskSignals(esg_controversies=True, details=tuple(f"issue {i}" for i in range(8))),
            emissions_normalized=0.8,
            risk_score=0.85,
            status=Disposition.REJECTED,
        ),
        AuditRecord(
            supplier_id="sup-2",
            supplier_name="EcoLogistics",
            risk_signals=RiskSignals(),
            emissions_normalized=0.3,
            risk_score=0.12,
            status=Disposition.APPROVED,
        ),
    ]


class TestReportingAgent:
    @pytest.mark.asyncio
    async def test_returns_model_markdown(self, mock_llm, records):
        mock_llm.ainvoke.return_value.content = "## Executive Summary\nRisk is concentrated in steel."
        agent = ReportingAgent(llm=mock_llm)

        report = await agent.generate_report("Tata Motors", records)

        assert report.startswith("## Executive Summary")
        prompt = mock_llm.ainvoke.call_args[0][0][-1].content
        assert "Tata Motors" in prompt
        assert "Global Steel Co" in prompt
        assert "Rejected" in prompt

    @pytest.mark.asyncio
    async def test_empty_reply_returns_failure_notice(self, mock_llm, records):
        mock_llm.ainvoke.return_value.content = ""
        agent = ReportingAgent(llm=mock_llm)

        assert await agent.generate_report("Tata Motors", records) == REPORT_EMPTY_FALLBACK

    @pytest.mark.asyncio
    async def test_llm_error_returns_error_markdown(self, mock_llm, mock_logger, records):
        mock_llm.ainvoke.side_effect = ConnectionError("network down")
        agent = ReportingAgent(llm=mock_llm, logger=mock_logger)

        report = await agent.generate_report("Tata Motors", records)

        assert report == REPORT_ERROR_FALLBACK
        assert report.startswith("## Error Generating Report")
        mock_logger.error.assert_called_once()

    def test_summary_truncates_findings(self, records):
        summary = json.loads(summarize_records(records, max_findings=5))

        assert summary[0]["name"] == "Global Steel Co"
        assert summary[0]["status"] == "Rejected"
        assert len(summary[0]["risks"]) == 5
        assert summary[1]["risks"] == []
