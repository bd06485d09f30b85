"""
Unit tests for SignalMonitorAgent.

The monitor never raises: any LLM or parsing failure degrades to the
low-risk default signals.
"""

import pytest

from app.agents.specialists import FALLBACK_FINDING, SignalMonitorAgent, default_signals
from app.agents.specialists.monitor_agent import signals_from_payload


class TestMonitorAgentParsing:
    @pytest.mark.asyncio
    async def test_parses_camel_case_payload(self, mock_llm, make_supplier):
        mock_llm.ainvoke.return_value.content = (
            '{"adverseMedia": true, "regulatoryAction": false, "safetyViolation": true, '
            '"esgControversies": false, "details": ["Plant fire in 2023", "Union dispute"]}'
        )
        agent = SignalMonitorAgent(llm=mock_llm)

        signals = await agent.retrieve_signals(make_supplier("Global Steel Co"))

        assert signals.adverse_media is True
        assert signals.regulatory_action is False
        assert signals.safety_violation is True
        assert signals.esg_controversies is False
        assert signals.details == ("Plant fire in 2023", "Union dispute")

    @pytest.mark.asyncio
    async def test_tolerates_markdown_fences(self, mock_llm, make_supplier):
        mock_llm.ainvoke.return_value.content = '```json\n{"esgControversies": true, "details": []}\n```'
        agent = SignalMonitorAgent(llm=mock_llm)

        signals = await agent.retrieve_signals(make_supplier())

        assert signals.esg_controversies is True
        assert signals.details == ()

    @pytest.mark.asyncio
    async def test_prompt_includes_supplier_profile(self, mock_llm, make_supplier):
        mock_llm.ainvoke.return_value.content = "{}"
        agent = SignalMonitorAgent(llm=mock_llm)

        await agent.retrieve_signals(make_supplier("TechChip Solutions"))

        messages = mock_llm.ainvoke.call_args[0][0]
        assert "TechChip Solutions" in messages[-1].content
        assert "Manufacturing" in messages[-1].content
        assert "Pune, India" in messages[-1].content

    def test_payload_accepts_snake_case_and_string_flags(self):
        signals = signals_from_payload({"adverse_media": "true", "safety_violation": "no", "details": "single finding"})

        assert signals.adverse_media is True
        assert signals.safety_violation is False
        assert signals.details == ("single finding",)


class TestMonitorAgentFallback:
    @pytest.mark.asyncio
    async def test_llm_error_returns_default_signals(self, mock_llm, mock_logger, make_supplier):
        mock_llm.ainvoke.side_effect = RuntimeError("rate limited")
        agent = SignalMonitorAgent(llm=mock_llm, logger=mock_logger)

        signals = await agent.retrieve_signals(make_supplier())

        assert signals == default_signals()
        assert signals.details == (FALLBACK_FINDING,)
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_invalid_json_returns_default_signals(self, mock_llm, make_supplier):
        mock_llm.ainvoke.return_value.content = "I cannot help with that."
        agent = SignalMonitorAgent(llm=mock_llm)

        signals = await agent.retrieve_signals(make_supplier())

        assert not any([signals.adverse_media, signals.regulatory_action, signals.safety_violation, signals.esg_controversies])
        assert signals.details == (FALLBACK_FINDING,)

    @pytest.mark.asyncio
    async def test_json_array_returns_default_signals(self, mock_llm, make_supplier):
        mock_llm.ainvoke.return_value.content = "[true, false]"
        agent = SignalMonitorAgent(llm=mock_llm)

        assert await agent.retrieve_signals(make_supplier()) == default_signals()
