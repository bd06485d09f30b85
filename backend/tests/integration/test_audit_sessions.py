"""
Integration tests for AuditSessionManager.

Hosted runs use real engines with in-memory providers. Covers retention of
finished runs and the capacity limit.
"""

import asyncio

import pytest
from unittest.mock import patch

from app.agents.engine import AuditWorkflowEngine
from app.core.exceptions import AuditCapacityError, AuditSessionNotFoundError
from app.services.audit_sessions import AuditSessionManager


@pytest.fixture
def engine_factory(make_signal_provider, make_report_provider):
    def _create_engine():
        return AuditWorkflowEngine(signal_provider=make_signal_provider(), report_provider=make_report_provider())
    return _create_engine


async def run_to_end(manager, company_id, suppliers):
    session = manager.start(company_id, suppliers)
    await session.wait()
    return session


@pytest.mark.integration
class TestFinishedRunRetention:
    @pytest.mark.asyncio
    async def test_oldest_finished_runs_evicted_over_cap(self, engine_factory, make_supplier):
        manager = AuditSessionManager(engine_factory, max_active=1, max_finished=2)
        suppliers = [make_supplier("EcoLogistics")]

        sessions = [await run_to_end(manager, f"Company {i}", suppliers) for i in range(4)]

        for evicted in sessions[:2]:
            with pytest.raises(AuditSessionNotFoundError):
                manager.get(evicted.run_id)
        for kept in sessions[2:]:
            assert manager.get(kept.run_id).state == "completed"
        assert len(manager) == 2

    @pytest.mark.asyncio
    async def test_many_sequential_runs_stay_bounded(self, engine_factory, make_supplier):
        manager = AuditSessionManager(engine_factory, max_active=1, max_finished=5)

        for i in range(20):
            last = await run_to_end(manager, f"Company {i}", [make_supplier("EcoLogistics")])

        assert manager.get(last.run_id).state == "completed"
        assert len(manager) == 5

    @pytest.mark.asyncio
    async def test_finished_run_available_until_retention_expires(self, engine_factory, make_supplier):
        manager = AuditSessionManager(engine_factory, retention_seconds=60)
        session = await run_to_end(manager, "Tata Motors", [make_supplier("EcoLogistics")])
        finished_at = session.finished_at

        with patch("app.services.audit_sessions.time.monotonic", return_value=finished_at + 30):
            status = manager.get(session.run_id).to_status()
        assert status.state == "completed"
        assert [r.supplier_name for r in status.records] == ["EcoLogistics"]

        with patch("app.services.audit_sessions.time.monotonic", return_value=finished_at + 61):
            with pytest.raises(AuditSessionNotFoundError):
                manager.get(session.run_id)

    @pytest.mark.asyncio
    async def test_running_sessions_are_never_evicted(
        self, make_supplier, make_signals, make_signal_provider, make_report_provider
    ):
        def _create_engine():
            provider = make_signal_provider({"Global Steel Co": make_signals(4)})
            return AuditWorkflowEngine(signal_provider=provider, report_provider=make_report_provider())

        manager = AuditSessionManager(_create_engine, max_active=2, retention_seconds=10, max_finished=1)
        paused = manager.start("Tata Motors", [make_supplier("Global Steel Co", emissions=1.0, flags=5)])
        for _ in range(500):
            if paused.state == "awaiting_decision":
                break
            await asyncio.sleep(0.01)
        assert paused.state == "awaiting_decision"

        with patch("app.services.audit_sessions.time.monotonic", return_value=10_000.0):
            assert manager.get(paused.run_id) is paused

        assert manager.submit_decision(paused.run_id, True) is True
        await paused.wait()
        assert paused.state == "completed"


@pytest.mark.integration
class TestCapacity:
    @pytest.mark.asyncio
    async def test_finished_runs_do_not_count_against_capacity(self, engine_factory, make_supplier):
        manager = AuditSessionManager(engine_factory, max_active=1)

        await run_to_end(manager, "Tata Motors", [make_supplier("EcoLogistics")])
        second = manager.start("Mahindra", [make_supplier("EcoLogistics")])

        with pytest.raises(AuditCapacityError):
            manager.start("Bajaj", [make_supplier("EcoLogistics")])
        await second.wait()
