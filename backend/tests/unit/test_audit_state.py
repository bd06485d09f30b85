"""
Unit tests for the per-supplier state machine.
"""

import pytest

from app.agents.state import STAGE_TRANSITIONS, SupplierStage, advance, create_initial_state
from app.core.exceptions import InvalidStageTransitionError


class TestSupplierStateMachine:
    def test_initial_state_is_pending(self, make_supplier):
        state = create_initial_state("run-1", "Tata Motors", make_supplier("Acme"))

        assert state["stage"] == SupplierStage.PENDING
        assert state["supplier_name"] == "Acme"
        assert state["record"] is None

    def test_happy_path_transitions(self, make_supplier):
        state = create_initial_state("run-1", "Tata Motors", make_supplier())
        for target in (
            SupplierStage.SIGNALS_GATHERED,
            SupplierStage.SCORED,
            SupplierStage.POLICY_EVALUATED,
            SupplierStage.AWAITING_DECISION,
            SupplierStage.FINALIZED,
        ):
            state["stage"] = advance(state, target)

        assert state["stage"] == SupplierStage.FINALIZED

    def test_skipping_a_stage_raises(self, make_supplier):
        state = create_initial_state("run-1", "Tata Motors", make_supplier())

        with pytest.raises(InvalidStageTransitionError):
            advance(state, SupplierStage.SCORED)

    def test_awaiting_decision_only_from_policy_evaluated(self, make_supplier):
        state = create_initial_state("run-1", "Tata Motors", make_supplier())
        state["stage"] = SupplierStage.SCORED

        with pytest.raises(InvalidStageTransitionError):
            advance(state, SupplierStage.AWAITING_DECISION)

    def test_finalized_is_terminal(self):
        assert STAGE_TRANSITIONS[SupplierStage.FINALIZED] == frozenset()
