"""Tests for the PostStateMachine domain guard.

These tests verify that:
    1. Settlement transitions reach the final states.
    2. Accounting events keep the campaign ACTIVE.
    3. Final states allow nothing.
    4. The convenience function validate_transition works.
"""

from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from crowdfund_ledger.domain.state_machine import (
    PostStateMachine,
    validate_transition,
)


class TestSettlementPaths:
    def test_goal_reached(self) -> None:
        sm = PostStateMachine("ACTIVE")
        sm.goal_reached()
        assert sm.status == "PAID"

    def test_refunds_completed(self) -> None:
        sm = PostStateMachine("ACTIVE")
        sm.refunds_completed()
        assert sm.status == "REFUNDED"


class TestSelfTransitions:
    def test_contribution_keeps_active(self) -> None:
        sm = PostStateMachine("ACTIVE")
        sm.contribution_recorded()
        sm.contribution_recorded()
        assert sm.status == "ACTIVE"

    def test_refund_claim_keeps_active(self) -> None:
        sm = PostStateMachine("ACTIVE")
        sm.refund_claimed()
        assert sm.status == "ACTIVE"


class TestIllegalTransitions:
    def test_paid_cannot_be_refunded(self) -> None:
        sm = PostStateMachine("PAID")
        with pytest.raises(TransitionNotAllowed):
            sm.refunds_completed()

    def test_refunded_cannot_take_contributions(self) -> None:
        sm = PostStateMachine("REFUNDED")
        with pytest.raises(TransitionNotAllowed):
            sm.contribution_recorded()

    def test_paid_is_final(self) -> None:
        assert PostStateMachine("PAID").get_allowed_events() == []

    def test_refunded_is_final(self) -> None:
        assert PostStateMachine("REFUNDED").get_allowed_events() == []


class TestAllowedEvents:
    def test_active_allowed(self) -> None:
        allowed = PostStateMachine("ACTIVE").get_allowed_events()
        assert set(allowed) == {
            "contribution_recorded",
            "refund_claimed",
            "goal_reached",
            "refunds_completed",
        }


class TestValidateTransitionFunction:
    def test_valid_transition(self) -> None:
        assert validate_transition("ACTIVE", "goal_reached") == "PAID"

    def test_invalid_event_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown event"):
            validate_transition("ACTIVE", "nonexistent_event")

    def test_invalid_status(self) -> None:
        with pytest.raises(ValueError, match="Unknown status"):
            PostStateMachine("SETTLED")
