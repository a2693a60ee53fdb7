"""Tests for domain enumerations."""

from __future__ import annotations

from crowdfund_ledger.domain.enums import EventType, PostAction, PostPhase, PostStatus


class TestPostStatus:
    def test_all_statuses_exist(self) -> None:
        assert {s.value for s in PostStatus} == {"ACTIVE", "PAID", "REFUNDED"}

    def test_status_is_str_enum(self) -> None:
        assert isinstance(PostStatus.ACTIVE, str)
        assert PostStatus.ACTIVE == "ACTIVE"


class TestPostPhase:
    def test_phases(self) -> None:
        assert PostPhase.FUNDING == "FUNDING"
        assert PostPhase.REFUNDABLE == "REFUNDABLE"


class TestEventType:
    def test_event_types_use_record_names(self) -> None:
        assert {e.value for e in EventType} == {
            "PostCreated",
            "FundsCollected",
            "RefundIssued",
            "PostRemoved",
        }


class TestPostAction:
    def test_actions_match_ledger_operations(self) -> None:
        assert PostAction.FUND == "fund_post"
        assert PostAction.CHECK_DEADLINE == "check_deadline"
        assert PostAction.CLAIM_REFUND == "claim_refund"
