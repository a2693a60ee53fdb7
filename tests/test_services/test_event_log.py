"""Tests for the append-only EventLog."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from crowdfund_ledger.domain.enums import EventType
from crowdfund_ledger.domain.events import FundsCollected, PostCreated, PostRemoved, RefundIssued
from crowdfund_ledger.infrastructure.event_log import EventLog, EventRecord
from tests.factories import ALICE, CREATOR, START

LATER = datetime(2024, 1, 2, tzinfo=UTC)


@pytest.fixture
def log() -> EventLog:
    return EventLog()


def _created(post_id: int) -> PostCreated:
    return PostCreated(
        post_id=post_id,
        creator=CREATOR,
        goal_amount=100,
        min_contribution=10,
        deadline=LATER,
    )


class TestAppend:
    def test_sequences_start_at_one(self, log: EventLog) -> None:
        records = log.append_all([_created(1), _created(2)], recorded_at=START)

        assert [r.sequence for r in records] == [1, 2]
        assert len(log) == 2

    def test_sequences_continue_across_batches(self, log: EventLog) -> None:
        log.append_all([_created(1)], recorded_at=START)
        [record] = log.append_all([PostRemoved(post_id=1)], recorded_at=LATER)

        assert record.sequence == 2
        assert record.recorded_at == LATER

    def test_record_to_dict(self, log: EventLog) -> None:
        [record] = log.append_all([RefundIssued(post_id=3, contributor=ALICE, amount=40)], START)

        assert record.to_dict() == {
            "sequence": 1,
            "recorded_at": START.isoformat(),
            "event_type": "RefundIssued",
            "post_id": 3,
            "data": {"post_id": 3, "contributor": ALICE, "amount": 40},
        }

    def test_records_are_immutable(self, log: EventLog) -> None:
        [record] = log.append_all([_created(1)], START)
        with pytest.raises(AttributeError):
            record.sequence = 9  # type: ignore[misc]


class TestQuery:
    def test_filters(self, log: EventLog) -> None:
        log.append_all(
            [
                _created(1),
                _created(2),
                FundsCollected(post_id=1, creator=CREATOR, collected_amount=100),
                PostRemoved(post_id=1),
            ],
            START,
        )

        assert [r.sequence for r in log.records(post_id=1)] == [1, 3, 4]
        assert [r.post_id for r in log.records(event_type=EventType.POST_CREATED)] == [1, 2]
        assert log.records(post_id=2, event_type=EventType.POST_REMOVED) == []

    def test_returned_list_is_a_copy(self, log: EventLog) -> None:
        log.append_all([_created(1)], START)
        log.records().clear()
        assert len(log) == 1


class TestSubscribe:
    def test_callback_receives_each_record(self, log: EventLog) -> None:
        seen: list[EventRecord] = []
        log.subscribe(seen.append)

        log.append_all([_created(1), PostRemoved(post_id=1)], START)

        assert [r.event_type for r in seen] == [EventType.POST_CREATED, EventType.POST_REMOVED]

    def test_unsubscribe(self, log: EventLog) -> None:
        seen: list[EventRecord] = []
        unsubscribe = log.subscribe(seen.append)
        log.append_all([_created(1)], START)

        unsubscribe()
        unsubscribe()
        log.append_all([_created(2)], START)

        assert len(seen) == 1

    def test_failing_subscriber_does_not_stop_others(self, log: EventLog) -> None:
        def broken(record: EventRecord) -> None:
            raise RuntimeError("observer crashed")

        seen: list[EventRecord] = []
        log.subscribe(broken)
        log.subscribe(seen.append)

        records = log.append_all([_created(1), PostRemoved(post_id=1)], START)

        assert [r.sequence for r in records] == [1, 2]
        assert seen == records
        assert len(log) == 2
