"""Append-only ledger event log.

Records are appended in commit order by the CampaignStore and can never be
updated or deleted. Observers either query the log or subscribe a callback
that is invoked for every appended record. A failing subscriber is logged
and skipped; it never fails the operation whose events it observes.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from crowdfund_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime

    from crowdfund_ledger.domain.enums import EventType
    from crowdfund_ledger.domain.events import LedgerEvent

logger = get_logger(__name__)


@dataclass(frozen=True)
class EventRecord:
    """A committed ledger event with its position in the log."""

    sequence: int
    recorded_at: datetime
    event: LedgerEvent

    @property
    def event_type(self) -> EventType:
        return self.event.event_type

    @property
    def post_id(self) -> int:
        return self.event.post_id

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "recorded_at": self.recorded_at.isoformat(),
            "event_type": self.event_type.value,
            "post_id": self.post_id,
            "data": self.event.payload(),
        }


class EventLog:
    """Append-only notification stream."""

    def __init__(self) -> None:
        self._records: list[EventRecord] = []
        self._subscribers: list[Callable[[EventRecord], None]] = []
        self._lock = threading.Lock()

    def append_all(self, events: Iterable[LedgerEvent], recorded_at: datetime) -> list[EventRecord]:
        """Append a batch of events atomically. This is the ONLY write operation."""
        with self._lock:
            appended = []
            for event in events:
                record = EventRecord(
                    sequence=len(self._records) + 1,
                    recorded_at=recorded_at,
                    event=event,
                )
                self._records.append(record)
                appended.append(record)
            subscribers = list(self._subscribers)

        for record in appended:
            logger.debug(
                "event_log.appended",
                sequence=record.sequence,
                event_type=record.event_type.value,
                post_id=record.post_id,
            )
            for callback in subscribers:
                try:
                    callback(record)
                except Exception:
                    logger.exception(
                        "event_log.subscriber_failed",
                        sequence=record.sequence,
                        event_type=record.event_type.value,
                        post_id=record.post_id,
                    )
        return appended

    def subscribe(self, callback: Callable[[EventRecord], None]) -> Callable[[], None]:
        """Register an observer. Returns a function that unsubscribes it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def records(
        self,
        post_id: int | None = None,
        event_type: EventType | None = None,
    ) -> list[EventRecord]:
        """Return committed records in log order, optionally filtered."""
        with self._lock:
            records = list(self._records)
        if post_id is not None:
            records = [r for r in records if r.post_id == post_id]
        if event_type is not None:
            records = [r for r in records if r.event_type == event_type]
        return records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
