"""Ledger event records.

One frozen dataclass per record type. ``payload()`` returns the fields an
observer sees, keyed the way the EventLog and the API expose them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime  # noqa: TC003 - needed at runtime by dataclasses
from typing import ClassVar

from crowdfund_ledger.domain.enums import EventType


@dataclass(frozen=True)
class LedgerEvent:
    """Base class for all records appended to the EventLog."""

    event_type: ClassVar[EventType]

    post_id: int

    def payload(self) -> dict:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, datetime):
                data[key] = value.isoformat()
        return data


@dataclass(frozen=True)
class PostCreated(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.POST_CREATED

    creator: str
    goal_amount: int
    min_contribution: int
    deadline: datetime


@dataclass(frozen=True)
class FundsCollected(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.FUNDS_COLLECTED

    creator: str
    collected_amount: int


@dataclass(frozen=True)
class RefundIssued(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.REFUND_ISSUED

    contributor: str
    amount: int


@dataclass(frozen=True)
class PostRemoved(LedgerEvent):
    event_type: ClassVar[EventType] = EventType.POST_REMOVED
