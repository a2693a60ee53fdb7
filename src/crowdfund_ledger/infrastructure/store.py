"""In-process campaign store with transactional access.

The store is the explicit replacement for contract storage: it owns every
Campaign record, the monotonically increasing post counter, and the commit
path to the funds host and the event log.

Each public ledger operation runs inside one ``transaction``:
    1. The target campaign's lock is acquired (creation takes the store lock).
    2. The operation mutates a deep copy of the record, buffers events, and
       queues transfers and removal.
    3. On commit, queued transfers run as one all-or-nothing batch; only if
       they succeed is the copy written back (or the record deleted) and the
       buffered events appended to the log.
Any exception before or during commit discards the copy, the events and the
transfers, so a failed operation leaves no trace.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from crowdfund_ledger.domain.exceptions import NotFoundError
from crowdfund_ledger.domain.funds_protocol import Transfer
from crowdfund_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime

    from crowdfund_ledger.domain.events import LedgerEvent
    from crowdfund_ledger.domain.funds_protocol import FundsTransfer
    from crowdfund_ledger.domain.models import Campaign
    from crowdfund_ledger.infrastructure.event_log import EventLog

logger = get_logger(__name__)


class StoreTransaction:
    """Working state of one ledger operation. Created only by CampaignStore."""

    def __init__(self, store: CampaignStore, now: datetime, campaign: Campaign | None) -> None:
        self._store = store
        self.now = now
        self._campaign = campaign
        self._inserted = False
        self._removed = False
        self.events: list[LedgerEvent] = []
        self.transfers: list[Transfer] = []

    @property
    def campaign(self) -> Campaign:
        if self._campaign is None or self._removed:
            raise RuntimeError("Transaction has no live campaign")
        return self._campaign

    @property
    def removed(self) -> bool:
        return self._removed

    def next_post_id(self) -> int:
        """Identifier the next inserted campaign will receive."""
        return self._store.post_count + 1

    def insert(self, campaign: Campaign) -> None:
        if self._campaign is not None:
            raise RuntimeError("Transaction already holds a campaign")
        if campaign.id != self.next_post_id():
            raise RuntimeError(f"Campaign id {campaign.id} is not the next post id")
        self._campaign = campaign
        self._inserted = True

    @property
    def inserted(self) -> bool:
        return self._inserted

    @property
    def record(self) -> Campaign | None:
        """The working record, including one marked for removal."""
        return self._campaign

    def remove(self) -> None:
        if self._campaign is None or self._removed:
            raise RuntimeError("Transaction has no live campaign")
        self._removed = True

    def emit(self, event: LedgerEvent) -> None:
        self.events.append(event)

    def transfer(self, source: str, recipient: str, amount: int) -> None:
        self.transfers.append(Transfer(source=source, recipient=recipient, amount=amount))


class CampaignStore:
    """Owns all campaign records, the post counter and the commit path."""

    def __init__(self, funds: FundsTransfer, event_log: EventLog) -> None:
        self._funds = funds
        self._event_log = event_log
        self._campaigns: dict[int, Campaign] = {}
        self._post_count = 0
        self._store_lock = threading.RLock()
        self._post_locks: dict[int, threading.RLock] = {}

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def post_count(self) -> int:
        with self._store_lock:
            return self._post_count

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load(self, post_id: int) -> Campaign:
        """Return a private copy of a stored campaign or raise NotFoundError."""
        with self._lock_for(post_id):
            campaign = self._campaigns.get(post_id)
            if campaign is None:
                raise NotFoundError(post_id)
            return campaign.copy()

    def exists(self, post_id: int) -> bool:
        with self._store_lock:
            return post_id in self._campaigns

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self, now: datetime, post_id: int | None = None) -> Iterator[StoreTransaction]:
        """Run one operation atomically.

        With ``post_id`` the transaction works on a copy of that campaign;
        without it, the transaction may insert a new campaign and holds the
        store lock so the post counter cannot move underneath it.
        """
        lock = self._store_lock if post_id is None else self._lock_for(post_id)
        with lock:
            campaign = None
            if post_id is not None:
                stored = self._campaigns.get(post_id)
                if stored is None:
                    raise NotFoundError(post_id)
                campaign = stored.copy()

            tx = StoreTransaction(self, now, campaign)
            yield tx
            self._commit(tx)

    def _commit(self, tx: StoreTransaction) -> None:
        with self._store_lock:
            if tx.transfers:
                self._funds.execute(tx.transfers)
                logger.debug("transfer.batch_applied", count=len(tx.transfers))

            campaign = tx.record
            if campaign is not None:
                if tx.removed:
                    self._campaigns.pop(campaign.id, None)
                    self._post_locks.pop(campaign.id, None)
                else:
                    self._campaigns[campaign.id] = campaign
                    self._post_locks.setdefault(campaign.id, threading.RLock())
                if tx.inserted:
                    self._post_count = campaign.id

            if tx.events:
                self._event_log.append_all(tx.events, recorded_at=tx.now)

    def _lock_for(self, post_id: int) -> threading.RLock:
        """Return the lock of a stored campaign; unknown ids raise NotFoundError.

        Callers must re-check existence after acquiring the lock, since the
        campaign may have been removed while they waited.
        """
        with self._store_lock:
            lock = self._post_locks.get(post_id)
            if lock is None:
                raise NotFoundError(post_id)
            return lock
