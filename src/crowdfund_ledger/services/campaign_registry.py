"""Campaign Registry — creates, reads and removes campaign records.

All access is by identifier through the CampaignStore; callers only ever
receive frozen snapshots.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from crowdfund_ledger.domain.events import PostCreated, PostRemoved
from crowdfund_ledger.domain.exceptions import ValidationError
from crowdfund_ledger.domain.models import Campaign
from crowdfund_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from datetime import datetime

    from crowdfund_ledger.domain.models import CampaignSnapshot
    from crowdfund_ledger.infrastructure.store import CampaignStore, StoreTransaction

logger = get_logger(__name__)

DEFAULT_CAMPAIGN_WINDOW = timedelta(days=5)

# Placeholder returned by list_ids() for removed posts
REMOVED_POST_ID = 0


class CampaignRegistry:
    """Owns the set of campaigns keyed by post id."""

    def __init__(self, store: CampaignStore, window: timedelta = DEFAULT_CAMPAIGN_WINDOW) -> None:
        self._store = store
        self._window = window

    @property
    def window(self) -> timedelta:
        return self._window

    def create(
        self,
        creator: str,
        goal_amount: int,
        min_contribution: int,
        now: datetime,
    ) -> int:
        """Open a new campaign and return its id."""
        if goal_amount <= 0:
            raise ValidationError(f"Goal amount must be positive, got {goal_amount}")
        if min_contribution <= 0:
            raise ValidationError(f"Minimum contribution must be positive, got {min_contribution}")

        with self._store.transaction(now) as tx:
            post_id = tx.next_post_id()
            campaign = Campaign(
                id=post_id,
                creator=creator,
                goal_amount=goal_amount,
                min_contribution=min_contribution,
                created_at=now,
                deadline=now + self._window,
            )
            tx.insert(campaign)
            tx.emit(
                PostCreated(
                    post_id=post_id,
                    creator=creator,
                    goal_amount=goal_amount,
                    min_contribution=min_contribution,
                    deadline=campaign.deadline,
                )
            )

        logger.info(
            "post.created",
            post_id=post_id,
            creator=creator,
            goal_amount=goal_amount,
            min_contribution=min_contribution,
            deadline=campaign.deadline.isoformat(),
        )
        return post_id

    def get(self, post_id: int) -> CampaignSnapshot:
        return self._store.load(post_id).snapshot()

    def list_ids(self) -> list[int]:
        """Return 1..post_count with REMOVED_POST_ID in place of removed posts."""
        return [
            post_id if self._store.exists(post_id) else REMOVED_POST_ID
            for post_id in range(1, self._store.post_count + 1)
        ]

    def remove(self, tx: StoreTransaction) -> None:
        """Delete the transaction's campaign on commit and record the removal.

        Only the SettlementEngine calls this, as the last step of a settlement.
        """
        post_id = tx.campaign.id
        tx.remove()
        tx.emit(PostRemoved(post_id=post_id))
