"""Campaign records and per-campaign contribution accounting.

Two shapes of a campaign exist:
    - Campaign:          the mutable record owned by the CampaignStore.
    - CampaignSnapshot:  the frozen copy handed to callers.

ContributionTracker is embedded in every Campaign. It keeps the
contributor -> amount map, the append-once contributor order used for bulk
refunds, and the running total that backs ``collected_amount``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003 - needed at runtime by dataclasses

from crowdfund_ledger.domain.enums import PostStatus


@dataclass
class ContributionTracker:
    """Contributor balances for a single campaign.

    ``total`` always equals ``sum(contributions.values())``; every mutation
    goes through record() or release().
    """

    contributors: list[str] = field(default_factory=list)
    contributions: dict[str, int] = field(default_factory=dict)
    total: int = 0

    def record(self, contributor: str, amount: int) -> int:
        """Accumulate a contribution and return the contributor's new balance."""
        if contributor not in self.contributions:
            self.contributors.append(contributor)
            self.contributions[contributor] = 0
        self.contributions[contributor] += amount
        self.total += amount
        return self.contributions[contributor]

    def amount_of(self, contributor: str) -> int:
        return self.contributions.get(contributor, 0)

    def release(self, contributor: str) -> int:
        """Zero a contributor's balance and return what it held.

        The contributor keeps its place in the ordered list so a later bulk
        refund pass skips it instead of paying twice.
        """
        amount = self.contributions.get(contributor, 0)
        if amount:
            self.contributions[contributor] = 0
            self.total -= amount
        return amount


@dataclass
class Campaign:
    """A funding request with a goal, deadline, and accumulated pledges."""

    id: int
    creator: str
    goal_amount: int
    min_contribution: int
    created_at: datetime
    deadline: datetime
    active: bool = True
    status: PostStatus = PostStatus.ACTIVE
    tracker: ContributionTracker = field(default_factory=ContributionTracker)

    @property
    def collected_amount(self) -> int:
        return self.tracker.total

    @property
    def goal_met(self) -> bool:
        return self.collected_amount >= self.goal_amount

    def copy(self) -> Campaign:
        """Deep copy used as the working record of a transaction."""
        return copy.deepcopy(self)

    def snapshot(self) -> CampaignSnapshot:
        return CampaignSnapshot(
            id=self.id,
            creator=self.creator,
            goal_amount=self.goal_amount,
            min_contribution=self.min_contribution,
            created_at=self.created_at,
            deadline=self.deadline,
            collected_amount=self.collected_amount,
            active=self.active,
            status=self.status,
            contributors=tuple(self.tracker.contributors),
            contributions=tuple(
                (account, self.tracker.contributions[account])
                for account in self.tracker.contributors
            ),
        )


@dataclass(frozen=True)
class CampaignSnapshot:
    """Immutable view of a campaign at the moment it was read.

    ``contributions`` is a tuple of (account, amount) pairs in contributor
    order so the snapshot stays hashable and cannot be mutated.
    """

    id: int
    creator: str
    goal_amount: int
    min_contribution: int
    created_at: datetime
    deadline: datetime
    collected_amount: int
    active: bool
    status: PostStatus
    contributors: tuple[str, ...]
    contributions: tuple[tuple[str, int], ...]

    def amount_of(self, contributor: str) -> int:
        for account, amount in self.contributions:
            if account == contributor:
                return amount
        return 0
