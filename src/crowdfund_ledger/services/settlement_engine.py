"""Settlement Engine — funding, deadline settlement and refunds.

This is the application layer that coordinates between:
    - Domain state machine (transition guard)
    - CampaignStore transactions (isolation + atomic commit)
    - Funds host (queued transfers, executed last)
    - Event log (records buffered until commit)

Every public method is one transaction. All precondition checks run before
any mutation, and transfers are queued so they execute as the final step of
the commit; a failure anywhere leaves the campaign exactly as it was.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from statemachine.exceptions import TransitionNotAllowed

from crowdfund_ledger.domain.enums import PostStatus
from crowdfund_ledger.domain.events import FundsCollected, RefundIssued
from crowdfund_ledger.domain.exceptions import (
    InvalidStateTransitionError,
    NoContributionError,
    NotFoundError,
    StateError,
    ValidationError,
)
from crowdfund_ledger.domain.state_machine import validate_transition
from crowdfund_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from datetime import datetime

    from crowdfund_ledger.domain.models import Campaign
    from crowdfund_ledger.infrastructure.store import CampaignStore, StoreTransaction
    from crowdfund_ledger.services.campaign_registry import CampaignRegistry

logger = get_logger(__name__)


class SettlementEngine:
    """Applies the state-changing operations on existing campaigns."""

    def __init__(
        self,
        store: CampaignStore,
        registry: CampaignRegistry,
        escrow_account: str = "ESCROW",
    ) -> None:
        self._store = store
        self._registry = registry
        self._escrow_account = escrow_account

    @property
    def escrow_account(self) -> str:
        return self._escrow_account

    # ------------------------------------------------------------------
    # Funding
    # ------------------------------------------------------------------

    def fund_post(self, post_id: int, contributor: str, amount: int, now: datetime) -> bool:
        """Record a contribution; settle immediately if it meets the goal.

        Returns True if this call paid out the campaign and removed it.
        """
        with self._store.transaction(now, post_id) as tx:
            campaign = tx.campaign
            self._require_active(campaign)
            if now > campaign.deadline:
                raise StateError(post_id, f"Post {post_id} deadline has passed")
            if amount < campaign.min_contribution:
                raise ValidationError(
                    f"Contribution {amount} is below the minimum of {campaign.min_contribution}"
                )

            self._fire_transition(campaign, "contribution_recorded")
            balance = campaign.tracker.record(contributor, amount)
            tx.transfer(contributor, self._escrow_account, amount)

            collected = 0
            settled = campaign.goal_met
            if settled:
                collected = self._pay_creator(tx)

        logger.info(
            "post.funded",
            post_id=post_id,
            contributor=contributor,
            amount=amount,
            contributor_balance=balance,
        )
        if settled:
            logger.info("post.funds_collected", post_id=post_id, collected_amount=collected)
            logger.info("post.removed", post_id=post_id, reason="goal_reached")
        return settled

    # ------------------------------------------------------------------
    # Deadline settlement
    # ------------------------------------------------------------------

    def check_deadline(self, post_id: int, now: datetime) -> PostStatus:
        """Settle a campaign whose deadline has been reached.

        Pays the creator if the goal is met, otherwise refunds every
        contributor that still holds a balance. Returns the final status.
        """
        with self._store.transaction(now, post_id) as tx:
            campaign = tx.campaign
            self._require_active(campaign)
            if now < campaign.deadline:
                raise StateError(post_id, f"Post {post_id} deadline has not been reached")

            collected = 0
            refunds: list[tuple[str, int]] = []
            if campaign.goal_met:
                collected = self._pay_creator(tx)
            else:
                refunds = self._refund_all(tx)

            final_status = campaign.status

        if final_status == PostStatus.PAID:
            logger.info("post.funds_collected", post_id=post_id, collected_amount=collected)
        else:
            for contributor, amount in refunds:
                logger.info(
                    "post.refund_issued",
                    post_id=post_id,
                    contributor=contributor,
                    amount=amount,
                )
        logger.info("post.removed", post_id=post_id, reason=f"deadline_{final_status.lower()}")
        return final_status

    # ------------------------------------------------------------------
    # Individual refunds
    # ------------------------------------------------------------------

    def claim_refund(self, post_id: int, contributor: str, now: datetime) -> int:
        """Refund one contributor of an expired, unfunded campaign. Returns the amount.

        A post that was already settled and removed holds no contributions, so
        claims against it raise NoContributionError. Ids never assigned raise
        NotFoundError.
        """
        try:
            return self._claim_refund(post_id, contributor, now)
        except NotFoundError as err:
            if 1 <= post_id <= self._store.post_count:
                raise NoContributionError(post_id, contributor) from err
            raise

    def _claim_refund(self, post_id: int, contributor: str, now: datetime) -> int:
        with self._store.transaction(now, post_id) as tx:
            campaign = tx.campaign
            self._require_active(campaign)
            if now < campaign.deadline:
                raise StateError(post_id, f"Post {post_id} deadline has not been reached")
            if campaign.goal_met:
                raise StateError(post_id, f"Post {post_id} reached its goal; no refunds available")
            if campaign.tracker.amount_of(contributor) == 0:
                raise NoContributionError(post_id, contributor)

            self._fire_transition(campaign, "refund_claimed")
            amount = campaign.tracker.release(contributor)
            tx.transfer(self._escrow_account, contributor, amount)
            tx.emit(RefundIssued(post_id=post_id, contributor=contributor, amount=amount))

        logger.info("post.refund_issued", post_id=post_id, contributor=contributor, amount=amount)
        return amount

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _pay_creator(self, tx: StoreTransaction) -> int:
        campaign = tx.campaign
        self._fire_transition(campaign, "goal_reached")
        collected = campaign.collected_amount
        campaign.active = False
        campaign.status = PostStatus.PAID
        tx.transfer(self._escrow_account, campaign.creator, collected)
        tx.emit(
            FundsCollected(
                post_id=campaign.id,
                creator=campaign.creator,
                collected_amount=collected,
            )
        )
        self._registry.remove(tx)
        return collected

    def _refund_all(self, tx: StoreTransaction) -> list[tuple[str, int]]:
        campaign = tx.campaign
        self._fire_transition(campaign, "refunds_completed")
        campaign.active = False
        campaign.status = PostStatus.REFUNDED

        refunds = []
        for contributor in campaign.tracker.contributors:
            amount = campaign.tracker.release(contributor)
            if amount == 0:
                continue
            tx.transfer(self._escrow_account, contributor, amount)
            tx.emit(RefundIssued(post_id=campaign.id, contributor=contributor, amount=amount))
            refunds.append((contributor, amount))

        self._registry.remove(tx)
        return refunds

    @staticmethod
    def _require_active(campaign: Campaign) -> None:
        if not campaign.active:
            raise StateError(campaign.id, f"Post {campaign.id} is not active")

    @staticmethod
    def _fire_transition(campaign: Campaign, event_name: str) -> None:
        """Validate a state machine transition.

        Raises InvalidStateTransitionError if the transition is illegal.
        """
        try:
            validate_transition(campaign.status.value, event_name)
        except (TransitionNotAllowed, ValueError) as err:
            raise InvalidStateTransitionError(
                campaign.id, campaign.status.value, event_name
            ) from err
