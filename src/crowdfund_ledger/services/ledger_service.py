"""Ledger Service — the public surface of the crowdfund ledger.

Both REST routes and MCP tools call into CrowdfundLedger, so every caller
shares one store, one clock and one event log. The ledger reads the clock
once per operation and passes that instant down to the registry and the
settlement engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from crowdfund_ledger.domain.clock import ManualClock, SystemClock
from crowdfund_ledger.domain.enums import PostAction, PostPhase
from crowdfund_ledger.infrastructure.event_log import EventLog
from crowdfund_ledger.infrastructure.store import CampaignStore
from crowdfund_ledger.logging_config import ledger_operation
from crowdfund_ledger.services.campaign_registry import DEFAULT_CAMPAIGN_WINDOW, CampaignRegistry
from crowdfund_ledger.services.settlement_engine import SettlementEngine
from crowdfund_ledger.services.transfer_service import SimulatedWallet

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import timedelta

    from crowdfund_ledger.config import Settings
    from crowdfund_ledger.domain.clock import Clock
    from crowdfund_ledger.domain.enums import EventType, PostStatus
    from crowdfund_ledger.domain.funds_protocol import FundsTransfer
    from crowdfund_ledger.domain.models import CampaignSnapshot
    from crowdfund_ledger.infrastructure.event_log import EventRecord


class CrowdfundLedger:
    """Escrow-style crowdfunding ledger."""

    def __init__(
        self,
        clock: Clock,
        funds: FundsTransfer,
        window: timedelta = DEFAULT_CAMPAIGN_WINDOW,
        escrow_account: str = "ESCROW",
        event_log: EventLog | None = None,
    ) -> None:
        self.clock = clock
        self.funds = funds
        self.event_log = event_log or EventLog()
        self._store = CampaignStore(funds=funds, event_log=self.event_log)
        self.registry = CampaignRegistry(self._store, window=window)
        self.engine = SettlementEngine(self._store, self.registry, escrow_account=escrow_account)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        clock: Clock | None = None,
        funds: FundsTransfer | None = None,
    ) -> CrowdfundLedger:
        """Build a ledger wired to the simulated wallet and the configured clock."""
        if clock is None:
            clock = ManualClock() if settings.clock_mode == "manual" else SystemClock()
        if funds is None:
            funds = SimulatedWallet(opening_balance=settings.wallet_opening_balance)
        return cls(
            clock=clock,
            funds=funds,
            window=settings.campaign_window,
            escrow_account=settings.escrow_account,
        )

    @property
    def escrow_account(self) -> str:
        return self.engine.escrow_account

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create_post(self, creator: str, goal_amount: int, min_contribution: int) -> int:
        with ledger_operation("create_post", creator=creator):
            return self.registry.create(creator, goal_amount, min_contribution, self.clock.now())

    def fund_post(self, post_id: int, contributor: str, amount: int) -> bool:
        with ledger_operation("fund_post", post_id=post_id):
            return self.engine.fund_post(post_id, contributor, amount, self.clock.now())

    def check_deadline(self, post_id: int) -> PostStatus:
        with ledger_operation("check_deadline", post_id=post_id):
            return self.engine.check_deadline(post_id, self.clock.now())

    def claim_refund(self, post_id: int, contributor: str) -> int:
        with ledger_operation("claim_refund", post_id=post_id):
            return self.engine.claim_refund(post_id, contributor, self.clock.now())

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    def get_post(self, post_id: int) -> CampaignSnapshot:
        return self.registry.get(post_id)

    def get_post_ids(self) -> list[int]:
        return self.registry.list_ids()

    def get_remaining_time(self, post_id: int) -> int:
        """Seconds until the deadline, or 0 once it has passed."""
        post = self.registry.get(post_id)
        remaining = (post.deadline - self.clock.now()).total_seconds()
        return max(0, int(remaining))

    def get_collected_funds(self, post_id: int) -> int:
        return self.registry.get(post_id).collected_amount

    def get_contribution(self, post_id: int, contributor: str) -> int:
        return self.registry.get(post_id).amount_of(contributor)

    def get_status(self, post_id: int) -> dict:
        """Get post status with its phase and the actions allowed right now."""
        post = self.registry.get(post_id)
        now = self.clock.now()

        allowed: list[str] = []
        if now <= post.deadline:
            allowed.append(PostAction.FUND.value)
        if now >= post.deadline:
            allowed.append(PostAction.CHECK_DEADLINE.value)
            if post.collected_amount < post.goal_amount and post.collected_amount > 0:
                allowed.append(PostAction.CLAIM_REFUND.value)

        return {
            "post_id": post.id,
            "status": post.status.value,
            "phase": (PostPhase.FUNDING if now < post.deadline else PostPhase.REFUNDABLE).value,
            "active": post.active,
            "goal_amount": post.goal_amount,
            "collected_amount": post.collected_amount,
            "remaining_seconds": max(0, int((post.deadline - now).total_seconds())),
            "allowed_actions": allowed,
        }

    def get_events(
        self,
        post_id: int | None = None,
        event_type: EventType | None = None,
    ) -> list[EventRecord]:
        """Get the committed event history, optionally for one post."""
        return self.event_log.records(post_id=post_id, event_type=event_type)

    def subscribe(self, callback: Callable[[EventRecord], None]) -> Callable[[], None]:
        return self.event_log.subscribe(callback)
