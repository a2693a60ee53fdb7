"""Shared test fixtures for the Crowdfund Ledger test suite.

Provides:
    - A manual clock pinned to a known instant
    - A simulated wallet with funded contributor accounts
    - A ledger wired to both
"""

from __future__ import annotations

import pytest

from crowdfund_ledger.domain.clock import ManualClock
from crowdfund_ledger.services.ledger_service import CrowdfundLedger
from crowdfund_ledger.services.transfer_service import SimulatedWallet
from tests.factories import ALICE, BOB, CAROL, CREATOR, START, STARTING_BALANCE

# ---------------------------------------------------------------------------
# Domain Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> ManualClock:
    """Return a manual clock starting at START."""
    return ManualClock(START)


@pytest.fixture
def wallet() -> SimulatedWallet:
    """Return a wallet where every contributor holds STARTING_BALANCE."""
    return SimulatedWallet(
        balances={
            CREATOR: 0,
            ALICE: STARTING_BALANCE,
            BOB: STARTING_BALANCE,
            CAROL: STARTING_BALANCE,
        }
    )


@pytest.fixture
def ledger(clock: ManualClock, wallet: SimulatedWallet) -> CrowdfundLedger:
    """Return a fresh ledger on the manual clock and simulated wallet."""
    return CrowdfundLedger(clock=clock, funds=wallet)
