#!/usr/bin/env python3
"""Crowdfund Ledger — End-to-End Simulation.

Runs three scenarios against an in-process ledger with a manual clock and
a simulated wallet:

    Scenario 1: Goal Reached
        - Creator opens a campaign (goal 100, min 10)
        - Alice pledges 60, Bob pledges 40 -> goal met, creator paid, post removed

    Scenario 2: Deadline Missed
        - Creator opens a campaign (goal 200, min 10)
        - Alice pledges 100
        - Five days pass -> check_deadline refunds Alice in full

    Scenario 3: Early Claim, Then Bulk Refund
        - Creator opens a campaign (goal 500, min 10)
        - Alice and Bob pledge
        - Deadline passes, Alice claims her refund herself
        - check_deadline refunds Bob and skips Alice (balance already zero)

Usage:
    uv run python simulation.py
    uv run python simulation.py --scenario 2
"""

from __future__ import annotations

import argparse
from datetime import timedelta

# ---------------------------------------------------------------------------
# Configure structured logging BEFORE importing app modules
# ---------------------------------------------------------------------------
from crowdfund_ledger.logging_config import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False)
logger = get_logger("simulation")

from crowdfund_ledger.domain.clock import ManualClock  # noqa: E402
from crowdfund_ledger.services.ledger_service import CrowdfundLedger  # noqa: E402
from crowdfund_ledger.services.transfer_service import SimulatedWallet  # noqa: E402

CREATOR = "0xC0FFEE0000000000000000000000000000000001"
ALICE = "0xA11CE00000000000000000000000000000000002"
BOB = "0xB0B0000000000000000000000000000000000003"
STARTING_BALANCE = 1_000


def new_ledger() -> tuple[CrowdfundLedger, ManualClock, SimulatedWallet]:
    clock = ManualClock()
    wallet = SimulatedWallet(
        balances={CREATOR: 0, ALICE: STARTING_BALANCE, BOB: STARTING_BALANCE},
    )
    return CrowdfundLedger(clock=clock, funds=wallet), clock, wallet


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def banner(text: str) -> None:
    line = "=" * 70
    print(f"\n{line}\n  {text}\n{line}")


def section(text: str) -> None:
    print(f"\n--- {text} ---")


def print_balances(ledger: CrowdfundLedger, wallet: SimulatedWallet) -> None:
    for name, account in (("creator", CREATOR), ("alice", ALICE), ("bob", BOB)):
        print(f"  {name:<8} {wallet.balance_of(account):>6}")
    print(f"  {'escrow':<8} {wallet.balance_of(ledger.escrow_account):>6}")


def print_event_log(ledger: CrowdfundLedger, post_id: int) -> None:
    section(f"Event log for post {post_id}")
    for record in ledger.get_events(post_id=post_id):
        print(f"  #{record.sequence:<3} {record.event_type.value:<15} {record.event.payload()}")


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def scenario_1_goal_reached() -> None:
    banner("Scenario 1: Goal Reached")
    ledger, _clock, wallet = new_ledger()

    post_id = ledger.create_post(CREATOR, goal_amount=100, min_contribution=10)
    section("Alice pledges 60")
    ledger.fund_post(post_id, ALICE, 60)
    print(f"  collected: {ledger.get_collected_funds(post_id)}")

    section("Bob pledges 40")
    settled = ledger.fund_post(post_id, BOB, 40)
    print(f"  settled: {settled}, post ids: {ledger.get_post_ids()}")

    print_balances(ledger, wallet)
    print_event_log(ledger, post_id)


def scenario_2_deadline_missed() -> None:
    banner("Scenario 2: Deadline Missed")
    ledger, clock, wallet = new_ledger()

    post_id = ledger.create_post(CREATOR, goal_amount=200, min_contribution=10)
    ledger.fund_post(post_id, ALICE, 100)
    print(f"  remaining: {ledger.get_remaining_time(post_id)}s")

    section("Five days pass")
    clock.advance(timedelta(days=5))
    print(f"  status: {ledger.get_status(post_id)}")

    status = ledger.check_deadline(post_id)
    print(f"  settled as {status.value}, post ids: {ledger.get_post_ids()}")

    print_balances(ledger, wallet)
    print_event_log(ledger, post_id)


def scenario_3_claim_then_bulk_refund() -> None:
    banner("Scenario 3: Early Claim, Then Bulk Refund")
    ledger, clock, wallet = new_ledger()

    post_id = ledger.create_post(CREATOR, goal_amount=500, min_contribution=10)
    ledger.fund_post(post_id, ALICE, 120)
    ledger.fund_post(post_id, BOB, 80)
    ledger.fund_post(post_id, ALICE, 30)

    clock.advance(timedelta(days=5, seconds=1))

    section("Alice claims her refund")
    refunded = ledger.claim_refund(post_id, ALICE)
    print(f"  refunded {refunded}, collected now {ledger.get_collected_funds(post_id)}")

    section("Anyone triggers the bulk settlement")
    ledger.check_deadline(post_id)

    print_balances(ledger, wallet)
    print_event_log(ledger, post_id)


SCENARIOS = {
    1: scenario_1_goal_reached,
    2: scenario_2_deadline_missed,
    3: scenario_3_claim_then_bulk_refund,
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Crowdfund Ledger Simulation")
    parser.add_argument(
        "--scenario",
        type=int,
        choices=sorted(SCENARIOS),
        help="Run a single scenario (default: all)",
    )
    args = parser.parse_args()

    selected = [args.scenario] if args.scenario else sorted(SCENARIOS)
    for number in selected:
        SCENARIOS[number]()
    logger.info("simulation.finished", scenarios=selected)


if __name__ == "__main__":
    main()
