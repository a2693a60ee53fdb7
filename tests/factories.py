"""Accounts and instants shared across the test suite."""

from __future__ import annotations

from datetime import UTC, datetime

CREATOR = "0xC0FFEE0000000000000000000000000000000001"
ALICE = "0xA11CE00000000000000000000000000000000002"
BOB = "0xB0B0000000000000000000000000000000000003"
CAROL = "0xCA401000000000000000000000000000000000004"

STARTING_BALANCE = 1_000
START = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
