"""Transfer Service — moves value between accounts for the ledger.

SimulatedWallet is the in-process host used by tests, the simulation and the
development API. It keeps integer balances per account and generates fake
transaction hashes.
"""

from __future__ import annotations

import threading
import uuid
from typing import TYPE_CHECKING

from crowdfund_ledger.domain.exceptions import TransferError
from crowdfund_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from crowdfund_ledger.domain.funds_protocol import Transfer

logger = get_logger(__name__)


class SimulatedWallet:
    """In-memory account balances with atomic batch transfers."""

    def __init__(
        self,
        balances: Mapping[str, int] | None = None,
        opening_balance: int = 0,
        rejecting: Iterable[str] = (),
    ) -> None:
        """Initialize the wallet.

        Args:
            balances: Starting balances per account.
            opening_balance: Balance assumed for accounts seen for the first time.
            rejecting: Accounts that refuse incoming transfers (simulates a
                       recipient whose receive hook reverts).
        """
        self._balances: dict[str, int] = dict(balances or {})
        self._opening_balance = opening_balance
        self._rejecting: set[str] = set(rejecting)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Host operations
    # ------------------------------------------------------------------

    def execute(self, transfers: Sequence[Transfer]) -> list[str]:
        with self._lock:
            staged = dict(self._balances)
            for transfer in transfers:
                if transfer.amount <= 0:
                    self._reject(transfer, "amount must be positive", transfer.source)
                if transfer.recipient in self._rejecting:
                    self._reject(
                        transfer,
                        f"recipient {transfer.recipient} rejected the transfer",
                        transfer.recipient,
                    )
                available = staged.get(transfer.source, self._opening_balance)
                if available < transfer.amount:
                    self._reject(
                        transfer,
                        f"insufficient funds in {transfer.source}: "
                        f"required {transfer.amount}, available {available}",
                        transfer.source,
                    )
                staged[transfer.source] = available - transfer.amount
                staged[transfer.recipient] = (
                    staged.get(transfer.recipient, self._opening_balance) + transfer.amount
                )
            self._balances = staged

        tx_hashes = ["0x" + uuid.uuid4().hex + uuid.uuid4().hex for _ in transfers]
        for transfer, tx_hash in zip(transfers, tx_hashes, strict=True):
            logger.info(
                "transfer.applied",
                tx_hash=tx_hash,
                amount=transfer.amount,
                from_account=transfer.source,
                to_account=transfer.recipient,
            )
        return tx_hashes

    def _reject(self, transfer: Transfer, reason: str, account: str) -> None:
        logger.warning(
            "transfer.batch_rejected",
            reason=reason,
            from_account=transfer.source,
            to_account=transfer.recipient,
            amount=transfer.amount,
        )
        raise TransferError(f"Transfer rejected: {reason}", account=account)

    # ------------------------------------------------------------------
    # Test / simulation helpers
    # ------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self._balances.get(account, self._opening_balance)

    def deposit(self, account: str, amount: int) -> int:
        """Credit an account from outside the ledger. Returns the new balance."""
        if amount <= 0:
            raise ValueError("deposit amount must be positive")
        with self._lock:
            balance = self._balances.get(account, self._opening_balance) + amount
            self._balances[account] = balance
            return balance

    def reject_incoming(self, account: str, enabled: bool = True) -> None:
        with self._lock:
            if enabled:
                self._rejecting.add(account)
            else:
                self._rejecting.discard(account)

    def total_supply(self) -> int:
        """Sum of all tracked balances."""
        with self._lock:
            return sum(self._balances.values())
