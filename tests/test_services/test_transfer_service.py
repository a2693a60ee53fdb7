"""Tests for the SimulatedWallet funds host."""

from __future__ import annotations

import pytest

from crowdfund_ledger.domain.exceptions import TransferError
from crowdfund_ledger.domain.funds_protocol import FundsTransfer, Transfer
from crowdfund_ledger.services.transfer_service import SimulatedWallet


@pytest.fixture
def wallet() -> SimulatedWallet:
    return SimulatedWallet(balances={"a": 100, "b": 50})


class TestExecute:
    def test_satisfies_protocol(self, wallet: SimulatedWallet) -> None:
        assert isinstance(wallet, FundsTransfer)

    def test_moves_value(self, wallet: SimulatedWallet) -> None:
        hashes = wallet.execute([Transfer("a", "b", 30)])

        assert len(hashes) == 1
        assert hashes[0].startswith("0x")
        assert wallet.balance_of("a") == 70
        assert wallet.balance_of("b") == 80

    def test_batch_sees_earlier_transfers(self, wallet: SimulatedWallet) -> None:
        wallet.execute([Transfer("a", "c", 100), Transfer("c", "b", 60)])
        assert wallet.balance_of("a") == 0
        assert wallet.balance_of("c") == 40
        assert wallet.balance_of("b") == 110

    def test_empty_batch(self, wallet: SimulatedWallet) -> None:
        assert wallet.execute([]) == []
        assert wallet.total_supply() == 150

    def test_insufficient_funds_rejects_whole_batch(self, wallet: SimulatedWallet) -> None:
        with pytest.raises(TransferError) as exc_info:
            wallet.execute([Transfer("a", "b", 10), Transfer("b", "a", 500)])

        assert exc_info.value.account == "b"
        assert exc_info.value.code == "TRANSFER_FAILED"
        assert wallet.balance_of("a") == 100
        assert wallet.balance_of("b") == 50

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_amount(self, wallet: SimulatedWallet, amount: int) -> None:
        with pytest.raises(TransferError):
            wallet.execute([Transfer("a", "b", amount)])

    def test_rejecting_recipient(self) -> None:
        wallet = SimulatedWallet(balances={"a": 100}, rejecting=["b"])
        with pytest.raises(TransferError) as exc_info:
            wallet.execute([Transfer("a", "b", 10)])
        assert exc_info.value.account == "b"
        assert wallet.balance_of("a") == 100

    def test_reject_incoming_toggle(self, wallet: SimulatedWallet) -> None:
        wallet.reject_incoming("b")
        with pytest.raises(TransferError):
            wallet.execute([Transfer("a", "b", 10)])

        wallet.reject_incoming("b", enabled=False)
        wallet.execute([Transfer("a", "b", 10)])
        assert wallet.balance_of("b") == 60

    def test_hashes_are_unique(self, wallet: SimulatedWallet) -> None:
        hashes = wallet.execute([Transfer("a", "b", 1) for _ in range(5)])
        assert len(set(hashes)) == 5


class TestHelpers:
    def test_opening_balance_for_unknown_accounts(self) -> None:
        wallet = SimulatedWallet(opening_balance=25)
        assert wallet.balance_of("new") == 25
        wallet.execute([Transfer("new", "other", 25)])
        assert wallet.balance_of("new") == 0
        assert wallet.balance_of("other") == 50

    def test_deposit(self, wallet: SimulatedWallet) -> None:
        assert wallet.deposit("a", 5) == 105
        assert wallet.total_supply() == 155

    def test_deposit_rejects_non_positive(self, wallet: SimulatedWallet) -> None:
        with pytest.raises(ValueError):
            wallet.deposit("a", 0)
