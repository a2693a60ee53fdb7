"""Funds Transfer Protocol.

Defines the interface the ledger uses to move value between accounts.
This is a Protocol (structural subtyping) so a funds host doesn't need to
inherit from a base class — it just needs to match the shape.

The domain layer has ZERO knowledge of how a host moves value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True)
class Transfer:
    """A single movement of value.

    Attributes:
        source: Account the value is taken from.
        recipient: Account the value is credited to.
        amount: Positive integer in the smallest currency unit.
    """

    source: str
    recipient: str
    amount: int


@runtime_checkable
class FundsTransfer(Protocol):
    """Protocol that every funds host must satisfy.

    ``execute`` is all-or-nothing: either every transfer in the batch is
    applied in order, or TransferError is raised and no balance changes.
    It returns one transaction reference per transfer.
    """

    def execute(self, transfers: Sequence[Transfer]) -> list[str]: ...
