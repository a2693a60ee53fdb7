"""Domain layer — pure business logic with zero framework dependencies."""

from crowdfund_ledger.domain.clock import Clock, ManualClock, SystemClock
from crowdfund_ledger.domain.enums import (
    EventType,
    PostAction,
    PostPhase,
    PostStatus,
)
from crowdfund_ledger.domain.events import (
    FundsCollected,
    LedgerEvent,
    PostCreated,
    PostRemoved,
    RefundIssued,
)
from crowdfund_ledger.domain.exceptions import (
    InvalidStateTransitionError,
    LedgerError,
    NoContributionError,
    NotFoundError,
    StateError,
    TransferError,
    ValidationError,
)
from crowdfund_ledger.domain.funds_protocol import FundsTransfer, Transfer
from crowdfund_ledger.domain.models import Campaign, CampaignSnapshot, ContributionTracker
from crowdfund_ledger.domain.state_machine import (
    PostStateMachine,
    validate_transition,
)

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "EventType",
    "PostAction",
    "PostPhase",
    "PostStatus",
    "FundsCollected",
    "LedgerEvent",
    "PostCreated",
    "PostRemoved",
    "RefundIssued",
    "FundsTransfer",
    "Transfer",
    "InvalidStateTransitionError",
    "LedgerError",
    "NoContributionError",
    "NotFoundError",
    "StateError",
    "TransferError",
    "ValidationError",
    "Campaign",
    "CampaignSnapshot",
    "ContributionTracker",
    "PostStateMachine",
    "validate_transition",
]
