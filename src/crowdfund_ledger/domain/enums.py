"""Domain enumerations for the Crowdfund Ledger.

These enums define the canonical states and record types used throughout
the system. They are framework-agnostic (no FastAPI imports).
"""

import enum


class PostStatus(enum.StrEnum):
    """Stored lifecycle states of a campaign.

    Transitions are enforced by the PostStateMachine guard.
    See domain/state_machine.py for the transition table.
    """

    ACTIVE = "ACTIVE"
    PAID = "PAID"
    REFUNDED = "REFUNDED"


class PostPhase(enum.StrEnum):
    """Time-dependent phase of an ACTIVE campaign.

    Not stored: derived from the clock, the deadline and the collected amount.
    """

    FUNDING = "FUNDING"
    REFUNDABLE = "REFUNDABLE"


class EventType(enum.StrEnum):
    """Types of records appended to the EventLog.

    Every committed state transition produces at least one record.
    """

    POST_CREATED = "PostCreated"
    FUNDS_COLLECTED = "FundsCollected"
    REFUND_ISSUED = "RefundIssued"
    POST_REMOVED = "PostRemoved"


class PostAction(enum.StrEnum):
    """Public operations a caller may attempt on a campaign."""

    FUND = "fund_post"
    CHECK_DEADLINE = "check_deadline"
    CLAIM_REFUND = "claim_refund"
