"""Pydantic API schemas."""

from crowdfund_ledger.schemas.post import (
    AdvanceClockRequest,
    CheckDeadlineResponse,
    ClaimRefundRequest,
    ClockResponse,
    CollectedFundsResponse,
    ContributionEntry,
    ContributionResponse,
    CreatePostRequest,
    FundPostRequest,
    FundPostResponse,
    HealthResponse,
    LedgerEventResponse,
    PostIdsResponse,
    PostResponse,
    PostStatusResponse,
    RefundResponse,
    RemainingTimeResponse,
)

__all__ = [
    "AdvanceClockRequest",
    "CheckDeadlineResponse",
    "ClaimRefundRequest",
    "ClockResponse",
    "CollectedFundsResponse",
    "ContributionEntry",
    "ContributionResponse",
    "CreatePostRequest",
    "FundPostRequest",
    "FundPostResponse",
    "HealthResponse",
    "LedgerEventResponse",
    "PostIdsResponse",
    "PostResponse",
    "PostStatusResponse",
    "RefundResponse",
    "RemainingTimeResponse",
]
