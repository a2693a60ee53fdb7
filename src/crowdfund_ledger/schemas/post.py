"""Pydantic schemas for the Posts API.

These schemas define the request/response shapes for the REST API and
MCP tools. They are separate from the domain records to maintain clean
boundaries between the API and the ledger core.

Amount rules (positive goal, minimum contribution) are enforced by the
ledger itself so every surface reports them with the same error code.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - needed at runtime by pydantic
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from crowdfund_ledger.domain.models import CampaignSnapshot
    from crowdfund_ledger.infrastructure.event_log import EventRecord

# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------


class CreatePostRequest(BaseModel):
    """Request body for opening a new campaign."""

    creator: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Account that receives the funds if the goal is met",
        examples=["0x742d35Cc6634C0532925a3b844Bc9e7595f2bD18"],
    )
    goal_amount: int = Field(
        ...,
        description="Funding goal in the smallest currency unit",
        examples=[100],
    )
    min_contribution: int = Field(
        ...,
        description="Smallest accepted contribution in the smallest currency unit",
        examples=[10],
    )


class FundPostRequest(BaseModel):
    """Request body for contributing to a campaign."""

    contributor: str = Field(..., min_length=1, max_length=128)
    amount: int = Field(..., description="Contribution in the smallest currency unit")


class ClaimRefundRequest(BaseModel):
    """Request body for a contributor reclaiming their pledge."""

    contributor: str = Field(..., min_length=1, max_length=128)


class AdvanceClockRequest(BaseModel):
    """Request body for moving the manual clock forward."""

    seconds: int = Field(..., ge=0, description="Seconds to advance")


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class ContributionEntry(BaseModel):
    contributor: str
    amount: int


class PostResponse(BaseModel):
    """Response schema for a campaign snapshot."""

    id: int
    creator: str
    goal_amount: int
    min_contribution: int
    collected_amount: int
    created_at: datetime
    deadline: datetime
    active: bool
    status: str
    contributions: list[ContributionEntry]

    @classmethod
    def from_snapshot(cls, post: CampaignSnapshot) -> PostResponse:
        return cls(
            id=post.id,
            creator=post.creator,
            goal_amount=post.goal_amount,
            min_contribution=post.min_contribution,
            collected_amount=post.collected_amount,
            created_at=post.created_at,
            deadline=post.deadline,
            active=post.active,
            status=post.status.value,
            contributions=[
                ContributionEntry(contributor=account, amount=amount)
                for account, amount in post.contributions
            ],
        )


class PostIdsResponse(BaseModel):
    """Post ids 1..N; removed posts appear as 0."""

    post_ids: list[int]


class FundPostResponse(BaseModel):
    post_id: int
    contributor: str
    amount: int
    settled: bool = Field(
        description="True if this contribution met the goal and paid out the campaign"
    )


class CheckDeadlineResponse(BaseModel):
    post_id: int
    status: str


class RefundResponse(BaseModel):
    post_id: int
    contributor: str
    amount: int


class RemainingTimeResponse(BaseModel):
    post_id: int
    remaining_seconds: int


class CollectedFundsResponse(BaseModel):
    post_id: int
    collected_amount: int


class ContributionResponse(BaseModel):
    post_id: int
    contributor: str
    amount: int


class PostStatusResponse(BaseModel):
    """Lightweight status check response."""

    post_id: int
    status: str
    phase: str
    active: bool
    goal_amount: int
    collected_amount: int
    remaining_seconds: int
    allowed_actions: list[str] = Field(
        description="Operations that would pass their time checks right now"
    )


class LedgerEventResponse(BaseModel):
    """Response schema for a committed ledger event."""

    sequence: int
    recorded_at: datetime
    event_type: str
    post_id: int
    data: dict

    @classmethod
    def from_record(cls, record: EventRecord) -> LedgerEventResponse:
        return cls(
            sequence=record.sequence,
            recorded_at=record.recorded_at,
            event_type=record.event_type.value,
            post_id=record.post_id,
            data=record.event.payload(),
        )


class ClockResponse(BaseModel):
    now: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    clock_mode: str = "system"
    post_count: int = 0
