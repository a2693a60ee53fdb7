"""Campaign ("post") REST API routes.

These endpoints provide the HTTP interface for creating campaigns, funding
them, settling them and reading their state. The MCP tools in
mcp_server/tools.py call the same CrowdfundLedger, ensuring consistency.

Routes:
    POST   /api/v1/posts                                — Create a campaign
    GET    /api/v1/posts                                — List post ids (0 = removed)
    GET    /api/v1/posts/{id}                           — Get campaign snapshot
    POST   /api/v1/posts/{id}/fund                      — Contribute
    POST   /api/v1/posts/{id}/check-deadline            — Settle after the deadline
    POST   /api/v1/posts/{id}/refund                    — Claim an individual refund
    GET    /api/v1/posts/{id}/remaining-time            — Seconds until the deadline
    GET    /api/v1/posts/{id}/collected                 — Collected funds
    GET    /api/v1/posts/{id}/contributions/{account}   — One contributor's balance
    GET    /api/v1/posts/{id}/status                    — Status + allowed actions
    GET    /api/v1/posts/{id}/events                    — Event history of one post
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from crowdfund_ledger.api.deps import get_ledger
from crowdfund_ledger.logging_config import get_logger
from crowdfund_ledger.schemas.post import (
    CheckDeadlineResponse,
    ClaimRefundRequest,
    CollectedFundsResponse,
    ContributionResponse,
    CreatePostRequest,
    FundPostRequest,
    FundPostResponse,
    LedgerEventResponse,
    PostIdsResponse,
    PostResponse,
    PostStatusResponse,
    RefundResponse,
    RemainingTimeResponse,
)
from crowdfund_ledger.services.ledger_service import CrowdfundLedger

router = APIRouter(prefix="/api/v1/posts", tags=["Posts"])
logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=PostResponse,
    status_code=201,
    summary="Create a new campaign",
)
def create_post(
    request: CreatePostRequest,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> PostResponse:
    """Open a campaign with a goal and a minimum contribution."""
    post_id = ledger.create_post(
        creator=request.creator,
        goal_amount=request.goal_amount,
        min_contribution=request.min_contribution,
    )
    return PostResponse.from_snapshot(ledger.get_post(post_id))


# ---------------------------------------------------------------------------
# Fund
# ---------------------------------------------------------------------------


@router.post(
    "/{post_id}/fund",
    response_model=FundPostResponse,
    summary="Contribute to a campaign",
)
def fund_post(
    post_id: int,
    request: FundPostRequest,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> FundPostResponse:
    """Record a contribution. A contribution that meets the goal pays out the campaign."""
    settled = ledger.fund_post(
        post_id=post_id,
        contributor=request.contributor,
        amount=request.amount,
    )
    return FundPostResponse(
        post_id=post_id,
        contributor=request.contributor,
        amount=request.amount,
        settled=settled,
    )


# ---------------------------------------------------------------------------
# Settle
# ---------------------------------------------------------------------------


@router.post(
    "/{post_id}/check-deadline",
    response_model=CheckDeadlineResponse,
    summary="Settle a campaign after its deadline",
)
def check_deadline(
    post_id: int,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> CheckDeadlineResponse:
    """Pay the creator or refund every contributor, then remove the campaign."""
    status = ledger.check_deadline(post_id)
    return CheckDeadlineResponse(post_id=post_id, status=status.value)


@router.post(
    "/{post_id}/refund",
    response_model=RefundResponse,
    summary="Claim an individual refund",
)
def claim_refund(
    post_id: int,
    request: ClaimRefundRequest,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> RefundResponse:
    """Return one contributor's pledge after an unsuccessful deadline."""
    amount = ledger.claim_refund(post_id=post_id, contributor=request.contributor)
    return RefundResponse(post_id=post_id, contributor=request.contributor, amount=amount)


# ---------------------------------------------------------------------------
# Read endpoints
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=PostIdsResponse,
    summary="List post ids",
)
def get_post_ids(ledger: CrowdfundLedger = Depends(get_ledger)) -> PostIdsResponse:
    """Return every id ever assigned; removed posts appear as 0."""
    return PostIdsResponse(post_ids=ledger.get_post_ids())


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get campaign details",
)
def get_post(
    post_id: int,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> PostResponse:
    return PostResponse.from_snapshot(ledger.get_post(post_id))


@router.get(
    "/{post_id}/remaining-time",
    response_model=RemainingTimeResponse,
    summary="Seconds until the deadline",
)
def get_remaining_time(
    post_id: int,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> RemainingTimeResponse:
    return RemainingTimeResponse(
        post_id=post_id,
        remaining_seconds=ledger.get_remaining_time(post_id),
    )


@router.get(
    "/{post_id}/collected",
    response_model=CollectedFundsResponse,
    summary="Collected funds",
)
def get_collected_funds(
    post_id: int,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> CollectedFundsResponse:
    return CollectedFundsResponse(
        post_id=post_id,
        collected_amount=ledger.get_collected_funds(post_id),
    )


@router.get(
    "/{post_id}/contributions/{contributor}",
    response_model=ContributionResponse,
    summary="One contributor's recorded amount",
)
def get_contribution(
    post_id: int,
    contributor: str,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> ContributionResponse:
    return ContributionResponse(
        post_id=post_id,
        contributor=contributor,
        amount=ledger.get_contribution(post_id, contributor),
    )


@router.get(
    "/{post_id}/status",
    response_model=PostStatusResponse,
    summary="Get lightweight status check",
)
def get_status(
    post_id: int,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> PostStatusResponse:
    """Return the current status, phase and the actions allowed right now."""
    return PostStatusResponse(**ledger.get_status(post_id))


@router.get(
    "/{post_id}/events",
    response_model=list[LedgerEventResponse],
    summary="Get event history",
)
def get_post_events(
    post_id: int,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> list[LedgerEventResponse]:
    """Return every committed event of a post, including after its removal."""
    return [LedgerEventResponse.from_record(r) for r in ledger.get_events(post_id=post_id)]
