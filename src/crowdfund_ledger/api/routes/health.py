"""Health check endpoint.

Reports the ledger's clock mode and how many posts have been created.
Used by Docker healthchecks, load balancers, and monitoring systems.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from crowdfund_ledger.api.deps import get_ledger
from crowdfund_ledger.domain.clock import ManualClock
from crowdfund_ledger.logging_config import get_logger
from crowdfund_ledger.schemas.post import HealthResponse
from crowdfund_ledger.services.ledger_service import CrowdfundLedger

router = APIRouter(tags=["Health"])
logger = get_logger(__name__)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the health status of the ledger.",
)
def health_check(ledger: CrowdfundLedger = Depends(get_ledger)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        clock_mode="manual" if isinstance(ledger.clock, ManualClock) else "system",
        post_count=len(ledger.get_post_ids()),
    )
