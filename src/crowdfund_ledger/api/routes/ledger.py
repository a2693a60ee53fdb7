"""Ledger-wide REST API routes.

Routes:
    GET    /api/v1/events          — Full event log, optionally filtered by type
    GET    /api/v1/clock           — Current ledger time
    POST   /api/v1/clock/advance   — Move the manual clock (CLOCK_MODE=manual only)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from crowdfund_ledger.api.deps import get_ledger
from crowdfund_ledger.domain.clock import ManualClock
from crowdfund_ledger.domain.enums import EventType
from crowdfund_ledger.logging_config import get_logger
from crowdfund_ledger.schemas.post import (
    AdvanceClockRequest,
    ClockResponse,
    LedgerEventResponse,
)
from crowdfund_ledger.services.ledger_service import CrowdfundLedger

router = APIRouter(prefix="/api/v1", tags=["Ledger"])
logger = get_logger(__name__)


@router.get(
    "/events",
    response_model=list[LedgerEventResponse],
    summary="Get the ledger event log",
)
def get_events(
    event_type: EventType | None = None,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> list[LedgerEventResponse]:
    return [
        LedgerEventResponse.from_record(r) for r in ledger.get_events(event_type=event_type)
    ]


@router.get("/clock", response_model=ClockResponse, summary="Current ledger time")
def get_clock(ledger: CrowdfundLedger = Depends(get_ledger)) -> ClockResponse:
    return ClockResponse(now=ledger.clock.now())


@router.post(
    "/clock/advance",
    response_model=ClockResponse,
    summary="Advance the manual clock",
)
def advance_clock(
    request: AdvanceClockRequest,
    ledger: CrowdfundLedger = Depends(get_ledger),
) -> ClockResponse:
    """Move ledger time forward. Only available when the ledger runs on a manual clock."""
    if not isinstance(ledger.clock, ManualClock):
        raise HTTPException(status_code=409, detail="Clock is not manual")
    now = ledger.clock.advance(seconds=request.seconds)
    logger.info("clock.advanced", seconds=request.seconds, now=now.isoformat())
    return ClockResponse(now=now)
