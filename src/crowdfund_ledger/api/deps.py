"""FastAPI dependency injection providers.

These are used with Depends() in route handlers to inject the ledger.
The ledger lives on ``app.state`` for the lifetime of the process.
"""

from __future__ import annotations

from fastapi import Request

from crowdfund_ledger.services.ledger_service import CrowdfundLedger


def get_ledger(request: Request) -> CrowdfundLedger:
    """Provide the process-wide CrowdfundLedger."""
    ledger = getattr(request.app.state, "ledger", None)
    if ledger is None:
        raise RuntimeError("Ledger not initialized. Create the app with create_app().")
    return ledger
