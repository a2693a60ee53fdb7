"""MCP Tool definitions for the Crowdfund Ledger.

These tools expose the ledger via the Model Context Protocol, allowing AI
agents to discover and call them programmatically.

Tools:
    - create_post: Open a new campaign
    - fund_post: Contribute to a campaign
    - check_deadline: Settle a campaign after its deadline
    - claim_refund: Reclaim a pledge from an expired, unfunded campaign
    - get_post: Read a campaign snapshot
    - get_status: Status, phase and allowed actions of a campaign
    - list_posts: Post ids (0 marks removed posts)

The MCP server is mounted into FastAPI at /mcp via app.mount() and shares the
app's CrowdfundLedger. Tools report ledger errors as an ``error`` payload
instead of raising, so agents always get a structured answer. Ledger calls
take thread locks, so they run in the threadpool rather than on the event loop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP
from starlette.concurrency import run_in_threadpool

from crowdfund_ledger.domain.exceptions import LedgerError
from crowdfund_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from crowdfund_ledger.services.ledger_service import CrowdfundLedger

logger = get_logger(__name__)


def _error(tool: str, exc: LedgerError) -> dict:
    logger.warning("mcp.tool_error", tool=tool, code=exc.code, error=exc.message)
    return {"error": exc.code, "message": exc.message}


def create_mcp_server(ledger: CrowdfundLedger) -> FastMCP:
    """Build the MCP server whose tools operate on ``ledger``."""
    mcp = FastMCP(
        "Crowdfund Ledger",
        json_response=True,
    )

    @mcp.tool()
    async def create_post(creator: str, goal_amount: int, min_contribution: int) -> dict:
        """Open a new crowdfunding campaign.

        Args:
            creator: Account that receives the funds if the goal is met.
            goal_amount: Funding goal in the smallest currency unit (> 0).
            min_contribution: Smallest accepted contribution (> 0).

        Returns:
            The new post id and its deadline.
        """
        try:
            post_id = await run_in_threadpool(
                ledger.create_post, creator, goal_amount, min_contribution
            )
            post = await run_in_threadpool(ledger.get_post, post_id)
        except LedgerError as exc:
            return _error("create_post", exc)
        return {
            "post_id": post_id,
            "deadline": post.deadline.isoformat(),
            "message": "Campaign created. Contributors can now fund it.",
        }

    @mcp.tool()
    async def fund_post(post_id: int, contributor: str, amount: int) -> dict:
        """Contribute to a campaign.

        Args:
            post_id: Id returned by create_post.
            contributor: Account sending the funds.
            amount: Contribution, at least the campaign's minimum.

        Returns:
            Whether this contribution met the goal and paid out the campaign.
        """
        try:
            settled = await run_in_threadpool(ledger.fund_post, post_id, contributor, amount)
        except LedgerError as exc:
            return _error("fund_post", exc)
        return {"post_id": post_id, "contributor": contributor, "amount": amount, "settled": settled}

    @mcp.tool()
    async def check_deadline(post_id: int) -> dict:
        """Settle a campaign whose deadline has been reached.

        Pays the creator if the goal is met, otherwise refunds all contributors.
        """
        try:
            status = await run_in_threadpool(ledger.check_deadline, post_id)
        except LedgerError as exc:
            return _error("check_deadline", exc)
        return {"post_id": post_id, "status": status.value}

    @mcp.tool()
    async def claim_refund(post_id: int, contributor: str) -> dict:
        """Reclaim your pledge from a campaign that missed its goal."""
        try:
            amount = await run_in_threadpool(ledger.claim_refund, post_id, contributor)
        except LedgerError as exc:
            return _error("claim_refund", exc)
        return {"post_id": post_id, "contributor": contributor, "amount": amount}

    @mcp.tool()
    async def get_post(post_id: int) -> dict:
        """Read a campaign's goal, deadline, collected funds and contributions."""
        try:
            post = await run_in_threadpool(ledger.get_post, post_id)
        except LedgerError as exc:
            return _error("get_post", exc)
        return {
            "post_id": post.id,
            "creator": post.creator,
            "goal_amount": post.goal_amount,
            "min_contribution": post.min_contribution,
            "collected_amount": post.collected_amount,
            "deadline": post.deadline.isoformat(),
            "active": post.active,
            "contributions": dict(post.contributions),
        }

    @mcp.tool()
    async def get_status(post_id: int) -> dict:
        """Check a campaign's phase, remaining time and the actions allowed now."""
        try:
            return await run_in_threadpool(ledger.get_status, post_id)
        except LedgerError as exc:
            return _error("get_status", exc)

    @mcp.tool()
    async def list_posts() -> dict:
        """List every post id ever created; removed posts appear as 0."""
        return {"post_ids": await run_in_threadpool(ledger.get_post_ids)}

    return mcp
