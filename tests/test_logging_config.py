"""Tests for the structlog setup helpers."""

from __future__ import annotations

import structlog

from crowdfund_ledger.logging_config import _isoformat_datetimes, ledger_operation
from tests.factories import START


class TestLedgerOperation:
    def test_binds_and_restores_context(self) -> None:
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id="req-1")

        with ledger_operation("fund_post", post_id=7):
            assert structlog.contextvars.get_contextvars() == {
                "request_id": "req-1",
                "operation": "fund_post",
                "post_id": 7,
            }

        assert structlog.contextvars.get_contextvars() == {"request_id": "req-1"}
        structlog.contextvars.clear_contextvars()


def test_datetimes_rendered_as_isoformat() -> None:
    event = _isoformat_datetimes(None, "info", {"event": "post.created", "deadline": START})
    assert event == {"event": "post.created", "deadline": START.isoformat()}
