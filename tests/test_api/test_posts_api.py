"""REST API tests for the campaign and ledger routes."""

from __future__ import annotations

import inspect
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from crowdfund_ledger.config import Settings
from crowdfund_ledger.main import create_app
from crowdfund_ledger.services.ledger_service import CrowdfundLedger
from tests.factories import ALICE, BOB, CREATOR, START, STARTING_BALANCE

WINDOW_SECONDS = int(timedelta(days=5).total_seconds())


@pytest.fixture
def client(ledger: CrowdfundLedger) -> TestClient:
    settings = Settings(app_env="development", clock_mode="manual", app_log_level="WARNING")
    with TestClient(create_app(settings=settings, ledger=ledger)) as test_client:
        yield test_client


def _create(client: TestClient, goal: int = 100, minimum: int = 10) -> int:
    response = client.post(
        "/api/v1/posts",
        json={"creator": CREATOR, "goal_amount": goal, "min_contribution": minimum},
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "version": "0.1.0",
            "clock_mode": "manual",
            "post_count": 0,
        }

    def test_request_id_is_echoed(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


class TestCreateAndRead:
    def test_create_returns_snapshot(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/posts",
            json={"creator": CREATOR, "goal_amount": 100, "min_contribution": 10},
        )
        body = response.json()

        assert response.status_code == 201
        assert body["id"] == 1
        assert body["status"] == "ACTIVE"
        assert body["collected_amount"] == 0
        assert body["contributions"] == []

    def test_invalid_amounts(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/posts",
            json={"creator": CREATOR, "goal_amount": 0, "min_contribution": 10},
        )
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_unknown_post(self, client: TestClient) -> None:
        response = client.get("/api/v1/posts/99")
        assert response.status_code == 404
        assert response.json()["error"] == "POST_NOT_FOUND"

    def test_read_helpers(self, client: TestClient) -> None:
        post_id = _create(client)
        client.post(f"/api/v1/posts/{post_id}/fund", json={"contributor": ALICE, "amount": 25})

        assert client.get(f"/api/v1/posts/{post_id}/collected").json()["collected_amount"] == 25
        assert client.get(
            f"/api/v1/posts/{post_id}/contributions/{ALICE}"
        ).json()["amount"] == 25
        assert client.get(
            f"/api/v1/posts/{post_id}/remaining-time"
        ).json()["remaining_seconds"] == WINDOW_SECONDS

        status = client.get(f"/api/v1/posts/{post_id}/status").json()
        assert status["phase"] == "FUNDING"
        assert status["allowed_actions"] == ["fund_post"]


class TestLifecycle:
    def test_goal_reached(self, client: TestClient, wallet) -> None:
        post_id = _create(client)

        first = client.post(f"/api/v1/posts/{post_id}/fund", json={"contributor": ALICE, "amount": 60})
        second = client.post(f"/api/v1/posts/{post_id}/fund", json={"contributor": BOB, "amount": 40})

        assert first.json()["settled"] is False
        assert second.json()["settled"] is True
        assert client.get("/api/v1/posts").json() == {"post_ids": [0]}
        assert client.get(f"/api/v1/posts/{post_id}").status_code == 404
        assert wallet.balance_of(CREATOR) == 100

        events = client.get(f"/api/v1/posts/{post_id}/events").json()
        assert [e["event_type"] for e in events] == ["PostCreated", "FundsCollected", "PostRemoved"]

    def test_deadline_refund_with_clock_advance(self, client: TestClient, wallet) -> None:
        post_id = _create(client, goal=200)
        client.post(f"/api/v1/posts/{post_id}/fund", json={"contributor": ALICE, "amount": 100})

        early = client.post(f"/api/v1/posts/{post_id}/check-deadline")
        assert early.status_code == 409
        assert early.json()["error"] == "INVALID_STATE"

        clock = client.post("/api/v1/clock/advance", json={"seconds": WINDOW_SECONDS})
        assert clock.status_code == 200
        assert client.get("/api/v1/clock").json()["now"].startswith(
            (START + timedelta(days=5)).strftime("%Y-%m-%dT%H:%M:%S")
        )

        settled = client.post(f"/api/v1/posts/{post_id}/check-deadline")
        assert settled.json() == {"post_id": post_id, "status": "REFUNDED"}
        assert wallet.balance_of(ALICE) == STARTING_BALANCE

        late_claim = client.post(f"/api/v1/posts/{post_id}/refund", json={"contributor": ALICE})
        assert late_claim.status_code == 400
        assert late_claim.json()["error"] == "NO_CONTRIBUTION"

    def test_claim_refund(self, client: TestClient) -> None:
        post_id = _create(client, goal=500)
        client.post(f"/api/v1/posts/{post_id}/fund", json={"contributor": ALICE, "amount": 50})
        client.post("/api/v1/clock/advance", json={"seconds": WINDOW_SECONDS + 1})

        refund = client.post(f"/api/v1/posts/{post_id}/refund", json={"contributor": ALICE})
        assert refund.json() == {"post_id": post_id, "contributor": ALICE, "amount": 50}

        again = client.post(f"/api/v1/posts/{post_id}/refund", json={"contributor": ALICE})
        assert again.status_code == 400
        assert again.json()["error"] == "NO_CONTRIBUTION"

    def test_late_funding_rejected(self, client: TestClient) -> None:
        post_id = _create(client)
        client.post("/api/v1/clock/advance", json={"seconds": WINDOW_SECONDS + 1})

        response = client.post(
            f"/api/v1/posts/{post_id}/fund", json={"contributor": ALICE, "amount": 10}
        )
        assert response.status_code == 409

    def test_transfer_failure(self, client: TestClient) -> None:
        post_id = _create(client)
        response = client.post(
            f"/api/v1/posts/{post_id}/fund", json={"contributor": "0xEMPTY", "amount": 10}
        )
        assert response.status_code == 502
        assert response.json()["error"] == "TRANSFER_FAILED"


class TestLedgerRoutes:
    def test_event_filter(self, client: TestClient) -> None:
        _create(client)
        _create(client)

        events = client.get("/api/v1/events", params={"event_type": "PostCreated"}).json()
        assert [e["post_id"] for e in events] == [1, 2]
        assert events[0]["data"]["creator"] == CREATOR

    def test_advance_requires_manual_clock(self, wallet) -> None:
        from crowdfund_ledger.domain.clock import SystemClock

        ledger = CrowdfundLedger(clock=SystemClock(), funds=wallet)
        app = create_app(settings=Settings(clock_mode="system"), ledger=ledger)
        with TestClient(app) as client:
            response = client.post("/api/v1/clock/advance", json={"seconds": 10})
        assert response.status_code == 409


def test_ledger_routes_run_in_threadpool(ledger: CrowdfundLedger) -> None:
    from fastapi.routing import APIRoute

    app = create_app(settings=Settings(clock_mode="manual"), ledger=ledger)
    endpoints = [route.endpoint for route in app.routes if isinstance(route, APIRoute)]

    assert endpoints
    assert not any(inspect.iscoroutinefunction(endpoint) for endpoint in endpoints)
