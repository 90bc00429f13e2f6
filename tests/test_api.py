"""HTTP-level tests for the loan endpoints and error responses."""

import uuid
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from loanapp.deps import get_session
from loanapp.main import app

PAYLOAD = {
    "first_name": "Ada",
    "last_name": "Obi",
    "email": "ada@example.com",
    "loan_amount": 10000,
    "tenor": 12,
    "monthly_income": 5000,
    "monthly_payment": 1000,
}


@pytest.fixture
async def client(session_factory, dispatcher):
    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.state.event_dispatcher = dispatcher

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    del app.state.event_dispatcher


def assert_problem(response, status_code):
    assert response.status_code == status_code
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["status"] == status_code
    assert body["instance"] == response.request.url.path
    return body


class TestApply:
    async def test_created(self, client, dispatcher):
        response = await client.post("/api/v1/loan/apply", json=PAYLOAD)

        assert response.status_code == 201
        assert response.json() == {"message": "Application submitted successfully"}

        await dispatcher.join()
        listing = (await client.get("/api/v1/loan/applicants")).json()
        assert listing["items"][0]["loan_status"] == "APPROVED"

    async def test_missing_fields(self, client):
        response = await client.post("/api/v1/loan/apply", json={"email": "ada@example.com"})

        body = assert_problem(response, 400)
        assert body["title"] == "Bad Request"
        assert body["detail"].startswith(
            "first_name: First name is required, last_name: Last name is required"
        )

    async def test_malformed_value(self, client):
        response = await client.post("/api/v1/loan/apply", json={**PAYLOAD, "tenor": "twelve"})

        body = assert_problem(response, 400)
        assert body["detail"].startswith("tenor: ")

    async def test_duplicate_email(self, client):
        await client.post("/api/v1/loan/apply", json=PAYLOAD)
        response = await client.post("/api/v1/loan/apply", json=PAYLOAD)

        body = assert_problem(response, 409)
        assert body["detail"] == "You are an already registered applicant"

    async def test_ineligible(self, client):
        response = await client.post(
            "/api/v1/loan/apply", json={**PAYLOAD, "monthly_income": 3000}
        )

        body = assert_problem(response, 422)
        assert "three(3) times" in body["detail"]

        listing = (await client.get("/api/v1/loan/applicants")).json()
        assert listing["total"] == 0


class TestListApplicants:
    async def test_empty(self, client):
        response = await client.get("/api/v1/loan/applicants")

        assert response.status_code == 200
        assert response.json() == {
            "items": [],
            "total": 0,
            "page": 0,
            "size": 100,
            "total_pages": 0,
        }

    async def test_paging(self, client, dispatcher):
        for i in range(3):
            await client.post(
                "/api/v1/loan/apply", json={**PAYLOAD, "email": f"ada{i}@example.com"}
            )
        await dispatcher.join()

        response = await client.get("/api/v1/loan/applicants", params={"page": 1, "size": 2})

        body = response.json()
        assert body["total"] == 3
        assert body["total_pages"] == 2
        assert [item["email"] for item in body["items"]] == ["ada2@example.com"]

        item = body["items"][0]
        assert item["name"] == "Ada Obi"
        assert item["tenor"] == 12
        assert Decimal(item["request_loan"]) == Decimal("10000")
        assert Decimal(item["amount_credited"]) == Decimal("10000")

    async def test_invalid_page_size(self, client):
        response = await client.get("/api/v1/loan/applicants", params={"size": 0})

        assert_problem(response, 400)


class TestApprove:
    async def _applicant_id(self, client, dispatcher):
        await client.post("/api/v1/loan/apply", json=PAYLOAD)
        await dispatcher.join()
        listing = (await client.get("/api/v1/loan/applicants")).json()
        return listing["items"][0]["id"]

    async def test_returns_status(self, client, dispatcher):
        applicant_id = await self._applicant_id(client, dispatcher)

        response = await client.post(f"/api/v1/loan/approve/{applicant_id}")

        assert response.status_code == 200
        assert response.json() == "APPROVED"

    async def test_requested_status_is_ignored(self, client, dispatcher):
        applicant_id = await self._applicant_id(client, dispatcher)

        response = await client.post(
            f"/api/v1/loan/approve/{applicant_id}", json={"status": "REJECTED"}
        )

        assert response.json() == "APPROVED"

    async def test_unknown_applicant(self, client):
        response = await client.post(f"/api/v1/loan/approve/{uuid.uuid4()}")

        body = assert_problem(response, 404)
        assert body["detail"] == "Applicant not found"

    async def test_malformed_id(self, client):
        response = await client.post("/api/v1/loan/approve/not-a-uuid")

        body = assert_problem(response, 400)
        assert body["detail"].startswith("applicant_id: ")


async def test_health(client):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "healthy"
    assert body["pending_approvals"] == 0


async def test_unstorable_amount_is_rejected_before_approval(client, dispatcher):
    response = await client.post(
        "/api/v1/loan/apply", json={**PAYLOAD, "monthly_income": "3000.004"}
    )

    body = assert_problem(response, 400)
    assert body["detail"].startswith("monthly_income: ")

    await dispatcher.join()
    listing = (await client.get("/api/v1/loan/applicants")).json()
    assert listing["total"] == 0
