"""
Test payable endpoints
"""
import pytest
from datetime import timedelta
from httpx import AsyncClient, ASGITransport
from bson import ObjectId

from app.api.deps import get_payable_service
from app.main import app
from app.models.payable import Payable, PayableStatus
from app.services.payable_service import PayableService
from conftest import NOW, TODAY


@pytest.fixture
def service(payable_repo, fixed_clock, override_dependency):
    service = PayableService(payable_repo, fixed_clock)
    override_dependency(get_payable_service, service)
    return service


def client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_create_then_pay(service, payable_repo, payable_payload):
    """POST returns 201 PENDING, PATCH pay returns 200 PAID."""
    payable_repo.create.side_effect = lambda payable: payable

    async with client() as ac:
        response = await ac.post("/api/payables", json=payable_payload)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["paidAt"] is None
        assert data["vendor"] == "Fornecedor A"
        assert data["amount"] == 150.50
        assert data["dueDate"] == payable_payload["dueDate"]
        assert data["category"] == "Software"
        assert ObjectId.is_valid(data["id"])

        created = payable_repo.create.call_args.args[0]
        payable_repo.mark_paid.return_value = created.model_copy(
            update={"status": PayableStatus.PAID, "paid_at": NOW, "updated_at": NOW}
        )
        response = await ac.patch(f"/api/payables/{data['id']}/pay")

    assert response.status_code == 200
    paid = response.json()
    assert paid["status"] == "PAID"
    assert paid["paidAt"] is not None
    assert paid["updatedAt"] is not None


@pytest.mark.asyncio
async def test_create_ignores_client_status(service, payable_repo, payable_payload):
    payable_repo.create.side_effect = lambda payable: payable
    payload = dict(payable_payload, status="PAID", paidAt=NOW.isoformat())

    async with client() as ac:
        response = await ac.post("/api/payables", json=payload)

    assert response.status_code == 201
    assert response.json()["status"] == "PENDING"
    assert response.json()["paidAt"] is None


@pytest.mark.asyncio
async def test_get_past_due_returns_overdue(service, payable_repo):
    payable = Payable(
        description="past due",
        vendor="V",
        amount="10.00",
        due_date=TODAY - timedelta(days=2),
        created_at=NOW
    )
    payable_repo.get.return_value = payable

    async with client() as ac:
        response = await ac.get(f"/api/payables/{payable.id}")

    assert response.status_code == 200
    assert response.json()["status"] == "OVERDUE"
    assert response.json()["id"] == str(payable.id)


@pytest.mark.asyncio
async def test_get_missing_returns_404(service, payable_repo):
    payable_repo.get.return_value = None

    async with client() as ac:
        response = await ac.get(f"/api/payables/{ObjectId()}")

    assert response.status_code == 404
    body = response.json()
    assert body["status"] == 404
    assert body["error"] == "Not Found"
    assert "Payable not found" in body["message"]


@pytest.mark.asyncio
async def test_list_passes_filters(service, payable_repo):
    payable_repo.find.return_value = [
        Payable(description="x", vendor="V", amount="10.00", due_date=TODAY + timedelta(days=1))
    ]

    async with client() as ac:
        response = await ac.get(
            "/api/payables",
            params={"status": "PENDING", "vendor": "v", "dueFrom": "2026-03-01", "dueTo": "2026-03-31"}
        )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["vendor"] == "V"
    query = payable_repo.find.call_args.args[0]
    assert query["status"] == "PENDING"
    assert query["vendor"]["$options"] == "i"
    assert {"due_date": {"$gte": "2026-03-01", "$lte": "2026-03-31"}} in query["$and"]


@pytest.mark.asyncio
async def test_list_without_filters(service, payable_repo):
    payable_repo.find.return_value = []

    async with client() as ac:
        response = await ac.get("/api/payables")

    assert response.status_code == 200
    assert response.json() == []
    payable_repo.find.assert_awaited_once_with({})


@pytest.mark.asyncio
async def test_list_invalid_status_returns_400(service, payable_repo):
    async with client() as ac:
        response = await ac.get("/api/payables", params={"status": "LOST"})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation Error"
    assert response.json()["message"].startswith("status:")
    payable_repo.find.assert_not_called()


@pytest.mark.asyncio
async def test_update_returns_200(service, payable_repo):
    existing = Payable(description="old", vendor="V", amount="10.00", due_date=TODAY, created_at=NOW)
    payable_repo.update.return_value = existing.model_copy(
        update={"description": "upd", "vendor": "V2", "updated_at": NOW}
    )
    payload = {
        "description": "upd",
        "vendor": "V2",
        "amount": 99.9,
        "dueDate": (TODAY + timedelta(days=10)).isoformat(),
        "category": "Cat"
    }

    async with client() as ac:
        response = await ac.put(f"/api/payables/{existing.id}", json=payload)

    assert response.status_code == 200
    assert response.json()["vendor"] == "V2"
    assert response.json()["description"] == "upd"


@pytest.mark.asyncio
async def test_update_missing_returns_404(service, payable_repo, payable_payload):
    payable_repo.update.return_value = None

    async with client() as ac:
        response = await ac.put(f"/api/payables/{ObjectId()}", json=payable_payload)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_returns_204(service, payable_repo):
    payable_repo.delete.return_value = True

    async with client() as ac:
        response = await ac.delete(f"/api/payables/{ObjectId()}")

    assert response.status_code == 204
    assert response.content == b""


@pytest.mark.asyncio
async def test_delete_then_get_returns_404(service, payable_repo):
    payable_repo.delete.return_value = True
    payable_repo.get.return_value = None
    payable_id = str(ObjectId())

    async with client() as ac:
        assert (await ac.delete(f"/api/payables/{payable_id}")).status_code == 204
        assert (await ac.get(f"/api/payables/{payable_id}")).status_code == 404


@pytest.mark.asyncio
async def test_pay_twice_returns_409(service, payable_repo):
    payable_repo.mark_paid.return_value = None
    payable_repo.get.return_value = Payable(
        description="x", vendor="V", amount="1.00", due_date=TODAY,
        status=PayableStatus.PAID, paid_at=NOW
    )

    async with client() as ac:
        response = await ac.patch(f"/api/payables/{ObjectId()}/pay")

    assert response.status_code == 409
    assert response.json()["error"] == "Conflict"


@pytest.mark.asyncio
async def test_create_missing_vendor_returns_400(service, payable_repo, payable_payload):
    payload = dict(payable_payload)
    del payload["vendor"]

    async with client() as ac:
        response = await ac.post("/api/payables", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation Error"
    assert "vendor" in body["message"]
    payable_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_amount_too_large_returns_400(service, payable_repo, payable_payload):
    """Amounts beyond the decimal precision are a validation error, not a 500."""
    payload = dict(payable_payload, amount=1e30)

    async with client() as ac:
        response = await ac.post("/api/payables", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation Error"
    assert body["message"].startswith("amount:")
    assert "amount out of range" in body["message"]
    payable_repo.create.assert_not_called()
