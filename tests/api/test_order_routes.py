"""Order Routes — verifies calculate-and-save, history, lookup and deletion.

Invariants:
    - POST /orders returns 201 with the stored result
    - Failed calculations store nothing
    - Missing orders return 404 RESOURCE_NOT_FOUND
    - DELETE returns 204 and removes the row
"""

from uuid import uuid4

from sqlalchemy import select

from pizzasplit.models.order import Order
from tests.factories import participant_json


ORDER = {
    "name": "Friday lunch",
    "participants": [participant_json("Ann", 3), participant_json("Bob", 5)],
}


async def test_create_order_returns_201(client):
    res = await client.post("/api/v1/orders", json=ORDER)
    assert res.status_code == 201
    data = res.json()
    assert data["name"] == "Friday lunch"
    assert data["scheme_id"] == "equal-price"
    assert data["result"]["user_costs"] == {"participant-1": 300, "participant-2": 500}
    assert data["participants"][1]["total_cost"] == 500
    assert data["participants"][1]["assigned_slices"] == 5
    assert data["settings"]["large"]["slices_per_pizza"] == 8


async def test_created_order_is_persisted(client, test_db):
    res = await client.post("/api/v1/orders", json=ORDER)
    rows = (await test_db.execute(select(Order))).scalars().all()
    assert len(rows) == 1
    assert str(rows[0].id) == res.json()["id"]
    assert rows[0].total_cost == 800
    assert rows[0].pizza_count == 1


async def test_get_order_returns_stored_result(client):
    created = (await client.post("/api/v1/orders", json=ORDER)).json()
    res = await client.get(f"/api/v1/orders/{created['id']}")
    assert res.status_code == 200
    assert res.json()["result"] == created["result"]


async def test_list_orders(client):
    await client.post("/api/v1/orders", json=ORDER)
    await client.post("/api/v1/orders", json={**ORDER, "name": "Saturday"})

    res = await client.get("/api/v1/orders", params={"limit": 1})
    assert res.status_code == 200
    data = res.json()
    assert data["total"] == 2
    assert data["limit"] == 1
    assert len(data["orders"]) == 1
    assert data["orders"][0]["total_cost"] == 800


async def test_failed_calculation_stores_nothing(client, test_db):
    res = await client.post("/api/v1/orders", json={
        "participants": [participant_json("Ann", 5, 3)],
    })
    assert res.status_code == 400
    rows = (await test_db.execute(select(Order))).scalars().all()
    assert rows == []


async def test_get_missing_order_returns_404(client):
    missing = uuid4()
    res = await client.get(f"/api/v1/orders/{missing}")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["context"]["order_id"] == str(missing)


async def test_malformed_order_id_returns_400(client):
    res = await client.get("/api/v1/orders/not-a-uuid")
    assert res.status_code == 400


async def test_delete_order_returns_204(client, seed_order):
    res = await client.delete(f"/api/v1/orders/{seed_order.id}")
    assert res.status_code == 204


async def test_delete_removes_order(client, seed_order, test_db):
    await client.delete(f"/api/v1/orders/{seed_order.id}")
    result = await test_db.execute(select(Order).where(Order.id == seed_order.id))
    assert result.scalar_one_or_none() is None


async def test_delete_missing_order_returns_404(client):
    res = await client.delete(f"/api/v1/orders/{uuid4()}")
    assert res.status_code == 404
