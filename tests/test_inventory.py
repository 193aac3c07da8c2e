# tests/test_inventory.py
from datetime import datetime, timedelta, timezone

import pytest

from conftest import inventory_payload


def _today():
    return datetime.now(timezone.utc).date()


async def _add(client, pharmacy, payload):
    response = await client.post("/api/inventory", json=payload, headers=pharmacy["headers"])
    assert response.status_code == 200, response.text
    return response.json()


async def test_create_item_belongs_to_caller(client, pharmacy):
    item = await _add(client, pharmacy, inventory_payload("Paracetamol", 40))

    assert item["pharmacy_id"] == pharmacy["profile_id"]
    assert item["current_stock"] == 40
    assert item["min_stock_level"] == 10


async def test_default_min_stock_level(client, pharmacy):
    payload = {"medicine_name": "Cetirizine", "current_stock": 3}
    item = await _add(client, pharmacy, payload)
    assert item["min_stock_level"] == 10


async def test_low_stock_is_strictly_below_minimum(client, pharmacy):
    await _add(client, pharmacy, inventory_payload("Ibuprofen", 5, 10))
    await _add(client, pharmacy, inventory_payload("Aspirin", 10, 10))
    await _add(client, pharmacy, inventory_payload("Loratadine", 0, 10))

    response = await client.get("/api/inventory/low-stock", headers=pharmacy["headers"])
    assert response.status_code == 200
    assert [i["medicine_name"] for i in response.json()] == ["Loratadine", "Ibuprofen"]


async def test_expiring_window_is_exclusive_and_ordered(client, pharmacy):
    today = _today()
    await _add(client, pharmacy, inventory_payload("Boundary", 50, expiry_date=today + timedelta(days=30)))
    await _add(client, pharmacy, inventory_payload("Soon", 50, expiry_date=today + timedelta(days=29)))
    await _add(client, pharmacy, inventory_payload("Expired", 50, expiry_date=today - timedelta(days=2)))
    await _add(client, pharmacy, inventory_payload("NoDate", 50))

    response = await client.get("/api/inventory/expiring", params={"days": 30}, headers=pharmacy["headers"])
    assert response.status_code == 200
    assert [i["medicine_name"] for i in response.json()] == ["Expired", "Soon"]


async def test_expiring_defaults_to_thirty_days(client, pharmacy):
    today = _today()
    await _add(client, pharmacy, inventory_payload("Soon", 50, expiry_date=today + timedelta(days=10)))
    await _add(client, pharmacy, inventory_payload("Later", 50, expiry_date=today + timedelta(days=90)))

    response = await client.get("/api/inventory/expiring", headers=pharmacy["headers"])
    assert [i["medicine_name"] for i in response.json()] == ["Soon"]


async def test_expiring_rejects_negative_days(client, pharmacy):
    response = await client.get("/api/inventory/expiring", params={"days": -1}, headers=pharmacy["headers"])
    assert response.status_code == 422


@pytest.mark.parametrize("field", ["current_stock", "min_stock_level"])
async def test_negative_stock_rejected(client, pharmacy, field):
    payload = inventory_payload("Broken", 5)
    payload[field] = -1

    response = await client.post("/api/inventory", json=payload, headers=pharmacy["headers"])
    assert response.status_code == 422

    listing = await client.get("/api/inventory", headers=pharmacy["headers"])
    assert listing.json() == []


async def test_inventory_is_scoped_per_pharmacy(client, pharmacy, other_pharmacy):
    await _add(client, pharmacy, inventory_payload("Ours", 1))
    await _add(client, other_pharmacy, inventory_payload("Theirs", 1))

    ours = await client.get("/api/inventory/low-stock", headers=pharmacy["headers"])
    assert [i["medicine_name"] for i in ours.json()] == ["Ours"]


async def test_replace_item(client, pharmacy):
    item = await _add(client, pharmacy, inventory_payload("Metformin", 3))

    response = await client.put(
        f"/api/inventory/{item['id']}",
        json=inventory_payload("Metformin", 120),
        headers=pharmacy["headers"],
    )
    assert response.status_code == 200
    assert response.json()["id"] == item["id"]
    assert response.json()["current_stock"] == 120

    low = await client.get("/api/inventory/low-stock", headers=pharmacy["headers"])
    assert low.json() == []


async def test_replace_item_of_another_pharmacy_forbidden(client, pharmacy, other_pharmacy):
    item = await _add(client, pharmacy, inventory_payload("Metformin", 3))

    response = await client.put(
        f"/api/inventory/{item['id']}",
        json=inventory_payload("Metformin", 0),
        headers=other_pharmacy["headers"],
    )
    assert response.status_code == 403


async def test_replace_unknown_item(client, pharmacy):
    response = await client.put(
        "/api/inventory/missing",
        json=inventory_payload("Ghost", 1),
        headers=pharmacy["headers"],
    )
    assert response.status_code == 404


@pytest.mark.parametrize("actor_fixture", ["doctor", "patient"])
async def test_inventory_is_pharmacy_only(client, doctor, patient, actor_fixture):
    actor = {"doctor": doctor, "patient": patient}[actor_fixture]

    assert (await client.get("/api/inventory/low-stock", headers=actor["headers"])).status_code == 403
    response = await client.post("/api/inventory", json=inventory_payload("X", 1), headers=actor["headers"])
    assert response.status_code == 403
