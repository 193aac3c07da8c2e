# tests/test_dashboards.py
from datetime import datetime, timedelta, timezone

from conftest import inventory_payload, prescription_payload


def _noon_today():
    now = datetime.now(timezone.utc)
    return now.replace(hour=12, minute=0, second=0, microsecond=0)


async def _book(client, patient, doctor, when, kind="video"):
    response = await client.post(
        "/api/appointments",
        json={
            "doctor_id": doctor["profile_id"],
            "appointment_date": when.isoformat(),
            "appointment_type": kind,
            "reason": "Check-up",
        },
        headers=patient["headers"],
    )
    assert response.status_code == 200, response.text
    return response.json()


async def _prescribe(client, doctor, patient, pharmacy_id=None):
    response = await client.post(
        "/api/prescriptions",
        json=prescription_payload(patient["profile_id"], pharmacy_id),
        headers=doctor["headers"],
    )
    assert response.status_code == 200, response.text
    return response.json()


async def test_patient_dashboard(client, patient, doctor, pharmacy):
    later = await _book(client, patient, doctor, _noon_today() + timedelta(days=7))
    sooner = await _book(client, patient, doctor, _noon_today() + timedelta(days=2), kind="in-person")
    await _book(client, patient, doctor, _noon_today() - timedelta(days=3))

    first = await _prescribe(client, doctor, patient, pharmacy["profile_id"])
    await _prescribe(client, doctor, patient, pharmacy["profile_id"])
    await client.put(
        f"/api/prescriptions/{first['id']}/status",
        json={"status": "approved"},
        headers=pharmacy["headers"],
    )

    response = await client.get("/api/dashboard", headers=patient["headers"])
    assert response.status_code == 200
    body = response.json()

    assert body["patient"]["id"] == patient["profile_id"]
    assert len(body["appointments"]) == 3
    assert body["appointments"][0]["id"] == later["id"]
    assert len(body["prescriptions"]) == 2
    assert body["stats"]["next_appointment"]["id"] == sooner["id"]
    assert body["stats"]["active_prescriptions"] == 1
    assert body["stats"]["health_score"] == 85


async def test_patient_dashboard_slices(client, patient, doctor):
    for i in range(7):
        await _book(client, patient, doctor, _noon_today() + timedelta(days=i + 1))
    for _ in range(4):
        await _prescribe(client, doctor, patient)

    body = (await client.get("/api/patient/dashboard", headers=patient["headers"])).json()
    assert len(body["appointments"]) == 5
    assert len(body["prescriptions"]) == 3


async def test_empty_patient_dashboard(client, patient):
    body = (await client.get("/api/dashboard", headers=patient["headers"])).json()

    assert body["appointments"] == []
    assert body["prescriptions"] == []
    assert body["stats"]["next_appointment"] is None
    assert body["stats"]["active_prescriptions"] == 0


async def test_doctor_dashboard(client, patient, doctor):
    await _book(client, patient, doctor, _noon_today())
    await _book(client, patient, doctor, _noon_today() + timedelta(days=1))
    await _prescribe(client, doctor, patient)

    response = await client.get("/api/dashboard", headers=doctor["headers"])
    assert response.status_code == 200
    body = response.json()

    assert body["doctor"]["id"] == doctor["profile_id"]
    assert body["stats"]["today_patients"] == 1
    assert len(body["today_appointments"]) == 1
    assert len(body["appointments"]) == 2
    assert body["stats"]["total_prescriptions"] == 1
    assert body["stats"]["pending_reviews"] == 0


async def test_pharmacy_dashboard(client, patient, doctor, pharmacy):
    today = datetime.now(timezone.utc).date()
    await client.post("/api/inventory", json=inventory_payload("Low", 2), headers=pharmacy["headers"])
    await client.post(
        "/api/inventory",
        json=inventory_payload("Expiring", 50, expiry_date=today + timedelta(days=5)),
        headers=pharmacy["headers"],
    )
    await client.post("/api/inventory", json=inventory_payload("Healthy", 50), headers=pharmacy["headers"])

    pending = await _prescribe(client, doctor, patient, pharmacy["profile_id"])
    approved = await _prescribe(client, doctor, patient, pharmacy["profile_id"])
    await client.put(
        f"/api/prescriptions/{approved['id']}/status",
        json={"status": "approved"},
        headers=pharmacy["headers"],
    )

    response = await client.get("/api/dashboard", headers=pharmacy["headers"])
    assert response.status_code == 200
    body = response.json()

    assert [p["id"] for p in body["new_prescriptions"]] == [pending["id"]]
    assert [p["id"] for p in body["approved_prescriptions"]] == [approved["id"]]
    assert len(body["inventory"]) == 3
    assert [i["medicine_name"] for i in body["low_stock_items"]] == ["Low"]
    assert [i["medicine_name"] for i in body["expiring_items"]] == ["Expiring"]
    assert body["stats"] == {
        "pending_orders": 1,
        "approved_orders": 1,
        "low_stock_count": 1,
        "expiring_count": 1,
    }


async def test_role_dashboard_rejects_other_roles(client, patient, doctor, pharmacy):
    assert (await client.get("/api/doctor/dashboard", headers=patient["headers"])).status_code == 403
    assert (await client.get("/api/pharmacy/dashboard", headers=doctor["headers"])).status_code == 403
    assert (await client.get("/api/patient/dashboard", headers=pharmacy["headers"])).status_code == 403


async def test_dashboard_requires_authentication(client):
    response = await client.get("/api/dashboard")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
