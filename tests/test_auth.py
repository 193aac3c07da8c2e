# tests/test_auth.py
from conftest import PASSWORD


async def test_register_patient_creates_profile(client, patient):
    me = await client.get("/api/auth/user", headers=patient["headers"])
    body = me.json()

    assert body["user"]["role"] == "patient"
    assert body["user"]["email"] == "patient@example.com"
    assert body["profile"]["user_id"] == body["user"]["id"]
    assert body["profile"]["date_of_birth"] == "1990-04-12"


async def test_register_doctor_requires_license_and_specialization(client):
    response = await client.post(
        "/api/auth/register",
        json={
            "email": "nolicense@example.com",
            "password": PASSWORD,
            "first_name": "No",
            "last_name": "License",
            "role": "doctor",
        },
    )
    assert response.status_code == 422

    # Nothing was stored
    login = await client.post("/api/auth/login", json={"email": "nolicense@example.com", "password": PASSWORD})
    assert login.status_code == 401


async def test_register_rejects_unknown_role(client):
    response = await client.post(
        "/api/auth/register",
        json={
            "email": "admin@example.com",
            "password": PASSWORD,
            "first_name": "A",
            "last_name": "B",
            "role": "admin",
        },
    )
    assert response.status_code == 422


async def test_duplicate_email_rejected(client, patient):
    response = await client.post(
        "/api/auth/register",
        json={
            "email": "Patient@Example.com",
            "password": PASSWORD,
            "first_name": "Dup",
            "last_name": "User",
            "role": "patient",
        },
    )
    assert response.status_code == 400


async def test_login_with_wrong_password(client, patient):
    response = await client.post("/api/auth/login", json={"email": "patient@example.com", "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


async def test_missing_and_malformed_tokens(client):
    assert (await client.get("/api/auth/user")).status_code == 401
    bad = await client.get("/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad.status_code == 401


async def test_access_token_cookie_accepted(client, patient):
    token = patient["headers"]["Authorization"].split(" ", 1)[1]
    client.cookies.set("access_token", token)
    response = await client.get("/api/auth/user")
    assert response.status_code == 200


async def test_logout_revokes_tokens(client, patient):
    response = await client.post("/api/auth/logout", headers=patient["headers"])
    assert response.status_code == 200

    after = await client.get("/api/prescriptions", headers=patient["headers"])
    assert after.status_code == 401

    refreshed = await client.post("/api/auth/refresh", json={"refresh_token": patient["refresh_token"]})
    assert refreshed.status_code == 401


async def test_refresh_rotates_token(client, patient):
    response = await client.post("/api/auth/refresh", json={"refresh_token": patient["refresh_token"]})
    assert response.status_code == 200
    tokens = response.json()
    assert tokens["refresh_token"] != patient["refresh_token"]

    # The old refresh token is single-use
    again = await client.post("/api/auth/refresh", json={"refresh_token": patient["refresh_token"]})
    assert again.status_code == 401

    me = await client.get("/api/auth/user", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert me.status_code == 200


async def test_access_token_cannot_refresh(client, patient):
    token = patient["headers"]["Authorization"].split(" ", 1)[1]
    response = await client.post("/api/auth/refresh", json={"refresh_token": token})
    assert response.status_code == 401


async def test_directory_listings(client, doctor, pharmacy, other_pharmacy, patient):
    doctors = await client.get("/api/doctors", headers=patient["headers"])
    assert [d["id"] for d in doctors.json()] == [doctor["profile_id"]]

    pharmacies = await client.get("/api/pharmacies", headers=patient["headers"])
    assert [p["pharmacy_name"] for p in pharmacies.json()] == ["Harbor Pharmacy", "Main Street Pharmacy"]


async def test_pharmacy_has_no_appointments(client, pharmacy):
    response = await client.get("/api/appointments", headers=pharmacy["headers"])
    assert response.status_code == 403


async def test_booking_with_unknown_doctor(client, patient):
    response = await client.post(
        "/api/appointments",
        json={"doctor_id": "missing", "appointment_date": "2030-01-01T09:00:00+00:00", "appointment_type": "video"},
        headers=patient["headers"],
    )
    assert response.status_code == 404
