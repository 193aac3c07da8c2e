# tests/conftest.py
import os
import sys
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Optional

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LLM_PROVIDER", "openrouter")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Ensure the repository root is on sys.path so tests can import app and config
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.AIassistant.llm_client import get_text_generator
from app.database.connection import get_db, init_models
from app.main import app
from app.shared.enums import Role
from app.shared.exceptions import UpstreamUnavailable

PASSWORD = "s3cure-passw0rd"


class StubGenerator:
    """Stands in for the provider client; records prompts and can be told to fail."""

    def __init__(self):
        self.reply = "Stay hydrated and keep regular check-ups."
        self.fail = False
        self.calls = []

    async def generate(self, prompt, role, context=None):
        self.calls.append((prompt, role, context))
        if self.fail:
            raise UpstreamUnavailable("stub provider offline")
        return self.reply

    def get_model_info(self):
        return {
            "provider": "stub",
            "model": "stub-model",
            "temperature": 0.7,
            "max_tokens": 500,
            "request_timeout": 30.0,
        }


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(bind=engine)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)
    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def generator():
    return StubGenerator()


@pytest_asyncio.fixture
async def client(session_factory, generator):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_text_generator] = lambda: generator
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ============================================================
# ✅ ACCOUNT HELPERS
# ============================================================
ROLE_FIELDS: Dict[Role, dict] = {
    Role.PATIENT: {"date_of_birth": "1990-04-12", "gender": "female", "phone": "555-0101"},
    Role.DOCTOR: {"license_number": "MD-1001", "specialization": "Cardiology", "experience": 12},
    Role.PHARMACY: {
        "pharmacy_name": "Main Street Pharmacy",
        "license_number": "PH-2001",
        "address": "12 Main Street",
        "phone": "555-0202",
    },
}


async def register_and_login(client: AsyncClient, role: Role, email: Optional[str] = None, **overrides) -> dict:
    """Register a user of the given role and return auth headers plus ids."""
    email = email or f"{role.value}@example.com"
    payload = {
        "email": email,
        "password": PASSWORD,
        "first_name": role.value.title(),
        "last_name": "Tester",
        "role": role.value,
        **ROLE_FIELDS[role],
        **overrides,
    }
    response = await client.post("/api/auth/register", json=payload)
    assert response.status_code == 200, response.text

    response = await client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    tokens = response.json()
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    me = await client.get("/api/auth/user", headers=headers)
    assert me.status_code == 200, me.text
    body = me.json()
    return {
        "headers": headers,
        "refresh_token": tokens["refresh_token"],
        "user_id": body["user"]["id"],
        "profile_id": body["profile"]["id"],
    }


@pytest_asyncio.fixture
async def doctor(client):
    return await register_and_login(client, Role.DOCTOR, "doctor@example.com")


@pytest_asyncio.fixture
async def patient(client):
    return await register_and_login(client, Role.PATIENT, "patient@example.com")


@pytest_asyncio.fixture
async def pharmacy(client):
    return await register_and_login(client, Role.PHARMACY, "pharmacy@example.com")


@pytest_asyncio.fixture
async def other_pharmacy(client):
    return await register_and_login(
        client,
        Role.PHARMACY,
        "other-pharmacy@example.com",
        pharmacy_name="Harbor Pharmacy",
        license_number="PH-2002",
    )


def prescription_payload(patient_id: str, pharmacy_id: Optional[str] = None, **overrides) -> dict:
    payload = {
        "patient_id": patient_id,
        "medications": [
            {"name": "Amoxicillin", "dosage": "500mg", "frequency": "3x daily", "instructions": "After meals"},
        ],
        "instructions": "Complete the full course",
        "pharmacy_id": pharmacy_id,
        "valid_until": (datetime.now(timezone.utc) + timedelta(days=30)).isoformat(),
    }
    payload.update(overrides)
    return payload


def inventory_payload(name: str, current_stock: int, min_stock_level: int = 10, expiry_date: Optional[date] = None) -> dict:
    return {
        "medicine_name": name,
        "generic_name": name.lower(),
        "form": "tablet",
        "current_stock": current_stock,
        "min_stock_level": min_stock_level,
        "price": "4.50",
        "expiry_date": expiry_date.isoformat() if expiry_date else None,
    }


@pytest_asyncio.fixture
async def patient_user_id(db_session):
    """A bare patient user row, for exercising services without HTTP."""
    from app.users.security import get_password_hash
    from app.users.user_models.user_model import User

    user = User(
        email="direct@example.com",
        hashed_password=get_password_hash(PASSWORD),
        role=Role.PATIENT.value,
    )
    db_session.add(user)
    await db_session.commit()
    return user.id
