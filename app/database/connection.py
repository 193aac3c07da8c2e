# app/database/connection.py
import logging
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from config.appconfig import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, future=True)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one session per request; anything left uncommitted is rolled back."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_models(bind: Optional[AsyncEngine] = None) -> None:
    """Create all tables registered on Base (on the app engine unless another is given)."""
    # Import models so they register on Base.metadata
    from app.users.user_models import user_model  # noqa: F401
    from app.users.auth_token_model import token_model  # noqa: F401
    from app.system_models.patient_model import patient_model  # noqa: F401
    from app.system_models.doctor_model import doctor_model  # noqa: F401
    from app.system_models.pharmacy_model import pharmacy_model  # noqa: F401
    from app.system_models.appointment_model import appointment_model  # noqa: F401
    from app.system_models.prescription_model import prescription_model  # noqa: F401
    from app.system_models.inventory_model import inventory_model  # noqa: F401
    from app.system_models.ai_conversation_model import ai_conversation_model  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Database tables ready")
