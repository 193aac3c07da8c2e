# app/main.py
from dotenv import load_dotenv

load_dotenv()

import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config.appconfig import settings

# Apply logging configuration
logging.config.dictConfig(settings.LOGGING_CONFIG)

# Import routers
from app.AIassistant.routes import router as ai_router
from app.database.connection import init_models
from app.shared.exceptions import WorkflowError
from app.system_services.system_routes import router as system_router
from app.users.auth_routers import router as auth_router

# Import configurations
from config.aiconfig import ai_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    await init_models()
    print("\n===============================================================================")
    print(f" 🚀 Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
    print(f" ✅ Database: {settings.DATABASE_URL.split('://')[0]}")
    print(f" ✅ LLM Provider: {ai_settings.LLM_PROVIDER} - {ai_settings.current_llm_model}")
    print(f" ✅ Temperature: {ai_settings.LLM_TEMPERATURE}")
    print(f" ✅ Max Tokens: {ai_settings.MAX_TOKENS}")
    print(f" ✅ Request Timeout: {ai_settings.REQUEST_TIMEOUT}s")
    print("===============================================================================\n")
    yield
    # Shutdown
    print("👋 Shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Healthcare coordination: prescriptions, pharmacy inventory, dashboards and an AI assistant",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# ✅ ERROR HANDLERS
# ============================================================
@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"❌ Database error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Include routers with prefixes
app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(system_router, prefix="/api")
app.include_router(ai_router, prefix="/api/ai", tags=["AI Assistant"])


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "healthy", "environment": settings.ENVIRONMENT}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
