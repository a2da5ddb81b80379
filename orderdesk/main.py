"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orderdesk.api.routes import router
from orderdesk.config import Settings, get_settings
from orderdesk.state.manager import get_state_manager
from orderdesk.utils.logging import get_logger, setup_logging

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("application_starting", storage_backend=settings.storage_backend)

    state_manager = None
    if settings.storage_backend == "redis":
        state_manager = await get_state_manager()
        logger.info("state_manager_initialized")

    yield

    logger.info("application_shutting_down")
    if state_manager is not None:
        await state_manager.disconnect()


# Create FastAPI app
app = FastAPI(
    title="Order Desk",
    description="Order management back office: order consistency and urgency ranking",
    version="0.1.0",
    lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1", tags=["orders"])


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "orderdesk"}


def worker_count(settings: Settings) -> int:
    """Memory-backed state lives in one process, so only Redis can scale out."""
    return settings.api_workers if settings.storage_backend == "redis" else 1


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "orderdesk.main:app",
        host=settings.api_host,
        port=settings.api_port,
        workers=worker_count(settings),
    )
