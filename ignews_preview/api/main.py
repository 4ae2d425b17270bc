import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from ignews_preview.api.deps import get_rules, get_settings, shutdown_adapters

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules on startup (fail-fast)
    try:
        get_rules()
    except (FileNotFoundError, ValueError):
        logger.critical("Rules load failed from %s", settings.rules_path, exc_info=True)
        raise
    logger.info("Rules loaded from %s", settings.rules_path)

    yield

    shutdown_adapters()


app = FastAPI(
    title="ig.news Preview",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from ignews_preview.api.routes import preview  # noqa: E402

app.include_router(preview.router, tags=["Preview"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "preview"}
