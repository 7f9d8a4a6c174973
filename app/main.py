"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.config import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hook."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    missing = settings.missing_credentials()
    if missing:
        logging.getLogger(__name__).warning(
            "[startup] missing configuration: %s", ", ".join(missing)
        )
    yield


app = FastAPI(
    title="now-playing",
    version="0.1.0",
    lifespan=lifespan,
)

# Routers
from app.routes_now_playing import router as now_playing_router  # noqa: E402

app.include_router(now_playing_router)


@app.get("/health")
async def health():
    """Simple health-check endpoint."""
    return JSONResponse({"status": "ok", "version": app.version})
