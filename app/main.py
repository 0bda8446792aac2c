"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.router import api_router
from app.config import get_settings
from app.db.engine import create_tables, engine
from app.errors import ListingError

_settings = get_settings()

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info("Database ready at %s", _settings.database_url)
    yield
    await engine.dispose()


app = FastAPI(
    title="Estate Listings",
    description="Property listings, viewing schedules and user administration with role-guarded mutations.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ListingError)
async def listing_error_handler(request: Request, exc: ListingError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind, "fields": exc.fields},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render malformed request bodies like store-level validation errors."""
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err["loc"]]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        name = ".".join(loc)
        if name and name not in fields:
            fields.append(name)
    return JSONResponse(
        status_code=400,
        content={"detail": f"Invalid fields: {', '.join(fields)}", "error": "validation", "fields": fields},
    )


# API routes
app.include_router(api_router)

# Uploaded listing images, read-only
_uploads_dir = Path(_settings.uploads.base_dir)
_uploads_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(_uploads_dir)), name="uploads")


@app.get("/health")
async def health():
    return {"ok": True}
