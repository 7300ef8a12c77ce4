"""
FastAPI application factory.

Usage:
    python -m api.app                         # Dev server on port 8000
    APP_FIXTURES_DIR=/srv/fixtures python -m api.app

OpenAPI docs available at http://localhost:8000/docs after starting.

Every data endpoint lives under /api/v1.  The fixture store is loaded on
the first request (or the first /health call) and shared read-only for the
rest of the process.

Environment: see utils.config.AppConfig (APP_FIXTURES_DIR, APP_HOST,
APP_PORT, APP_LOG_FORMAT, APP_LOG_LEVEL, APP_CORS_ORIGINS).
"""

import json
import logging
import time
import uuid
import warnings
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from api.errors import register_error_handlers
from api.fixtures import get_fixtures_dir, load_store, set_fixtures_dir
from api.routes import contracts, corruption, countries, meetings
from utils.config import AppConfig
from utils.fixtures import FixtureError

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

_SLOW_REQUEST_MS = 500
_CACHE_CONTROL = "public, max-age=300"

# ── Structured logging ────────────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("transparency_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=_cfg.log_level, force=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warn at startup when the fixture directory is missing."""
    fixtures_dir = get_fixtures_dir()
    if not fixtures_dir.is_dir():
        warnings.warn(
            f"Fixture directory not found at {fixtures_dir}. "
            "Set APP_FIXTURES_DIR or pass --fixtures to main.py.",
            stacklevel=2,
        )
    yield


def create_app(fixtures_dir: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        fixtures_dir: Override the fixture directory (useful for testing).

    Returns:
        Configured FastAPI application instance.
    """
    if fixtures_dir is not None:
        set_fixtures_dir(fixtures_dir)

    app = FastAPI(
        title="Global Transparency Dashboard API",
        summary="Public-data REST API for national budgets, corruption indices and diplomacy.",
        description=(
            "## Global Transparency Dashboard API\n\n"
            "Read-only access to country budgets, Corruption Perception Index "
            "scores, health and education expenditure, world leader meetings, "
            "corruption cases and government contracts.\n\n"
            "### Key concepts\n"
            "- **Country codes** are matched in any letter case (`bw` = `BW`).\n"
            "- **Current value** of a metric is the most recent entry of its yearly series.\n"
            "- **Relationships** are keyed by country pair, e.g. `BW-US`.\n"
            "- **Transparency scores** on contracts range from 0 to 10.\n\n"
            "### Errors\n"
            "Errors return `{error, detail?, status_code}`. An unknown country "
            "gives `404 Country not found`; a known country without the requested "
            "series gives a 404 naming the dataset."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "countries",
                "description": (
                    "Country details, yearly budget/CPI/health/education series "
                    "and budget breakdowns by sector."
                ),
            },
            {
                "name": "meetings",
                "description": "World leader meetings and country-pair relationships.",
            },
            {
                "name": "corruption",
                "description": "Reported corruption cases and per-country summaries.",
            },
            {
                "name": "contracts",
                "description": "Government contracts with transparency scores.",
            },
            {
                "name": "meta",
                "description": "Health check.",
            },
        ],
    )

    # ── CORS middleware ───────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── ETag + Cache-Control middleware ───────────────────────────────────────

    def _compute_etag() -> str | None:
        """Weak ETag from the fixture fingerprint; None if fixtures won't load."""
        try:
            return f'W/"{load_store().fingerprint}"'
        except FixtureError:
            return None

    @app.middleware("http")
    async def cache_control_middleware(request: Request, call_next):
        """Add Cache-Control/ETag to successful data responses; 304 on If-None-Match."""
        response = await call_next(request)

        path = request.url.path
        if (request.method != "GET" or response.status_code != 200
                or not path.startswith("/api/v1") or path.endswith("/health")):
            return response

        etag = await run_in_threadpool(_compute_etag)
        if etag is None:
            return response
        if request.headers.get("If-None-Match") == etag:
            return Response(status_code=304, headers={"ETag": etag, "Cache-Control": _CACHE_CONTROL})
        response.headers["ETag"] = etag
        response.headers.setdefault("Cache-Control", _CACHE_CONTROL)
        return response

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with its duration and a short request id."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        path = request.url.path

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if _cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, path, response.status_code, duration_ms, request_id,
            )
        if duration_ms > _SLOW_REQUEST_MS:
            _logger.warning(
                "slow_request method=%s path=%s duration_ms=%.1f",
                request.method, path, duration_ms,
            )
        return response

    # ── Security headers ──────────────────────────────────────────────────────

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    register_error_handlers(app)

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    @app.get("/api/v1/health", tags=["meta"], summary="Health check (versioned)")
    def health():
        """Return 200 OK with record counts if the fixtures load, else 503."""
        try:
            store = load_store()
        except FixtureError as e:
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "error": str(e)},
            )
        return {"status": "ok", "fixtures": str(get_fixtures_dir()), **store.counts()}

    # ── Register routers ──────────────────────────────────────────────────────
    # countries goes last: its /countries/{code}/{metric} route would
    # otherwise shadow the per-country meetings, corruption and contract paths.

    prefix = "/api/v1"
    app.include_router(meetings.router,   prefix=prefix)
    app.include_router(corruption.router, prefix=prefix)
    app.include_router(contracts.router,  prefix=prefix)
    app.include_router(countries.router,  prefix=prefix)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
