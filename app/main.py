"""
Main FastAPI application for the TechDocGen backend.
Handles CORS, request logging middleware, lifespan events, and router registration.
"""
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings
from app.errors import DocGenError
from app.routers import catalog, generation, health
from app.routers.generation import CORS_HEADERS
from app.services.ai_gateway import check_gateway_config

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown event handler."""
    logger.info("=" * 60)
    logger.info("  Starting TechDocGen backend …")
    logger.info("=" * 60)

    # The API key is read once here; a missing key is not fatal, generation
    # requests will fail with a configuration error until it is set.
    gateway = check_gateway_config()
    if gateway["configured"]:
        logger.info("✓ AI gateway: %s (model %s)", gateway["base_url"], gateway["model"])
    else:
        logger.warning(
            "⚠ AI_GATEWAY_API_KEY is not set — generation endpoints will return 500"
        )

    logger.info("=" * 60)
    logger.info("  TechDocGen backend ready on http://%s:%d", settings.HOST, settings.PORT)
    logger.info("  Swagger UI : http://%s:%d/docs", settings.HOST, settings.PORT)
    logger.info("  Health     : http://%s:%d/api/health", settings.HOST, settings.PORT)
    logger.info("=" * 60)

    yield  # ← server is running

    logger.info("✓ Shutdown complete.")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="TechDocGen API",
    description=(
        "**TechDocGen** — AI-powered technical documentation generator.\n\n"
        "Pick a template, describe the subject, and the backend composes a "
        "prompt and asks the hosted model to write the documentation.\n\n"
        "Key endpoints:\n"
        "- `POST /generate-documentation` — generate documentation\n"
        "- `POST /chat-assistant` — help chatbot\n"
        "- `GET  /api/templates` — available templates\n"
        "- `GET  /api/options` — audiences, detail levels, formats, languages\n"
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# ---------------------------------------------------------------------------
# Request / response logging middleware
# ---------------------------------------------------------------------------

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every request with method, path, status code, and elapsed time.
    Attaches an ``X-Process-Time`` header (milliseconds) and the permissive
    CORS headers to every response.  Preflight ``OPTIONS`` requests reach
    the routes unchanged, so they get the same empty 200 a bare OPTIONS does.
    """
    t0 = time.monotonic()
    response = await call_next(request)
    elapsed_ms = round((time.monotonic() - t0) * 1000, 2)

    # Skip noisy health-check polling from the frontend
    if request.url.path not in ("/api/health/", "/api/health", "/"):
        logger.info(
            "%s %s → %d  (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )

    for name, value in CORS_HEADERS.items():
        response.headers.setdefault(name, value)
    response.headers["X-Process-Time"] = f"{elapsed_ms}ms"
    return response


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or mistyped request bodies are client errors, reported as ``{"error"}``."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.warning("Invalid request on %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"{location}: {message}" if location else message},
        headers=CORS_HEADERS,
    )


@app.exception_handler(DocGenError)
async def docgen_exception_handler(request: Request, exc: DocGenError):
    """Domain errors that escaped a ``handle()`` wrapper."""
    logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=CORS_HEADERS,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return a structured JSON error for any unhandled exception."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": str(exc) or "Unknown error occurred",
            "path": str(request.url.path),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        headers=CORS_HEADERS,
    )


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health.router,      prefix="/api/health", tags=["Health"])
app.include_router(catalog.router,     prefix="/api",        tags=["Catalog"])
app.include_router(generation.router,                        tags=["Generation"])


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

@app.get("/", tags=["Root"], include_in_schema=False)
async def root():
    """API root — returns basic service info."""
    return {
        "name": "TechDocGen API",
        "version": "0.1.0",
        "description": "Technical Documentation Generator Backend",
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": {
            "generate": "/generate-documentation",
            "chat": "/chat-assistant",
            "templates": "/api/templates",
            "options": "/api/options",
        },
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info",
    )
