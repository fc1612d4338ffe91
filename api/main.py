"""Bookstore API — FastAPI entry point.

Registers middleware, exception handlers, routers, and lifecycle hooks.
The books router is mounted under the configured API prefix (/api).
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger

from api.middleware import RequestContextMiddleware, get_request_id
from core.config import settings
from core.database import close_db, init_db
from core.errors import NotFoundError
from core.observability.logging_setup import configure_logging


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    configure_logging(settings.log_level, settings.log_json)
    if settings.db_create_tables:
        await init_db()

    logger.info("{} {} started", settings.app_name, settings.version)
    yield
    await close_db()
    logger.info("{} shutting down", settings.app_name)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title=settings.app_name,
    description="CRUD API for bookstore catalog records",
    version=settings.version,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request id + access log
app.add_middleware(RequestContextMiddleware)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc if part not in ("body", "path", "query")]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report every violated constraint as 400, grouped by field."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(error["loc"]), []).append(error["msg"])

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "title": "One or more validation errors occurred.",
            "status": status.HTTP_400_BAD_REQUEST,
            "traceId": get_request_id(),
            "errors": errors,
        },
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return Response(status_code=status.HTTP_404_NOT_FOUND)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

from bookstore.router import router as books_router  # noqa: E402

app.include_router(books_router, prefix=settings.api_prefix, tags=["Books"])


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "healthy", "version": settings.version}


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
        "resources": [f"{settings.api_prefix}/books"],
    }


if __name__ == "__main__":
    import uvicorn

    # Access lines come from RequestContextMiddleware
    uvicorn.run(app, host="0.0.0.0", port=8000, access_log=False)
