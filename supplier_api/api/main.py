"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (body limit, request context, CORS)
  - Mount the supplier + user routers at the root path
  - Expose a health check endpoint

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: /register, /login, /supplier

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - Swagger UI / OpenAPI only in development (APP_ENV=development)
  - Test environments (APP_ENV=test|testing|ci) skip the DB pool entirely

Notes:
  - Middleware order matters: BodyLimit → RequestContext → CORS → routes
  - /healthz follows Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..infrastructure.db import close_pool, ensure_schema, get_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers

API_TITLE = "Supplier API"
API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()

    if settings.is_production():
        settings.validate_security_requirements()

    if settings.is_test():
        logger.info("Supplier API starting up (in-memory adapters)")
        yield
        return

    init_pool(
        database_url=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )

    try:
        ensure_schema()

        logger.info(
            "Supplier API starting up",
            extra={
                "app_env": settings.app_env,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )

        yield

    finally:
        close_pool()
        logger.info("Supplier API shutting down")


def _docs_enabled() -> bool:
    return get_settings().is_development()


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    from fastapi.openapi.utils import get_openapi

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "JWT access token via Authorization: Bearer <token>.",
        },
    }

    # R: Solo POST/PUT/DELETE de /supplier requieren token.
    protected = {("post", "/supplier"), ("put", "/supplier/{supplier_id}"),
                 ("delete", "/supplier/{supplier_id}")}
    for path, methods in openapi_schema.get("paths", {}).items():
        for method, operation in methods.items():
            if not isinstance(operation, dict):
                continue
            operation["security"] = (
                [{"BearerAuth": []}] if (method, path) in protected else []
            )

    app.openapi_schema = openapi_schema
    return app.openapi_schema


# R: Create FastAPI application instance with API metadata
app = FastAPI(
    title=API_TITLE,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/swagger" if _docs_enabled() else None,
    redoc_url=None,
    openapi_url="/swagger/v1/swagger.json" if _docs_enabled() else None,
    openapi_tags=[
        {"name": "User", "description": "Registro y login (JWT)"},
        {"name": "Supplier", "description": "CRUD de proveedores"},
    ],
)
app.openapi = custom_openapi


# R: Middleware order (bottom = first to execute):
# 1. CORSMiddleware - handles preflight
# 2. RequestContextMiddleware - sets request_id
# 3. BodyLimitMiddleware - rejects oversized bodies early
app.add_middleware(BodyLimitMiddleware)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().get_allowed_origins_list(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
)

app.include_router(router)

register_exception_handlers(app)


# R: Health check endpoint for monitoring/orchestration (Kubernetes, Docker)
@app.get("/healthz", include_in_schema=False)
def healthz(request: Request):
    """
    Returns:
        ok: True if the store is reachable
        db: "connected", "disconnected" or "in-memory"
        request_id: Correlation ID for this request
    """
    settings = get_settings()
    if settings.is_test():
        db_status = "in-memory"
    else:
        db_status = "disconnected"
        try:
            with get_pool().connection() as conn:
                conn.execute("SELECT 1")
            db_status = "connected"
        except Exception as e:
            logger.warning("Health check: DB unavailable", extra={"error": str(e)})

    return {
        "ok": db_status != "disconnected",
        "db": db_status,
        "request_id": getattr(request.state, "request_id", None),
    }
