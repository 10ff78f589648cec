from __future__ import annotations

"""Application factory for FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests and the ASGI entry point build the same application.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import contact_router, health_router
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware, security_headers_middleware
from app.core.openapi import apply_openapi_customizations

CORS_ALLOWED_HEADERS = [
    "Content-Type",
    "Authorization",
    "Accept",
    "X-Requested-With",
    "Origin",
    "Access-Control-Request-Method",
    "Access-Control-Request-Headers",
]


def _cors_origins(value: str) -> list[str]:
    origins = [origin.strip() for origin in value.split(",") if origin.strip()]
    return origins or ["*"]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Contact Form API",
        description=(
            "Accepts contact form submissions, validates and rate limits them, "
            "stores each submission and emails staff and the submitter."
        ),
        version=settings.app.version,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    # Middleware (last added runs first)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings.app.cors_origin),
        allow_methods=["GET", "POST", "OPTIONS", "HEAD"],
        allow_headers=CORS_ALLOWED_HEADERS,
        allow_credentials=False,
        max_age=86400,
    )

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(contact_router)
    app.include_router(health_router)

    # OpenAPI customizations (tags, documented error envelopes)
    apply_openapi_customizations(app)

    return app
