"""Tests for global exception handlers.

Validates that all exception types are mapped onto the response envelope
with proper HTTP status codes and no information leakage.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.errors import (
    AppError,
    ConfigurationAppError,
    EmailAppError,
    PayloadTooLargeAppError,
    RateLimitAppError,
    StorageAppError,
    ValidationAppError,
)
from app.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def handler_client(app_with_handlers: FastAPI) -> TestClient:
    """Create test client with handlers enabled."""
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    def test_validation_error_returns_400_with_field_errors(
        self, handler_client: TestClient, app_with_handlers: FastAPI
    ):
        @app_with_handlers.get("/test-validation")
        async def test_endpoint():
            raise ValidationAppError(
                code="validation_failed",
                message="Validation failed",
                details={"errors": [{"field": "email", "message": "Please provide a valid email address"}]},
            )

        response = handler_client.get("/test-validation")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Validation failed",
            "errors": [{"field": "email", "message": "Please provide a valid email address"}],
        }

    def test_rate_limit_error_returns_429(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-rate-limit")
        async def test_endpoint():
            raise RateLimitAppError(
                code="rate_limit_exceeded",
                message="Too many requests. Please try again later.",
            )

        response = handler_client.get("/test-rate-limit")

        assert response.status_code == 429
        assert response.json()["message"] == "Too many requests. Please try again later."

    def test_payload_too_large_error_returns_413(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-too-large")
        async def test_endpoint():
            raise PayloadTooLargeAppError(
                code="body_too_large",
                message="Request body too large",
                details={"max_bytes": 10},
            )

        response = handler_client.get("/test-too-large")

        assert response.status_code == 413
        assert response.json() == {"success": False, "message": "Request body too large"}

    @pytest.mark.parametrize("error_cls", [StorageAppError, EmailAppError, ConfigurationAppError])
    def test_server_side_errors_return_generic_500(
        self, error_cls, handler_client: TestClient, app_with_handlers: FastAPI
    ):
        @app_with_handlers.get("/test-server-error")
        async def test_endpoint():
            raise error_cls(code="backend_down", message="connection refused to 10.0.0.5")

        response = handler_client.get("/test-server-error")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Internal server error. Please try again later.",
        }
        assert "10.0.0.5" not in response.text


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_unexpected_exception_handler_registered(self, app_with_handlers: FastAPI):
        assert Exception in app_with_handlers.exception_handlers

    def test_general_exception_handler_logic(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        exc = RuntimeError("Unexpected error: database connection failed")
        response = asyncio.run(general_exception_handler(request, exc))

        response_body = response.body if isinstance(response.body, bytes) else bytes(response.body)
        data = json.loads(response_body.decode())
        assert response.status_code == 500
        assert data == {"success": False, "message": "Internal server error"}

    def test_unhandled_route_error_never_leaks_stack_trace(
        self, handler_client: TestClient, app_with_handlers: FastAPI
    ):
        @app_with_handlers.get("/test-crash")
        async def test_endpoint():
            raise ValueError("Test error with details")

        response = handler_client.get("/test-crash")

        assert response.status_code == 500
        assert "Traceback" not in response.text
        assert "ValueError" not in response.text
        assert "details" not in response.text


class TestErrorHandlerIntegration:
    """Integration tests for exception handler setup."""

    def test_setup_exception_handlers_registers_handlers(self, app_with_handlers: FastAPI):
        assert AppError in app_with_handlers.exception_handlers
        assert Exception in app_with_handlers.exception_handlers

    def test_unknown_route_uses_envelope(self, handler_client: TestClient):
        response = handler_client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Endpoint not found"}

    def test_multiple_handler_setups_does_not_fail(self):
        app = FastAPI()

        setup_exception_handlers(app)
        setup_exception_handlers(app)

        assert AppError in app.exception_handlers
