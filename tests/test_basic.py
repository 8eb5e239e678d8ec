"""
Basic application tests.

Validates that the FastAPI app starts correctly, the health endpoint
responds as expected and cross-cutting middleware is applied.
"""

import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from cryptofund.shared.logging import RedactSecretsFilter
from cryptofund.shared.security.headers import DOCS_CSP, SecurityHeadersMiddleware
from cryptofund.shared.security.rate_limiting import caller_key


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self, client) -> None:
        """Health endpoint must return HTTP 200 with status ok."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

    def test_health_response_body(self, client) -> None:
        """Health endpoint must return status and version fields."""
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert "version" in body


class TestSecurityHeaders:
    """Tests for security headers on responses."""

    def test_security_headers_present(self, client) -> None:
        response = client.get("/api/v1/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Cache-Control"] == "no-store"
        assert "Content-Security-Policy" in response.headers

    def test_headers_on_error_responses(self, client) -> None:
        response = client.get("/api/v1/users/me")
        assert response.status_code == 401
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_docs_pages_get_their_own_csp(self) -> None:
        app = FastAPI(docs_url="/docs")
        app.add_middleware(SecurityHeadersMiddleware)
        response = TestClient(app).get("/docs")
        assert response.headers["Content-Security-Policy"] == DOCS_CSP
        assert "Cache-Control" not in response.headers


class TestValidationErrors:
    def test_validation_error_shape(self, client) -> None:
        response = client.post("/api/v1/users", json={"name": "A", "email": "not-an-email"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        fields = {detail["loc"][-1] for detail in body["details"]}
        assert {"name", "email"} <= fields

    def test_docs_disabled_outside_debug(self, client) -> None:
        assert client.get("/docs").status_code == 404


class TestLogRedaction:
    def _record(self, msg: str, *args) -> logging.LogRecord:
        return logging.LogRecord("urllib3", logging.DEBUG, __file__, 1, msg, args, None)

    def test_query_credentials_masked(self) -> None:
        record = self._record(
            '"GET /api/v1/quote?symbol=%s&token=%s HTTP/1.1" 200', "AAPL", "s3cr3t"
        )
        RedactSecretsFilter().filter(record)
        message = record.getMessage()
        assert "s3cr3t" not in message
        assert "symbol=AAPL&token=***" in message

    def test_plain_messages_untouched(self) -> None:
        record = self._record("Verified %d predictions", 3)
        assert RedactSecretsFilter().filter(record) is True
        assert record.getMessage() == "Verified 3 predictions"


class TestRateLimitKey:
    def _request(self, headers: list) -> Request:
        return Request({"type": "http", "headers": headers, "client": ("10.0.0.7", 5000)})

    def test_keyed_by_user_when_known(self) -> None:
        request = self._request([(b"x-user-id", b"user-123")])
        assert caller_key(request) == "user:user-123"

    def test_falls_back_to_client_address(self) -> None:
        assert caller_key(self._request([])) == "addr:10.0.0.7"
