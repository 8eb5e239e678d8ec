"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cryptofund.domain.advisor.errors import (
    AdvisorDomainError,
    AdvisorServiceError,
    ChatSessionNotFoundError,
    MarketDataError,
    PredictionNotFoundError,
)
from cryptofund.domain.funding.errors import (
    CampaignNotActiveError,
    CampaignNotFoundError,
    EmailAlreadyRegisteredError,
    FundingDomainError,
    InvalidAmountError,
    InvalidCampaignStatusError,
    NotAuthenticatedError,
    PermissionDeniedError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_403 = 403
HTTP_404 = 404
HTTP_409 = 409
HTTP_500 = 500
HTTP_502 = 502


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, Any] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report schema violations as 400 with per-field details."""
        details = [
            {
                "loc": [str(part) for part in error.get("loc", ())],
                "msg": error.get("msg", ""),
                "type": error.get("type", ""),
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=HTTP_400,
            content={"error": "Validation failed", "details": details},
        )

    # --- Advisor ---

    @app.exception_handler(PredictionNotFoundError)
    async def handle_prediction_not_found(
        _request: Request, exc: PredictionNotFoundError
    ) -> JSONResponse:
        """Handle missing prediction errors."""
        logger.warning("Prediction not found: %s", exc.prediction_id)
        return _error_response(HTTP_404, "Prediction not found")

    @app.exception_handler(ChatSessionNotFoundError)
    async def handle_chat_session_not_found(
        _request: Request, exc: ChatSessionNotFoundError
    ) -> JSONResponse:
        """Handle missing or foreign chat session errors."""
        logger.warning("Chat session not found: %s", exc.session_id)
        return _error_response(HTTP_404, "Chat session not found")

    @app.exception_handler(AdvisorServiceError)
    async def handle_advisor_service(
        _request: Request, exc: AdvisorServiceError
    ) -> JSONResponse:
        """Handle generative-AI provider failures."""
        logger.error("AI advisor failure: %s", exc.reason)
        return _error_response(HTTP_502, "AI advisor unavailable")

    @app.exception_handler(MarketDataError)
    async def handle_market_data(
        _request: Request, exc: MarketDataError
    ) -> JSONResponse:
        """Handle market data provider failures."""
        logger.error("Market data failure for %s: %s", exc.symbol, exc.reason)
        return _error_response(HTTP_502, "Market data unavailable", exc.symbol)

    @app.exception_handler(AdvisorDomainError)
    async def handle_advisor_domain(
        _request: Request, exc: AdvisorDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled advisor domain errors."""
        logger.error("Unhandled advisor domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    # --- Funding ---

    @app.exception_handler(NotAuthenticatedError)
    async def handle_not_authenticated(
        _request: Request, exc: NotAuthenticatedError
    ) -> JSONResponse:
        """Handle requests without a known caller."""
        return _error_response(HTTP_401, "Unauthorized")

    @app.exception_handler(PermissionDeniedError)
    async def handle_permission_denied(
        _request: Request, exc: PermissionDeniedError
    ) -> JSONResponse:
        """Handle actions on resources the caller may not touch."""
        logger.warning("Permission denied: %s", exc.action)
        return _error_response(HTTP_403, "Forbidden")

    @app.exception_handler(UserNotFoundError)
    async def handle_user_not_found(
        _request: Request, exc: UserNotFoundError
    ) -> JSONResponse:
        """Handle missing user errors."""
        logger.warning("User not found: %s", exc.user_id)
        return _error_response(HTTP_404, "User not found")

    @app.exception_handler(EmailAlreadyRegisteredError)
    async def handle_email_taken(
        _request: Request, exc: EmailAlreadyRegisteredError
    ) -> JSONResponse:
        """Handle duplicate registrations."""
        return _error_response(HTTP_409, "Email already registered")

    @app.exception_handler(CampaignNotFoundError)
    async def handle_campaign_not_found(
        _request: Request, exc: CampaignNotFoundError
    ) -> JSONResponse:
        """Handle missing campaign errors."""
        logger.warning("Campaign not found: %s", exc.campaign_id)
        return _error_response(HTTP_404, "Campaign not found")

    @app.exception_handler(CampaignNotActiveError)
    async def handle_campaign_not_active(
        _request: Request, exc: CampaignNotActiveError
    ) -> JSONResponse:
        """Handle contributions to paused or finished campaigns."""
        return _error_response(HTTP_400, "Campaign is not active", exc.status)

    @app.exception_handler(InvalidCampaignStatusError)
    async def handle_invalid_status(
        _request: Request, exc: InvalidCampaignStatusError
    ) -> JSONResponse:
        """Handle status changes owners are not allowed to make."""
        return _error_response(HTTP_400, "Invalid campaign status", exc.status)

    @app.exception_handler(InvalidAmountError)
    async def handle_invalid_amount(
        _request: Request, exc: InvalidAmountError
    ) -> JSONResponse:
        """Handle non-positive goals and contributions."""
        return _error_response(HTTP_400, "Amount must be positive")

    @app.exception_handler(FundingDomainError)
    async def handle_funding_domain(
        _request: Request, exc: FundingDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled funding domain errors."""
        logger.error("Unhandled funding domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
