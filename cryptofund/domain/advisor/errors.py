"""
Domain-specific errors for the advisor bounded context.

All errors raised from the advisor domain must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class AdvisorDomainError(Exception):
    """Base error for all advisor domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class PredictionNotFoundError(AdvisorDomainError):
    """Raised when a stock prediction cannot be found."""

    def __init__(self, prediction_id: str) -> None:
        super().__init__(f"Prediction not found: {prediction_id}")
        self.prediction_id = prediction_id


class ChatSessionNotFoundError(AdvisorDomainError):
    """Raised when a chat session does not exist or belongs to another user."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Chat session not found: {session_id}")
        self.session_id = session_id


class AdvisorServiceError(AdvisorDomainError):
    """Raised when the generative-AI provider call fails."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"AI advisor call failed: {reason}")
        self.reason = reason


class MarketDataError(AdvisorDomainError):
    """Raised when a quote cannot be obtained for a symbol."""

    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(f"Market data unavailable for {symbol}: {reason}")
        self.symbol = symbol
        self.reason = reason
