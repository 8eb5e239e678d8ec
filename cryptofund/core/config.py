"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, including provider keys and
the tuning constants of the prediction workflow.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_heavy: Rate limit for LLM-backed endpoints.
        database_url: SQLAlchemy URL of the relational store.
        gemini_api_key: Google Gemini API key. Empty disables the advisor,
            and chat turns receive the fallback reply.
        finnhub_api_key: Finnhub API key. Empty switches to synthetic quotes.
        synthetic_quote_fallback: Serve a synthetic quote when Finnhub fails
            on a quote lookup. Verification never uses it.
        quote_cache_minutes: How long a fetched quote is served from cache.
        verification_min_age_hours: Minimum prediction age before verification.
        verification_batch_limit: Maximum predictions verified per run.
        prediction_history_limit: Verified predictions loaded as context.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "CryptoFund"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"
    rate_limit_heavy: str = "10/minute"

    database_url: str = "sqlite:///./cryptofund.db"

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.4
    gemini_max_output_tokens: int = 2048
    gemini_timeout_seconds: float = 30.0

    finnhub_api_key: str = ""
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    finnhub_timeout_seconds: float = 10.0
    synthetic_quote_fallback: bool = False

    quote_cache_minutes: int = 15
    verification_min_age_hours: int = 24
    verification_batch_limit: int = 50
    prediction_history_limit: int = 10


settings = Settings()
