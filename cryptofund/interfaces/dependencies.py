"""
Shared dependency providers.

The database engine is built once per process from settings.
Tests replace it through ``app.dependency_overrides[get_engine]``.
"""

from functools import lru_cache

from sqlalchemy.engine import Engine

from cryptofund.core.config import settings
from cryptofund.infrastructure.database import build_engine


@lru_cache
def get_engine() -> Engine:
    """Build the SQLAlchemy engine from application settings."""
    return build_engine(settings.database_url)
