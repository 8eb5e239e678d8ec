"""
Shared fixtures.

The API runs against an in-memory SQLite database. The Gemini and
market data ports are replaced with fakes so no test touches the network.
"""

from typing import Optional
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from cryptofund.domain.advisor.entities import (
    ChatCategory,
    HistoricalExchange,
    StockQuote,
    utcnow,
)
from cryptofund.domain.advisor.errors import AdvisorServiceError, MarketDataError
from cryptofund.domain.advisor.ports import MarketDataPort, StockAdvisorPort
from cryptofund.infrastructure.database import build_engine, create_tables
from cryptofund.infrastructure.funding.user_repository import UserRepositoryAdapter
from cryptofund.interfaces.advisor.dependencies import (
    get_market_data,
    get_stock_advisor,
    get_verification_market_data,
)
from cryptofund.interfaces.dependencies import get_engine
from cryptofund.main import app
from cryptofund.shared.security.rate_limiting import limiter

ANALYSIS = """**Predicted Direction:** UP
**Price Target:** $200.50
**Confidence Level:** 80%
**Timeframe:** 1 month

### Technical Factors
- Price holding above the 50-day moving average
- RSI trending higher

### Fundamental Factors
- Earnings beat expectations
- Revenue growth accelerating

### Market Conditions
- Sector rotation into technology

### Analysis Summary
Momentum remains constructive into the next quarter.
"""


class FakeAdvisor(StockAdvisorPort):
    """Canned advisor that records its calls."""

    def __init__(self, analysis: str = ANALYSIS, reply: str = "Diversify across sectors.") -> None:
        self.analysis = analysis
        self.reply = reply
        self.fail = False
        self.analyze_calls: list[dict] = []
        self.answer_calls: list[tuple[str, ChatCategory]] = []

    def analyze_stock(
        self,
        symbol: str,
        user_query: str,
        quote: Optional[StockQuote],
        history: list[HistoricalExchange],
    ) -> str:
        self.analyze_calls.append(
            {"symbol": symbol, "user_query": user_query, "quote": quote, "history": history}
        )
        if self.fail:
            raise AdvisorServiceError("provider down")
        return self.analysis

    def answer(self, message: str, category: ChatCategory) -> str:
        self.answer_calls.append((message, category))
        if self.fail:
            raise AdvisorServiceError("provider down")
        return self.reply


class FakeMarketData(MarketDataPort):
    """Flat quotes from a price table; symbols in ``failing`` raise."""

    def __init__(self, prices: Optional[dict[str, float]] = None) -> None:
        self.prices = dict(prices or {})
        self.failing: set[str] = set()
        self.calls: list[str] = []

    def fetch_quote(self, symbol: str) -> StockQuote:
        self.calls.append(symbol)
        if symbol in self.failing:
            raise MarketDataError(symbol, "provider down")
        price = self.prices.get(symbol, 100.0)
        return StockQuote(
            symbol=symbol,
            price=price,
            change=0.0,
            change_percent=0.0,
            high=price,
            low=price,
            open=price,
            prev_close=price,
        )


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def advisor() -> FakeAdvisor:
    return FakeAdvisor()


@pytest.fixture
def market_data() -> FakeMarketData:
    return FakeMarketData(prices={"AAPL": 190.0})


@pytest.fixture
def client(engine, advisor, market_data):
    """TestClient wired to the in-memory database and fake ports."""
    limiter.enabled = False
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_stock_advisor] = lambda: advisor
    app.dependency_overrides[get_market_data] = lambda: market_data
    app.dependency_overrides[get_verification_market_data] = lambda: market_data
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def register(client):
    """Register a user through the API and return the response body."""

    def _register(name: str = "Alice Example", email: str = "alice@example.com") -> dict:
        response = client.post("/api/v1/users", json={"name": name, "email": email})
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def make_admin(engine):
    def _make_admin(user: dict) -> None:
        UserRepositoryAdapter(engine).set_admin(UUID(user["id"]), True, updated_at=utcnow())

    return _make_admin
