"""
Synthetic market data for development and unconfigured deployments.

Used when no market data provider key is set, or the provider fails,
so that quotes, verification and the market overview keep working.
"""

import random
from typing import Optional

from cryptofund.domain.advisor.entities import (
    IndexLevel,
    MarketSnapshot,
    SectorMove,
    StockQuote,
    utcnow,
)

BASE_PRICES = {
    "AAPL": 187.68,
    "MSFT": 403.78,
    "GOOGL": 142.56,
    "AMZN": 178.12,
    "TSLA": 177.89,
    "META": 472.22,
    "NVDA": 879.35,
    "NFLX": 624.46,
}


def base_price(symbol: str) -> float:
    """Return a stable reference price for a symbol."""
    symbol = symbol.upper()
    if symbol in BASE_PRICES:
        return BASE_PRICES[symbol]
    return 50.0 + (sum(ord(ch) for ch in symbol) % 450)


def synthetic_quote(symbol: str, rng: Optional[random.Random] = None) -> StockQuote:
    """Return a quote within ±3 of the symbol's base price."""
    rng = rng or random.Random()
    reference = base_price(symbol)
    change = rng.uniform(-3, 3)
    price = reference + change
    return StockQuote(
        symbol=symbol.upper(),
        price=price,
        change=change,
        change_percent=change / reference * 100,
        high=price + rng.uniform(0, 2),
        low=price - rng.uniform(0, 2),
        open=price - change / 2,
        prev_close=price - change,
    )


def synthetic_snapshot(rng: Optional[random.Random] = None) -> MarketSnapshot:
    """Return a plausible macro, index and sector overview for today."""
    rng = rng or random.Random()
    return MarketSnapshot(
        date=utcnow(),
        indicators={
            "vix": 15 + rng.uniform(0, 10),
            "fedRate": 5.25 + rng.uniform(-0.25, 0.25),
            "unemployment": 3.5 + rng.uniform(0, 1),
            "gdp": 2 + rng.uniform(0, 2),
            "inflation": 3 + rng.uniform(0, 1),
        },
        major_indices={
            "S&P 500": IndexLevel(
                value=5000 + rng.uniform(0, 200),
                change=rng.uniform(-20, 20),
                change_percent=rng.uniform(-1, 1),
            ),
            "Dow Jones": IndexLevel(
                value=38000 + rng.uniform(0, 1000),
                change=rng.uniform(-150, 150),
                change_percent=rng.uniform(-1, 1),
            ),
            "Nasdaq": IndexLevel(
                value=16000 + rng.uniform(0, 500),
                change=rng.uniform(-75, 75),
                change_percent=rng.uniform(-1, 1),
            ),
        },
        sector_performance={
            "Technology": SectorMove(rng.uniform(-2, 2), rng.uniform(-2, 2)),
            "Healthcare": SectorMove(rng.uniform(-1.5, 1.5), rng.uniform(-1.5, 1.5)),
            "Financials": SectorMove(rng.uniform(-1.25, 1.25), rng.uniform(-1.25, 1.25)),
            "Consumer Discretionary": SectorMove(
                rng.uniform(-1.5, 1.5), rng.uniform(-1.5, 1.5)
            ),
            "Energy": SectorMove(rng.uniform(-2, 2), rng.uniform(-2, 2)),
        },
    )
