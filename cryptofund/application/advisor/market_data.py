"""
Use cases: Stock quotes, trending stocks and the market overview.

GetStockQuoteUseCase
    Input: symbol
    Output: StockQuote
    Side effects: Stores freshly fetched quotes in the quote cache.
    Failure cases: MarketDataError.

GetTrendingStocksUseCase
    Output: list[StockQuote] for the trending symbols that could be quoted.

GetMarketOverviewUseCase
    Output: MarketSnapshot
    Side effects: Stores a synthetic snapshot when none exists yet.
"""

import logging
from datetime import timedelta

from cryptofund.domain.advisor.entities import MarketSnapshot, StockQuote, utcnow
from cryptofund.domain.advisor.errors import MarketDataError
from cryptofund.domain.advisor.ports import (
    MarketDataPort,
    MarketSnapshotRepository,
    StockQuoteRepository,
)
from cryptofund.domain.advisor.synthetic_market import synthetic_snapshot

logger = logging.getLogger(__name__)

TRENDING_SYMBOLS = ("AAPL", "MSFT", "GOOGL", "AMZN", "TSLA")


class GetStockQuoteUseCase:
    """Returns a quote, serving from the cache while it is fresh."""

    def __init__(
        self,
        market_data: MarketDataPort,
        quote_repo: StockQuoteRepository,
        cache_minutes: int = 15,
    ) -> None:
        self._market_data = market_data
        self._quote_repo = quote_repo
        self._cache_window = timedelta(minutes=cache_minutes)

    def execute(self, symbol: str) -> StockQuote:
        """Run the quote lookup.

        Args:
            symbol: Stock ticker symbol, any case.

        Returns:
            A cached quote younger than the cache window, or a fresh one.

        Raises:
            MarketDataError: If no cached quote exists and the fetch fails.
        """
        symbol = symbol.strip().upper()
        cached = self._quote_repo.get_fresh(symbol, since=utcnow() - self._cache_window)
        if cached is not None:
            logger.debug("Quote cache hit for %s", symbol)
            return cached

        logger.info("Fetching quote for symbol=%s", symbol)
        quote = self._market_data.fetch_quote(symbol)
        self._quote_repo.save(quote)
        return quote


class GetTrendingStocksUseCase:
    """Quotes a fixed list of popular symbols."""

    def __init__(self, get_quote: GetStockQuoteUseCase) -> None:
        self._get_quote = get_quote

    def execute(self) -> list[StockQuote]:
        quotes = []
        for symbol in TRENDING_SYMBOLS:
            try:
                quotes.append(self._get_quote.execute(symbol))
            except MarketDataError as exc:
                logger.warning("Skipping trending symbol %s: %s", symbol, exc.reason)
        return quotes


class GetMarketOverviewUseCase:
    """Returns the latest market snapshot, seeding one if the store is empty."""

    def __init__(self, snapshot_repo: MarketSnapshotRepository) -> None:
        self._snapshot_repo = snapshot_repo

    def execute(self) -> MarketSnapshot:
        snapshot = self._snapshot_repo.get_latest()
        if snapshot is not None:
            return snapshot

        logger.info("No market snapshot stored, generating a synthetic one")
        snapshot = synthetic_snapshot()
        self._snapshot_repo.save(snapshot)
        return snapshot
