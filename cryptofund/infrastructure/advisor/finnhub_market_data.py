"""
Adapter: Finnhub market data.

Implements MarketDataPort.
Fetches real-time quotes from the Finnhub /quote endpoint. When no API
key is configured, or the provider fails and the synthetic fallback is
enabled, a synthetic quote is returned instead.
"""

import logging
from typing import Optional

import requests

from cryptofund.domain.advisor.entities import StockQuote
from cryptofund.domain.advisor.errors import MarketDataError
from cryptofund.domain.advisor.ports import MarketDataPort
from cryptofund.domain.advisor.synthetic_market import synthetic_quote

logger = logging.getLogger(__name__)


class FinnhubMarketDataAdapter(MarketDataPort):
    """Quote provider backed by Finnhub."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://finnhub.io/api/v1",
        timeout: float = 10.0,
        synthetic_fallback: bool = False,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._synthetic_fallback = synthetic_fallback
        self._http = session or requests.Session()

    def fetch_quote(self, symbol: str) -> StockQuote:
        """Return the current quote for ``symbol``.

        Raises:
            MarketDataError: If the provider fails and the synthetic
                fallback is disabled.
        """
        symbol = symbol.upper()
        if not self._api_key:
            logger.debug("No Finnhub key configured, using synthetic quote for %s", symbol)
            return synthetic_quote(symbol)

        try:
            return self._fetch(symbol)
        except MarketDataError as e:
            if not self._synthetic_fallback:
                raise
            logger.warning("Finnhub quote failed for %s (%s), using synthetic", symbol, e.reason)
            return synthetic_quote(symbol)

    def _fetch(self, symbol: str) -> StockQuote:
        try:
            response = self._http.get(
                f"{self._base_url}/quote",
                params={"symbol": symbol, "token": self._api_key},
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise MarketDataError(symbol, type(e).__name__) from e
        except ValueError as e:
            raise MarketDataError(symbol, "non-JSON response") from e

        # Finnhub answers unknown symbols with an all-zero quote.
        price = data.get("c") or 0
        if price <= 0:
            raise MarketDataError(symbol, "no price returned")

        return StockQuote(
            symbol=symbol,
            price=float(price),
            change=float(data.get("d") or 0),
            change_percent=float(data.get("dp") or 0),
            high=float(data.get("h") or 0),
            low=float(data.get("l") or 0),
            open=float(data.get("o") or 0),
            prev_close=float(data.get("pc") or 0),
        )
