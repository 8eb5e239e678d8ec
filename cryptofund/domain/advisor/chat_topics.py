"""
Free-text helpers for the advisor chat.

Pulls a ticker symbol out of a user's message and names new
chat sessions after what the first message is about.
"""

import re
from typing import Optional

from cryptofund.domain.advisor.entities import ChatCategory

FALLBACK_REPLY = (
    "I'm sorry, I wasn't able to analyze that right now. "
    "Please try again in a moment, or ask about a different stock."
)

COMPANY_TICKERS = {
    "apple": "AAPL",
    "tesla": "TSLA",
    "amazon": "AMZN",
    "microsoft": "MSFT",
    "google": "GOOGL",
    "alphabet": "GOOGL",
    "meta": "META",
    "facebook": "META",
    "nvidia": "NVDA",
    "netflix": "NFLX",
}

# Upper-case words that show up in questions but are not tickers.
NON_TICKERS = frozenset({
    "A", "ABOUT", "AI", "ALL", "AM", "AN", "AND", "ANY", "ARE", "AS", "AT", "ATH",
    "BE", "BEAR", "BULL", "BUT", "BUY", "BY", "CAN", "CEO", "CFO", "CPI", "DCA",
    "DID", "DO", "DOES", "EPS", "ETF", "EU", "EV", "FED", "FOR", "FROM", "GDP",
    "GET", "GOOD", "HAS", "HAVE", "HELP", "HI", "HOLD", "HOW", "I", "IF", "IN",
    "IPO", "IS", "IT", "ITS", "LONG", "MACD", "ME", "MY", "NEW", "NO", "NOT",
    "NOW", "NYSE", "OF", "OK", "ON", "OR", "OUT", "PE", "PLEASE", "Q1", "Q2",
    "Q3", "Q4", "ROI", "RSI", "SEC", "SELL", "SHORT", "SO", "THE", "THIS",
    "TO", "TODAY", "UK", "UP", "US", "USA", "USD", "WE", "WHAT", "WHEN",
    "WHICH", "WHO", "WHY", "WILL", "WITH", "YES", "YOU", "YOUR", "YTD",
})

STOCK_TITLES = (
    (("apple", "aapl"), "Apple Stock Discussion"),
    (("tesla", "tsla"), "Tesla Stock Analysis"),
    (("amazon", "amzn"), "Amazon Stock Inquiry"),
    (("microsoft", "msft"), "Microsoft Stock Analysis"),
    (("google", "alphabet", "googl"), "Google Stock Discussion"),
    (("market", "trend", "index"), "Market Trends Analysis"),
    (("invest", "portfolio", "strategy"), "Investment Strategy Advice"),
    (("crypto", "bitcoin", "ethereum"), "Cryptocurrency Discussion"),
)
DEFAULT_STOCK_TITLE = "Stock Market Conversation"

FUNDING_TITLES = (
    (("crowdfunding",), "Crowdfunding Strategy"),
    (("invest", "roi"), "Investment Advice"),
    (("budget", "plan"), "Project Budget Planning"),
)
DEFAULT_FUNDING_TITLE = "Funding Conversation"

_CASHTAG = re.compile(r"\$([A-Za-z]{1,5})\b")
_UPPER_WORD = re.compile(r"\b[A-Z]{1,5}\b")


def extract_symbol(message: str) -> Optional[str]:
    """Return the ticker a message is asking about, or None.

    Checked in order: a ``$TICKER`` cashtag, a known company name, then a
    standalone upper-case word that is not a common word or jargon.
    """
    cashtag = _CASHTAG.search(message)
    if cashtag:
        return cashtag.group(1).upper()

    lowered = message.lower()
    for name, ticker in COMPANY_TICKERS.items():
        if re.search(rf"\b{name}\b", lowered):
            return ticker

    for word in _UPPER_WORD.findall(message):
        if word not in NON_TICKERS:
            return word

    return None


def generate_session_title(message: str, category: ChatCategory = ChatCategory.STOCKS) -> str:
    """Name a new chat session from its first message."""
    lowered = message.lower()
    if category is ChatCategory.FUNDING:
        table, default = FUNDING_TITLES, DEFAULT_FUNDING_TITLE
    else:
        table, default = STOCK_TITLES, DEFAULT_STOCK_TITLE

    for keywords, title in table:
        if any(keyword in lowered for keyword in keywords):
            return title
    return default
