"""
Tests for the advisor domain layer.

Pure functions only: analysis parsing, accuracy scoring, chat topic
helpers and synthetic market data. No database or network calls.
"""

import random
from uuid import uuid4

import pytest

from cryptofund.domain.advisor.accuracy import (
    historical_accuracy,
    observed_direction,
    price_accuracy,
    score_prediction,
)
from cryptofund.domain.advisor.chat_topics import extract_symbol, generate_session_title
from cryptofund.domain.advisor.entities import (
    ChatCategory,
    ChatMessage,
    ChatRole,
    ChatSession,
    Direction,
    StockPrediction,
    Timeframe,
)
from cryptofund.domain.advisor.prediction_parser import (
    extract_factors,
    normalize_analysis,
    parse_analysis,
    parse_confidence,
    parse_direction,
    parse_price_target,
)
from cryptofund.domain.advisor.synthetic_market import (
    base_price,
    synthetic_quote,
    synthetic_snapshot,
)

ANALYSIS = """**Predicted Direction:** UP
**Price Target:** $200.50
**Confidence Level:** 80%

### Technical Factors
- Price holding above the 50-day moving average
- RSI trending higher

### Fundamental Factors
- Earnings beat expectations
- Revenue growth accelerating

### Market Conditions
- Sector rotation into technology
"""


def _prediction(initial: float, predicted: float, direction: Direction) -> StockPrediction:
    return StockPrediction(
        user_id=uuid4(),
        symbol="AAPL",
        initial_price=initial,
        predicted_price=predicted,
        predicted_direction=direction,
        confidence=0.7,
        timeframe="1 month",
        ai_reasoning="",
    )


# ══════════════════════════════════════════════════════════════════════
# Analysis parsing
# ══════════════════════════════════════════════════════════════════════


class TestParseAnalysis:
    """Structured fields scraped from a well-formed Markdown report."""

    def test_labelled_fields(self):
        parsed = parse_analysis(ANALYSIS, current_price=190.0)
        assert parsed.direction is Direction.UP
        assert parsed.confidence == pytest.approx(0.8)
        assert parsed.predicted_price == pytest.approx(200.5)

    def test_factor_sections(self):
        parsed = parse_analysis(ANALYSIS, current_price=190.0)
        assert parsed.technical_factors == [
            "Price holding above the 50-day moving average",
            "RSI trending higher",
        ]
        assert parsed.fundamental_factors == [
            "Earnings beat expectations",
            "Revenue growth accelerating",
        ]
        assert parsed.market_conditions == ["Sector rotation into technology"]

    def test_analysis_is_normalized(self):
        parsed = parse_analysis("  Outlook  is   mixed.\n\n\n\nWatch volume.  ", 10.0)
        assert parsed.analysis == "Outlook is mixed.\n\nWatch volume."


class TestParseDirection:
    def test_label_beats_keywords(self):
        text = "Some call it bullish.\nPredicted Direction: Down"
        assert parse_direction(text) is Direction.DOWN

    def test_up_keyword(self):
        assert parse_direction("The chart looks bullish.") is Direction.UP

    def test_down_keyword(self):
        assert parse_direction("Shares look bearish into the close.") is Direction.DOWN

    def test_neutral_when_nothing_matches(self):
        assert parse_direction("Hard to say where this goes.") is Direction.NEUTRAL


class TestParseConfidence:
    def test_default_when_absent(self):
        assert parse_confidence("No numbers here") == pytest.approx(0.7)

    def test_capped_at_one(self):
        assert parse_confidence("Confidence: 150%") == pytest.approx(1.0)

    def test_decimal_percentage(self):
        assert parse_confidence("**Confidence Level:** 62.5%") == pytest.approx(0.625)


class TestParsePriceTarget:
    def test_thousands_separator(self):
        assert parse_price_target("Price Target: $1,250.75", 1000.0, Direction.UP) == (
            pytest.approx(1250.75)
        )

    def test_fallback_follows_direction(self):
        assert parse_price_target("", 100.0, Direction.UP) == pytest.approx(105.0)
        assert parse_price_target("", 100.0, Direction.DOWN) == pytest.approx(95.0)
        assert parse_price_target("", 100.0, Direction.NEUTRAL) == pytest.approx(100.0)


class TestExtractFactors:
    def test_keyword_fallback_without_headings(self):
        text = "Volume is rising. Earnings were strong. The sector is weak."
        assert extract_factors(text, "technical") == ["Volume is rising"]
        assert extract_factors(text, "fundamental") == ["Earnings were strong"]
        assert extract_factors(text, "market") == ["The sector is weak"]

    def test_at_most_five(self):
        block = "Technical Factors:\n" + "\n".join(f"- Signal number {i}" for i in range(8))
        assert len(extract_factors(block, "technical")) == 5

    def test_unknown_kind_is_empty(self):
        assert extract_factors("Volume is rising.", "astrology") == []

    def test_normalize_converts_line_endings(self):
        assert normalize_analysis("a\r\nb\rc") == "a\nb\nc"


# ══════════════════════════════════════════════════════════════════════
# Accuracy scoring
# ══════════════════════════════════════════════════════════════════════


class TestAccuracy:
    def test_observed_direction(self):
        assert observed_direction(100.0, 101.0) is Direction.UP
        assert observed_direction(100.0, 99.0) is Direction.DOWN
        assert observed_direction(100.0, 100.0) is Direction.NEUTRAL

    def test_perfect_prediction(self):
        direction, accuracy = score_prediction(_prediction(100.0, 110.0, Direction.UP), 110.0)
        assert direction is Direction.UP
        assert accuracy == pytest.approx(100.0)

    def test_wrong_direction_and_price(self):
        direction, accuracy = score_prediction(_prediction(100.0, 110.0, Direction.UP), 90.0)
        assert direction is Direction.DOWN
        # miss of 20% of initial price, no direction credit
        assert accuracy == pytest.approx(80.0 * 0.7)

    def test_price_accuracy_floors_at_zero(self):
        assert price_accuracy(10.0, 100.0, 10.0) == 0.0
        assert price_accuracy(0.0, 5.0, 5.0) == 0.0

    def test_historical_accuracy_ignores_unknown(self):
        assert historical_accuracy([None, 50.0, 70.0]) == pytest.approx(60.0)
        assert historical_accuracy([]) == 0.0


# ══════════════════════════════════════════════════════════════════════
# Chat topics
# ══════════════════════════════════════════════════════════════════════


class TestExtractSymbol:
    def test_cashtag(self):
        assert extract_symbol("What do you think about $tsla?") == "TSLA"

    def test_upper_case_word(self):
        assert extract_symbol("Should I buy NVDA now?") == "NVDA"

    def test_company_name(self):
        assert extract_symbol("is it a good time to buy apple?") == "AAPL"

    def test_jargon_is_not_a_ticker(self):
        assert extract_symbol("what is the GDP outlook?") is None

    def test_company_name_beats_shouted_words(self):
        assert extract_symbol("Should I BUY or SELL apple now?") == "AAPL"

    @pytest.mark.parametrize(
        "message",
        ["Should I BUY or SELL now?", "HOLD for the LONG run?", "CAN YOU HELP ME?"],
    )
    def test_trading_words_are_not_tickers(self, message):
        assert extract_symbol(message) is None

    def test_cashtag_beats_company_name(self):
        assert extract_symbol("apple or $MSFT?") == "MSFT"


class TestSessionTitle:
    def test_stock_title(self):
        assert generate_session_title("How is Tesla doing?") == "Tesla Stock Analysis"

    def test_stock_default(self):
        assert generate_session_title("Hello there") == "Stock Market Conversation"

    def test_funding_title(self):
        title = generate_session_title("help me plan a budget", ChatCategory.FUNDING)
        assert title == "Project Budget Planning"

    def test_funding_default(self):
        assert generate_session_title("hello", ChatCategory.FUNDING) == "Funding Conversation"


class TestEntities:
    def test_timeframe_labels(self):
        assert Timeframe.SHORT.label == "1 week"
        assert Timeframe.MEDIUM.label == "1 month"
        assert Timeframe.LONG.label == "3 months"

    def test_session_preview_uses_last_message(self):
        session = ChatSession(
            user_id=uuid4(),
            title="t",
            messages=[
                ChatMessage(role=ChatRole.USER, content="first"),
                ChatMessage(role=ChatRole.ASSISTANT, content="latest answer"),
            ],
        )
        assert session.preview == "latest answer..."


# ══════════════════════════════════════════════════════════════════════
# Synthetic market data
# ══════════════════════════════════════════════════════════════════════


class TestSyntheticMarket:
    def test_known_symbol_stays_near_base(self):
        quote = synthetic_quote("aapl", rng=random.Random(1))
        assert quote.symbol == "AAPL"
        assert abs(quote.price - 187.68) <= 3
        assert quote.low <= quote.price <= quote.high

    def test_unknown_symbol_base_price(self):
        assert base_price("ZZZ") == 50.0 + (ord("Z") * 3) % 450

    def test_snapshot_shape(self):
        snapshot = synthetic_snapshot(rng=random.Random(7))
        assert set(snapshot.major_indices) == {"S&P 500", "Dow Jones", "Nasdaq"}
        assert "vix" in snapshot.indicators
        assert "Technology" in snapshot.sector_performance
