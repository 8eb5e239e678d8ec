"""
Tests for the advisor infrastructure adapters.

HTTP adapters get a stub requests session; repositories run on the
in-memory SQLite engine from conftest.
"""

from datetime import date, timedelta
from pathlib import Path
from uuid import uuid4

import pytest
import requests

from cryptofund.application.advisor.dtos import VerifyPredictionsCommand
from cryptofund.core.config import settings
from cryptofund.domain.advisor.entities import (
    ChatCategory,
    ChatMessage,
    ChatRole,
    ChatSession,
    Direction,
    HistoricalExchange,
    PredictionOutcome,
    StockPrediction,
    StockQuote,
    utcnow,
)
from cryptofund.domain.advisor.errors import AdvisorServiceError, MarketDataError
from cryptofund.domain.advisor.synthetic_market import synthetic_snapshot
from cryptofund.infrastructure.advisor.chat_session_repository import (
    ChatSessionRepositoryAdapter,
)
from cryptofund.infrastructure.advisor.finnhub_market_data import FinnhubMarketDataAdapter
from cryptofund.infrastructure.advisor.gemini_advisor import GeminiAdvisorAdapter
from cryptofund.infrastructure.advisor.market_repositories import (
    MarketSnapshotRepositoryAdapter,
    StockQuoteRepositoryAdapter,
)
from cryptofund.infrastructure.advisor.prediction_repository import (
    StockPredictionRepositoryAdapter,
)
from cryptofund.infrastructure.advisor.prompt_loader import PromptLoader
from cryptofund.interfaces.advisor.dependencies import (
    get_market_data,
    get_verification_market_data,
    get_verify_predictions_use_case,
)


class StubResponse:
    def __init__(self, payload=None, status_code: int = 200, json_error: bool = False):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self._json_error:
            raise ValueError("not json")
        return self._payload


class StubSession:
    """Records requests and replays a fixed response or exception."""

    def __init__(self, response=None, error: Exception = None):
        self.response = response
        self.error = error
        self.requests: list[dict] = []

    def _handle(self, method, url, **kwargs):
        self.requests.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._handle("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._handle("POST", url, **kwargs)


def _quote(symbol: str = "AAPL", price: float = 190.0, **overrides) -> StockQuote:
    fields = dict(
        symbol=symbol, price=price, change=1.5, change_percent=0.8,
        high=191.0, low=188.0, open=189.0, prev_close=188.5,
    )
    fields.update(overrides)
    return StockQuote(**fields)


# ══════════════════════════════════════════════════════════════════════
# Prompt loader
# ══════════════════════════════════════════════════════════════════════


class TestPromptLoader:
    def test_stock_prompt_contains_context(self):
        loader = PromptLoader()
        prompt = loader.build_stock_prompt(
            symbol="AAPL",
            user_query="Is it a buy?",
            quote=_quote(),
            history=[
                HistoricalExchange(
                    user_message="Predict the stock AAPL",
                    ai_response="Predicted up with price target 200.0.",
                    accuracy=82.4,
                )
            ],
            today=date(2024, 3, 1),
        )
        assert "2024-03-01" in prompt
        assert "AAPL" in prompt
        assert "Is it a buy?" in prompt
        assert '"previousClose": 188.5' in prompt
        assert "Predicted up with price target 200.0." in prompt
        assert "Prediction accuracy: 82%" in prompt

    def test_quote_and_history_are_optional(self):
        prompt = PromptLoader().build_stock_prompt("MSFT", "Outlook?", None, [])
        assert "Current stock data" not in prompt
        assert "historical conversations" not in prompt

    def test_missing_file_uses_built_in_prompts(self, tmp_path: Path):
        loader = PromptLoader(config_path=tmp_path / "missing.yaml")
        prompt = loader.build_stock_prompt("TSLA", "Outlook?", _quote("TSLA"), [])
        assert "TSLA" in prompt
        assert loader.get_chat_system_prompt(ChatCategory.STOCKS)

    def test_chat_prompts_per_category(self):
        loader = PromptLoader()
        stocks = loader.get_chat_system_prompt(ChatCategory.STOCKS)
        funding = loader.get_chat_system_prompt(ChatCategory.FUNDING)
        assert stocks and funding
        assert stocks != funding


# ══════════════════════════════════════════════════════════════════════
# Gemini adapter
# ══════════════════════════════════════════════════════════════════════


def _gemini_payload(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestGeminiAdvisorAdapter:
    def test_analysis_text_returned(self):
        session = StubSession(StubResponse(_gemini_payload("Predicted Direction: Up")))
        adapter = GeminiAdvisorAdapter(api_key="secret", model="gemini-test", session=session)

        text = adapter.analyze_stock("AAPL", "Outlook?", _quote(), [])

        assert text == "Predicted Direction: Up"
        request = session.requests[0]
        assert request["url"].endswith("/models/gemini-test:generateContent")
        assert request["params"] == {"key": "secret"}
        assert "AAPL" in request["json"]["contents"][0]["parts"][0]["text"]
        assert "systemInstruction" not in request["json"]

    def test_answer_sends_system_instruction(self):
        session = StubSession(StubResponse(_gemini_payload("Start small.")))
        adapter = GeminiAdvisorAdapter(api_key="secret", session=session)

        assert adapter.answer("tips?", ChatCategory.FUNDING) == "Start small."
        assert "systemInstruction" in session.requests[0]["json"]

    def test_missing_key_raises_without_request(self):
        session = StubSession(StubResponse(_gemini_payload("unused")))
        adapter = GeminiAdvisorAdapter(api_key="", session=session)
        with pytest.raises(AdvisorServiceError):
            adapter.answer("hi", ChatCategory.STOCKS)
        assert session.requests == []

    def test_http_error_does_not_leak_key(self):
        session = StubSession(StubResponse({}, status_code=500))
        adapter = GeminiAdvisorAdapter(api_key="secret", session=session)
        with pytest.raises(AdvisorServiceError) as excinfo:
            adapter.answer("hi", ChatCategory.STOCKS)
        assert "secret" not in str(excinfo.value)
        assert "500" in excinfo.value.reason

    def test_connection_error(self):
        adapter = GeminiAdvisorAdapter(
            api_key="secret", session=StubSession(error=requests.ConnectionError("down"))
        )
        with pytest.raises(AdvisorServiceError):
            adapter.answer("hi", ChatCategory.STOCKS)

    @pytest.mark.parametrize(
        "response",
        [
            StubResponse(json_error=True),
            StubResponse({"promptFeedback": {"blockReason": "SAFETY"}}),
            StubResponse(_gemini_payload("   ")),
        ],
    )
    def test_unusable_responses(self, response):
        adapter = GeminiAdvisorAdapter(api_key="secret", session=StubSession(response))
        with pytest.raises(AdvisorServiceError):
            adapter.analyze_stock("AAPL", "Outlook?", None, [])


# ══════════════════════════════════════════════════════════════════════
# Finnhub adapter
# ══════════════════════════════════════════════════════════════════════


FINNHUB_QUOTE = {"c": 190.25, "d": 1.5, "dp": 0.79, "h": 191.0, "l": 188.0, "o": 189.0, "pc": 188.75}


class TestFinnhubMarketDataAdapter:
    def test_quote_mapped(self):
        session = StubSession(StubResponse(FINNHUB_QUOTE))
        adapter = FinnhubMarketDataAdapter(api_key="key", session=session)

        quote = adapter.fetch_quote("aapl")

        assert quote.symbol == "AAPL"
        assert quote.price == 190.25
        assert quote.prev_close == 188.75
        assert session.requests[0]["params"] == {"symbol": "AAPL", "token": "key"}

    def test_no_key_uses_synthetic(self):
        session = StubSession(StubResponse(FINNHUB_QUOTE))
        quote = FinnhubMarketDataAdapter(api_key="", session=session).fetch_quote("MSFT")
        assert abs(quote.price - 403.78) <= 3
        assert session.requests == []

    def test_zero_price_falls_back_to_synthetic_when_enabled(self):
        session = StubSession(StubResponse({"c": 0, "d": None}))
        adapter = FinnhubMarketDataAdapter(api_key="key", synthetic_fallback=True, session=session)
        quote = adapter.fetch_quote("AAPL")
        assert abs(quote.price - 187.68) <= 3

    def test_failure_raises_by_default(self):
        adapter = FinnhubMarketDataAdapter(
            api_key="key",
            session=StubSession(error=requests.Timeout("slow")),
        )
        with pytest.raises(MarketDataError) as excinfo:
            adapter.fetch_quote("AAPL")
        assert excinfo.value.symbol == "AAPL"


# ══════════════════════════════════════════════════════════════════════
# Repositories
# ══════════════════════════════════════════════════════════════════════


def _prediction(symbol: str = "AAPL", age: timedelta = timedelta(0)) -> StockPrediction:
    return StockPrediction(
        user_id=uuid4(),
        symbol=symbol,
        initial_price=100.0,
        predicted_price=105.0,
        predicted_direction=Direction.UP,
        confidence=0.7,
        timeframe="1 month",
        ai_reasoning="Looks bullish.",
        technical_factors=["RSI rising"],
        created_at=utcnow() - age,
    )


class TestStockPredictionRepositoryAdapter:
    def test_round_trip(self, engine):
        repo = StockPredictionRepositoryAdapter(engine)
        prediction = _prediction()
        repo.save(prediction)

        loaded = repo.get_by_id(prediction.id)

        assert loaded.symbol == "AAPL"
        assert loaded.predicted_direction is Direction.UP
        assert loaded.technical_factors == ["RSI rising"]
        assert loaded.actual_outcome is None

    def test_outcome_written_once(self, engine):
        repo = StockPredictionRepositoryAdapter(engine)
        prediction = _prediction()
        repo.save(prediction)
        first = PredictionOutcome(
            accuracy=90.0, verified_at=utcnow(), actual_price=104.0,
            actual_direction=Direction.UP,
        )

        assert repo.record_outcome(prediction.id, first) is True
        assert repo.record_outcome(prediction.id, PredictionOutcome(10.0, utcnow())) is False

        outcome = repo.get_by_id(prediction.id).actual_outcome
        assert outcome.accuracy == 90.0
        assert outcome.actual_direction is Direction.UP

    def test_verified_and_unverified_listings(self, engine):
        repo = StockPredictionRepositoryAdapter(engine)
        old = _prediction(age=timedelta(days=2))
        recent = _prediction()
        verified = _prediction(age=timedelta(days=3))
        for p in (old, recent, verified):
            repo.save(p)
        repo.record_outcome(verified.id, PredictionOutcome(50.0, utcnow()))

        pending = repo.list_unverified_before(utcnow() - timedelta(days=1))
        assert [p.id for p in pending] == [old.id]
        assert [p.id for p in repo.list_verified("AAPL")] == [verified.id]
        assert len(repo.list_by_symbol("AAPL")) == 3


class TestChatSessionRepositoryAdapter:
    def test_append_and_owner_scoping(self, engine):
        repo = ChatSessionRepositoryAdapter(engine)
        owner = uuid4()
        session = ChatSession(
            user_id=owner,
            title="Apple Stock Discussion",
            messages=[ChatMessage(role=ChatRole.USER, content="AAPL?")],
        )
        repo.create(session)

        later = utcnow() + timedelta(minutes=1)
        repo.append_messages(
            session.id, [ChatMessage(role=ChatRole.ASSISTANT, content="Up.")], updated_at=later
        )

        loaded = repo.get_for_user(session.id, owner)
        assert [m.role for m in loaded.messages] == [ChatRole.USER, ChatRole.ASSISTANT]
        assert loaded.updated_at == later
        assert repo.get_for_user(session.id, uuid4()) is None
        assert repo.delete(session.id, uuid4()) is False
        assert repo.delete(session.id, owner) is True

    def test_list_filters_category(self, engine):
        repo = ChatSessionRepositoryAdapter(engine)
        owner = uuid4()
        repo.create(ChatSession(user_id=owner, title="a"))
        repo.create(ChatSession(user_id=owner, title="b", category=ChatCategory.FUNDING))
        assert [s.title for s in repo.list_for_user(owner, ChatCategory.STOCKS)] == ["a"]


class TestMarketRepositories:
    def test_quote_cache_freshness(self, engine):
        repo = StockQuoteRepositoryAdapter(engine)
        repo.save(_quote(timestamp=utcnow() - timedelta(hours=1)))
        assert repo.get_fresh("AAPL", since=utcnow() - timedelta(minutes=15)) is None
        repo.save(_quote(price=191.0))
        assert repo.get_fresh("AAPL", since=utcnow() - timedelta(minutes=15)).price == 191.0

    def test_snapshot_round_trip(self, engine):
        repo = MarketSnapshotRepositoryAdapter(engine)
        assert repo.get_latest() is None
        snapshot = synthetic_snapshot()
        repo.save(snapshot)
        loaded = repo.get_latest()
        assert loaded.major_indices["Nasdaq"].value == pytest.approx(
            snapshot.major_indices["Nasdaq"].value
        )
        assert set(loaded.sector_performance) == set(snapshot.sector_performance)


# ══════════════════════════════════════════════════════════════════════
# Wired market data
# ══════════════════════════════════════════════════════════════════════


class TestVerificationWiring:
    """Verification built by the dependency factories, provider down."""

    @pytest.fixture
    def provider_down(self, monkeypatch):
        def refuse(self, url, **kwargs):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(settings, "finnhub_api_key", "key")
        monkeypatch.setattr(settings, "synthetic_quote_fallback", True)
        monkeypatch.setattr(requests.Session, "get", refuse)

    def test_failed_symbol_left_unverified(self, engine, provider_down):
        repo = StockPredictionRepositoryAdapter(engine)
        prediction = _prediction("ZZZQ", age=timedelta(hours=48))
        repo.save(prediction)
        use_case = get_verify_predictions_use_case(
            engine=engine, market_data=get_verification_market_data()
        )

        report = use_case.execute(VerifyPredictionsCommand())

        assert report.verified_count == 0
        assert report.failed_symbols == ["ZZZQ"]
        assert repo.get_by_id(prediction.id).actual_outcome is None

    def test_quote_lookups_may_still_fall_back(self, provider_down):
        quote = get_market_data().fetch_quote("AAPL")
        assert abs(quote.price - 187.68) <= 3

    def test_quote_lookups_raise_by_default(self, provider_down, monkeypatch):
        monkeypatch.setattr(settings, "synthetic_quote_fallback", False)
        with pytest.raises(MarketDataError):
            get_market_data().fetch_quote("AAPL")
