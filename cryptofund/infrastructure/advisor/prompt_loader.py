"""
Prompt loader for the Gemini stock advisor.

Loads prompt templates from YAML and renders them.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional

import yaml

from cryptofund.domain.advisor.entities import (
    ChatCategory,
    HistoricalExchange,
    StockQuote,
)

logger = logging.getLogger(__name__)

DEFAULT_PROMPTS_PATH = Path(__file__).parent / "prompts.yaml"


class PromptLoader:
    """Load and render advisor prompts from YAML."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize prompt loader.

        Args:
            config_path: Path to a prompts YAML file. Defaults to the
                prompts.yaml shipped next to this module.
        """
        self.config_path = config_path or DEFAULT_PROMPTS_PATH
        self.prompts = self._load_prompts()

    def _load_prompts(self) -> dict[str, Any]:
        """Load prompts from YAML file."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                prompts = yaml.safe_load(f)
            logger.info("Loaded prompts from %s", self.config_path)
            return prompts
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load prompts: %s", e)
            return self._get_fallback_prompts()

    def _get_fallback_prompts(self) -> dict[str, Any]:
        """Minimal prompts used when the YAML file cannot be read."""
        return {
            "system_preamble": (
                "You are an expert stock market analyst. Current date: {today}"
            ),
            "stock_analysis": (
                "Analyze the stock symbol {symbol}. State the Predicted Direction "
                "(Up / Down / Neutral), a Price Target, a Confidence Level in percent, "
                "then list Technical Factors, Fundamental Factors and Market Conditions."
            ),
            "user_query": "User query: {query}",
            "stock_data": "Current stock data: {quote_json}",
            "history_header": "Relevant historical conversations to learn from:",
            "history_item": "User: {user_message}\nYour previous response: {ai_response}",
            "history_accuracy": "Prediction accuracy: {accuracy:.0f}%",
            "chat": {},
        }

    def build_stock_prompt(
        self,
        symbol: str,
        user_query: str,
        quote: Optional[StockQuote],
        history: list[HistoricalExchange],
        today: Optional[date] = None,
    ) -> str:
        """
        Render the full analysis prompt for one symbol.

        Args:
            symbol: Upper-case ticker symbol.
            user_query: The user's question.
            quote: Current quote to anchor the analysis, if any.
            history: Past verified exchanges for the symbol, most recent first.
            today: Date stamped into the preamble. Defaults to today.

        Returns:
            Prompt text sent to the model.
        """
        today = today or date.today()
        parts = [
            self.prompts["system_preamble"].format(today=today.isoformat()).strip(),
            self.prompts["stock_analysis"].format(symbol=symbol).strip(),
            self.prompts["user_query"].format(query=user_query),
        ]
        if quote is not None:
            parts.append(self.prompts["stock_data"].format(quote_json=_quote_json(quote)))
        if history:
            parts.append(self._history_block(history))
        return "\n\n".join(parts)

    def _history_block(self, history: list[HistoricalExchange]) -> str:
        items = []
        for exchange in history:
            item = self.prompts["history_item"].format(
                user_message=exchange.user_message,
                ai_response=exchange.ai_response,
            )
            if exchange.accuracy:
                item += "\n" + self.prompts["history_accuracy"].format(
                    accuracy=exchange.accuracy
                )
            items.append(item)
        return self.prompts["history_header"] + "\n" + "\n\n".join(items)

    def get_chat_system_prompt(self, category: ChatCategory) -> str:
        """Return the system prompt for general questions in a category."""
        chat = self.prompts.get("chat", {})
        return chat.get(category.value, {}).get(
            "system", "You are a helpful financial assistant."
        ).strip()


def _quote_json(quote: StockQuote) -> str:
    return json.dumps(
        {
            "symbol": quote.symbol,
            "price": round(quote.price, 2),
            "change": round(quote.change, 2),
            "changePercent": round(quote.change_percent, 2),
            "high": round(quote.high, 2),
            "low": round(quote.low, 2),
            "open": round(quote.open, 2),
            "previousClose": round(quote.prev_close, 2),
        }
    )


# Global prompt loader instance
_prompt_loader = None


def get_prompt_loader() -> PromptLoader:
    """Get global prompt loader instance."""
    global _prompt_loader
    if _prompt_loader is None:
        _prompt_loader = PromptLoader()
    return _prompt_loader
