"""
Adapter: Gemini stock advisor.

Implements StockAdvisorPort.
Calls the Google Gemini generateContent REST endpoint with prompts
rendered by PromptLoader. Any transport or payload problem is raised
as AdvisorServiceError.
"""

import logging
from typing import Any, Optional

import requests

from cryptofund.domain.advisor.entities import (
    ChatCategory,
    HistoricalExchange,
    StockQuote,
)
from cryptofund.domain.advisor.errors import AdvisorServiceError
from cryptofund.domain.advisor.ports import StockAdvisorPort
from cryptofund.infrastructure.advisor.prompt_loader import PromptLoader, get_prompt_loader

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


class GeminiAdvisorAdapter(StockAdvisorPort):
    """Generates stock analyses and chat answers with Gemini.

    One HTTP request per call; no retries.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.4,
        max_output_tokens: int = 2048,
        timeout: float = 30.0,
        prompt_loader: Optional[PromptLoader] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        self._timeout = timeout
        self._prompts = prompt_loader or get_prompt_loader()
        self._http = session or requests.Session()

    def analyze_stock(
        self,
        symbol: str,
        user_query: str,
        quote: Optional[StockQuote],
        history: list[HistoricalExchange],
    ) -> str:
        prompt = self._prompts.build_stock_prompt(
            symbol=symbol,
            user_query=user_query,
            quote=quote,
            history=history,
        )
        logger.info("Requesting Gemini analysis for %s (model=%s)", symbol, self._model)
        return self._generate(prompt)

    def answer(self, message: str, category: ChatCategory) -> str:
        system = self._prompts.get_chat_system_prompt(category)
        logger.info("Requesting Gemini answer (category=%s)", category.value)
        return self._generate(message, system_instruction=system)

    def _generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        """Call generateContent and return the concatenated text parts.

        Raises:
            AdvisorServiceError: If the key is missing, the request fails or
                the response carries no text.
        """
        if not self._api_key:
            raise AdvisorServiceError("Gemini API key is not configured")

        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self._temperature,
                "maxOutputTokens": self._max_output_tokens,
            },
            "safetySettings": SAFETY_SETTINGS,
        }
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        try:
            response = self._http.post(
                f"{GEMINI_BASE_URL}/models/{self._model}:generateContent",
                params={"key": self._api_key},
                json=payload,
                timeout=self._timeout,
            )
            response.raise_for_status()
            result = response.json()
        except requests.RequestException as e:
            # The URL carries the API key, so only the error type is reported.
            status = getattr(e.response, "status_code", None)
            reason = f"{type(e).__name__} (status={status})" if status else type(e).__name__
            logger.error("Gemini request failed: %s", reason)
            raise AdvisorServiceError(reason) from e
        except ValueError as e:
            raise AdvisorServiceError("Gemini returned a non-JSON response") from e

        try:
            parts = result["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            block_reason = (result.get("promptFeedback") or {}).get("blockReason")
            logger.warning("Gemini returned no candidates (blockReason=%s)", block_reason)
            raise AdvisorServiceError("Gemini returned no content") from e

        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            raise AdvisorServiceError("Gemini returned an empty response")
        return text
