"""
Extraction of structured prediction fields from free-text LLM analyses.

The advisor asks the model for a Markdown report with fixed headings, but
the reply is unstructured prose. Everything here is best-effort: every
function returns a plausible value even when the expected headings are
missing, and nothing raises.
"""

import re
from dataclasses import dataclass, field

from cryptofund.domain.advisor.entities import Direction

DEFAULT_CONFIDENCE = 0.7
MAX_FACTORS = 5
MIN_FACTOR_LENGTH = 4

UP_KEYWORDS = ("bullish", "upward", "up")
DOWN_KEYWORDS = ("bearish", "downward", "down")

FACTOR_HEADINGS = {
    "technical": r"technical\s+factors?",
    "fundamental": r"fundamental\s+factors?",
    "market": r"market\s+(?:conditions?|factors?)",
}

FACTOR_KEYWORDS = {
    "technical": (
        "moving average", "resistance", "support", "rsi", "macd",
        "volume", "trend", "chart", "pattern",
    ),
    "fundamental": (
        "earnings", "revenue", "profit", "eps", "p/e",
        "valuation", "dividend", "growth", "margin",
    ),
    "market": (
        "market", "sector", "industry", "economy", "fed",
        "interest rate", "inflation", "sentiment",
    ),
}

_EMPHASIS = re.compile(r"[*_`]+")
_DIRECTION_LABEL = re.compile(
    r"predicted\s+direction:?\s*(up|down|neutral)", re.IGNORECASE
)
_CONFIDENCE = re.compile(r"confidence(?:\s+level)?:?\s*(\d+(?:\.\d+)?)\s*%", re.IGNORECASE)
_PRICE_TARGET = re.compile(r"price\s+target:?\s*\$?\s*(\d+(?:,\d{3})*(?:\.\d+)?)", re.IGNORECASE)
_ITEM_SPLIT = re.compile(r"\n|(?:^|\s)[-•*]\s+|(?:^|\s)\d+\.\s+")
_CONTINUATION = re.compile(r"^\s*(?:[-•*]|\d+\.)\s+")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class ParsedAnalysis:
    """Fields scraped from one LLM analysis."""

    analysis: str
    direction: Direction
    confidence: float
    predicted_price: float
    technical_factors: list[str] = field(default_factory=list)
    fundamental_factors: list[str] = field(default_factory=list)
    market_conditions: list[str] = field(default_factory=list)


def normalize_analysis(text: str) -> str:
    """Tidy whitespace in a raw model reply without touching its content."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t]{2,}", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _plain(text: str) -> str:
    """Drop Markdown emphasis so labels like ``**Price Target:**`` match."""
    return _EMPHASIS.sub("", text)


def parse_direction(text: str) -> Direction:
    """Return the predicted direction.

    An explicit ``Predicted Direction:`` label wins; otherwise the first
    matching keyword group decides (up is checked before down).
    """
    plain = _plain(text)
    labelled = _DIRECTION_LABEL.search(plain)
    if labelled:
        return Direction(labelled.group(1).lower())

    lowered = plain.lower()
    if any(keyword in lowered for keyword in UP_KEYWORDS):
        return Direction.UP
    if any(keyword in lowered for keyword in DOWN_KEYWORDS):
        return Direction.DOWN
    return Direction.NEUTRAL


def parse_confidence(text: str) -> float:
    """Return the stated confidence as a 0-1 fraction (0.7 when absent)."""
    match = _CONFIDENCE.search(_plain(text))
    if not match:
        return DEFAULT_CONFIDENCE
    return min(float(match.group(1)), 100.0) / 100


def parse_price_target(text: str, current_price: float, direction: Direction) -> float:
    """Return the stated price target, or a ±5% move keyed off direction."""
    match = _PRICE_TARGET.search(_plain(text))
    if match:
        return float(match.group(1).replace(",", ""))
    if direction is Direction.UP:
        return current_price * 1.05
    if direction is Direction.DOWN:
        return current_price * 0.95
    return current_price


def _section_block(text: str, heading: str) -> str:
    """Return the text under ``heading``: inline remainder plus bullet lines."""
    lines = text.split("\n")
    pattern = re.compile(heading + r":?(.*)$", re.IGNORECASE)

    for index, line in enumerate(lines):
        match = pattern.search(line)
        if not match:
            continue
        collected = [match.group(1)]
        for following in lines[index + 1:]:
            if not following.strip():
                if len(collected) > 1 or collected[0].strip():
                    break
                continue
            if following.lstrip().startswith("#"):
                break
            if not _CONTINUATION.match(following):
                break
            collected.append(following)
        return "\n".join(collected).strip()
    return ""


def extract_factors(text: str, kind: str) -> list[str]:
    """Return up to five factor strings of the given kind.

    Args:
        text: Plain or Markdown analysis.
        kind: One of ``technical``, ``fundamental``, ``market``.
    """
    plain = _plain(text)
    factors: list[str] = []

    heading = FACTOR_HEADINGS.get(kind)
    if heading:
        block = _section_block(plain, heading)
        for item in _ITEM_SPLIT.split(block):
            item = item.strip(" :-•*\t")
            if len(item) >= MIN_FACTOR_LENGTH:
                factors.append(item)

    if not factors:
        keywords = FACTOR_KEYWORDS.get(kind, ())
        for sentence in _SENTENCE_SPLIT.split(plain):
            sentence = " ".join(sentence.split())
            if sentence and any(k in sentence.lower() for k in keywords):
                factors.append(sentence)

    return factors[:MAX_FACTORS]


def parse_analysis(raw: str, current_price: float) -> ParsedAnalysis:
    """Scrape every structured field from a model reply."""
    analysis = normalize_analysis(raw)
    direction = parse_direction(analysis)
    return ParsedAnalysis(
        analysis=analysis,
        direction=direction,
        confidence=parse_confidence(analysis),
        predicted_price=parse_price_target(analysis, current_price, direction),
        technical_factors=extract_factors(analysis, "technical"),
        fundamental_factors=extract_factors(analysis, "fundamental"),
        market_conditions=extract_factors(analysis, "market"),
    )
