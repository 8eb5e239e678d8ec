"""
Accuracy scoring for verified predictions.

A prediction is scored on a 0-100 scale as a weighted blend of
getting the direction right and landing close to the observed price.
"""

from typing import Iterable, Optional

from cryptofund.domain.advisor.entities import Direction, StockPrediction

DIRECTION_WEIGHT = 0.3
PRICE_WEIGHT = 0.7


def observed_direction(initial_price: float, current_price: float) -> Direction:
    """Classify the move from ``initial_price`` to ``current_price``."""
    if current_price > initial_price:
        return Direction.UP
    if current_price < initial_price:
        return Direction.DOWN
    return Direction.NEUTRAL


def price_accuracy(initial_price: float, predicted_price: float, current_price: float) -> float:
    """Return 100 minus the miss as a percentage of the initial price, floored at 0."""
    if initial_price <= 0:
        return 0.0
    miss = abs((current_price - predicted_price) / initial_price * 100)
    return 100.0 - min(100.0, miss)


def score_prediction(
    prediction: StockPrediction, current_price: float
) -> tuple[Direction, float]:
    """Score a prediction against the observed price.

    Returns:
        The observed direction and the blended accuracy (0-100).
    """
    actual = observed_direction(prediction.initial_price, current_price)
    direction_score = 100.0 if actual is prediction.predicted_direction else 0.0
    blended = (
        price_accuracy(prediction.initial_price, prediction.predicted_price, current_price)
        * PRICE_WEIGHT
        + direction_score * DIRECTION_WEIGHT
    )
    return actual, blended


def historical_accuracy(accuracies: Iterable[Optional[float]]) -> float:
    """Mean of the known accuracy scores, 0 when there are none."""
    known = [a for a in accuracies if a is not None]
    if not known:
        return 0.0
    return sum(known) / len(known)
