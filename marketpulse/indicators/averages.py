"""Moving-average primitives and the shared zero-denominator guard.

Two EMA seeding rules exist side by side and are kept apart on purpose:

* ``ema_seed_first`` seeds with the first value and runs the recurrence
  over every later point. The indicator calculators use it.
* ``ema_seed_sma`` seeds with the mean of the first ``period`` values and
  starts the recurrence at index ``period``. Trend and sentiment
  aggregation use it.
"""

from collections.abc import Sequence

from marketpulse.errors import InsufficientDataError


def safe_divide(numerator: float, denominator: float, fallback: float) -> float:
    """Divide, returning ``fallback`` when the denominator is zero.

    Args:
        numerator: Dividend.
        denominator: Divisor.
        fallback: Value returned when ``denominator == 0``.

    Returns:
        numerator / denominator, or fallback.
    """
    if denominator == 0:
        return fallback
    return numerator / denominator


def ema_series(values: Sequence[float], period: int) -> list[float]:
    """EMA at every point, seeded with the first value.

    Args:
        values: Input series (oldest first).
        period: EMA period. May exceed ``len(values)``.

    Returns:
        List of EMA values, same length as ``values``.
    """
    if not values:
        return []

    multiplier = 2 / (period + 1)
    ema = values[0]
    result = [ema]

    for value in values[1:]:
        ema = (value - ema) * multiplier + ema
        result.append(ema)

    return result


def ema_seed_first(values: Sequence[float], period: int) -> float:
    """Latest EMA value, seeded with the first value.

    A one-element series returns that element.
    """
    if not values:
        raise InsufficientDataError("EMA of an empty series")
    return ema_series(values, period)[-1]


def ema_seed_sma(values: Sequence[float], period: int) -> float:
    """Latest EMA value, seeded with the mean of the first ``period`` values.

    When the series is shorter than ``period`` the result is the mean of
    the whole series.
    """
    if not values:
        raise InsufficientDataError("EMA of an empty series")

    seed_window = values[:period]
    ema = sum(seed_window) / len(seed_window)
    multiplier = 2 / (period + 1)

    for value in values[period:]:
        ema = (value - ema) * multiplier + ema

    return ema


def sma(values: Sequence[float], period: int) -> float:
    """Mean of the last ``period`` values.

    Raises:
        InsufficientDataError: If fewer than ``period`` values exist.
    """
    if period < 1 or len(values) < period:
        raise InsufficientDataError(
            f"Not enough data points for SMA({period}): got {len(values)}"
        )
    return sum(values[-period:]) / period


def trailing_mean(values: Sequence[float], period: int) -> float:
    """Mean of the last ``min(len(values), period)`` values.

    This is what an SMA over a short history collapses to; on a
    one-element series it returns the element itself.
    """
    if not values:
        raise InsufficientDataError("Mean of an empty series")
    window = values[-period:]
    return sum(window) / len(window)
