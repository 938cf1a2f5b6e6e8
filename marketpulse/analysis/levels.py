"""Support and resistance levels from local price extremes."""

from collections.abc import Sequence

MAX_LEVELS = 3
MIN_DETECTED_LEVELS = 2
NEIGHBOURS = 2
SUPPORT_OFFSETS = (0.95, 0.90, 0.85)
RESISTANCE_OFFSETS = (1.05, 1.10, 1.15)


def _local_extremes(values: Sequence[float], lowest: bool) -> set[float]:
    """Values at least as extreme as their two neighbours on each side."""
    found = set()
    for i in range(NEIGHBOURS, len(values) - NEIGHBOURS):
        window = values[i - NEIGHBOURS:i + NEIGHBOURS + 1]
        if values[i] == (min(window) if lowest else max(window)):
            found.add(values[i])
    return found


def find_supports(lows: Sequence[float], current_price: float) -> list[float]:
    """Find up to three support levels below the current price.

    Args:
        lows: Candle lows, oldest first.
        current_price: Latest close.

    Returns:
        Levels strictly below ``current_price``, nearest first. When fewer
        than two local minima qualify, levels 5%, 10% and 15% below price
        fill the list.
    """
    levels = {low for low in _local_extremes(lows, lowest=True) if low < current_price}

    if len(levels) < MIN_DETECTED_LEVELS:
        levels |= {current_price * offset for offset in SUPPORT_OFFSETS}
        levels = {level for level in levels if level < current_price}

    return sorted(levels, reverse=True)[:MAX_LEVELS]


def find_resistances(highs: Sequence[float], current_price: float) -> list[float]:
    """Find up to three resistance levels above the current price.

    Mirror of find_supports over candle highs; levels are nearest first.
    """
    levels = {high for high in _local_extremes(highs, lowest=False) if high > current_price}

    if len(levels) < MIN_DETECTED_LEVELS:
        levels |= {current_price * offset for offset in RESISTANCE_OFFSETS}
        levels = {level for level in levels if level > current_price}

    return sorted(levels)[:MAX_LEVELS]
