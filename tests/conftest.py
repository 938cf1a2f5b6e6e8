"""Shared fixtures for marketpulse tests."""

import pytest

HOUR_MS = 3_600_000


def build_candles(
    closes: list[float],
    volumes: list[float] | None = None,
    spread: float = 0.01,
    step_ms: int = HOUR_MS,
    start_ms: int = 1_700_000_000_000,
) -> list[dict]:
    """Candle dicts whose open is the previous close and whose wicks extend ``spread``."""
    volumes = volumes or [1000.0] * len(closes)
    candles = []
    for i, close in enumerate(closes):
        open_ = closes[i - 1] if i > 0 else close
        candles.append({
            "timestamp": start_ms + i * step_ms,
            "open": open_,
            "high": max(open_, close) * (1 + spread),
            "low": min(open_, close) * (1 - spread),
            "close": close,
            "volume": volumes[i],
        })
    return candles


@pytest.fixture
def make_candles():
    """Factory fixture building candle dicts from closes."""
    return build_candles


@pytest.fixture
def flat_candles():
    """Thirty identical candles at 100 with no range."""
    return build_candles([100.0] * 30, spread=0.0)


@pytest.fixture
def rising_candles():
    """Thirty candles closing one point higher each hour."""
    return build_candles([100.0 + i for i in range(30)])


@pytest.fixture
def gap_down_candles():
    """Forty-five candles at 100, then a 50% gap down that flattens at 50."""
    return build_candles([100.0] * 45 + [50.0] * 15)
