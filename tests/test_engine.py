"""Property-based and scenario tests for the analysis engine."""

import json
import math
import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from marketpulse import analyze, analyze_batch
from marketpulse.config import EngineParameters
from marketpulse.errors import InvalidInputError
from marketpulse.indicators import labels as lbl
from marketpulse.sources import FileCandleSource


@st.composite
def long_candle_series(draw, min_length: int = 201, max_length: int = 260):
    """Generate valid hourly candle series long enough for every indicator."""
    length = draw(st.integers(min_value=min_length, max_value=max_length))
    base_price = draw(st.floats(min_value=0.01, max_value=1000.0))

    changes = draw(st.lists(
        st.sampled_from([-0.04, -0.02, -0.01, 0.0, 0.01, 0.02, 0.04]),
        min_size=length - 1,
        max_size=length - 1,
    ))
    volumes = draw(st.lists(
        st.floats(min_value=0.0, max_value=5_000_000.0),
        min_size=length,
        max_size=length,
    ))

    closes = [base_price]
    for change in changes:
        closes.append(closes[-1] * (1 + change))

    candles = []
    for i, close in enumerate(closes):
        open_ = closes[i - 1] if i > 0 else close
        candles.append({
            "timestamp": 1_700_000_000_000 + i * 3_600_000,
            "open": open_,
            "high": max(open_, close) * 1.005,
            "low": min(open_, close) * 0.995,
            "close": close,
            "volume": volumes[i],
        })
    return candles


def _numbers(value):
    """Yield every number nested in a dumped model."""
    if isinstance(value, bool):
        return
    if isinstance(value, (int, float)):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from _numbers(item)
    elif isinstance(value, list):
        for item in value:
            yield from _numbers(item)


class TestAnalyzeProperties:
    """
    **Feature: indicator-engine, Property: complete finite analysis**

    *For any* valid series of at least 201 candles, every indicator is
    present, every number is finite and every label is from its set.
    """

    @given(candles=long_candle_series())
    @settings(max_examples=25, deadline=None)
    def test_finite_and_labelled(self, candles: list[dict]):
        result = analyze(candles)

        assert set(result.indicators) == set(lbl.LABEL_SETS)
        for number in _numbers(result.model_dump()):
            assert math.isfinite(number)
        for name, indicator in result.indicators.items():
            assert indicator.interpretation in lbl.LABEL_SETS[name]
            assert indicator.interpretation != lbl.INSUFFICIENT_DATA

        assert result.current_trend in lbl.TREND_LABELS
        assert result.price_action_pattern in lbl.PATTERN_LABELS
        assert result.volume_trend in lbl.VOLUME_TREND_LABELS
        assert result.sentiment in lbl.SENTIMENT_LABELS

    @given(candles=long_candle_series())
    @settings(max_examples=25, deadline=None)
    def test_levels_ordered(self, candles: list[dict]):
        result = analyze(candles)
        price = result.current_price

        assert len(result.supports) <= 3
        assert len(result.resistances) <= 3
        assert all(level < price for level in result.supports)
        assert all(level > price for level in result.resistances)
        assert result.supports == sorted(result.supports, reverse=True)
        assert result.resistances == sorted(result.resistances)

    @given(candles=long_candle_series(min_length=2, max_length=240))
    @settings(max_examples=25, deadline=None)
    def test_idempotent(self, candles: list[dict]):
        assert analyze(candles) == analyze(candles)


class TestAnalyzeScenarios:
    """Scenario tests for analyze."""

    def test_gap_down_is_bearish(self, gap_down_candles):
        result = analyze(gap_down_candles)

        assert result.current_trend == "downtrend"
        assert result.price_change_24h == pytest.approx(-50.0)
        assert "price_change_24h" in result.bearish_factors
        assert "trend" in result.bearish_factors

    def test_caller_price_change_wins(self, gap_down_candles):
        result = analyze(gap_down_candles, price_change_24h=12.5)

        assert result.price_change_24h == 12.5
        assert "price_change_24h" in result.bullish_factors

    def test_dmi_mirrors_adx(self, rising_candles):
        result = analyze(rising_candles)
        assert result.indicators["dmi"] == result.indicators["adx"]

    def test_two_candles_are_enough(self, make_candles):
        result = analyze(make_candles([100.0, 101.0]))

        assert result.indicators["rsi"].interpretation == lbl.INSUFFICIENT_DATA
        assert result.price_action_pattern == "insufficient data"

    def test_custom_parameters(self, rising_candles):
        result = analyze(rising_candles, EngineParameters(rsi_period=40))
        assert result.indicators["rsi"].interpretation == lbl.INSUFFICIENT_DATA

    def test_invalid_input(self, make_candles):
        candles = make_candles([100.0, 101.0])
        candles[1]["volume"] = -5

        with pytest.raises(InvalidInputError):
            analyze(candles)

    def test_huge_values_are_invalid_input(self, make_candles):
        closes = [1e200 * (1 + 0.01 * i) for i in range(30)]
        candles = make_candles(closes, volumes=[1e200] * 30, spread=0.0)

        with pytest.raises(InvalidInputError, match="must not exceed"):
            analyze(candles)

    def test_json_keeps_indicator_fields(self, rising_candles):
        data = json.loads(analyze(rising_candles).model_dump_json())

        assert data["indicators"]["macd"].keys() >= {"value", "signal", "histogram", "interpretation"}
        assert data["indicators"]["market_profile"]["value_area"]["high"] > 0


class TestAnalyzeBatch:
    """Tests for analyze_batch."""

    def test_analyzes_each_symbol(self, make_candles, rising_candles):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "SOL.json").write_text(json.dumps(rising_candles))
            (root / "BONK.json").write_text(json.dumps({"candles": make_candles([1.0, 0.9, 0.8])}))

            results = analyze_batch(FileCandleSource(root), ["sol", "bonk"])

        assert list(results) == ["sol", "bonk"]
        assert results["sol"].current_price == 129.0
        assert results["bonk"].current_price == 0.8

    def test_limit_trims_to_latest(self, rising_candles):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "SOL.json").write_text(json.dumps(rising_candles))

            results = analyze_batch(FileCandleSource(root), ["SOL"], limit=5)

        assert results["SOL"].indicators["rsi"].interpretation == lbl.INSUFFICIENT_DATA

    def test_missing_symbol_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ValueError, match="not found"):
                analyze_batch(FileCandleSource(tmpdir), ["NOPE"])
