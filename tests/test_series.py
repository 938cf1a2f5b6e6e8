"""Tests for series preparation and validation."""

import math

import pytest

from marketpulse.errors import InvalidInputError
from marketpulse.indicators.series import percent_changes, prepare
from marketpulse.models import Candle


class TestPrepare:
    """Tests for prepare()."""

    def test_derives_columns(self, make_candles):
        candles = make_candles([100.0, 110.0, 99.0])

        series = prepare(candles)

        assert len(series) == 3
        assert series.closes == (100.0, 110.0, 99.0)
        assert series.last_close == 99.0
        assert series.price_changes[0] == 0.0
        assert series.price_changes[1] == pytest.approx(10.0)
        assert series.price_changes[2] == pytest.approx(-10.0)
        first = candles[0]
        assert series.typical_prices[0] == pytest.approx(
            (first["high"] + first["low"] + first["close"]) / 3
        )

    def test_accepts_candle_models(self, make_candles):
        candles = [Candle(**c) for c in make_candles([1.0, 2.0])]
        assert prepare(candles).closes == (1.0, 2.0)

    def test_empty_series(self):
        with pytest.raises(InvalidInputError, match="empty"):
            prepare([])

    def test_single_candle(self, make_candles):
        with pytest.raises(InvalidInputError, match="at least 2"):
            prepare(make_candles([100.0]))

    def test_negative_volume(self, make_candles):
        candles = make_candles([100.0, 101.0])
        candles[1]["volume"] = -1.0

        with pytest.raises(InvalidInputError, match="index 1"):
            prepare(candles)

    def test_non_finite_price(self, make_candles):
        candles = make_candles([100.0, 101.0])
        candles[0]["close"] = math.nan

        with pytest.raises(InvalidInputError, match="index 0"):
            prepare(candles)

    def test_high_below_low(self, make_candles):
        candles = make_candles([100.0, 101.0])
        candles[1]["high"] = candles[1]["low"] - 1

        with pytest.raises(InvalidInputError, match="index 1"):
            prepare(candles)

    def test_close_outside_range(self, make_candles):
        candles = make_candles([100.0, 101.0])
        candles[1]["close"] = candles[1]["high"] + 1

        with pytest.raises(InvalidInputError):
            prepare(candles)

    def test_rejects_overflowing_magnitude(self, make_candles):
        candles = make_candles([100.0, 101.0, 102.0])
        candles[2].update(open=1e200, high=1e200, low=1e200, close=1e200)

        with pytest.raises(InvalidInputError, match="index 2"):
            prepare(candles)

    def test_rejects_overflowing_volume(self, make_candles):
        candles = make_candles([100.0, 101.0])
        candles[0]["volume"] = 1e200

        with pytest.raises(InvalidInputError, match="index 0"):
            prepare(candles)

    def test_timestamps_must_increase(self, make_candles):
        candles = make_candles([100.0, 101.0, 102.0])
        candles[2]["timestamp"] = candles[1]["timestamp"]

        with pytest.raises(InvalidInputError, match="strictly increase"):
            prepare(candles)

    def test_rejects_non_mapping(self, make_candles):
        candles = make_candles([100.0]) + [(1, 2, 3)]

        with pytest.raises(InvalidInputError, match="index 1"):
            prepare(candles)

    def test_does_not_mutate_input(self, make_candles):
        candles = make_candles([100.0, 101.0, 102.0])
        snapshot = [dict(c) for c in candles]

        prepare(candles)

        assert candles == snapshot


class TestPercentChanges:
    """Tests for percent_changes()."""

    def test_zero_previous_close_reads_zero(self):
        assert percent_changes([0.0, 5.0, 10.0]) == [0.0, 0.0, 100.0]
