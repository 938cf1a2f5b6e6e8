"""Tests for trend, pattern, volume and sentiment classification."""

import pytest

from marketpulse.analysis.classification import (
    aggregate_sentiment,
    classify_trend,
    classify_volume_trend,
    identify_pattern,
    price_change_since,
)

HOUR_MS = 3_600_000
FLAT = [100.0] * 30


class TestClassifyTrend:
    """Tests for classify_trend."""

    def test_stacked_emas_rising(self):
        closes = [float(i) for i in range(1, 61)]
        assert classify_trend(closes, [0.0] + [1.0] * 59) == "uptrend"

    def test_stacked_emas_falling(self):
        closes = [float(i) for i in range(60, 0, -1)]
        assert classify_trend(closes, [0.0] + [-1.0] * 59) == "downtrend"

    def test_falls_back_to_recent_changes(self):
        changes = [0.0] * 27 + [1.0, 1.0, -1.0]
        assert classify_trend(FLAT, changes) == "uptrend"

    def test_recent_changes_majority_down(self):
        changes = [0.0] * 27 + [-1.0, 0.5, -1.0]
        assert classify_trend(FLAT, changes) == "downtrend"

    def test_tie_is_sideways(self):
        changes = [0.0] * 27 + [1.0, 0.0, -1.0]
        assert classify_trend(FLAT, changes) == "sideways"

    def test_first_change_is_ignored(self):
        assert classify_trend([100.0, 100.0], [5.0, 0.0]) == "sideways"


class TestIdentifyPattern:
    """Tests for identify_pattern."""

    @pytest.mark.parametrize("closes,expected", [
        ([100, 98, 96, 94, 90, 90, 93, 96, 99, 100], "reversal (bullish)"),
        ([90, 92, 94, 97, 100, 100, 98, 96, 93, 90], "reversal (bearish)"),
        ([90, 92, 94, 97, 100, 100, 102, 104, 106, 108], "uptrend continuation"),
        ([100, 98, 96, 94, 90, 90, 88, 86, 84, 80], "downtrend continuation"),
        ([100, 100, 100, 100, 100, 100, 102, 104, 106, 108], "breakout"),
        ([90, 92, 94, 97, 100, 100, 101, 100, 101, 100], "consolidation"),
        ([100] * 10, "no clear pattern"),
    ])
    def test_patterns(self, closes, expected):
        assert identify_pattern([float(c) for c in closes]) == expected

    def test_uses_last_ten_closes(self):
        closes = [500.0] * 20 + [100, 98, 96, 94, 90, 90, 93, 96, 99, 100]
        assert identify_pattern(closes) == "reversal (bullish)"

    def test_insufficient_data(self):
        assert identify_pattern([100.0] * 9) == "insufficient data"


class TestVolumeTrend:
    """Tests for classify_volume_trend."""

    @pytest.mark.parametrize("recent,expected", [
        (130.0, "strongly increasing"),
        (110.0, "increasing"),
        (100.0, "stable"),
        (90.0, "decreasing"),
        (70.0, "strongly decreasing"),
    ])
    def test_ratios(self, recent, expected):
        assert classify_volume_trend([100.0] * 5 + [recent] * 5) == expected

    def test_insufficient_data(self):
        assert classify_volume_trend([100.0] * 9) == "insufficient data"


class TestPriceChangeSince:
    """Tests for price_change_since."""

    def test_uses_close_a_day_earlier(self):
        timestamps = [i * HOUR_MS for i in range(30)]
        closes = [100.0 + i for i in range(30)]

        # Last candle at 29h, so the reference is the close at 5h
        assert price_change_since(timestamps, closes) == pytest.approx((129.0 - 105.0) / 105.0 * 100)

    def test_short_span_uses_first_close(self):
        timestamps = [i * HOUR_MS for i in range(10)]
        closes = [100.0 + i for i in range(10)]

        assert price_change_since(timestamps, closes) == pytest.approx(9.0)


class TestAggregateSentiment:
    """Tests for aggregate_sentiment."""

    def test_all_bullish(self):
        closes = [float(i) for i in range(1, 41)]

        sentiment, bullish, bearish = aggregate_sentiment(25.0, 0.5, closes, 3.0, "uptrend")

        assert sentiment == "bullish"
        assert bullish == ["rsi", "macd_histogram", "ema_alignment", "price_change_24h", "trend"]
        assert bearish == []

    def test_all_bearish(self):
        closes = [float(i) for i in range(40, 0, -1)]

        sentiment, bullish, bearish = aggregate_sentiment(75.0, -0.5, closes, -3.0, "downtrend")

        assert sentiment == "bearish"
        assert len(bearish) == 5
        assert bullish == []

    def test_no_signals_is_neutral(self):
        sentiment, bullish, bearish = aggregate_sentiment(50.0, 0.0, FLAT, 0.0, "sideways")

        assert sentiment == "neutral"
        assert bullish == bearish == []

    def test_one_point_lead_is_neutral(self):
        sentiment, bullish, bearish = aggregate_sentiment(25.0, -0.1, FLAT, 2.0, "sideways")

        assert (len(bullish), len(bearish)) == (2, 1)
        assert sentiment == "neutral"

    def test_two_point_lead_decides(self):
        sentiment, _, _ = aggregate_sentiment(25.0, 0.0, FLAT, 2.0, "sideways")
        assert sentiment == "bullish"
