"""Trend, price-action pattern, volume trend and sentiment classification."""

from collections.abc import Sequence

from marketpulse.indicators.averages import ema_seed_sma, safe_divide

DAY_MS = 86_400_000
PATTERN_WINDOW = 10
HALF_TREND_THRESHOLD = 3.0
TREND_EMA_PERIODS = (9, 20, 50)


def classify_trend(closes: Sequence[float], price_changes: Sequence[float]) -> str:
    """Classify the trend from the EMA 9/20/50 stack.

    Falls back to the majority sign of the last three percentage price
    changes when the EMAs are not stacked in either direction.

    Args:
        closes: Closes, oldest first.
        price_changes: Percentage change of each close (first entry 0).

    Returns:
        "uptrend", "downtrend" or "sideways".
    """
    ema9, ema20, ema50 = (ema_seed_sma(closes, p) for p in TREND_EMA_PERIODS)

    if ema9 > ema20 > ema50:
        return "uptrend"
    if ema9 < ema20 < ema50:
        return "downtrend"

    recent = price_changes[1:][-3:]
    rising = sum(1 for change in recent if change > 0)
    falling = sum(1 for change in recent if change < 0)

    if rising > falling:
        return "uptrend"
    if falling > rising:
        return "downtrend"
    return "sideways"


def _half_trend(prices: Sequence[float]) -> str:
    change = safe_divide(prices[-1] - prices[0], prices[0], 0.0) * 100
    if change > HALF_TREND_THRESHOLD:
        return "up"
    if change < -HALF_TREND_THRESHOLD:
        return "down"
    return "sideways"


def identify_pattern(closes: Sequence[float]) -> str:
    """Label the price action of the last ten closes.

    The window is split into two halves of five and each half is called
    up or down on a move beyond 3%.
    """
    if len(closes) < PATTERN_WINDOW:
        return "insufficient data"

    recent = closes[-PATTERN_WINDOW:]
    first = _half_trend(recent[:PATTERN_WINDOW // 2])
    second = _half_trend(recent[PATTERN_WINDOW // 2:])

    if first == "down" and second == "up":
        return "reversal (bullish)"
    if first == "up" and second == "down":
        return "reversal (bearish)"
    if first == "up" and second == "up":
        return "uptrend continuation"
    if first == "down" and second == "down":
        return "downtrend continuation"
    if first == "sideways" and second != "sideways":
        return "breakout"
    if first != "sideways" and second == "sideways":
        return "consolidation"
    return "no clear pattern"


def classify_volume_trend(volumes: Sequence[float]) -> str:
    """Compare mean volume of the last five candles with the five before."""
    if len(volumes) < PATTERN_WINDOW:
        return "insufficient data"

    recent = sum(volumes[-5:]) / 5
    previous = sum(volumes[-10:-5]) / 5

    if recent > previous * 1.2:
        return "strongly increasing"
    if recent > previous * 1.05:
        return "increasing"
    if recent < previous * 0.8:
        return "strongly decreasing"
    if recent < previous * 0.95:
        return "decreasing"
    return "stable"


def price_change_since(timestamps: Sequence[int], closes: Sequence[float], window_ms: int = DAY_MS) -> float:
    """Percentage change of the last close over the close ``window_ms`` earlier.

    Uses the last close at or before ``timestamps[-1] - window_ms``; a
    series spanning less than the window is measured from its first close.
    """
    cutoff = timestamps[-1] - window_ms
    reference = closes[0]
    for ts, close in zip(timestamps, closes):
        if ts > cutoff:
            break
        reference = close

    return safe_divide(closes[-1] - reference, reference, 0.0) * 100


def aggregate_sentiment(
    rsi: float,
    macd_histogram: float,
    closes: Sequence[float],
    price_change_24h: float,
    trend: str,
) -> tuple[str, list[str], list[str]]:
    """Tally bullish and bearish signals into a sentiment verdict.

    One point each for: RSI below 30 (bullish) or above 70 (bearish); the
    sign of the MACD histogram; EMA9 against EMA20; the sign of the 24h
    price change; and an uptrend or downtrend label.

    Args:
        rsi: RSI value.
        macd_histogram: MACD histogram.
        closes: Closes, oldest first.
        price_change_24h: 24h price change in percent.
        trend: Trend label from classify_trend.

    Returns:
        Tuple of (sentiment, bullish factor names, bearish factor names).
        Sentiment is "bullish" or "bearish" only when one side leads by
        more than one point.
    """
    bullish: list[str] = []
    bearish: list[str] = []

    if rsi < 30:
        bullish.append("rsi")
    elif rsi > 70:
        bearish.append("rsi")

    if macd_histogram > 0:
        bullish.append("macd_histogram")
    elif macd_histogram < 0:
        bearish.append("macd_histogram")

    ema9 = ema_seed_sma(closes, 9)
    ema20 = ema_seed_sma(closes, 20)
    if ema9 > ema20:
        bullish.append("ema_alignment")
    elif ema9 < ema20:
        bearish.append("ema_alignment")

    if price_change_24h > 0:
        bullish.append("price_change_24h")
    elif price_change_24h < 0:
        bearish.append("price_change_24h")

    if trend == "uptrend":
        bullish.append("trend")
    elif trend == "downtrend":
        bearish.append("trend")

    if len(bullish) > len(bearish) + 1:
        sentiment = "bullish"
    elif len(bearish) > len(bullish) + 1:
        sentiment = "bearish"
    else:
        sentiment = "neutral"

    return sentiment, bullish, bearish

