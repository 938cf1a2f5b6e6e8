"""Technical indicator calculators.

Each calculator is a pure function of a PreparedSeries (plus its periods)
returning the indicator's latest reading with an interpretation label from
``marketpulse.indicators.labels``. When the series is too short for a
calculator it returns that calculator's neutral default labelled
``INSUFFICIENT_DATA`` instead of raising.

A few readings follow the reference engine rather than the textbook:

* RSI is capped at 85.
* MACD runs over percentage price changes, not raw closes.
* ADX and the directional indicators are clamped (DI <= 65, 15 <= ADX <= 65).
* MACD's signal line, Stochastic %D, the OBV signal and the CMF signal are
  smoothed over the oscillator's latest value only, which makes each equal
  to that value. ``historical=True`` smooths over the full history instead.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from marketpulse.indicators import labels as lbl
from marketpulse.indicators.averages import (
    ema_seed_first,
    ema_series,
    safe_divide,
    sma,
    trailing_mean,
)
from marketpulse.indicators.series import PreparedSeries
from marketpulse.models import (
    ADXResult,
    AroonResult,
    BollingerBandsResult,
    ChaikinMoneyFlowResult,
    ChannelResult,
    DirectionalResult,
    ElderRayResult,
    EMAResult,
    IchimokuCloudResult,
    IchimokuResult,
    MACDResult,
    MarketProfileResult,
    OBVResult,
    ScalarResult,
    SMAResult,
    StochasticResult,
    ValueArea,
    VolumeNode,
)

logger = logging.getLogger(__name__)

RSI_CEILING = 85.0
DI_CEILING = 65.0
ADX_FLOOR = 15.0
MACD_DECIMALS = 8
CCI_CONSTANT = 0.015
OBV_SIGNAL_PERIOD = 20
CMF_SIGNAL_PERIOD = 9
EMA_PERIODS = (9, 20, 50, 200)
SMA_PERIODS = (20, 50, 200)


def _insufficient(name: str, needed: int, got: int) -> None:
    logger.debug("%s: need %d candles, got %d; using neutral default", name, needed, got)


def _true_ranges(series: PreparedSeries) -> list[float]:
    """True range for every candle after the first."""
    highs, lows, closes = series.highs, series.lows, series.closes
    return [
        max(
            highs[i] - lows[i],
            abs(highs[i] - closes[i - 1]),
            abs(lows[i] - closes[i - 1]),
        )
        for i in range(1, len(closes))
    ]


def _midpoint(highs: Sequence[float], lows: Sequence[float], period: int) -> float:
    return (max(highs[-period:]) + min(lows[-period:])) / 2


# RSI

def calculate_rsi(series: PreparedSeries, period: int = 14) -> ScalarResult:
    """Calculate the Relative Strength Index with Wilder smoothing.

    Initial average gain and loss come from the first ``period`` changes;
    each later change is folded in as ``(avg * (period - 1) + x) / period``.

    Args:
        series: Prepared candle series.
        period: RSI period (default 14).

    Returns:
        ScalarResult in [0, 85]. A series with no movement reads 50 and one
        with gains but no losses reads the 85 ceiling.
    """
    closes = series.closes
    if len(closes) < period + 1:
        _insufficient("RSI", period + 1, len(closes))
        return ScalarResult(value=50.0, interpretation=lbl.INSUFFICIENT_DATA)

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = closes[i] - closes[i - 1]
        if change >= 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    for i in range(period + 1, len(closes)):
        change = closes[i] - closes[i - 1]
        avg_gain = (avg_gain * (period - 1) + max(change, 0.0)) / period
        avg_loss = (avg_loss * (period - 1) + max(-change, 0.0)) / period

    if avg_gain == 0 and avg_loss == 0:
        rsi = 50.0
    elif avg_loss == 0:
        rsi = RSI_CEILING
    else:
        rs = avg_gain / avg_loss
        rsi = min(100 - (100 / (1 + rs)), RSI_CEILING)

    return ScalarResult(value=rsi, interpretation=interpret_rsi(rsi))


def interpret_rsi(rsi: float) -> str:
    if rsi > 70:
        return lbl.RSI_OVERBOUGHT
    elif rsi < 30:
        return lbl.RSI_OVERSOLD
    elif rsi > 50:
        return lbl.RSI_BULLISH
    elif rsi < 50:
        return lbl.RSI_BEARISH
    return lbl.RSI_NEUTRAL


# MACD

def calculate_macd(
    series: PreparedSeries,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
    historical: bool = False,
) -> MACDResult:
    """Calculate MACD over percentage price changes.

    Args:
        series: Prepared candle series.
        fast: Fast EMA period (default 12).
        slow: Slow EMA period (default 26).
        signal: Signal line period (default 9).
        historical: Build the signal line from the MACD history rather
            than from the latest MACD value alone.

    Returns:
        MACDResult with line, signal and histogram rounded to 8 places.
    """
    changes = series.price_changes
    needed = max(fast, slow) + signal
    if len(changes) < needed:
        _insufficient("MACD", needed, len(changes))
        return MACDResult(value=0.0, signal=0.0, histogram=0.0, interpretation=lbl.INSUFFICIENT_DATA)

    if historical:
        macd_history = [
            f - s for f, s in zip(ema_series(changes, fast), ema_series(changes, slow))
        ]
        macd_line = macd_history[-1]
        signal_line = ema_seed_first(macd_history, signal)
    else:
        macd_line = ema_seed_first(changes, fast) - ema_seed_first(changes, slow)
        signal_line = ema_seed_first([macd_line], signal)

    histogram = macd_line - signal_line

    return MACDResult(
        value=round(macd_line, MACD_DECIMALS),
        signal=round(signal_line, MACD_DECIMALS),
        histogram=round(histogram, MACD_DECIMALS),
        interpretation=interpret_macd(macd_line, signal_line, histogram),
    )


def interpret_macd(macd_line: float, signal_line: float, histogram: float) -> str:
    if macd_line > signal_line:
        text = lbl.MACD_ABOVE
        if histogram > 0:
            text += lbl.MACD_STRONG if histogram > abs(macd_line) * 0.1 else lbl.MACD_MODERATE
    elif macd_line < signal_line:
        text = lbl.MACD_BELOW
        if histogram < 0:
            text += lbl.MACD_STRONG if histogram < -abs(macd_line) * 0.1 else lbl.MACD_MODERATE
    else:
        text = lbl.MACD_AT

    return text + (lbl.MACD_UPTREND if macd_line > 0 else lbl.MACD_DOWNTREND)


# Bollinger Bands

def calculate_bollinger_bands(
    series: PreparedSeries,
    period: int = 20,
    std_dev: float = 2.0,
) -> BollingerBandsResult:
    """Calculate Bollinger Bands over the last ``period`` closes.

    The upper band never sits closer than 0.1% above the middle band and
    the lower band is floored at zero.

    Args:
        series: Prepared candle series.
        period: SMA period (default 20).
        std_dev: Standard deviation multiplier (default 2.0).

    Returns:
        BollingerBandsResult. ``percent_b`` lies in [0, 100] while the last
        close is inside the bands.
    """
    closes = series.closes
    last_price = closes[-1]

    if len(closes) < period:
        _insufficient("Bollinger Bands", period, len(closes))
        return BollingerBandsResult(
            upper=last_price * 1.05,
            middle=last_price,
            lower=last_price * 0.95,
            bandwidth=10.0,
            percent_b=50.0,
            interpretation=lbl.INSUFFICIENT_DATA,
        )

    middle = sma(closes, period)
    variance = sum((x - middle) ** 2 for x in closes[-period:]) / period
    std = variance ** 0.5

    upper = max(middle + std_dev * std, middle * 1.001)
    lower = max(middle - std_dev * std, 0.0)
    bandwidth = safe_divide(upper - lower, middle, 0.0) * 100
    percent_b = safe_divide(last_price - lower, upper - lower, 0.5) * 100

    return BollingerBandsResult(
        upper=upper,
        middle=middle,
        lower=lower,
        bandwidth=bandwidth,
        percent_b=percent_b,
        interpretation=interpret_bollinger_bands(last_price, upper, lower, middle, bandwidth),
    )


def interpret_bollinger_bands(
    price: float, upper: float, lower: float, middle: float, bandwidth: float
) -> str:
    if price > upper:
        text = lbl.BB_ABOVE_UPPER
    elif price < lower:
        text = lbl.BB_BELOW_LOWER
    elif price > middle:
        text = lbl.BB_UPPER_HALF
    else:
        text = lbl.BB_LOWER_HALF

    if bandwidth < 10:
        text += lbl.BB_SQUEEZE
    elif bandwidth > 40:
        text += lbl.BB_WIDE

    return text


# Stochastic

def _stochastic_k(series: PreparedSeries, end: int, k_period: int) -> float:
    start = max(0, end - k_period + 1)
    highest_high = max(series.highs[start:end + 1])
    lowest_low = min(series.lows[start:end + 1])
    # No range reads as mid-scale
    return safe_divide(series.closes[end] - lowest_low, highest_high - lowest_low, 0.5) * 100


def calculate_stochastic(
    series: PreparedSeries,
    k_period: int = 14,
    d_period: int = 3,
    historical: bool = False,
) -> StochasticResult:
    """Calculate the Stochastic Oscillator (%K and %D).

    Args:
        series: Prepared candle series.
        k_period: %K lookback (default 14). Shorter series use every candle.
        d_period: %D smoothing period (default 3).
        historical: Smooth %D over the last ``d_period`` %K readings.

    Returns:
        StochasticResult with %K and %D in [0, 100].
    """
    last = len(series) - 1
    k = _stochastic_k(series, last, k_period)

    if historical:
        k_history = [
            _stochastic_k(series, end, k_period)
            for end in range(max(0, last - d_period + 1), last + 1)
        ]
        d = trailing_mean(k_history, d_period)
    else:
        d = trailing_mean([k], d_period)

    return StochasticResult(k=k, d=d, interpretation=interpret_stochastic(k, d))


def interpret_stochastic(k: float, d: float) -> str:
    if k > 80 and d > 80:
        return lbl.STOCH_OVERBOUGHT
    elif k < 20 and d < 20:
        return lbl.STOCH_OVERSOLD
    elif k > d:
        return lbl.STOCH_BULLISH
    elif k < d:
        return lbl.STOCH_BEARISH
    return lbl.STOCH_FLAT


# ADX / DMI

def calculate_adx(series: PreparedSeries, period: Optional[int] = None) -> ADXResult:
    """Calculate a clamped ADX with +DI and -DI.

    Directional movement and true range are summed over every
    candle-to-candle transition. Both DIs are capped at 65 and ADX is
    held inside [15, 65].

    Args:
        series: Prepared candle series.
        period: Number of most recent transitions to include. ``None``
            (the default) accumulates over the whole series.

    Returns:
        ADXResult.
    """
    highs, lows, closes = series.highs, series.lows, series.closes
    n = len(closes)

    plus_dm = 0.0
    minus_dm = 0.0
    true_range = 0.0

    start = 1 if period is None else max(1, n - period)
    for i in range(start, n):
        up_move = highs[i] - highs[i - 1]
        down_move = lows[i - 1] - lows[i]

        if up_move > down_move and up_move > 0:
            plus_dm += up_move
        if down_move > up_move and down_move > 0:
            minus_dm += down_move

        true_range += max(
            highs[i] - lows[i],
            abs(highs[i] - closes[i - 1]),
            abs(lows[i] - closes[i - 1]),
        )

    # Zero true range divides by 1
    plus_di = min(DI_CEILING, safe_divide(plus_dm, true_range, plus_dm) * 100)
    minus_di = min(DI_CEILING, safe_divide(minus_dm, true_range, minus_dm) * 100)
    spread = abs(plus_di - minus_di)
    adx = min(DI_CEILING, max(ADX_FLOOR, safe_divide(spread, plus_di + minus_di, spread) * 100))

    return ADXResult(
        adx=adx,
        plus_di=plus_di,
        minus_di=minus_di,
        interpretation=interpret_adx(adx, plus_di, minus_di),
    )


def interpret_adx(adx: float, plus_di: float, minus_di: float) -> str:
    bullish = plus_di > minus_di
    if adx > 25:
        return lbl.ADX_STRONG_BULLISH if bullish else lbl.ADX_STRONG_BEARISH
    elif adx > 20:
        return lbl.ADX_MODERATE_BULLISH if bullish else lbl.ADX_MODERATE_BEARISH
    return lbl.ADX_RANGING


# VWAP

def calculate_vwap(series: PreparedSeries) -> ScalarResult:
    """Cumulative VWAP over the whole series; no volume falls back to the last close."""
    weighted = sum(tp * v for tp, v in zip(series.typical_prices, series.volumes))
    vwap = safe_divide(weighted, sum(series.volumes), series.last_close)

    price = series.last_close
    if price > vwap:
        interpretation = lbl.VWAP_ABOVE
    elif price < vwap:
        interpretation = lbl.VWAP_BELOW
    else:
        interpretation = lbl.VWAP_AT

    return ScalarResult(value=vwap, interpretation=interpretation)


# Ichimoku

def _ichimoku_lines(
    series: PreparedSeries,
    conversion: int,
    base: int,
    span_b: int,
    displacement: int,
) -> tuple[float, float, float, float, float]:
    highs, lows, closes = series.highs, series.lows, series.closes

    conversion_line = _midpoint(highs, lows, conversion)
    base_line = _midpoint(highs, lows, base)
    leading_span_a = (conversion_line + base_line) / 2
    leading_span_b = _midpoint(highs, lows, span_b)

    lag_index = len(closes) - 1 - displacement
    lagging_span = closes[lag_index] if lag_index >= 0 else closes[-1]

    return conversion_line, base_line, leading_span_a, leading_span_b, lagging_span


def calculate_ichimoku(
    series: PreparedSeries,
    conversion: int = 9,
    base: int = 26,
    span_b: int = 52,
    displacement: int = 26,
) -> IchimokuResult:
    conv, base_line, span_a, span_b_value, lagging = _ichimoku_lines(
        series, conversion, base, span_b, displacement
    )
    price = series.last_close

    signals = []
    if price > span_a and price > span_b_value:
        signals.append(lbl.ICHIMOKU_ABOVE)
    elif price < span_a and price < span_b_value:
        signals.append(lbl.ICHIMOKU_BELOW)
    signals.append(lbl.ICHIMOKU_SHORT_BULLISH if conv > base_line else lbl.ICHIMOKU_SHORT_BEARISH)
    signals.append(lbl.LAGGING_UP if price > lagging else lbl.LAGGING_DOWN)

    return IchimokuResult(
        conversion_line=conv,
        base_line=base_line,
        leading_span_a=span_a,
        leading_span_b=span_b_value,
        lagging_span=lagging,
        interpretation=". ".join(signals),
    )


def calculate_ichimoku_cloud(
    series: PreparedSeries,
    conversion: int = 9,
    base: int = 26,
    span_b: int = 52,
    displacement: int = 26,
) -> IchimokuCloudResult:
    """Ichimoku lines plus cloud colour and the cloud-relative reading."""
    conv, base_line, span_a, span_b_value, lagging = _ichimoku_lines(
        series, conversion, base, span_b, displacement
    )
    price = series.last_close

    if price > span_a and price > span_b_value:
        position = lbl.CLOUD_ABOVE
    elif price < span_a and price < span_b_value:
        position = lbl.CLOUD_BELOW
    else:
        position = lbl.CLOUD_INSIDE

    signals = [
        position,
        lbl.CLOUD_SHORT_BULLISH if conv > base_line else lbl.CLOUD_SHORT_BEARISH,
        lbl.LAGGING_UP if price > lagging else lbl.LAGGING_DOWN,
    ]

    return IchimokuCloudResult(
        conversion_line=conv,
        base_line=base_line,
        leading_span_a=span_a,
        leading_span_b=span_b_value,
        lagging_span=lagging,
        cloud_color="green" if span_a > span_b_value else "red",
        interpretation=". ".join(signals),
    )


# ATR

def calculate_atr(series: PreparedSeries, period: int = 14) -> ScalarResult:
    """Average True Range as a first-value-seeded EMA of true range.

    Args:
        series: Prepared candle series.
        period: EMA period (default 14).

    Returns:
        ScalarResult with the latest ATR.
    """
    atr = ema_seed_first(_true_ranges(series), period)
    atr_percent = safe_divide(atr, series.last_close, 0.0) * 100

    if atr_percent > 5:
        interpretation = lbl.ATR_HIGH
    elif atr_percent > 2:
        interpretation = lbl.ATR_MODERATE
    else:
        interpretation = lbl.ATR_LOW

    return ScalarResult(value=atr, interpretation=interpretation)


# OBV

def calculate_obv(series: PreparedSeries, historical: bool = False) -> OBVResult:
    """On-Balance Volume with a 20-period signal line."""
    closes, volumes = series.closes, series.volumes

    obv = 0.0
    history = [obv]
    for i in range(1, len(closes)):
        if closes[i] > closes[i - 1]:
            obv += volumes[i]
        elif closes[i] < closes[i - 1]:
            obv -= volumes[i]
        history.append(obv)

    signal = trailing_mean(history if historical else [obv], OBV_SIGNAL_PERIOD)

    return OBVResult(
        value=obv,
        signal=signal,
        interpretation=lbl.OBV_UP if obv > signal else lbl.OBV_DOWN,
    )


# MFI

def calculate_mfi(series: PreparedSeries, period: Optional[int] = None) -> ScalarResult:
    """Calculate the Money Flow Index.

    Args:
        series: Prepared candle series.
        period: Number of most recent transitions to include. ``None``
            (the default) accumulates money flow over the whole series.

    Returns:
        ScalarResult in [0, 100]. Only positive flow reads 100; no flow
        at all reads 50.
    """
    typical, volumes = series.typical_prices, series.volumes
    n = len(typical)
    start = 1 if period is None else max(1, n - period)

    positive = 0.0
    negative = 0.0
    for i in range(start, n):
        raw_flow = typical[i] * volumes[i]
        if typical[i] > typical[i - 1]:
            positive += raw_flow
        else:
            negative += raw_flow

    if negative == 0:
        mfi = 100.0 if positive > 0 else 50.0
    else:
        mfi = 100 - (100 / (1 + positive / negative))

    if mfi > 80:
        interpretation = lbl.MFI_OVERBOUGHT
    elif mfi < 20:
        interpretation = lbl.MFI_OVERSOLD
    elif mfi > 60:
        interpretation = lbl.MFI_BUYING
    elif mfi < 40:
        interpretation = lbl.MFI_SELLING
    else:
        interpretation = lbl.MFI_NEUTRAL

    return ScalarResult(value=mfi, interpretation=interpretation)


# CCI

def calculate_cci(series: PreparedSeries, period: int = 20) -> ScalarResult:
    """Commodity Channel Index of the latest typical price."""
    typical = series.typical_prices
    if len(typical) < period:
        _insufficient("CCI", period, len(typical))
        return ScalarResult(value=0.0, interpretation=lbl.INSUFFICIENT_DATA)

    mean = sma(typical, period)
    mean_dev = sum(abs(tp - mean) for tp in typical[-period:]) / period
    cci = safe_divide(typical[-1] - mean, CCI_CONSTANT * mean_dev, 0.0)

    if cci > 100:
        interpretation = lbl.CCI_OVERBOUGHT
    elif cci < -100:
        interpretation = lbl.CCI_OVERSOLD
    elif cci > 0:
        interpretation = lbl.CCI_POSITIVE
    else:
        interpretation = lbl.CCI_NEGATIVE

    return ScalarResult(value=cci, interpretation=interpretation)


# Williams %R

def calculate_williams_r(series: PreparedSeries, period: int = 14) -> ScalarResult:
    """Williams %R in [-100, 0]; a window with no range reads -50."""
    highest_high = max(series.highs[-period:])
    lowest_low = min(series.lows[-period:])
    r = safe_divide(highest_high - series.last_close, highest_high - lowest_low, 0.5) * -100

    if r > -20:
        interpretation = lbl.WILLR_OVERBOUGHT
    elif r < -80:
        interpretation = lbl.WILLR_OVERSOLD
    else:
        interpretation = lbl.WILLR_NEUTRAL

    return ScalarResult(value=r, interpretation=interpretation)


# Aroon

def calculate_aroon(series: PreparedSeries, period: int = 25) -> AroonResult:
    """Calculate Aroon up, down and oscillator.

    ``up`` is ``(period - bars since the highest high) / period * 100``
    within the last ``period`` candles; ``down`` mirrors it for the
    lowest low. On ties the most recent extreme wins.

    Args:
        series: Prepared candle series.
        period: Lookback (default 25).

    Returns:
        AroonResult with up and down in [0, 100].
    """
    highs, lows = series.highs, series.lows
    last = len(highs) - 1
    window = min(period, len(highs))

    bars_since_high = 0
    bars_since_low = 0
    for i in range(1, window):
        if highs[last - i] > highs[last - bars_since_high]:
            bars_since_high = i
        if lows[last - i] < lows[last - bars_since_low]:
            bars_since_low = i

    up = (period - bars_since_high) / period * 100
    down = (period - bars_since_low) / period * 100

    if up > 70 and down < 30:
        interpretation = lbl.AROON_STRONG_BULLISH
    elif down > 70 and up < 30:
        interpretation = lbl.AROON_STRONG_BEARISH
    elif up > down:
        interpretation = lbl.AROON_BULLISH
    else:
        interpretation = lbl.AROON_BEARISH

    return AroonResult(up=up, down=down, oscillator=up - down, interpretation=interpretation)


# TRIX

def calculate_trix(series: PreparedSeries, period: int = 15) -> ScalarResult:
    """TRIX: percentage change of the triple-smoothed EMA of closes."""
    triple = ema_series(ema_series(ema_series(series.closes, period), period), period)
    trix = safe_divide(triple[-1] - triple[-2], triple[-2], 0.0) * 100

    if trix > 0:
        interpretation = lbl.TRIX_STRONG_BULLISH if trix > 0.5 else lbl.TRIX_BULLISH
    else:
        interpretation = lbl.TRIX_STRONG_BEARISH if trix < -0.5 else lbl.TRIX_BEARISH

    return ScalarResult(value=trix, interpretation=interpretation)


# ROC

def calculate_roc(series: PreparedSeries, period: int = 14) -> ScalarResult:
    closes = series.closes
    if len(closes) < period + 1:
        _insufficient("ROC", period + 1, len(closes))
        return ScalarResult(value=0.0, interpretation=lbl.INSUFFICIENT_DATA)

    old_price = closes[-period - 1]
    roc = safe_divide(closes[-1] - old_price, old_price, 0.0) * 100

    if roc > 10:
        interpretation = lbl.ROC_STRONG_UP
    elif roc < -10:
        interpretation = lbl.ROC_STRONG_DOWN
    elif roc > 0:
        interpretation = lbl.ROC_POSITIVE
    else:
        interpretation = lbl.ROC_NEGATIVE

    return ScalarResult(value=roc, interpretation=interpretation)


# Parabolic SAR

def calculate_psar(
    series: PreparedSeries,
    af: float = 0.02,
    max_af: float = 0.2,
) -> DirectionalResult:
    """Calculate the Parabolic SAR.

    Starts long with the SAR at the first low. While long the SAR may not
    rise above the previous two lows (below the previous two highs while
    short); a close through the SAR flips the trend and resets the
    acceleration factor.

    Args:
        series: Prepared candle series.
        af: Acceleration factor step (default 0.02).
        max_af: Acceleration factor ceiling (default 0.2).

    Returns:
        DirectionalResult with the latest SAR and trend.
    """
    highs, lows = series.highs, series.lows

    rising = True
    sar = lows[0]
    extreme = highs[0]
    factor = af

    for i in range(1, len(highs)):
        sar = sar + factor * (extreme - sar)

        if rising:
            sar = min(sar, lows[i - 1], lows[i - 2] if i >= 2 else lows[i - 1])
            if lows[i] < sar:
                rising = False
                sar = extreme
                extreme = lows[i]
                factor = af
            elif highs[i] > extreme:
                extreme = highs[i]
                factor = min(factor + af, max_af)
        else:
            sar = max(sar, highs[i - 1], highs[i - 2] if i >= 2 else highs[i - 1])
            if highs[i] > sar:
                rising = True
                sar = extreme
                extreme = highs[i]
                factor = af
            elif lows[i] < extreme:
                extreme = lows[i]
                factor = min(factor + af, max_af)

    return DirectionalResult(
        value=sar,
        trend="up" if rising else "down",
        interpretation=lbl.PSAR_UP if rising else lbl.PSAR_DOWN,
    )


# Supertrend

def calculate_supertrend(
    series: PreparedSeries,
    period: int = 10,
    multiplier: float = 3.0,
) -> DirectionalResult:
    """Calculate the SuperTrend indicator.

    Args:
        series: Prepared candle series.
        period: ATR period (default 10).
        multiplier: ATR multiplier (default 3.0).

    Returns:
        DirectionalResult with the active band and trend.
    """
    high, low, close = series.highs, series.lows, series.closes
    n = len(close)
    if n < period + 1:
        _insufficient("Supertrend", period + 1, n)
        return DirectionalResult(
            value=close[-1],
            trend="up" if close[-1] >= close[0] else "down",
            interpretation=lbl.INSUFFICIENT_DATA,
        )

    atr = ema_series([high[0] - low[0]] + _true_ranges(series), period)

    upper_band = [0.0] * n
    lower_band = [0.0] * n
    supertrend = 0.0
    direction = -1

    for i in range(period, n):
        hl2 = (high[i] + low[i]) / 2
        upper_band[i] = hl2 + (multiplier * atr[i])
        lower_band[i] = hl2 - (multiplier * atr[i])

        if i == period:
            supertrend = upper_band[i]
            direction = -1
            continue

        # Bands only tighten unless price closed through them
        if not (lower_band[i] > lower_band[i - 1] or close[i - 1] < lower_band[i - 1]):
            lower_band[i] = lower_band[i - 1]
        if not (upper_band[i] < upper_band[i - 1] or close[i - 1] > upper_band[i - 1]):
            upper_band[i] = upper_band[i - 1]

        if direction == -1:
            if close[i] > upper_band[i]:
                supertrend, direction = lower_band[i], 1
            else:
                supertrend, direction = upper_band[i], -1
        else:
            if close[i] < lower_band[i]:
                supertrend, direction = upper_band[i], -1
            else:
                supertrend, direction = lower_band[i], 1

    rising = direction == 1
    return DirectionalResult(
        value=supertrend,
        trend="up" if rising else "down",
        interpretation=lbl.SUPERTREND_UP if rising else lbl.SUPERTREND_DOWN,
    )


# Moving-average sets

def _interpret_ma_set(price: float, averages: Sequence[float]) -> str:
    above = [price > average for average in averages]
    if all(above):
        return lbl.MA_ALL_BULLISH
    elif not any(above):
        return lbl.MA_ALL_BEARISH
    return lbl.MA_MIXED


def calculate_ema_set(series: PreparedSeries) -> EMAResult:
    """EMA 9/20/50/200 of closes, seeded with the first close."""
    ema9, ema20, ema50, ema200 = (ema_seed_first(series.closes, p) for p in EMA_PERIODS)
    return EMAResult(
        ema9=ema9,
        ema20=ema20,
        ema50=ema50,
        ema200=ema200,
        interpretation=_interpret_ma_set(series.last_close, (ema9, ema20, ema50, ema200)),
    )


def calculate_sma_set(series: PreparedSeries) -> SMAResult:
    """SMA 20/50/200 of closes; all three read the last close until 200 candles exist."""
    closes = series.closes
    longest = max(SMA_PERIODS)
    if len(closes) < longest:
        _insufficient("SMA", longest, len(closes))
        price = series.last_close
        return SMAResult(sma20=price, sma50=price, sma200=price, interpretation=lbl.INSUFFICIENT_DATA)

    sma20, sma50, sma200 = (sma(closes, p) for p in SMA_PERIODS)
    return SMAResult(
        sma20=sma20,
        sma50=sma50,
        sma200=sma200,
        interpretation=_interpret_ma_set(series.last_close, (sma20, sma50, sma200)),
    )


# Market Profile

def calculate_market_profile(series: PreparedSeries, value_area_share: float = 0.7) -> MarketProfileResult:
    """Calculate a close-based market (volume) profile.

    Closes are binned to 0.01. The Point of Control is the bin holding the
    most volume (the earliest bin to appear wins a tie). The Value Area is
    the narrowest run of adjacent bins, in price order, holding at least
    ``value_area_share`` of the total volume.

    Args:
        series: Prepared candle series.
        value_area_share: Share of volume the Value Area must hold (default 0.7).

    Returns:
        MarketProfileResult with volume nodes in ascending price order.
    """
    bins: dict[float, list] = {}
    for close, volume in zip(series.closes, series.volumes):
        node = bins.setdefault(round(close, 2), [0.0, 0])
        node[0] += volume
        node[1] += 1

    point_of_control = max(bins, key=lambda price: bins[price][0])

    prices = sorted(bins)
    volumes = [bins[p][0] for p in prices]
    total = sum(volumes)
    target = total * value_area_share

    va_low = va_high = point_of_control
    va_volume = 0.0
    if total > 0:
        best_key = None
        running = 0.0
        left = 0
        for right in range(len(prices)):
            running += volumes[right]
            while left < right and running - volumes[left] >= target:
                running -= volumes[left]
                left += 1
            if running >= target:
                key = (prices[right] - prices[left], -running, prices[left])
                if best_key is None or key < best_key:
                    best_key = key
                    va_low, va_high, va_volume = prices[left], prices[right], running

    balance_target = (va_high + va_low + point_of_control) / 3

    return MarketProfileResult(
        point_of_control=point_of_control,
        value_area=ValueArea(high=va_high, low=va_low, volume=va_volume),
        volume_nodes=[
            VolumeNode(price=p, volume=bins[p][0], time_spent=bins[p][1]) for p in prices
        ],
        balance_target=balance_target,
        interpretation=interpret_market_profile(
            point_of_control, va_high, va_low, balance_target, series.last_close
        ),
    )


def interpret_market_profile(
    poc: float, high: float, low: float, balance_target: float, price: float
) -> str:
    if price > poc:
        text = lbl.PROFILE_ABOVE_POC
    elif price < poc:
        text = lbl.PROFILE_BELOW_POC
    else:
        text = lbl.PROFILE_AT_POC

    position = safe_divide(price - low, high - low, 0.5) * 100
    if position > 80:
        text += lbl.PROFILE_UPPER_VALUE
    elif position < 20:
        text += lbl.PROFILE_LOWER_VALUE

    if abs(price - balance_target) < 0.01 * balance_target:
        text += lbl.PROFILE_BALANCED

    return text


# Keltner / Donchian

def calculate_keltner_channels(
    series: PreparedSeries,
    period: int = 20,
    multiplier: float = 2.0,
) -> ChannelResult:
    """EMA(period) of closes plus/minus ``multiplier`` ATR(period)."""
    middle = ema_seed_first(series.closes, period)
    atr = calculate_atr(series, period).value

    upper = middle + multiplier * atr
    lower = middle - multiplier * atr
    bandwidth = safe_divide(upper - lower, middle, 0.0) * 100

    price = series.last_close
    if price > upper:
        interpretation = lbl.KELTNER_ABOVE
    elif price < lower:
        interpretation = lbl.KELTNER_BELOW
    elif price > middle:
        interpretation = lbl.KELTNER_UPPER_HALF
    else:
        interpretation = lbl.KELTNER_LOWER_HALF

    return ChannelResult(upper=upper, middle=middle, lower=lower, bandwidth=bandwidth, interpretation=interpretation)


def calculate_donchian_channels(series: PreparedSeries, period: int = 20) -> ChannelResult:
    upper = max(series.highs[-period:])
    lower = min(series.lows[-period:])
    middle = (upper + lower) / 2
    bandwidth = safe_divide(upper - lower, middle, 0.0) * 100

    price = series.last_close
    if price >= upper:
        interpretation = lbl.DONCHIAN_NEW_HIGH
    elif price <= lower:
        interpretation = lbl.DONCHIAN_NEW_LOW
    elif price > middle:
        interpretation = lbl.DONCHIAN_UPPER_HALF
    else:
        interpretation = lbl.DONCHIAN_LOWER_HALF

    return ChannelResult(upper=upper, middle=middle, lower=lower, bandwidth=bandwidth, interpretation=interpretation)


# Chaikin Money Flow

def _money_flow_volumes(series: PreparedSeries) -> list[float]:
    return [
        safe_divide((c - l) - (h - c), h - l, 0.0) * v
        for h, l, c, v in zip(series.highs, series.lows, series.closes, series.volumes)
    ]


def calculate_chaikin_money_flow(
    series: PreparedSeries,
    period: int = 20,
    historical: bool = False,
) -> ChaikinMoneyFlowResult:
    """Calculate Chaikin Money Flow as the SMA of money-flow volume.

    Divergence is flagged when the price change over the whole series and
    the change of CMF against its previous-candle value point in
    opposite directions.

    Args:
        series: Prepared candle series.
        period: SMA period (default 20).
        historical: Build the 9-period signal from the CMF history.

    Returns:
        ChaikinMoneyFlowResult.
    """
    flows = _money_flow_volumes(series)
    n = len(flows)
    if n < period:
        _insufficient("Chaikin Money Flow", period, n)
        return ChaikinMoneyFlowResult(
            value=0.0, signal=0.0, divergence=False, interpretation=lbl.INSUFFICIENT_DATA
        )

    cmf = sma(flows, period)
    if historical:
        history = [sma(flows[:end], period) for end in range(period, n + 1)]
        signal = ema_seed_first(history, CMF_SIGNAL_PERIOD)
    else:
        signal = ema_seed_first([cmf], CMF_SIGNAL_PERIOD)

    divergence = False
    if n - 1 >= period:
        closes = series.closes
        price_change = safe_divide(closes[-1] - closes[0], closes[0], 0.0)
        cmf_change = cmf - sma(flows[:-1], period)
        divergence = (price_change > 0 and cmf_change < 0) or (price_change < 0 and cmf_change > 0)

    if cmf > 0.25:
        text = lbl.CMF_STRONG_ACCUMULATION
    elif cmf < -0.25:
        text = lbl.CMF_STRONG_DISTRIBUTION
    elif cmf > 0:
        text = lbl.CMF_ACCUMULATION
    else:
        text = lbl.CMF_DISTRIBUTION

    text += lbl.CMF_RISING if cmf > signal else lbl.CMF_FALLING
    if divergence:
        text += lbl.CMF_DIVERGENCE

    return ChaikinMoneyFlowResult(value=cmf, signal=signal, divergence=divergence, interpretation=text)


# Elder Ray

def calculate_elder_ray(series: PreparedSeries, period: int = 13) -> ElderRayResult:
    """Bull and bear power of the latest candle against EMA(period)."""
    ema = ema_seed_first(series.closes, period)
    price = series.last_close

    bull_power = series.highs[-1] - ema
    bear_power = series.lows[-1] - ema

    if price > ema and bull_power > 0 and bear_power > -bull_power:
        trend = "strongly bullish"
    elif price < ema and bear_power < 0 and abs(bear_power) > bull_power:
        trend = "strongly bearish"
    elif price > ema:
        trend = "moderately bullish"
    else:
        trend = "moderately bearish"

    if bull_power > 0 and bear_power < 0:
        text = lbl.ELDER_STRONG
    elif bull_power > 0 and bear_power > 0:
        text = lbl.ELDER_VERY_BULLISH
    elif bull_power < 0 and bear_power < 0:
        text = lbl.ELDER_VERY_BEARISH
    else:
        text = lbl.ELDER_WEAK

    return ElderRayResult(
        bull_power=bull_power,
        bear_power=bear_power,
        trend=trend,
        interpretation=f"{text}. Overall trend is {trend}",
    )
