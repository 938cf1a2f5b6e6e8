"""Interpretation labels.

Each indicator interprets its numbers with a label taken from a closed
set. The formatting layer keys its prose off these strings, so a new
label must be added here before a calculator can return it.
"""

from itertools import product

INSUFFICIENT_DATA = "Neutral - insufficient data"

# RSI
RSI_OVERBOUGHT = "Overbought - the asset may be due for a correction downward"
RSI_OVERSOLD = "Oversold - the asset may be due for a bounce upward"
RSI_BULLISH = "Bullish momentum - price strength is above average"
RSI_BEARISH = "Bearish momentum - price strength is below average"
RSI_NEUTRAL = "Neutral momentum - gains and losses are balanced"

# MACD
MACD_ABOVE = "Bullish - MACD is above signal line"
MACD_BELOW = "Bearish - MACD is below signal line"
MACD_AT = "Neutral - MACD is at signal line"
MACD_STRONG = " with strong momentum"
MACD_MODERATE = " with moderate momentum"
MACD_UPTREND = " in uptrend"
MACD_DOWNTREND = " in downtrend"

# Bollinger Bands
BB_ABOVE_UPPER = "Overbought - price is above the upper band"
BB_BELOW_LOWER = "Oversold - price is below the lower band"
BB_UPPER_HALF = "Bullish - price is above the middle band within the bands"
BB_LOWER_HALF = "Bearish - price is below the middle band within the bands"
BB_SQUEEZE = ". Low bandwidth suggests a potential breakout"
BB_WIDE = ". High bandwidth indicates high volatility"

# Stochastic
STOCH_OVERBOUGHT = "Overbought - strong selling pressure may be incoming"
STOCH_OVERSOLD = "Oversold - strong buying pressure may be incoming"
STOCH_BULLISH = "Bullish momentum building"
STOCH_BEARISH = "Bearish momentum building"
STOCH_FLAT = "Neutral momentum - %K level with %D"

# ADX / DMI
ADX_STRONG_BULLISH = "Strong bullish trend"
ADX_STRONG_BEARISH = "Strong bearish trend"
ADX_MODERATE_BULLISH = "Moderate bullish trend"
ADX_MODERATE_BEARISH = "Moderate bearish trend"
ADX_RANGING = "No clear trend - market is ranging"

# VWAP
VWAP_ABOVE = "Bullish - price is above VWAP, indicating buying pressure"
VWAP_BELOW = "Bearish - price is below VWAP, indicating selling pressure"
VWAP_AT = "Neutral - price is at VWAP"

# Ichimoku
ICHIMOKU_ABOVE = "Strong bullish trend"
ICHIMOKU_BELOW = "Strong bearish trend"
ICHIMOKU_SHORT_BULLISH = "Short-term bullish"
ICHIMOKU_SHORT_BEARISH = "Short-term bearish"
CLOUD_ABOVE = "Strong bullish trend - price above the cloud"
CLOUD_BELOW = "Strong bearish trend - price below the cloud"
CLOUD_INSIDE = "Price in the cloud - trend is unclear"
CLOUD_SHORT_BULLISH = "Short-term momentum is bullish"
CLOUD_SHORT_BEARISH = "Short-term momentum is bearish"
LAGGING_UP = "Confirmation of uptrend"
LAGGING_DOWN = "Confirmation of downtrend"

# ATR
ATR_HIGH = "High volatility - large price swings expected"
ATR_MODERATE = "Moderate volatility - normal market conditions"
ATR_LOW = "Low volatility - potential breakout incoming"

# OBV
OBV_UP = "OBV indicates uptrend - volume supports price action"
OBV_DOWN = "OBV indicates downtrend - possible divergence between price and volume"

# MFI
MFI_OVERBOUGHT = "Overbought - potential reversal or correction likely"
MFI_OVERSOLD = "Oversold - potential buying opportunity"
MFI_BUYING = "Strong buying pressure"
MFI_SELLING = "Strong selling pressure"
MFI_NEUTRAL = "Neutral money flow"

# CCI
CCI_OVERBOUGHT = "Overbought - potential reversal or correction likely"
CCI_OVERSOLD = "Oversold - potential buying opportunity"
CCI_POSITIVE = "Positive momentum building"
CCI_NEGATIVE = "Negative momentum building"

# Williams %R
WILLR_OVERBOUGHT = "Overbought - potential reversal downward"
WILLR_OVERSOLD = "Oversold - potential reversal upward"
WILLR_NEUTRAL = "Neutral momentum"

# Aroon
AROON_STRONG_BULLISH = "Strong bullish trend"
AROON_STRONG_BEARISH = "Strong bearish trend"
AROON_BULLISH = "Bullish momentum building"
AROON_BEARISH = "Bearish momentum building"

# TRIX
TRIX_STRONG_BULLISH = "Strong bullish momentum"
TRIX_BULLISH = "Moderate bullish momentum"
TRIX_STRONG_BEARISH = "Strong bearish momentum"
TRIX_BEARISH = "Moderate bearish momentum"

# ROC
ROC_STRONG_UP = "Strong upward momentum - potential overbought"
ROC_STRONG_DOWN = "Strong downward momentum - potential oversold"
ROC_POSITIVE = "Positive momentum building"
ROC_NEGATIVE = "Negative momentum building"

# Parabolic SAR / Supertrend
PSAR_UP = "Uptrend - SAR is acting as support below price"
PSAR_DOWN = "Downtrend - SAR is acting as resistance above price"
SUPERTREND_UP = "Uptrend - Supertrend is acting as support below price"
SUPERTREND_DOWN = "Downtrend - Supertrend is acting as resistance above price"

# Moving-average sets
MA_ALL_BULLISH = "Strong bullish trend across all timeframes"
MA_ALL_BEARISH = "Strong bearish trend across all timeframes"
MA_MIXED = "Mixed trend signals across different timeframes"

# Market Profile
PROFILE_ABOVE_POC = "Price is above Point of Control, showing bullish control"
PROFILE_BELOW_POC = "Price is below Point of Control, showing bearish control"
PROFILE_AT_POC = "Price at Point of Control, showing equilibrium"
PROFILE_UPPER_VALUE = ". Price is in upper value area, potential resistance ahead"
PROFILE_LOWER_VALUE = ". Price is in lower value area, potential support nearby"
PROFILE_BALANCED = ". Price near balance target, suggesting fair value"

# Keltner Channels
KELTNER_ABOVE = "Overbought - price above upper channel"
KELTNER_BELOW = "Oversold - price below lower channel"
KELTNER_UPPER_HALF = "Bullish momentum within channels"
KELTNER_LOWER_HALF = "Bearish momentum within channels"

# Donchian Channels
DONCHIAN_NEW_HIGH = "New high - strong bullish momentum"
DONCHIAN_NEW_LOW = "New low - strong bearish momentum"
DONCHIAN_UPPER_HALF = "Price in upper half of channel - bullish bias"
DONCHIAN_LOWER_HALF = "Price in lower half of channel - bearish bias"

# Chaikin Money Flow
CMF_STRONG_ACCUMULATION = "Strong accumulation"
CMF_STRONG_DISTRIBUTION = "Strong distribution"
CMF_ACCUMULATION = "Moderate accumulation"
CMF_DISTRIBUTION = "Moderate distribution"
CMF_RISING = ", bullish momentum building"
CMF_FALLING = ", bearish pressure increasing"
CMF_DIVERGENCE = " with potential trend reversal signal"

# Elder Ray
ELDER_STRONG = "Strong trend - bulls control highs, bears control lows"
ELDER_VERY_BULLISH = "Very bullish - bulls control both highs and lows"
ELDER_VERY_BEARISH = "Very bearish - bears control both highs and lows"
ELDER_WEAK = "Weak trend - mixed control between bulls and bears"
ELDER_TRENDS = ("strongly bullish", "strongly bearish", "moderately bullish", "moderately bearish")


def _joined(*groups: tuple[str, ...], sep: str = "") -> frozenset[str]:
    return frozenset(sep.join(parts) for parts in product(*groups))


LABEL_SETS: dict[str, frozenset[str]] = {
    "rsi": frozenset({RSI_OVERBOUGHT, RSI_OVERSOLD, RSI_BULLISH, RSI_BEARISH, RSI_NEUTRAL, INSUFFICIENT_DATA}),
    "macd": _joined(
        (MACD_ABOVE, MACD_BELOW, MACD_AT),
        (MACD_STRONG, MACD_MODERATE, ""),
        (MACD_UPTREND, MACD_DOWNTREND),
    ) | {INSUFFICIENT_DATA},
    "bollinger_bands": _joined(
        (BB_ABOVE_UPPER, BB_BELOW_LOWER, BB_UPPER_HALF, BB_LOWER_HALF),
        (BB_SQUEEZE, BB_WIDE, ""),
    ) | {INSUFFICIENT_DATA},
    "stochastic": frozenset({STOCH_OVERBOUGHT, STOCH_OVERSOLD, STOCH_BULLISH, STOCH_BEARISH, STOCH_FLAT}),
    "adx": frozenset({ADX_STRONG_BULLISH, ADX_STRONG_BEARISH, ADX_MODERATE_BULLISH, ADX_MODERATE_BEARISH, ADX_RANGING}),
    "vwap": frozenset({VWAP_ABOVE, VWAP_BELOW, VWAP_AT}),
    "ichimoku": frozenset(
        ". ".join(part for part in parts if part)
        for parts in product(
            (ICHIMOKU_ABOVE, ICHIMOKU_BELOW, ""),
            (ICHIMOKU_SHORT_BULLISH, ICHIMOKU_SHORT_BEARISH),
            (LAGGING_UP, LAGGING_DOWN),
        )
    ),
    "ichimoku_cloud": _joined(
        (CLOUD_ABOVE, CLOUD_BELOW, CLOUD_INSIDE),
        (CLOUD_SHORT_BULLISH, CLOUD_SHORT_BEARISH),
        (LAGGING_UP, LAGGING_DOWN),
        sep=". ",
    ),
    "atr": frozenset({ATR_HIGH, ATR_MODERATE, ATR_LOW}),
    "obv": frozenset({OBV_UP, OBV_DOWN}),
    "mfi": frozenset({MFI_OVERBOUGHT, MFI_OVERSOLD, MFI_BUYING, MFI_SELLING, MFI_NEUTRAL}),
    "cci": frozenset({CCI_OVERBOUGHT, CCI_OVERSOLD, CCI_POSITIVE, CCI_NEGATIVE, INSUFFICIENT_DATA}),
    "williams_r": frozenset({WILLR_OVERBOUGHT, WILLR_OVERSOLD, WILLR_NEUTRAL}),
    "aroon": frozenset({AROON_STRONG_BULLISH, AROON_STRONG_BEARISH, AROON_BULLISH, AROON_BEARISH}),
    "trix": frozenset({TRIX_STRONG_BULLISH, TRIX_BULLISH, TRIX_STRONG_BEARISH, TRIX_BEARISH}),
    "roc": frozenset({ROC_STRONG_UP, ROC_STRONG_DOWN, ROC_POSITIVE, ROC_NEGATIVE, INSUFFICIENT_DATA}),
    "psar": frozenset({PSAR_UP, PSAR_DOWN}),
    "supertrend": frozenset({SUPERTREND_UP, SUPERTREND_DOWN, INSUFFICIENT_DATA}),
    "ema": frozenset({MA_ALL_BULLISH, MA_ALL_BEARISH, MA_MIXED}),
    "sma": frozenset({MA_ALL_BULLISH, MA_ALL_BEARISH, MA_MIXED, INSUFFICIENT_DATA}),
    "market_profile": _joined(
        (PROFILE_ABOVE_POC, PROFILE_BELOW_POC, PROFILE_AT_POC),
        (PROFILE_UPPER_VALUE, PROFILE_LOWER_VALUE, ""),
        (PROFILE_BALANCED, ""),
    ),
    "keltner_channels": frozenset({KELTNER_ABOVE, KELTNER_BELOW, KELTNER_UPPER_HALF, KELTNER_LOWER_HALF}),
    "donchian_channels": frozenset({DONCHIAN_NEW_HIGH, DONCHIAN_NEW_LOW, DONCHIAN_UPPER_HALF, DONCHIAN_LOWER_HALF}),
    "chaikin_money_flow": _joined(
        (CMF_STRONG_ACCUMULATION, CMF_STRONG_DISTRIBUTION, CMF_ACCUMULATION, CMF_DISTRIBUTION),
        (CMF_RISING, CMF_FALLING),
        (CMF_DIVERGENCE, ""),
    ) | {INSUFFICIENT_DATA},
    "elder_ray": _joined(
        (ELDER_STRONG, ELDER_VERY_BULLISH, ELDER_VERY_BEARISH, ELDER_WEAK),
        tuple(f". Overall trend is {trend}" for trend in ELDER_TRENDS),
    ),
}
LABEL_SETS["dmi"] = LABEL_SETS["adx"]

TREND_LABELS = frozenset({"uptrend", "downtrend", "sideways"})
PATTERN_LABELS = frozenset({
    "reversal (bullish)",
    "reversal (bearish)",
    "uptrend continuation",
    "downtrend continuation",
    "breakout",
    "consolidation",
    "no clear pattern",
    "insufficient data",
})
VOLUME_TREND_LABELS = frozenset({
    "strongly increasing",
    "increasing",
    "stable",
    "decreasing",
    "strongly decreasing",
    "insufficient data",
})
SENTIMENT_LABELS = frozenset({"bullish", "bearish", "neutral"})
