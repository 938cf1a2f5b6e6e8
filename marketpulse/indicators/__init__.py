"""Technical indicators module."""

from marketpulse.indicators.series import PreparedSeries, prepare
from marketpulse.indicators.technical import (
    calculate_adx,
    calculate_aroon,
    calculate_atr,
    calculate_bollinger_bands,
    calculate_cci,
    calculate_chaikin_money_flow,
    calculate_donchian_channels,
    calculate_elder_ray,
    calculate_ema_set,
    calculate_ichimoku,
    calculate_ichimoku_cloud,
    calculate_keltner_channels,
    calculate_macd,
    calculate_market_profile,
    calculate_mfi,
    calculate_obv,
    calculate_psar,
    calculate_roc,
    calculate_rsi,
    calculate_sma_set,
    calculate_stochastic,
    calculate_supertrend,
    calculate_trix,
    calculate_vwap,
    calculate_williams_r,
)

__all__ = [
    "PreparedSeries",
    "prepare",
    "calculate_adx",
    "calculate_aroon",
    "calculate_atr",
    "calculate_bollinger_bands",
    "calculate_cci",
    "calculate_chaikin_money_flow",
    "calculate_donchian_channels",
    "calculate_elder_ray",
    "calculate_ema_set",
    "calculate_ichimoku",
    "calculate_ichimoku_cloud",
    "calculate_keltner_channels",
    "calculate_macd",
    "calculate_market_profile",
    "calculate_mfi",
    "calculate_obv",
    "calculate_psar",
    "calculate_roc",
    "calculate_rsi",
    "calculate_sma_set",
    "calculate_stochastic",
    "calculate_supertrend",
    "calculate_trix",
    "calculate_vwap",
    "calculate_williams_r",
]
