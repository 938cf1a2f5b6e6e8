"""Analysis engine: runs every calculator and aggregates the results."""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Optional

from marketpulse.analysis.classification import (
    aggregate_sentiment,
    classify_trend,
    classify_volume_trend,
    identify_pattern,
    price_change_since,
)
from marketpulse.analysis.levels import find_resistances, find_supports
from marketpulse.config import EngineParameters
from marketpulse.indicators import technical as ta
from marketpulse.indicators.series import CandleLike, PreparedSeries, prepare
from marketpulse.models import AnalysisResult, IndicatorResult
from marketpulse.sources.base import CandleSource

logger = logging.getLogger(__name__)

DEFAULT_BATCH_LIMIT = 250

Calculator = Callable[[PreparedSeries, EngineParameters], IndicatorResult]

CALCULATORS: dict[str, Calculator] = {
    "rsi": lambda s, p: ta.calculate_rsi(s, p.rsi_period),
    "macd": lambda s, p: ta.calculate_macd(
        s, p.macd_fast, p.macd_slow, p.macd_signal, p.historical_smoothing
    ),
    "bollinger_bands": lambda s, p: ta.calculate_bollinger_bands(s, p.bb_period, p.bb_std_dev),
    "stochastic": lambda s, p: ta.calculate_stochastic(
        s, p.stoch_k_period, p.stoch_d_period, p.historical_smoothing
    ),
    "adx": lambda s, p: ta.calculate_adx(s, p.adx_period),
    "vwap": lambda s, p: ta.calculate_vwap(s),
    "ichimoku": lambda s, p: ta.calculate_ichimoku(
        s, p.ichimoku_conversion, p.ichimoku_base, p.ichimoku_span_b, p.ichimoku_displacement
    ),
    "atr": lambda s, p: ta.calculate_atr(s, p.atr_period),
    "obv": lambda s, p: ta.calculate_obv(s, p.historical_smoothing),
    "mfi": lambda s, p: ta.calculate_mfi(s, p.mfi_period),
    "cci": lambda s, p: ta.calculate_cci(s, p.cci_period),
    "williams_r": lambda s, p: ta.calculate_williams_r(s, p.williams_period),
    "aroon": lambda s, p: ta.calculate_aroon(s, p.aroon_period),
    "trix": lambda s, p: ta.calculate_trix(s, p.trix_period),
    "roc": lambda s, p: ta.calculate_roc(s, p.roc_period),
    "psar": lambda s, p: ta.calculate_psar(s, p.psar_af, p.psar_max_af),
    "supertrend": lambda s, p: ta.calculate_supertrend(
        s, p.supertrend_period, p.supertrend_multiplier
    ),
    "ema": lambda s, p: ta.calculate_ema_set(s),
    "sma": lambda s, p: ta.calculate_sma_set(s),
    "ichimoku_cloud": lambda s, p: ta.calculate_ichimoku_cloud(
        s, p.ichimoku_conversion, p.ichimoku_base, p.ichimoku_span_b, p.ichimoku_displacement
    ),
    "market_profile": lambda s, p: ta.calculate_market_profile(s, p.value_area_share),
    "keltner_channels": lambda s, p: ta.calculate_keltner_channels(
        s, p.keltner_period, p.keltner_multiplier
    ),
    "donchian_channels": lambda s, p: ta.calculate_donchian_channels(s, p.donchian_period),
    "chaikin_money_flow": lambda s, p: ta.calculate_chaikin_money_flow(
        s, p.cmf_period, p.historical_smoothing
    ),
    "elder_ray": lambda s, p: ta.calculate_elder_ray(s, p.elder_period),
}


def compute_indicators(series: PreparedSeries, params: EngineParameters) -> dict[str, IndicatorResult]:
    """Run every calculator over a prepared series.

    ``dmi`` reports the same reading as ``adx``.
    """
    indicators = {name: calculate(series, params) for name, calculate in CALCULATORS.items()}
    indicators["dmi"] = indicators["adx"]
    return indicators


def analyze(
    candles: Sequence[CandleLike],
    params: Optional[EngineParameters] = None,
    price_change_24h: Optional[float] = None,
) -> AnalysisResult:
    """Analyze an OHLCV series.

    Args:
        candles: Candles (or mappings with the Candle fields), oldest first.
        params: Indicator periods; defaults to EngineParameters().
        price_change_24h: 24h change in percent from token metadata. When
            omitted it is measured from the series itself.

    Returns:
        AnalysisResult with every indicator, support/resistance levels,
        trend, pattern, volume trend and sentiment.

    Raises:
        InvalidInputError: If the series is malformed or has fewer than
            two candles.
    """
    params = params or EngineParameters()
    series = prepare(candles)
    logger.debug("Analyzing %d candles", len(series))

    indicators = compute_indicators(series, params)
    price = series.last_close

    if price_change_24h is None:
        price_change_24h = price_change_since(series.timestamps, series.closes)

    trend = classify_trend(series.closes, series.price_changes)
    sentiment, bullish, bearish = aggregate_sentiment(
        indicators["rsi"].value,
        indicators["macd"].histogram,
        series.closes,
        price_change_24h,
        trend,
    )

    return AnalysisResult(
        indicators=indicators,
        current_price=price,
        supports=find_supports(series.lows, price),
        resistances=find_resistances(series.highs, price),
        current_trend=trend,
        price_action_pattern=identify_pattern(series.closes),
        volume_trend=classify_volume_trend(series.volumes),
        price_change_24h=price_change_24h,
        bullish_factors=bullish,
        bearish_factors=bearish,
        sentiment=sentiment,
    )


def analyze_batch(
    source: CandleSource,
    symbols: Iterable[str],
    params: Optional[EngineParameters] = None,
    limit: int = DEFAULT_BATCH_LIMIT,
) -> dict[str, AnalysisResult]:
    """Fetch candles for each symbol from ``source`` and analyze them.

    Symbols are analyzed independently; the first failure propagates.

    Args:
        source: Market-data source.
        symbols: Symbols to analyze.
        params: Indicator periods shared by every symbol.
        limit: Maximum candles to request per symbol.

    Returns:
        Mapping of symbol to its AnalysisResult, in input order.
    """
    results = {}
    for symbol in symbols:
        candles = source.get_candles(symbol, limit)
        logger.info("Fetched %d candles for %s", len(candles), symbol)
        results[symbol] = analyze(candles, params)
    return results
