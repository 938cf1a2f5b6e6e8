"""Indicator and analysis result models.

Every numeric field is a finite float: the models are built with
``allow_inf_nan=False`` so a NaN or infinity reaching a result is a
validation error rather than a returned value.
"""

from typing import Literal

from pydantic import BaseModel, Field, SerializeAsAny


class IndicatorResult(BaseModel):
    """Base for all indicator results."""

    interpretation: str = Field(..., min_length=1, description="Label from the indicator's label set")

    model_config = {"frozen": True, "allow_inf_nan": False}


class ScalarResult(IndicatorResult):
    """A single value (RSI, ATR, MFI, CCI, Williams %R, TRIX, ROC, VWAP)."""

    value: float


class MACDResult(IndicatorResult):
    value: float = Field(..., description="MACD line")
    signal: float = Field(..., description="Signal line")
    histogram: float = Field(..., description="MACD minus signal")


class OBVResult(IndicatorResult):
    value: float = Field(..., description="On-balance volume")
    signal: float = Field(..., description="Smoothed OBV")


class BollingerBandsResult(IndicatorResult):
    upper: float
    middle: float
    lower: float
    bandwidth: float = Field(..., ge=0, description="Band width as % of middle band")
    percent_b: float = Field(..., description="Position of the last close inside the bands, %")


class StochasticResult(IndicatorResult):
    k: float = Field(..., ge=0, le=100)
    d: float = Field(..., ge=0, le=100)


class ADXResult(IndicatorResult):
    adx: float = Field(..., ge=15, le=65)
    plus_di: float = Field(..., ge=0, le=65)
    minus_di: float = Field(..., ge=0, le=65)


class AroonResult(IndicatorResult):
    up: float = Field(..., ge=0, le=100)
    down: float = Field(..., ge=0, le=100)
    oscillator: float


class DirectionalResult(IndicatorResult):
    """A level with a direction (Parabolic SAR, Supertrend)."""

    value: float
    trend: Literal["up", "down"]


class IchimokuResult(IndicatorResult):
    conversion_line: float
    base_line: float
    leading_span_a: float
    leading_span_b: float
    lagging_span: float


class IchimokuCloudResult(IchimokuResult):
    cloud_color: Literal["green", "red"]


class EMAResult(IndicatorResult):
    ema9: float
    ema20: float
    ema50: float
    ema200: float


class SMAResult(IndicatorResult):
    sma20: float
    sma50: float
    sma200: float


class ChannelResult(IndicatorResult):
    """Keltner and Donchian channels."""

    upper: float
    middle: float
    lower: float
    bandwidth: float


class ChaikinMoneyFlowResult(IndicatorResult):
    value: float
    signal: float
    divergence: bool


class ElderRayResult(IndicatorResult):
    bull_power: float
    bear_power: float
    trend: Literal["strongly bullish", "strongly bearish", "moderately bullish", "moderately bearish"]


class ValueArea(BaseModel):
    high: float
    low: float
    volume: float = Field(..., ge=0)

    model_config = {"frozen": True, "allow_inf_nan": False}


class VolumeNode(BaseModel):
    price: float
    volume: float = Field(..., ge=0)
    time_spent: int = Field(..., ge=1, description="Number of candles closing in this bin")

    model_config = {"frozen": True, "allow_inf_nan": False}


class MarketProfileResult(IndicatorResult):
    point_of_control: float
    value_area: ValueArea
    volume_nodes: list[VolumeNode] = Field(..., description="Price bins, ascending by price")
    balance_target: float


class AnalysisResult(BaseModel):
    """Aggregate produced by one call to the engine."""

    indicators: dict[str, SerializeAsAny[IndicatorResult]]
    current_price: float = Field(..., ge=0)
    supports: list[float] = Field(default_factory=list, description="Nearest first, below price")
    resistances: list[float] = Field(default_factory=list, description="Nearest first, above price")
    current_trend: Literal["uptrend", "downtrend", "sideways"]
    price_action_pattern: str
    volume_trend: str
    price_change_24h: float
    bullish_factors: list[str] = Field(default_factory=list)
    bearish_factors: list[str] = Field(default_factory=list)
    sentiment: Literal["bullish", "bearish", "neutral"]

    model_config = {"frozen": True, "allow_inf_nan": False}
