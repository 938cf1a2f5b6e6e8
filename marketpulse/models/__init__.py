"""Data models for marketpulse."""

from marketpulse.models.candle import Candle
from marketpulse.models.results import (
    ADXResult,
    AnalysisResult,
    AroonResult,
    BollingerBandsResult,
    ChaikinMoneyFlowResult,
    ChannelResult,
    DirectionalResult,
    ElderRayResult,
    EMAResult,
    IchimokuCloudResult,
    IchimokuResult,
    IndicatorResult,
    MACDResult,
    MarketProfileResult,
    OBVResult,
    ScalarResult,
    SMAResult,
    StochasticResult,
    ValueArea,
    VolumeNode,
)

__all__ = [
    "Candle",
    "ADXResult",
    "AnalysisResult",
    "AroonResult",
    "BollingerBandsResult",
    "ChaikinMoneyFlowResult",
    "ChannelResult",
    "DirectionalResult",
    "ElderRayResult",
    "EMAResult",
    "IchimokuCloudResult",
    "IchimokuResult",
    "IndicatorResult",
    "MACDResult",
    "MarketProfileResult",
    "OBVResult",
    "ScalarResult",
    "SMAResult",
    "StochasticResult",
    "ValueArea",
    "VolumeNode",
]
