"""Candle (OHLCV) data model."""

from pydantic import BaseModel, Field, model_validator


class Candle(BaseModel):
    """Represents a single OHLCV candle."""

    timestamp: int = Field(..., ge=0, description="Candle open time, ms since epoch")
    open: float = Field(..., ge=0, description="Opening price")
    high: float = Field(..., ge=0, description="High price")
    low: float = Field(..., ge=0, description="Low price")
    close: float = Field(..., ge=0, description="Closing price")
    volume: float = Field(..., ge=0, description="Traded volume")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @model_validator(mode="after")
    def _check_range(self) -> "Candle":
        if self.high < self.low:
            raise ValueError(f"high ({self.high}) is less than low ({self.low})")
        if self.high < max(self.open, self.close):
            raise ValueError(f"high ({self.high}) is below open/close")
        if self.low > min(self.open, self.close):
            raise ValueError(f"low ({self.low}) is above open/close")
        return self

    @property
    def typical_price(self) -> float:
        """(high + low + close) / 3."""
        return (self.high + self.low + self.close) / 3
