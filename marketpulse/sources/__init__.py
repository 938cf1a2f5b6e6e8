"""Market-data sources."""

from marketpulse.sources.base import CandleSource
from marketpulse.sources.file import FileCandleSource, read_candles

__all__ = ["CandleSource", "FileCandleSource", "read_candles"]
