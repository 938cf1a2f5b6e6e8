"""Base market-data source interface."""

from abc import ABC, abstractmethod

from marketpulse.models import Candle


class CandleSource(ABC):
    """Abstract base class for market-data sources.

    The engine never fetches data itself; callers (or analyze_batch) pull
    candles from a source and hand them over.
    """

    @abstractmethod
    def get_candles(self, symbol: str, limit: int) -> list[Candle]:
        """Get the most recent candles for a symbol.

        Args:
            symbol: Token symbol.
            limit: Maximum number of candles to return.

        Returns:
            Candles, oldest first.

        Raises:
            ValueError: If the symbol is unknown or its data is unreadable.
        """
        pass
