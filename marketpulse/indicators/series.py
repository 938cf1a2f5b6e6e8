"""Series preparation: validation and derived price series."""

from collections.abc import Mapping, Sequence
from typing import Union

from pydantic import BaseModel, ValidationError

from marketpulse.errors import InvalidInputError
from marketpulse.indicators.averages import safe_divide
from marketpulse.models import Candle

MIN_SERIES_LENGTH = 2
# Squares and price * volume products of larger values overflow a float
MAX_MAGNITUDE = 1e150

CandleLike = Union[Candle, Mapping]


class PreparedSeries(BaseModel):
    """Validated OHLCV columns plus the derived series every calculator reads."""

    timestamps: tuple[int, ...]
    opens: tuple[float, ...]
    highs: tuple[float, ...]
    lows: tuple[float, ...]
    closes: tuple[float, ...]
    volumes: tuple[float, ...]
    typical_prices: tuple[float, ...]
    price_changes: tuple[float, ...]

    model_config = {"frozen": True, "allow_inf_nan": False}

    def __len__(self) -> int:
        return len(self.closes)

    @property
    def last_close(self) -> float:
        return self.closes[-1]


def _to_candle(item: CandleLike, index: int) -> Candle:
    if isinstance(item, Candle):
        return item
    if not isinstance(item, Mapping):
        raise InvalidInputError(
            f"Candle at index {index} must be a Candle or a mapping, got {type(item).__name__}"
        )
    try:
        return Candle.model_validate(dict(item))
    except ValidationError as e:
        problems = "; ".join(err["msg"] for err in e.errors())
        raise InvalidInputError(f"Invalid OHLCV data at index {index}: {problems}") from e


def percent_changes(closes: Sequence[float]) -> list[float]:
    """Percentage change of each close over the previous one; first entry is 0."""
    changes = [0.0]
    for i in range(1, len(closes)):
        changes.append(safe_divide(closes[i] - closes[i - 1], closes[i - 1], 0.0) * 100)
    return changes


def prepare(candles: Sequence[CandleLike]) -> PreparedSeries:
    """Validate a candle series and derive the columns used by the calculators.

    Args:
        candles: Candles (or mappings with the Candle fields), oldest first.

    Returns:
        PreparedSeries with closes, highs, lows, typical prices and
        percentage price changes.

    Raises:
        InvalidInputError: If the series is empty or shorter than two
            candles, a candle holds a negative or non-finite value or an
            inconsistent high/low range, a value above
            MAX_MAGNITUDE, or timestamps do not strictly increase.
    """
    if candles is None or len(candles) == 0:
        raise InvalidInputError("OHLCV series is empty")
    if len(candles) < MIN_SERIES_LENGTH:
        raise InvalidInputError(
            f"Insufficient OHLCV data points: need at least {MIN_SERIES_LENGTH}, got {len(candles)}"
        )

    validated = [_to_candle(item, i) for i, item in enumerate(candles)]

    for i, candle in enumerate(validated):
        largest = max(candle.open, candle.high, candle.low, candle.close, candle.volume)
        if largest > MAX_MAGNITUDE:
            raise InvalidInputError(
                f"OHLCV values must not exceed {MAX_MAGNITUDE:g}: index {i} holds {largest:g}"
            )

    for i in range(1, len(validated)):
        if validated[i].timestamp <= validated[i - 1].timestamp:
            raise InvalidInputError(
                f"Timestamps must strictly increase: index {i} "
                f"({validated[i].timestamp}) follows {validated[i - 1].timestamp}"
            )

    closes = [c.close for c in validated]

    return PreparedSeries(
        timestamps=tuple(c.timestamp for c in validated),
        opens=tuple(c.open for c in validated),
        highs=tuple(c.high for c in validated),
        lows=tuple(c.low for c in validated),
        closes=tuple(closes),
        volumes=tuple(c.volume for c in validated),
        typical_prices=tuple(c.typical_price for c in validated),
        price_changes=tuple(percent_changes(closes)),
    )
