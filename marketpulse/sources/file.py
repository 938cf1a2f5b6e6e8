"""JSON file candle source."""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from marketpulse.models import Candle
from marketpulse.sources.base import CandleSource

logger = logging.getLogger(__name__)


def read_candles(path: Union[str, Path]) -> list[Candle]:
    """Read candles from a JSON file.

    The file holds either a list of candle objects or an object with a
    ``candles`` list. Each candle has ``timestamp`` (ms), ``open``,
    ``high``, ``low``, ``close`` and ``volume``.

    Args:
        path: JSON file path.

    Returns:
        Candles in file order.

    Raises:
        ValueError: If the file is missing, not JSON, or holds an invalid candle.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ValueError(f"Candle file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Could not read candles from {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("candles")
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of candles or a 'candles' list")

    candles = []
    for i, item in enumerate(data):
        try:
            candles.append(Candle.model_validate(item))
        except ValidationError as e:
            raise ValueError(f"Invalid candle at index {i} in {path}: {e}") from e

    logger.debug("Read %d candles from %s", len(candles), path)
    return candles


class FileCandleSource(CandleSource):
    """Candle source backed by a directory of ``<SYMBOL>.json`` files."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def get_candles(self, symbol: str, limit: int) -> list[Candle]:
        """Read the symbol's file and return its last ``limit`` candles."""
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        candles = read_candles(self.root / f"{symbol.upper()}.json")
        return candles[-limit:]
