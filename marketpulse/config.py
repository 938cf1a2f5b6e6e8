"""Engine parameters and their TOML configuration file.

Defaults reproduce the reference periods. A config file only needs the
keys it overrides::

    [indicators]
    rsi_period = 21
    bb_std_dev = 2.5
"""

import logging
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError, model_validator

from marketpulse.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "marketpulse" / "config.toml"


class EngineParameters(BaseModel):
    """Per-indicator periods and multipliers."""

    rsi_period: int = Field(default=14, ge=1)
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=26, ge=1)
    macd_signal: int = Field(default=9, ge=1)
    bb_period: int = Field(default=20, ge=1)
    bb_std_dev: float = Field(default=2.0, gt=0)
    stoch_k_period: int = Field(default=14, ge=1)
    stoch_d_period: int = Field(default=3, ge=1)
    adx_period: Optional[int] = Field(
        default=None,
        ge=1,
        description="Window for ADX/DMI in transitions; None accumulates over the whole series",
    )
    atr_period: int = Field(default=14, ge=1)
    mfi_period: Optional[int] = Field(
        default=None,
        ge=1,
        description="Window for MFI in transitions; None accumulates over the whole series",
    )
    cci_period: int = Field(default=20, ge=1)
    williams_period: int = Field(default=14, ge=1)
    aroon_period: int = Field(default=25, ge=1)
    trix_period: int = Field(default=15, ge=1)
    roc_period: int = Field(default=14, ge=1)
    psar_af: float = Field(default=0.02, gt=0)
    psar_max_af: float = Field(default=0.2, gt=0)
    supertrend_period: int = Field(default=10, ge=1)
    supertrend_multiplier: float = Field(default=3.0, gt=0)
    ichimoku_conversion: int = Field(default=9, ge=1)
    ichimoku_base: int = Field(default=26, ge=1)
    ichimoku_span_b: int = Field(default=52, ge=1)
    ichimoku_displacement: int = Field(default=26, ge=0)
    keltner_period: int = Field(default=20, ge=1)
    keltner_multiplier: float = Field(default=2.0, gt=0)
    donchian_period: int = Field(default=20, ge=1)
    cmf_period: int = Field(default=20, ge=1)
    elder_period: int = Field(default=13, ge=1)
    value_area_share: float = Field(default=0.7, gt=0, le=1)
    historical_smoothing: bool = Field(
        default=False,
        description="Smooth signal lines over the oscillator history instead of its latest value",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def _check_ordering(self) -> "EngineParameters":
        if self.psar_max_af < self.psar_af:
            raise ValueError("psar_max_af must be >= psar_af")
        return self


def load_parameters(config_path: Optional[Path] = None) -> EngineParameters:
    """Load engine parameters from a TOML file.

    Args:
        config_path: Path to the file. Defaults to DEFAULT_CONFIG_PATH.
            A missing default file yields the default parameters; a
            missing explicit path is an error.

    Returns:
        EngineParameters with the file's overrides applied.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values.
    """
    path = config_path or DEFAULT_CONFIG_PATH

    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return EngineParameters()

    try:
        data = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e

    overrides = data.get("indicators", {})
    if not isinstance(overrides, dict):
        raise ConfigError(f"[indicators] in {path} must be a table")

    try:
        params = EngineParameters(**overrides)
    except ValidationError as e:
        raise ConfigError(f"Invalid indicator parameters in {path}: {e}") from e

    logger.debug("Loaded %d indicator overrides from %s", len(overrides), path)
    return params
