"""Tests for engine parameter loading."""

import tempfile
from pathlib import Path

import pytest

from marketpulse import config
from marketpulse.config import EngineParameters, load_parameters
from marketpulse.errors import ConfigError


def _write(tmpdir: str, text: str) -> Path:
    path = Path(tmpdir) / "config.toml"
    path.write_text(text)
    return path


class TestEngineParameters:
    """Tests for EngineParameters defaults and validation."""

    def test_defaults(self):
        params = EngineParameters()

        assert params.rsi_period == 14
        assert (params.macd_fast, params.macd_slow, params.macd_signal) == (12, 26, 9)
        assert params.bb_std_dev == 2.0
        assert params.mfi_period is None
        assert params.adx_period is None
        assert params.historical_smoothing is False

    def test_max_af_below_step(self):
        with pytest.raises(ValueError):
            EngineParameters(psar_af=0.3, psar_max_af=0.2)

    def test_frozen(self):
        params = EngineParameters()
        with pytest.raises(ValueError):
            params.rsi_period = 7


class TestLoadParameters:
    """Tests for load_parameters."""

    def test_overrides(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "[indicators]\nrsi_period = 21\nhistorical_smoothing = true\n")

            params = load_parameters(path)

        assert params.rsi_period == 21
        assert params.historical_smoothing is True
        assert params.macd_fast == 12

    def test_file_without_indicators_table(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "[other]\nkey = 1\n")
            assert load_parameters(path) == EngineParameters()

    def test_missing_default_file(self, monkeypatch):
        with tempfile.TemporaryDirectory() as tmpdir:
            monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", Path(tmpdir) / "missing.toml")
            assert load_parameters() == EngineParameters()

    def test_missing_explicit_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError, match="not found"):
                load_parameters(Path(tmpdir) / "missing.toml")

    @pytest.mark.parametrize("text", [
        "[indicators\nrsi_period = 21\n",
        "[indicators]\nrsi_period = 0\n",
        "[indicators]\nunknown_period = 5\n",
        "[indicators]\npsar_af = 0.5\npsar_max_af = 0.2\n",
        "indicators = 5\n",
    ])
    def test_invalid_files(self, text):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, text)
            with pytest.raises(ConfigError):
                load_parameters(path)
