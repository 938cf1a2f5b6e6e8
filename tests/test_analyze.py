"""Tests for the analyze and signal commands."""

import json
import tempfile
from pathlib import Path

from click.testing import CliRunner

from marketpulse.cli.main import cli


def _write_candles(tmpdir: str, candles, name: str = "SOL.json") -> str:
    path = Path(tmpdir) / name
    path.write_text(json.dumps(candles))
    return str(path)


class TestAnalyzeCommand:
    """Tests for `marketpulse analyze`."""

    def test_renders_tables(self, rising_candles):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_candles(tmpdir, rising_candles)
            result = runner.invoke(cli, ["analyze", path])

        assert result.exit_code == 0, result.output
        assert "Technical Analysis" in result.output
        assert "RSI" in result.output
        assert "Sentiment" in result.output

    def test_json_output(self, rising_candles):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_candles(tmpdir, rising_candles)
            result = runner.invoke(cli, ["analyze", path, "--json", "--change-24h=-4.5"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert len(data["indicators"]) == 26
        assert data["price_change_24h"] == -4.5
        assert data["indicators"]["rsi"]["value"] == 85.0

    def test_config_override(self, rising_candles):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_candles(tmpdir, rising_candles)
            config_path = Path(tmpdir) / "config.toml"
            config_path.write_text("[indicators]\nrsi_period = 50\n")
            result = runner.invoke(cli, ["analyze", path, "--json", "-c", str(config_path)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["indicators"]["rsi"]["value"] == 50.0

    def test_invalid_candles_exit_1(self, make_candles):
        candles = make_candles([100.0, 101.0, 102.0])
        candles[2]["timestamp"] = candles[0]["timestamp"]

        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_candles(tmpdir, candles)
            result = runner.invoke(cli, ["analyze", path])

        assert result.exit_code == 1
        assert "Invalid candle data" in result.output

    def test_bad_config_exit_1(self, rising_candles):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_candles(tmpdir, rising_candles)
            config_path = Path(tmpdir) / "config.toml"
            config_path.write_text("[indicators]\nbogus = 1\n")
            result = runner.invoke(cli, ["analyze", path, "-c", str(config_path)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_missing_file(self):
        result = CliRunner().invoke(cli, ["analyze", "does-not-exist.json"])
        assert result.exit_code == 2


class TestSignalCommand:
    """Tests for `marketpulse signal`."""

    def test_breakdown(self, gap_down_candles):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_candles(tmpdir, gap_down_candles)
            result = runner.invoke(cli, ["signal", path])

        assert result.exit_code == 0, result.output
        assert "Signal Analysis" in result.output
        assert "price_change_24h" in result.output
        assert "trend" in result.output


class TestCliGroup:
    """Tests for the lazy command group."""

    def test_lists_commands(self):
        result = CliRunner().invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "analyze" in result.output
        assert "signal" in result.output
