"""Analyze and signal commands for marketpulse CLI.

Runs the indicator engine over a candle file and renders the result.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from marketpulse.analysis import analyze as run_analysis
from marketpulse.config import load_parameters
from marketpulse.errors import ConfigError, InvalidInputError
from marketpulse.models import AnalysisResult, IndicatorResult
from marketpulse.sources import read_candles

console = Console()

SENTIMENT_COLORS = {"bullish": "green", "bearish": "red", "neutral": "yellow"}
TREND_COLORS = {"uptrend": "green", "downtrend": "red", "sideways": "yellow"}

INDICATOR_NAMES = {
    "rsi": "RSI",
    "macd": "MACD",
    "bollinger_bands": "Bollinger Bands",
    "stochastic": "Stochastic",
    "adx": "ADX",
    "dmi": "DMI",
    "vwap": "VWAP",
    "ichimoku": "Ichimoku",
    "atr": "ATR",
    "obv": "OBV",
    "mfi": "MFI",
    "cci": "CCI",
    "williams_r": "Williams %R",
    "aroon": "Aroon",
    "trix": "TRIX",
    "roc": "ROC",
    "psar": "Parabolic SAR",
    "supertrend": "SuperTrend",
    "ema": "EMA 9/20/50/200",
    "sma": "SMA 20/50/200",
    "ichimoku_cloud": "Ichimoku Cloud",
    "market_profile": "Market Profile",
    "keltner_channels": "Keltner Channels",
    "donchian_channels": "Donchian Channels",
    "chaikin_money_flow": "Chaikin Money Flow",
    "elder_ray": "Elder Ray",
}


def _error(message: str) -> None:
    console.print(Panel(
        f"[red]{message}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def _run(file: Path, config_path: Optional[Path], change_24h: Optional[float]) -> AnalysisResult:
    """Load parameters and candles, then analyze; errors exit with status 1."""
    try:
        params = load_parameters(config_path)
        candles = read_candles(file)
        return run_analysis(candles, params, price_change_24h=change_24h)
    except ConfigError as e:
        _error(f"Configuration error: {e}")
    except InvalidInputError as e:
        _error(f"Invalid candle data: {e}")
    except ValueError as e:
        _error(str(e))


def _format_number(value: float) -> str:
    if abs(value) >= 1000:
        return f"{value:,.2f}"
    if abs(value) >= 1:
        return f"{value:.2f}"
    return f"{value:.6g}"


def _summarize(result: IndicatorResult) -> str:
    """Short value column for an indicator: its scalar fields, at most three."""
    parts = []
    for name, value in result.model_dump(exclude={"interpretation"}).items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        parts.append(f"{name}={_format_number(value)}")
        if len(parts) == 3:
            break
    return ", ".join(parts)


def _levels(levels: list[float]) -> str:
    return ", ".join(_format_number(level) for level in levels) or "-"


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="TOML file with [indicators] overrides",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the analysis as JSON")
@click.option(
    "--change-24h",
    type=float,
    default=None,
    help="24h price change in percent; measured from the candles if omitted",
)
def analyze(file: Path, config_path: Optional[Path], as_json: bool, change_24h: Optional[float]) -> None:
    """Calculate and display technical indicators for a candle file.

    FILE is a JSON list of candles (or an object with a "candles" list),
    each with timestamp (ms), open, high, low, close and volume.

    \b
    Examples:
      marketpulse analyze SOL.json
      marketpulse analyze SOL.json --change-24h -4.2
      marketpulse analyze SOL.json -c tuned.toml --json
    """
    result = _run(file, config_path, change_24h)

    if as_json:
        click.echo(result.model_dump_json(indent=2))
        return

    table = Table(title=f"Indicators - {file.stem.upper()}", show_lines=False)
    table.add_column("Indicator", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Interpretation")

    for key, indicator in result.indicators.items():
        table.add_row(INDICATOR_NAMES.get(key, key), _summarize(indicator), indicator.interpretation)

    console.print(table)

    sentiment_color = SENTIMENT_COLORS[result.sentiment]
    trend_color = TREND_COLORS[result.current_trend]
    output_lines = [
        f"[bold]Price:[/bold] {_format_number(result.current_price)} "
        f"({result.price_change_24h:+.2f}% 24h)",
        f"[bold]Trend:[/bold] [{trend_color}]{result.current_trend}[/{trend_color}]",
        f"[bold]Pattern:[/bold] {result.price_action_pattern}",
        f"[bold]Volume:[/bold] {result.volume_trend}",
        f"[bold]Support:[/bold] {_levels(result.supports)}",
        f"[bold]Resistance:[/bold] {_levels(result.resistances)}",
        "",
        f"[bold]Sentiment:[/bold] [{sentiment_color}]{result.sentiment.upper()}[/{sentiment_color}]",
    ]

    console.print(Panel(
        "\n".join(output_lines),
        title="[bold cyan]Technical Analysis[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="TOML file with [indicators] overrides",
)
def signal(file: Path, config_path: Optional[Path]) -> None:
    """Show the sentiment verdict and the signals behind it.

    \b
    Sentiment is BULLISH or BEARISH only when one side leads by more
    than one signal; otherwise it is NEUTRAL.

    \b
    Examples:
      marketpulse signal SOL.json
    """
    result = _run(file, config_path, None)

    color = SENTIMENT_COLORS[result.sentiment]
    output_lines = [
        f"[bold]{file.stem.upper()}[/bold] - {_format_number(result.current_price)}\n",
        f"[bold]Sentiment:[/bold] [{color}]{result.sentiment.upper()}[/{color}]",
        f"[bold]Trend:[/bold] {result.current_trend}",
        "",
        "[bold]Signal Breakdown:[/bold]",
    ]
    for factor in result.bullish_factors:
        output_lines.append(f"  {factor:18} [green]+1[/green]")
    for factor in result.bearish_factors:
        output_lines.append(f"  {factor:18} [red]-1[/red]")
    if not result.bullish_factors and not result.bearish_factors:
        output_lines.append("  [dim]No signals[/dim]")

    console.print(Panel(
        "\n".join(output_lines),
        title="[bold cyan]Signal Analysis[/bold cyan]",
        border_style="cyan",
    ))
