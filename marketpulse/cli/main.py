"""Main CLI entry point for marketpulse.

This module provides the main click group and lazy loading
of subcommand modules.
"""

import importlib
import logging
from typing import Optional

import click


class LazyGroup(click.Group):
    """A click Group that imports command modules only when invoked."""

    def __init__(self, *args, lazy_subcommands: Optional[dict[str, str]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        base = super().list_commands(ctx)
        return sorted(set(base) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = getattr(module, cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "analyze": "marketpulse.cli.analyze",
    "signal": "marketpulse.cli.analyze",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="marketpulse")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """marketpulse - technical analysis for crypto OHLCV data.

    Reads a JSON file of candles and reports indicators, support and
    resistance, trend and an overall sentiment.

    \b
    Quick Start:
      marketpulse analyze SOL.json          # Full indicator table
      marketpulse analyze SOL.json --json   # Machine-readable output
      marketpulse signal SOL.json           # Sentiment verdict only
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
