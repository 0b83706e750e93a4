"""Root Typer application with subcommand registration."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from symbo import SymboContext, __version__

app = typer.Typer(
    name="symbo",
    help="Symbolicate macOS / iOS crash reports with dSYM bundles",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Shared state across commands
_ctx = SymboContext()


def get_context() -> SymboContext:
    return _ctx


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"symbo {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Optional[str] = typer.Option(None, "--config", "-C", help="Path to symbo.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit internal logs as JSON"),
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True
    ),
) -> None:
    """Symbolicate macOS / iOS crash reports with dSYM bundles."""
    from symbo.errors import ConfigError
    from symbo.utils.formatters import print_error
    from symbo.utils.logging import setup_logging

    setup_logging(level="DEBUG" if verbose else "WARNING", json_output=json_logs)
    _ctx.config_path = Path(config) if config else None
    _ctx.config = None
    try:
        _ctx.ensure_config()
    except ConfigError as exc:
        print_error(str(exc))
        raise typer.Exit(1)


# -- Subcommand registration --
from symbo.cli.symbolicate import symbolicate_cmd  # noqa: E402
from symbo.cli.search import search_cmd  # noqa: E402
from symbo.cli.uuids import uuids_cmd  # noqa: E402
from symbo.cli.dsym import dsym_cmd  # noqa: E402

app.command(name="symbolicate")(symbolicate_cmd)
app.command(name="search")(search_cmd)
app.command(name="uuids")(uuids_cmd)
app.command(name="dsym")(dsym_cmd)
