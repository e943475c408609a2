"""CLI entrypoint for etherfolio."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Annotated

import typer

from .logger import setup_logging
from .pipeline import PreflightError
from .processors import AggregationError
from .report import format_snapshot_table, snapshot_to_dict
from .settings import PortfolioSettings
from .state import AppState

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Wallet holdings and fiat value across the tracked tokens.",
)


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return logging.getLogger("etherfolio")


@app.callback(invoke_without_command=True)
def portfolio(
    address: Annotated[
        str | None, typer.Argument(help="Wallet address to value.")
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [etherfolio] table).",
        ),
    ] = None,
    fiat_currency: Annotated[
        str | None,
        typer.Option("--fiat", "-f", help="Fiat currency to price in (e.g. usd)."),
    ] = None,
    chain_id: Annotated[
        int | None,
        typer.Option("--chain-id", help="Chain ID passed to the balance provider."),
    ] = None,
    global_timeout_seconds: Annotated[
        float | None,
        typer.Option(
            "--global-timeout-seconds",
            help="Abort the whole run after this many seconds (<= 0 disables).",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the snapshot as JSON instead of a table."),
    ] = False,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config (with secrets redacted) and exit.",
        ),
    ] = False,
):
    """Fetch balances and prices for ADDRESS and print its portfolio."""
    if config_path:
        os.environ["ETHERFOLIO_CONFIG"] = str(config_path)

    init_kwargs: dict[str, str | int | float] = {}
    if fiat_currency is not None:
        init_kwargs["fiat_currency"] = fiat_currency
    if chain_id is not None:
        init_kwargs["chain_id"] = chain_id
    if global_timeout_seconds is not None:
        init_kwargs["global_timeout_seconds"] = global_timeout_seconds
    if log_level is not None:
        init_kwargs["log_level"] = log_level

    settings = PortfolioSettings(**init_kwargs)

    setup_logging(settings.log_level)
    state = AppState(settings=settings, logger=_build_logger())

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    if not address:
        raise typer.BadParameter("a wallet address is required", param_hint="ADDRESS")

    from .pipeline.run import run_portfolio

    try:
        snapshot = asyncio.run(run_portfolio(state, address))
    except (PreflightError, AggregationError, asyncio.TimeoutError) as e:
        typer.secho(f"Error loading portfolio: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    if as_json:
        typer.echo(json.dumps(snapshot_to_dict(snapshot), indent=2))
    else:
        format_snapshot_table(snapshot)


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
