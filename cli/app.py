from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import render_history, render_readings_json, render_refresh_status
from logging_config import configure_logging
from services.errors import InsecureTransportNotAllowed
from services.history import HistoryClient, build_history_client
from services.summary import Thresholds


@dataclass
class CLIState:
    config: CLIConfig
    client: HistoryClient


app = typer.Typer(
    help="Fetch and display the temperature history.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _thresholds(state: CLIState, low: Optional[float], high: Optional[float]) -> Thresholds:
    try:
        return state.config.thresholds(low=low, high=high)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback()
def main(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="History endpoint (defaults to TEMPURR_HISTORY_URL or http://localhost:6729/history).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds before a request is abandoned.",
    ),
    dev_insecure_tls: Optional[bool] = typer.Option(
        None,
        "--dev-insecure-tls/--verify-tls",
        help="Skip server certificate checks. Only allowed with TEMPURR_ENV=development.",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging()
    if timeout is not None and timeout <= 0:
        raise typer.BadParameter("Timeout must be a positive number of seconds.", param_hint="--timeout")
    try:
        client = build_history_client(
            url=url, dev_insecure_tls=dev_insecure_tls, timeout=timeout
        )
    except InsecureTransportNotAllowed as exc:
        raise typer.BadParameter(str(exc), param_hint="--dev-insecure-tls") from exc
    ctx.obj = CLIState(config=load_config(), client=client)
    ctx.call_on_close(client.close)


@app.command("history")
def history_command(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print readings as JSON."),
    low: Optional[float] = typer.Option(None, "--low", help="Low threshold line."),
    high: Optional[float] = typer.Option(None, "--high", help="High threshold line."),
) -> None:
    """Fetch the history once and print it."""
    state = _get_state(ctx)
    thresholds = _thresholds(state, low, high)
    result = state.client.fetch()
    if as_json:
        render_readings_json(result)
        if result.diagnostic:
            typer.secho(result.diagnostic, fg=typer.colors.RED, err=True)
        return
    render_history(result, thresholds)


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        help="Seconds between refreshes (defaults to TEMPURR_REFRESH_INTERVAL or 30).",
    ),
    count: int = typer.Option(
        0,
        "--count",
        min=0,
        help="Number of refreshes before exiting; 0 keeps going until interrupted.",
    ),
    low: Optional[float] = typer.Option(None, "--low", help="Low threshold line."),
    high: Optional[float] = typer.Option(None, "--high", help="High threshold line."),
) -> None:
    """Re-fetch the history on an interval."""
    state = _get_state(ctx)
    thresholds = _thresholds(state, low, high)
    delay = interval if interval is not None and interval > 0 else state.config.refresh_interval

    refreshes = 0
    try:
        while True:
            result = state.client.fetch()
            render_history(result, thresholds)
            render_refresh_status(result, datetime.now())
            refreshes += 1
            if count and refreshes >= count:
                return
            typer.echo()
            time.sleep(delay)
    except KeyboardInterrupt:
        typer.echo("Stopped.")
