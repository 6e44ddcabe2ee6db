from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List

import typer
from pydantic import TypeAdapter

from models.records import FetchResult, Reading
from services.summary import HistorySummarizer, HistorySummary, ThresholdBand, Thresholds

_BAND_COLORS = {
    ThresholdBand.below: typer.colors.BLUE,
    ThresholdBand.within: typer.colors.GREEN,
    ThresholdBand.above: typer.colors.RED,
}

_readings_adapter = TypeAdapter(List[Reading])


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _format_temperature(value: float | None) -> str:
    return "-" if value is None else f"{value:.2f}"


def _format_instant(value: datetime | None) -> str:
    return "-" if value is None else value.isoformat()


def render_readings_json(result: FetchResult) -> None:
    typer.echo(_readings_adapter.dump_json(result.readings, indent=2).decode("utf-8"))


def render_summary(summary: HistorySummary, thresholds: Thresholds) -> None:
    echo_heading("Summary")
    echo_key_values(
        [
            ("readings", summary.reading_count),
            ("min", _format_temperature(summary.min_temperature)),
            ("max", _format_temperature(summary.max_temperature)),
            ("mean", _format_temperature(summary.mean_temperature)),
            ("first", _format_instant(summary.first_at)),
            ("last", _format_instant(summary.last_at)),
        ]
    )
    typer.echo(f"thresholds: low={thresholds.low} high={thresholds.high}")
    for band in ThresholdBand:
        typer.echo(f"  - {band.value}: {summary.band_counts[band]}")


def render_history(result: FetchResult, thresholds: Thresholds) -> None:
    echo_heading("Temperature History")
    if not result.readings:
        typer.echo("No data available.")
        if result.diagnostic:
            typer.secho(result.diagnostic, fg=typer.colors.RED, err=True)
        return

    for reading in result.readings:
        band = thresholds.classify(reading.temperature)
        typer.secho(
            f"{reading.timestamp.isoformat()}  {reading.temperature:>8.2f}  {band.value}",
            fg=_BAND_COLORS[band],
        )

    typer.echo()
    summary = HistorySummarizer().summarize(result.readings, thresholds)
    render_summary(summary, thresholds)


def render_refresh_status(result: FetchResult, refreshed_at: datetime) -> None:
    typer.secho(
        f"Last refreshed at {refreshed_at:%H:%M:%S} ({result.status.value})",
        dim=True,
    )
