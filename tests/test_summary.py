"""Unit tests for threshold classification and summary statistics."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from models.records import Reading
from services.summary import HistorySummarizer, ThresholdBand, Thresholds

_START = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _reading(key: int, temperature: float) -> Reading:
    """Helper to build readings spaced one minute apart."""

    return Reading(key=key, temperature=temperature, timestamp=_START + timedelta(minutes=key))


@pytest.mark.parametrize(
    ("temperature", "band"),
    [
        (1.99, ThresholdBand.below),
        (2.0, ThresholdBand.within),
        (5.0, ThresholdBand.within),
        (8.0, ThresholdBand.within),
        (8.01, ThresholdBand.above),
    ],
)
def test_default_thresholds_are_inclusive(temperature: float, band: ThresholdBand) -> None:
    assert Thresholds().classify(temperature) is band


def test_thresholds_reject_inverted_bounds() -> None:
    with pytest.raises(ValueError):
        Thresholds(low=9.0, high=1.0)


def test_summarize_empty_iterable_returns_default_summary() -> None:
    summary = HistorySummarizer().summarize([])

    assert summary.reading_count == 0
    assert summary.min_temperature is None
    assert summary.max_temperature is None
    assert summary.mean_temperature is None
    assert summary.first_at is None
    assert summary.last_at is None
    assert summary.band_counts == {band: 0 for band in ThresholdBand}


def test_summarize_computes_statistics_and_bands() -> None:
    readings = [_reading(0, 1.0), _reading(1, 5.0), _reading(2, 9.0), _reading(3, 7.0)]

    summary = HistorySummarizer().summarize(readings)

    assert summary.reading_count == 4
    assert summary.min_temperature == 1.0
    assert summary.max_temperature == 9.0
    assert summary.mean_temperature == 5.5
    assert summary.first_at == _START
    assert summary.last_at == _START + timedelta(minutes=3)
    assert summary.band_counts == {
        ThresholdBand.below: 1,
        ThresholdBand.within: 2,
        ThresholdBand.above: 1,
    }


def test_summarize_uses_custom_thresholds() -> None:
    readings = [_reading(0, 1.0), _reading(1, 5.0)]

    summary = HistorySummarizer().summarize(readings, Thresholds(low=0.0, high=4.0))

    assert summary.band_counts[ThresholdBand.within] == 1
    assert summary.band_counts[ThresholdBand.above] == 1
