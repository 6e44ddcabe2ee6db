"""Threshold classification and summary statistics for readings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable

from models.records import Reading

DEFAULT_LOW_THRESHOLD = 2.0
DEFAULT_HIGH_THRESHOLD = 8.0


class ThresholdBand(str, Enum):
    below = "below"
    within = "within"
    above = "above"


@dataclass(frozen=True)
class Thresholds:
    """Static low/high lines drawn across the history chart."""

    low: float = DEFAULT_LOW_THRESHOLD
    high: float = DEFAULT_HIGH_THRESHOLD

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValueError(
                f"Low threshold {self.low} is above high threshold {self.high}."
            )

    def classify(self, temperature: float) -> ThresholdBand:
        if temperature < self.low:
            return ThresholdBand.below
        if temperature > self.high:
            return ThresholdBand.above
        return ThresholdBand.within


@dataclass
class HistorySummary:
    """Computed statistics for a batch of readings."""

    reading_count: int = 0
    min_temperature: float | None = None
    max_temperature: float | None = None
    mean_temperature: float | None = None
    first_at: datetime | None = None
    last_at: datetime | None = None
    band_counts: Dict[ThresholdBand, int] = field(
        default_factory=lambda: {band: 0 for band in ThresholdBand}
    )


class HistorySummarizer:
    """Reduces a fetched batch to the figures shown under the history."""

    def summarize(
        self, readings: Iterable[Reading], thresholds: Thresholds | None = None
    ) -> HistorySummary:
        thresholds = thresholds or Thresholds()
        summary = HistorySummary()
        total = 0.0

        for reading in readings:
            summary.reading_count += 1
            value = reading.temperature
            total += value

            if summary.min_temperature is None or value < summary.min_temperature:
                summary.min_temperature = value
            if summary.max_temperature is None or value > summary.max_temperature:
                summary.max_temperature = value

            if summary.first_at is None or reading.timestamp < summary.first_at:
                summary.first_at = reading.timestamp
            if summary.last_at is None or reading.timestamp > summary.last_at:
                summary.last_at = reading.timestamp

            summary.band_counts[thresholds.classify(value)] += 1

        if summary.reading_count:
            summary.mean_temperature = total / summary.reading_count

        return summary
