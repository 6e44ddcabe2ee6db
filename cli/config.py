from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from services.summary import DEFAULT_HIGH_THRESHOLD, DEFAULT_LOW_THRESHOLD, Thresholds

DEFAULT_REFRESH_INTERVAL = 30.0

_REFRESH_INTERVAL_ENV = "TEMPURR_REFRESH_INTERVAL"
_LOW_THRESHOLD_ENV = "TEMPURR_THRESHOLD_LOW"
_HIGH_THRESHOLD_ENV = "TEMPURR_THRESHOLD_HIGH"


@dataclass(frozen=True)
class CLIConfig:
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    low_threshold: float = DEFAULT_LOW_THRESHOLD
    high_threshold: float = DEFAULT_HIGH_THRESHOLD

    def thresholds(
        self, low: Optional[float] = None, high: Optional[float] = None
    ) -> Thresholds:
        return Thresholds(
            low=self.low_threshold if low is None else low,
            high=self.high_threshold if high is None else high,
        )


def _read_float(value: Optional[str], default: float, *, positive: bool = True) -> float:
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    if positive and parsed <= 0:
        return default
    return parsed


def load_config(
    refresh_interval: Optional[float] = None,
    low_threshold: Optional[float] = None,
    high_threshold: Optional[float] = None,
) -> CLIConfig:
    if refresh_interval is None:
        refresh_interval = _read_float(
            os.getenv(_REFRESH_INTERVAL_ENV), DEFAULT_REFRESH_INTERVAL
        )
    if low_threshold is None:
        low_threshold = _read_float(
            os.getenv(_LOW_THRESHOLD_ENV), DEFAULT_LOW_THRESHOLD, positive=False
        )
    if high_threshold is None:
        high_threshold = _read_float(
            os.getenv(_HIGH_THRESHOLD_ENV), DEFAULT_HIGH_THRESHOLD, positive=False
        )
    return CLIConfig(
        refresh_interval=refresh_interval,
        low_threshold=low_threshold,
        high_threshold=high_threshold,
    )
