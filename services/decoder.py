"""Decoding and timestamp normalization for history payloads."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from operator import attrgetter
from typing import List

from pydantic import ValidationError

from models.records import Reading
from models.schemas import HistoryPayload
from services.errors import DecodeFailure

_FRACTIONAL_SECONDS = re.compile(r"\.\d{3}")
_STRICT_ISO8601 = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:Z|[+-]\d{2}:\d{2})$"
)


def normalize_timestamp(value: str) -> datetime:
    """Parse a wire ``created_at`` value into an aware UTC datetime.

    Millisecond groups are dropped, not rounded, so ``10:15:30.999Z`` and
    ``10:15:30Z`` are the same instant. A time-zone designator is required.
    """
    candidate = _FRACTIONAL_SECONDS.sub("", value)
    if not _STRICT_ISO8601.match(candidate):
        raise ValueError(f"Invalid timestamp format: {value!r}")

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError(f"Invalid timestamp: {value!r}") from exc

    return parsed.astimezone(timezone.utc)


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if location:
        return f"{location}: {first['msg']}"
    return first["msg"]


def decode_history(body: bytes) -> List[Reading]:
    """Decode a history response body into readings sorted by time.

    One bad record fails the whole batch.
    """
    try:
        records = HistoryPayload.validate_json(body)
    except ValidationError as exc:
        raise DecodeFailure(f"Malformed history payload ({_describe(exc)})") from exc

    readings: List[Reading] = []
    for index, record in enumerate(records):
        try:
            timestamp = normalize_timestamp(record.created_at)
        except ValueError as exc:
            raise DecodeFailure(
                f"Record {index} has an unparseable created_at {record.created_at!r}"
            ) from exc
        readings.append(Reading(key=index, temperature=record.temp, timestamp=timestamp))

    readings.sort(key=attrgetter("timestamp"))
    return readings
