"""Pydantic schemas for the history wire format."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class FetchStatus(str, Enum):
    """How a history fetch ended."""

    ok = "ok"
    invalid_endpoint = "invalid_endpoint"
    transport_failure = "transport_failure"
    decode_failure = "decode_failure"


class WireReading(BaseModel):
    """One record of the ``/history`` response body."""

    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    temp: float = Field(..., description="Temperature value, unit unspecified.")
    created_at: str = Field(
        ..., description="ISO-8601 timestamp, optionally with .XXX fractional seconds."
    )


HistoryPayload = TypeAdapter(List[WireReading])
