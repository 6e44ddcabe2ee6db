"""Failure kinds raised inside the history pipeline."""

from __future__ import annotations

from typing import Optional

from models.schemas import FetchStatus


class HistoryError(Exception):
    """Base class for errors the client converts into an empty result."""

    status: FetchStatus = FetchStatus.transport_failure


class InvalidEndpoint(HistoryError):
    status = FetchStatus.invalid_endpoint


class TransportFailure(HistoryError):
    status = FetchStatus.transport_failure

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeFailure(HistoryError):
    status = FetchStatus.decode_failure


class InsecureTransportNotAllowed(ValueError):
    """Raised when certificate checks are disabled outside development."""
