"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from models.schemas import FetchStatus


@dataclass(frozen=True, slots=True)
class Reading:
    """A single temperature sample decoded from the history payload.

    ``key`` is the record's position in the decoded array. It only
    identifies the reading within one batch.
    """

    key: int
    temperature: float
    timestamp: datetime


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one history fetch.

    Failed fetches carry an empty ``readings`` list and a ``diagnostic``
    describing what went wrong.
    """

    readings: List[Reading] = field(default_factory=list)
    status: FetchStatus = FetchStatus.ok
    diagnostic: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.ok

    @classmethod
    def failure(cls, status: FetchStatus, diagnostic: str) -> "FetchResult":
        return cls(readings=[], status=status, diagnostic=diagnostic)
