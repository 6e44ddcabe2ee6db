"""HTTP clients that fetch and normalize the temperature history."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import httpx

from models.records import FetchResult
from models.schemas import FetchStatus
from services.decoder import decode_history
from services.errors import (
    HistoryError,
    InsecureTransportNotAllowed,
    InvalidEndpoint,
    TransportFailure,
)
from settings import DEFAULT_HISTORY_URL, DEFAULT_REQUEST_TIMEOUT, Settings, get_settings

logger = logging.getLogger(__name__)


class TransportMode(str, Enum):
    """Server certificate policy for the HTTP transport."""

    verified = "verified"
    dev_insecure = "dev_insecure"

    @property
    def verify(self) -> bool:
        return self is TransportMode.verified


def resolve_transport_mode(environment: str, dev_insecure_tls: bool) -> TransportMode:
    if not dev_insecure_tls:
        return TransportMode.verified
    if environment != "development":
        raise InsecureTransportNotAllowed(
            "Disabling certificate validation requires TEMPURR_ENV=development "
            f"(current environment: {environment!r})."
        )
    return TransportMode.dev_insecure


def validate_endpoint(url: str) -> httpx.URL:
    # ``host`` decodes IDNA labels lazily, so a bad label surfaces here.
    try:
        parsed = httpx.URL(url)
        scheme, host = parsed.scheme, parsed.host
    except (httpx.InvalidURL, ValueError, TypeError) as exc:
        raise InvalidEndpoint(f"Invalid history URL {url!r}: {exc}") from exc
    if scheme not in {"http", "https"}:
        raise InvalidEndpoint(f"Unsupported scheme in history URL {url!r}.")
    if not host:
        raise InvalidEndpoint(f"History URL {url!r} has no host.")
    return parsed


def _status_error(exc: httpx.HTTPStatusError) -> TransportFailure:
    status_code = exc.response.status_code
    return TransportFailure(
        f"History endpoint answered with status {status_code}.",
        status_code=status_code,
    )


def _request_error(url: str, exc: httpx.RequestError) -> TransportFailure:
    detail = str(exc) or type(exc).__name__
    return TransportFailure(f"Request to {url} failed: {detail}")


def _failed(url: str, exc: HistoryError) -> FetchResult:
    logger.warning(
        "History fetch failed",
        extra={
            "url": url,
            "status": exc.status.value,
            "status_code": getattr(exc, "status_code", None),
            "reason": str(exc),
        },
    )
    return FetchResult.failure(exc.status, str(exc))


def _succeeded(url: str, body: bytes) -> FetchResult:
    readings = decode_history(body)
    logger.info(
        "History fetched",
        extra={"url": url, "status": FetchStatus.ok.value, "reading_count": len(readings)},
    )
    return FetchResult(readings=readings)


def _warn_if_insecure(url: str, mode: TransportMode) -> None:
    if mode is TransportMode.dev_insecure:
        logger.warning(
            "Server certificate validation is disabled",
            extra={"url": url, "transport_mode": mode.value},
        )


class HistoryClient:
    """Blocking client for the ``/history`` endpoint.

    ``fetch`` never raises for endpoint, transport or decode problems; they
    come back as an empty :class:`FetchResult` with a diagnostic. Calls may
    overlap freely, each one issues its own request.
    """

    def __init__(
        self,
        url: str = DEFAULT_HISTORY_URL,
        *,
        mode: TransportMode = TransportMode.verified,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.url = url
        self.mode = mode
        _warn_if_insecure(url, mode)
        self._client = httpx.Client(timeout=timeout, verify=mode.verify, transport=transport)

    def __enter__(self) -> "HistoryClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch(self) -> FetchResult:
        try:
            return _succeeded(self.url, self._get())
        except HistoryError as exc:
            return _failed(self.url, exc)

    def _get(self) -> bytes:
        endpoint = validate_endpoint(self.url)
        try:
            response = self._client.get(endpoint)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise _status_error(exc) from exc
        except httpx.RequestError as exc:
            raise _request_error(self.url, exc) from exc
        return response.content


class AsyncHistoryClient:
    """Coroutine flavour of :class:`HistoryClient` with the same contract."""

    def __init__(
        self,
        url: str = DEFAULT_HISTORY_URL,
        *,
        mode: TransportMode = TransportMode.verified,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.mode = mode
        _warn_if_insecure(url, mode)
        self._client = httpx.AsyncClient(
            timeout=timeout, verify=mode.verify, transport=transport
        )

    async def __aenter__(self) -> "AsyncHistoryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self) -> FetchResult:
        try:
            return _succeeded(self.url, await self._get())
        except HistoryError as exc:
            return _failed(self.url, exc)

    async def _get(self) -> bytes:
        endpoint = validate_endpoint(self.url)
        try:
            response = await self._client.get(endpoint)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise _status_error(exc) from exc
        except httpx.RequestError as exc:
            raise _request_error(self.url, exc) from exc
        return response.content


def build_history_client(
    settings: Optional[Settings] = None,
    *,
    url: Optional[str] = None,
    dev_insecure_tls: Optional[bool] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> HistoryClient:
    """Factory that wires a client from settings plus explicit overrides."""
    settings = settings or get_settings()
    insecure = settings.dev_insecure_tls if dev_insecure_tls is None else dev_insecure_tls
    mode = resolve_transport_mode(settings.environment, insecure)
    return HistoryClient(
        url or settings.history_url,
        mode=mode,
        timeout=settings.request_timeout if timeout is None else timeout,
        transport=transport,
    )
