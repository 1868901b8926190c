"""HTTP transport for posting notices to an Airbrake-compatible collector.

Each ``notify`` call serializes one notice, issues one POST and maps the
outcome onto a NotifyResult or a NotifierError. There are no retries and,
unless one is passed in, no timeout; callers wanting either wrap the call.
"""

from __future__ import annotations

import ssl
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from errbit_notifier.errors import (
    GatewayError,
    InvalidEndpointError,
    ResponseDecodeError,
    TransportError,
)
from errbit_notifier.logging import get_logger
from errbit_notifier.models import Notice, NotifyResult

logger = get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class Connector(Protocol):
    """Connection strategy, chosen once per client from the endpoint scheme."""

    def client_options(self) -> dict[str, Any]:
        """Keyword arguments for the underlying httpx client."""
        ...


class PlainConnector:
    """Plaintext HTTP connections."""

    def client_options(self) -> dict[str, Any]:
        return {}


class TLSConnector:
    """TLS connections trusting the platform's root certificate store."""

    def __init__(self) -> None:
        self.ssl_context = ssl.create_default_context()

    def client_options(self) -> dict[str, Any]:
        return {"verify": self.ssl_context}


def parse_endpoint(url: str | httpx.URL) -> httpx.URL:
    """Validate an endpoint URL.

    Raises:
        InvalidEndpointError: If the URL is not an absolute http(s) URL with a host
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidEndpointError(f"Invalid endpoint URL {url!r}: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidEndpointError(f"Invalid endpoint URL {url!r}: expected http(s)://host/...")
    return parsed


def select_connector(url: httpx.URL) -> Connector:
    """Pick the connector for an endpoint: TLS for https, plaintext otherwise."""
    if url.scheme == "https":
        return TLSConnector()
    return PlainConnector()


def interpret_response(status_code: int, body: str) -> NotifyResult:
    """Map a collector response onto a NotifyResult.

    Raises:
        GatewayError: Any status other than 201 Created
        ResponseDecodeError: A 201 whose body is not a valid result
    """
    if status_code != httpx.codes.CREATED:
        logger.warning("Collector rejected notice", status=status_code)
        raise GatewayError(status_code=status_code, reason=body)

    try:
        result = NotifyResult.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Collector returned malformed result", body=body)
        raise ResponseDecodeError(str(e), body) from e

    logger.debug("Notice accepted", id=result.id, url=result.url)
    return result


def _transport_error(e: httpx.RequestError) -> TransportError:
    reason = str(e) or type(e).__name__
    logger.warning("Notice request failed", error=reason)
    return TransportError(reason)


class _BaseClient:
    def __init__(self, url: str | httpx.URL, timeout: float | None = None):
        self.url = parse_endpoint(url)
        self.connector = select_connector(self.url)
        self.timeout = timeout

    def _http_options(self, transport: Any) -> dict[str, Any]:
        options = self.connector.client_options()
        options["timeout"] = self.timeout
        if transport is not None:
            options["transport"] = transport
        return options

    def _log_send(self, notice: Notice) -> None:
        logger.debug(
            "Sending notice",
            host=self.url.host,
            errors=[error.type_ for error in notice.errors],
        )


class Client(_BaseClient):
    """Blocking notice client. Safe to share between threads."""

    def __init__(
        self,
        url: str | httpx.URL,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Create a client for one notice endpoint.

        Args:
            url: Full notice endpoint, including the project key query
            timeout: Optional request timeout in seconds (default: none)
            transport: Optional httpx transport, mainly for tests

        Raises:
            InvalidEndpointError: If the URL is malformed
        """
        super().__init__(url, timeout)
        self._http = httpx.Client(**self._http_options(transport))

    def notify(self, notice: Notice) -> NotifyResult:
        """Send a notice and return the collector's identifiers.

        Raises:
            TransportError: Connection, write or read failure
            GatewayError: Non-201 response
            ResponseDecodeError: Undecodable 201 response
        """
        self._log_send(notice)
        try:
            response = self._http.post(
                self.url,
                content=notice.to_json().encode("utf-8"),
                headers=JSON_HEADERS,
            )
        except httpx.RequestError as e:
            raise _transport_error(e) from e
        return interpret_response(response.status_code, response.text)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AsyncClient(_BaseClient):
    """Asyncio notice client. Safe to share between tasks on one event loop."""

    def __init__(
        self,
        url: str | httpx.URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(url, timeout)
        self._http = httpx.AsyncClient(**self._http_options(transport))

    async def notify(self, notice: Notice) -> NotifyResult:
        """Send a notice and return the collector's identifiers.

        Raises the same errors as Client.notify.
        """
        self._log_send(notice)
        try:
            response = await self._http.post(
                self.url,
                content=notice.to_json().encode("utf-8"),
                headers=JSON_HEADERS,
            )
        except httpx.RequestError as e:
            raise _transport_error(e) from e
        return interpret_response(response.status_code, response.text)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
