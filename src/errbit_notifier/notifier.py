"""High-level entry points: build a notice from an exception and send it."""

from __future__ import annotations

import httpx

from errbit_notifier.classifier import ChainError, SimpleError
from errbit_notifier.client import AsyncClient, Client
from errbit_notifier.config import Config
from errbit_notifier.models import Notice, NotifyResult
from errbit_notifier.notice import build_notice


class Notifier:
    """Reports exceptions to the collector configured in a Config.

    Example:
        notifier = Notifier(Config.from_env())
        try:
            int("NOT A NUMBER")
        except ValueError as e:
            notifier.notify_error(e)
    """

    def __init__(
        self,
        config: Config,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Raises InvalidEndpointError if the configured endpoint is malformed."""
        self.config = config
        self.client = Client(config.endpoint, timeout=timeout, transport=transport)

    def notify(self, notice: Notice) -> NotifyResult:
        """Send a pre-built notice as-is."""
        return self.client.notify(notice)

    def notify_error(self, error: BaseException) -> NotifyResult:
        """Report an exception on its own, without a backtrace."""
        return self.client.notify(build_notice(SimpleError(error), self.config))

    def notify_chain_error(
        self, error: BaseException, backtrace: str | None = None
    ) -> NotifyResult:
        """Report an exception with its root cause type and backtrace."""
        notice = build_notice(ChainError(error, backtrace), self.config)
        return self.client.notify(notice)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "Notifier":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AsyncNotifier:
    """Asyncio counterpart of Notifier."""

    def __init__(
        self,
        config: Config,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.client = AsyncClient(config.endpoint, timeout=timeout, transport=transport)

    async def notify(self, notice: Notice) -> NotifyResult:
        return await self.client.notify(notice)

    async def notify_error(self, error: BaseException) -> NotifyResult:
        return await self.client.notify(build_notice(SimpleError(error), self.config))

    async def notify_chain_error(
        self, error: BaseException, backtrace: str | None = None
    ) -> NotifyResult:
        notice = build_notice(ChainError(error, backtrace), self.config)
        return await self.client.notify(notice)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "AsyncNotifier":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
