"""Collector that streams auction items from the Shio feed."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from .shio_conn import new_shio_conn
from .types import ShioItem

_log = logging.getLogger(__name__)


class ShioCollector:
    """Yields ShioItems received over a single feed connection."""

    def __init__(self, receiver: asyncio.Queue) -> None:
        self._receiver = receiver

    @classmethod
    async def new_without_executor(cls, wss_url: str, num_retries: int | None = None) -> ShioCollector:
        """Open a feed connection only for reading; no bids are sent through it."""
        _log.warning("only reading from shio feed, not sending any bids")
        _, receiver = await new_shio_conn(wss_url, 3 if num_retries is None else num_retries)
        return cls(receiver)

    def name(self) -> str:
        return "ShioCollector"

    async def get_event_stream(self) -> AsyncIterator[ShioItem]:
        """Yield items as they arrive; raise RuntimeError if the feed stops."""
        while True:
            item = await self._receiver.get()
            if isinstance(item, BaseException):
                raise RuntimeError("ShioCollector stream ended unexpectedly") from item
            yield item