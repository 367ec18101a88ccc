from __future__ import annotations
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator
from app.schemas.events import (
    ProgressEvent,
    ThoughtEvent,
    ActionEvent,
    ProgressUpdateEvent,
    ResultEvent,
    DeliverableEvent,
    CompleteEvent,
    ErrorEvent,
)

log = logging.getLogger(__name__)

_CLOSED = object()


class ChannelClosedError(RuntimeError):
    """Raised when emitting to, or closing, a channel that is already closed."""


class EventChannel:
    """One-way, ordered event queue between a producer and a single reader."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, event: ProgressEvent) -> None:
        if self._closed:
            raise ChannelClosedError(f"Cannot send {event.type!r} event on a closed channel")
        await self._queue.put(event)

    def close(self) -> None:
        if self._closed:
            raise ChannelClosedError("Channel already closed")
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> AsyncIterator[ProgressEvent]:
        return self._drain()

    async def _drain(self) -> AsyncIterator[ProgressEvent]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item


class ProgressEmitter:
    """Typed event helpers over a channel; keeps percent values non-decreasing."""

    def __init__(self, channel: EventChannel) -> None:
        self.channel = channel
        self.last_percent = 0

    @classmethod
    @asynccontextmanager
    async def open(cls, channel: EventChannel):
        """Yield an emitter and close the channel exactly once on any exit."""
        emitter = cls(channel)
        try:
            yield emitter
        finally:
            channel.close()

    async def thought(self, content: str) -> None:
        await self.channel.send(ThoughtEvent(content=content))

    async def action(self, content: str) -> None:
        await self.channel.send(ActionEvent(content=content))

    async def progress(self, percent: int, step: str) -> None:
        clamped = min(max(percent, self.last_percent), 100)
        if clamped != percent:
            log.debug(f"Progress {percent} clamped to {clamped}")
        self.last_percent = clamped
        await self.channel.send(ProgressUpdateEvent(percent=clamped, step=step))

    async def result(self, content: str) -> None:
        await self.channel.send(ResultEvent(content=content))

    async def deliverable(self, key: str, url: str) -> None:
        await self.channel.send(DeliverableEvent(key=key, url=url))

    async def complete(self) -> None:
        await self.channel.send(CompleteEvent())

    async def error(self, content: str) -> None:
        await self.channel.send(ErrorEvent(content=content))
