"""Server-sent event framing for the progress stream."""
from __future__ import annotations
from collections.abc import AsyncIterator, Iterable, Iterator
from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel


@dataclass(frozen=True)
class SSERecord:
    event: Optional[str]
    data: str


def format_sse(event: BaseModel) -> str:
    """One ``data: <json>`` record terminated by a blank line."""
    return f"data: {event.model_dump_json()}\n\n"


class SSEDecoder:
    """
    Incremental line-oriented SSE decoder.

    Supports ``event:`` and multi-line ``data:`` fields. A blank line
    terminates a record; records without data are dropped.
    """

    def __init__(self) -> None:
        self._event: Optional[str] = None
        self._data: list[str] = []

    def feed(self, line: str) -> Optional[SSERecord]:
        line = line.rstrip("\r\n")
        if line == "":
            return self.flush()
        if line.startswith("event:"):
            self._event = line[len("event:"):].strip()
        elif line.startswith("data:"):
            self._data.append(line[len("data:"):].strip())
        return None

    def flush(self) -> Optional[SSERecord]:
        data = "\n".join(self._data).strip()
        record = SSERecord(self._event, data) if data else None
        self._event = None
        self._data = []
        return record


def iter_sse(lines: Iterable[str]) -> Iterator[SSERecord]:
    decoder = SSEDecoder()
    for line in lines:
        record = decoder.feed(line)
        if record:
            yield record
    # EOF terminates a trailing record without a blank line
    record = decoder.flush()
    if record:
        yield record


async def aiter_sse(lines: AsyncIterator[str]) -> AsyncIterator[SSERecord]:
    decoder = SSEDecoder()
    async for line in lines:
        record = decoder.feed(line)
        if record:
            yield record
    record = decoder.flush()
    if record:
        yield record
