"""Unit tests for the event channel and progress emitter."""
import pytest
from app.core.channel import ChannelClosedError, EventChannel, ProgressEmitter
from app.core.sse import format_sse
from app.schemas.events import (
    ThoughtEvent,
    ProgressUpdateEvent,
    DeliverableEvent,
    CompleteEvent,
    parse_event,
)


@pytest.mark.asyncio
async def test_events_drain_in_emission_order():
    channel = EventChannel()
    async with ProgressEmitter.open(channel) as emitter:
        await emitter.thought("one")
        await emitter.progress(10, "step")
        await emitter.deliverable("spec", "https://notion.so/x")
        await emitter.complete()

    events = [e async for e in channel]

    assert events == [
        ThoughtEvent(content="one"),
        ProgressUpdateEvent(percent=10, step="step"),
        DeliverableEvent(key="spec", url="https://notion.so/x"),
        CompleteEvent(),
    ]


@pytest.mark.asyncio
async def test_channel_closed_on_exception():
    channel = EventChannel()
    with pytest.raises(RuntimeError):
        async with ProgressEmitter.open(channel) as emitter:
            await emitter.thought("before")
            raise RuntimeError("boom")

    assert channel.closed
    assert [e async for e in channel] == [ThoughtEvent(content="before")]


@pytest.mark.asyncio
async def test_send_after_close_raises():
    channel = EventChannel()
    channel.close()

    with pytest.raises(ChannelClosedError):
        await channel.send(CompleteEvent())
    with pytest.raises(ChannelClosedError):
        channel.close()


@pytest.mark.asyncio
async def test_progress_never_decreases():
    channel = EventChannel()
    async with ProgressEmitter.open(channel) as emitter:
        await emitter.progress(40, "a")
        await emitter.progress(20, "b")
        await emitter.progress(150, "c")

    percents = [e.percent async for e in channel]
    assert percents == [40, 40, 100]


def test_event_wire_format():
    record = format_sse(ProgressUpdateEvent(percent=5, step="Analyzing requirements"))

    assert record == 'data: {"type":"progress","percent":5,"step":"Analyzing requirements"}\n\n'
    assert format_sse(CompleteEvent()) == 'data: {"type":"complete"}\n\n'


def test_parse_event_uses_type_discriminant():
    event = parse_event('{"type": "deliverable", "key": "spec", "url": "data:text/markdown;base64,eA=="}')

    assert isinstance(event, DeliverableEvent)
    assert event.key == "spec"
