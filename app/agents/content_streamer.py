import logging
import math
from typing import List, Optional
from app.core.channel import ProgressEmitter
from app.agents.base import ExecutionContext, STREAM_START_PERCENT
from app.core.llm import TextGenerator

log = logging.getLogger(__name__)

STREAM_MAX_PERCENT = 85
STREAM_PERCENT_SPAN = 70
EXPECTED_LENGTH = 4000
PROGRESS_STEP = 10
STATUS_INTERVAL = 800


def streaming_percent(length: int) -> int:
    """Progress estimate for a response of the given accumulated length."""
    percent = STREAM_START_PERCENT + math.floor(length / EXPECTED_LENGTH * STREAM_PERCENT_SPAN)
    return max(0, min(percent, STREAM_MAX_PERCENT))


class ContentStreamer:
    def __init__(self, generator: Optional[TextGenerator]):
        self.generator = generator

    async def stream(
        self,
        ctx: ExecutionContext,
        emitter: ProgressEmitter,
        system_instruction: str,
        prompt: str,
        status_messages: List[str],
        step: str,
    ) -> str:
        """
        Consume the generator, accumulating text into ctx.content.

        Emits a Progress event when the estimate moves more than
        PROGRESS_STEP past the last one, and the next status message as a
        Thought each time the text grows by more than STATUS_INTERVAL.
        """
        if self.generator is None:
            raise RuntimeError("No text generator configured")

        parts: List[str] = [ctx.content] if ctx.content else []
        length = len(ctx.content)

        async for delta in self.generator.stream_text(system_instruction, prompt):
            if not delta:
                continue
            parts.append(delta)
            length += len(delta)

            percent = streaming_percent(length)
            if percent > ctx.last_percent + PROGRESS_STEP:
                ctx.last_percent = percent
                await emitter.progress(percent, step)

            if length > ctx.last_message_offset + STATUS_INTERVAL and ctx.message_cursor < len(status_messages):
                await emitter.thought(status_messages[ctx.message_cursor])
                ctx.message_cursor += 1
                ctx.last_message_offset = length

        ctx.content = "".join(parts)
        log.info(f"Generation finished with {length} characters")
        return ctx.content
