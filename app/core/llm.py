from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from anthropic import AsyncAnthropic
from app.core.config import Settings, settings


class TextGenerator(ABC):
    @abstractmethod
    def stream_text(self, system_instruction: str, prompt: str) -> AsyncIterator[str]:
        """Stream generated text increments until the response ends."""

    async def aclose(self) -> None:
        """Release pooled connections; called once when the app shuts down."""


class AnthropicTextGenerator(TextGenerator):
    """Streams text deltas from the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        model: str = settings.anthropic_model,
        max_tokens: int = settings.anthropic_max_tokens,
        client: AsyncAnthropic | None = None,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self._client = client or AsyncAnthropic(api_key=api_key)

    async def stream_text(self, system_instruction: str, prompt: str) -> AsyncIterator[str]:
        async with self._client.messages.stream(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system_instruction,
            messages=[{"role": "user", "content": prompt}],
        ) as stream:
            async for text in stream.text_stream:
                yield text

    async def aclose(self) -> None:
        await self._client.close()


def build_generator(config: Settings) -> TextGenerator | None:
    """Generator for the configured credential, or None when no key is set."""
    if not config.anthropic_api_key:
        return None
    return AnthropicTextGenerator(
        api_key=config.anthropic_api_key,
        model=config.anthropic_model,
        max_tokens=config.anthropic_max_tokens,
    )
