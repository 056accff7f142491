"""Streaming generation client for Google Gemini."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import AsyncIterator

from .errors import StreamerInitError
from .schema import EndOfStream, GenerationChunk, NextChunk, StreamError, StreamEvent

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPE = "image/jpeg"


class ContentStreamer(ABC):
    """Base interface for streaming text generation from a prompt plus an image."""

    provider_name: str = "base"

    @abstractmethod
    def stream(self, prompt: str, image: bytes) -> AsyncIterator[StreamEvent]:
        """
        Finite, non-restartable sequence of events. Always terminated by exactly
        one EndOfStream or StreamError.
        """
        ...


class GeminiStreamer(ContentStreamer):
    """Google Gemini provider using the async streaming API of google-genai."""

    provider_name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        harassment_threshold: str = "BLOCK_ONLY_HIGH",
    ) -> None:
        from google import genai
        from google.genai import types

        self.model = model
        try:
            self._client = genai.Client(api_key=api_key)
            self._config = types.GenerateContentConfig(
                safety_settings=[
                    types.SafetySetting(
                        category=types.HarmCategory.HARM_CATEGORY_HARASSMENT,
                        threshold=types.HarmBlockThreshold(harassment_threshold),
                    )
                ],
            )
        except Exception as e:
            raise StreamerInitError(f"unable to create Gemini client: {e}") from e
        logger.info("Gemini client ready model=%s", self.model)

    def _contents(self, prompt: str, image: bytes):
        from google.genai import types

        return [
            types.Part.from_text(text=prompt),
            types.Part.from_bytes(data=image, mime_type=IMAGE_MIME_TYPE),
        ]

    async def stream(self, prompt: str, image: bytes) -> AsyncIterator[StreamEvent]:
        logger.info("Streaming generation via Gemini model=%s image_bytes=%d", self.model, len(image))
        try:
            responses = await self._client.aio.models.generate_content_stream(
                model=self.model,
                contents=self._contents(prompt, image),
                config=self._config,
            )
            async for resp in responses:
                yield NextChunk(GenerationChunk.from_sdk(resp))
        except Exception as e:
            yield StreamError(e)
            return
        yield EndOfStream()
