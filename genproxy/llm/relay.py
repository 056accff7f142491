"""
Purpose:
- Turn the typed event stream into the plain text fragments written to the client.
- Nothing is aggregated: each fragment is yielded as soon as its chunk arrives.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Iterator, Optional

from .errors import GenerationError
from .schema import EndOfStream, GenerationChunk, NextChunk, StreamError, StreamEvent

logger = logging.getLogger(__name__)

def chunk_texts(chunk: Optional[GenerationChunk]) -> Iterator[str]:
    """Text of every part of every candidate, in order. Missing layers and media parts are skipped."""
    if chunk is None:
        return
    for cand in chunk.candidates:
        if cand.content is None:
            continue
        for part in cand.content.parts:
            if part.text:
                yield part.text

async def relay_text(events: AsyncIterator[StreamEvent]) -> AsyncIterator[str]:
    """
    Yield text until EndOfStream. A StreamError stops the relay with GenerationError;
    fragments already yielded are not taken back.
    """
    async for event in events:
        if isinstance(event, EndOfStream):
            return
        if isinstance(event, StreamError):
            logger.error("Error generating content: %r", event.cause)
            raise GenerationError("unable to generate content") from event.cause
        if isinstance(event, NextChunk):
            for text in chunk_texts(event.chunk):
                yield text
