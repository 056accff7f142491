"""
Purpose:
- Explicit models for the nested chunk -> candidates -> content -> parts shape
  returned by the streaming generation call.
- Typed stream events so end-of-stream is never confused with a failure.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Optional, Union
from pydantic import BaseModel, Field

class Part(BaseModel):
    text: Optional[str] = None
    # set for inline media parts (images, audio, ...)
    mime_type: Optional[str] = None

class Content(BaseModel):
    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)

class Candidate(BaseModel):
    content: Optional[Content] = None
    finish_reason: Optional[str] = None

class GenerationChunk(BaseModel):
    candidates: List[Candidate] = Field(default_factory=list)

    @classmethod
    def from_sdk(cls, resp: Any) -> Optional["GenerationChunk"]:
        """
        Convert a google.genai GenerateContentResponse (or anything shaped like one).
        Absent layers are skipped; a None response stays None.
        """
        if resp is None:
            return None
        candidates: List[Candidate] = []
        for cand in (getattr(resp, "candidates", None) or []):
            if cand is None:
                continue
            content = None
            sdk_content = getattr(cand, "content", None)
            if sdk_content is not None:
                parts: List[Part] = []
                for p in (getattr(sdk_content, "parts", None) or []):
                    if p is None:
                        continue
                    inline = getattr(p, "inline_data", None)
                    parts.append(Part(
                        text=getattr(p, "text", None),
                        mime_type=getattr(inline, "mime_type", None) if inline is not None else None,
                    ))
                content = Content(role=getattr(sdk_content, "role", None), parts=parts)
            reason = getattr(cand, "finish_reason", None)
            candidates.append(Candidate(
                content=content,
                finish_reason=str(getattr(reason, "value", reason)) if reason is not None else None,
            ))
        return cls(candidates=candidates)


@dataclass(frozen=True)
class NextChunk:
    chunk: Optional[GenerationChunk]

@dataclass(frozen=True)
class EndOfStream:
    pass

@dataclass(frozen=True)
class StreamError:
    cause: BaseException

StreamEvent = Union[NextChunk, EndOfStream, StreamError]
