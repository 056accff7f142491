"""
Purpose:
- /api/generate takes a multipart form (image `file` + text `prompt`) and streams
  Gemini's generated text back as it arrives.
- Client mistakes get a 4xx with a short plain-text message; server-side detail only goes to the log.
"""

import logging
from typing import AsyncIterator

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from ..core.settings import Settings, api_key_configured
from ..llm.errors import GenerationError
from ..llm.relay import relay_text
from ..llm.streamer import ContentStreamer

logger = logging.getLogger(__name__)

# Registered for every method so a wrong method gets 405 here instead of
# falling through to the index catch-all.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

API_KEY_MISSING_MESSAGE = (
    "Error: To get started, get an API key at https://makersuite.google.com/app/apikey, "
    "set it as the API_KEY environment variable and restart the server"
)

def _error(message: str, status_code: int, headers: dict | None = None) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code, headers=headers)

async def _parse_form(request: Request, limit: int) -> FormData:
    declared = request.headers.get("content-length")
    if declared is not None and int(declared) > limit:
        raise ValueError(f"request body of {declared} bytes exceeds {limit}")
    return await request.form(max_part_size=limit)

async def _chain(first: str, rest: AsyncIterator[str]) -> AsyncIterator[str]:
    yield first
    async for text in rest:
        yield text

def create_generate_router(cfg: Settings, streamer: ContentStreamer) -> APIRouter:
    """Bind the generate handler to its credential, upload cap and streaming client."""
    router = APIRouter(prefix="/api", tags=["generate"])

    @router.api_route("/generate", methods=ALL_METHODS)
    async def generate(request: Request):
        if request.method != "POST":
            return _error("Invalid request method", 405, headers={"Allow": "POST"})

        if not api_key_configured(cfg.api_key):
            logger.error("Gemini API key is not configured; set API_KEY")
            return _error(API_KEY_MISSING_MESSAGE, 500)

        try:
            form = await _parse_form(request, cfg.max_upload_bytes)
        except (ValueError, MultiPartException, StarletteHTTPException) as e:
            logger.warning("Error parsing multipart form: %s", getattr(e, "detail", e))
            return _error("Error: unable to parse form", 400)

        try:
            upload = form.get("file")
            if not isinstance(upload, UploadFile):
                logger.warning("Error retrieving file: no file in field 'file'")
                return _error("Error: unable to retrieve file", 400)

            # chunked bodies carry no Content-Length; the spooled size is checked before reading
            if upload.size is not None and upload.size > cfg.max_upload_bytes:
                logger.warning("Error parsing multipart form: file of %d bytes exceeds %d",
                               upload.size, cfg.max_upload_bytes)
                return _error("Error: unable to parse form", 400)

            try:
                # never hold more than cap + 1 bytes
                contents = await upload.read(cfg.max_upload_bytes + 1)
            except OSError as e:
                logger.error("Unable to read file: %s", e)
                return _error("Error: unable to read file", 500)

            if len(contents) > cfg.max_upload_bytes:
                logger.warning("Error parsing multipart form: file exceeds %d bytes", cfg.max_upload_bytes)
                return _error("Error: unable to parse form", 400)

            prompt = form.get("prompt")
            if not isinstance(prompt, str) or not prompt:
                logger.warning("Rejected request with empty prompt")
                return _error("Error: prompt cannot be empty", 400)
        finally:
            await form.close()

        texts = relay_text(streamer.stream(prompt, contents))

        # Prime the stream: a failure before any text can still become a 500.
        try:
            first = await texts.__anext__()
        except StopAsyncIteration:
            return PlainTextResponse("")
        except GenerationError:
            return _error("Error: unable to generate content", 500)

        return StreamingResponse(_chain(first, texts), media_type="text/plain")

    return router
