"""
Shared fixtures: a fake streaming client in place of Gemini, settings pointing at
temporary directories, and a TestClient factory.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from genproxy.core.settings import Settings
from genproxy.llm.schema import (
    Candidate, Content, EndOfStream, GenerationChunk, NextChunk, Part, StreamError,
)
from genproxy.llm.streamer import ContentStreamer
from genproxy.main import create_app

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


def text_chunk(*texts):
    return GenerationChunk(candidates=[
        Candidate(content=Content(role="model", parts=[Part(text=t) for t in texts]))
    ])


class FakeStreamer(ContentStreamer):
    """Replays a fixed list of events and records what was consumed."""

    provider_name = "fake"

    def __init__(self, events):
        self.events = list(events)
        self.calls = []
        self.consumed = 0

    async def stream(self, prompt, image):
        self.calls.append((prompt, image))
        for event in self.events:
            self.consumed += 1
            yield event


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("API_KEY", "MODEL_NAME", "MAX_UPLOAD_BYTES", "INDEX_FALLTHROUGH", "LOG_LEVEL", "ADDR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def images_dir(tmp_path):
    d = tmp_path / "images"
    d.mkdir()
    return d


@pytest.fixture
def make_settings(images_dir):
    def _make(**overrides):
        values = {
            "api_key": "test-key",
            "static_dir": STATIC_DIR,
            "images_dir": images_dir,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def make_streamer():
    def _make(*texts, fail_after=None, trailing=()):
        """
        One chunk per text. fail_after=n emits a StreamError after the first n chunks,
        followed by `trailing` texts that must never be consumed.
        """
        events = [NextChunk(text_chunk(t)) for t in texts[:fail_after]]
        if fail_after is not None:
            events.append(StreamError(RuntimeError("upstream exploded")))
            events.extend(NextChunk(text_chunk(t)) for t in trailing)
        else:
            events.append(EndOfStream())
        return FakeStreamer(events)
    return _make


@pytest.fixture
def make_client(make_settings, make_streamer):
    def _make(streamer=None, raise_server_exceptions=True, **overrides):
        cfg = make_settings(**overrides)
        app = create_app(cfg, streamer or make_streamer("ok"))
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)
    return _make
