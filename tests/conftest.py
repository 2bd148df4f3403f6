import copy
import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

# tests/conftest.py

from event_codegen.stream.transport import Scheduler, StreamHandle, TimerHandle, Transport


SAMPLE_SCHEMA: Dict[str, Any] = {
    "endpoint": "/events/stream",
    "events": [
        {
            "name": "selection",
            "description": "Selection changed",
            "payload": {
                "count": {"type": "number", "description": "Number of selected items"},
                "selectedIds": {"type": "number-list", "description": "Selected item ids"},
            },
        },
        {
            "name": "document",
            "description": "Document lifecycle",
            "payload": {
                "type": {
                    "type": "string",
                    "enum": ["opened", "closed", "activated"],
                    "description": "What happened",
                },
                "documentName": {"type": "string"},
            },
        },
    ],
}


@pytest.fixture
def sample_schema() -> Dict[str, Any]:
    """A fresh copy of the two-event example schema."""
    return copy.deepcopy(SAMPLE_SCHEMA)


@pytest.fixture
def write_schema(tmp_path) -> Callable[..., Path]:
    """
    Write a schema dict as JSON under tmp_path.
    Usage: path = write_schema("base.json", {...})
    """
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    monkeypatch.delenv("EVENT_STREAM_URL", raising=False)
    yield
    from event_codegen.stream import dispose_default_client
    dispose_default_client()


class FakeStream(StreamHandle):
    def __init__(self, url, on_open, on_event, on_lost):
        self.url = url
        self.on_open = on_open
        self.on_event = on_event
        self.on_lost = on_lost
        self.closed = False

    def close(self) -> None:
        self.closed = True

    # helpers used by tests to play the server side
    def open(self):
        self.on_open()

    def emit(self, event_name: str, data: Any):
        self.on_event(event_name, json.dumps(data))

    def lose(self, error=None):
        self.on_lost(error)


class FakeTransport(Transport):
    def __init__(self, fail: bool = False):
        self.streams: List[FakeStream] = []
        self.fail = fail

    def open(self, url, on_open, on_event, on_lost) -> FakeStream:
        if self.fail:
            raise ConnectionError("refused")
        stream = FakeStream(url, on_open, on_event, on_lost)
        self.streams.append(stream)
        return stream

    @property
    def last(self) -> FakeStream:
        return self.streams[-1]


class FakeTimer(TimerHandle):
    def __init__(self, delay_ms, callback):
        self.delay_ms = delay_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler(Scheduler):
    def __init__(self):
        self.timers: List[FakeTimer] = []

    def schedule(self, delay_ms, callback) -> FakeTimer:
        timer = FakeTimer(delay_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def fire(self, timer: FakeTimer = None):
        """Fire a timer the way a real timer would, even if it was cancelled too late."""
        timer = timer or self.timers[-1]
        timer.callback()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
