"""Shared test fixtures for smart_todo tests."""

import os
import tempfile
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from smart_todo.events import EventContext, EventRegistry


@pytest.fixture
def temp_config_file():
    """Create a temporary config file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write('')
        temp_path = Path(f.name)
    yield temp_path
    temp_path.unlink(missing_ok=True)


@pytest.fixture
def registry():
    """Give a test the EventRegistry and restore its bindings afterwards."""
    events = dict(EventRegistry._events)
    aliases = dict(EventRegistry._aliases)
    yield EventRegistry
    EventRegistry._events.clear()
    EventRegistry._events.update(events)
    EventRegistry._aliases.clear()
    EventRegistry._aliases.update(aliases)


@pytest.fixture(autouse=True)
def no_github_tokens(monkeypatch):
    """Keep tokens from the developer's environment out of the tests."""
    for var in list(os.environ):
        if var.startswith("SMART_TODO_GITHUB_TOKEN"):
            monkeypatch.delenv(var)


class RecordingHandler:
    """httpx.MockTransport handler that records requests.

    ``responses`` is consumed in order; the last entry repeats. An entry is
    either an httpx.Response or an exception instance to raise.
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            content=response.content,
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)


def make_context(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> EventContext:
    """Create an EventContext that talks to ``handler`` and never sleeps."""
    http = {"timeout": 1.0, "max_retries": 3, "initial_backoff": 0}
    http.update(kwargs.pop("http", {}))
    return EventContext(transport=httpx.MockTransport(handler), http=http, **kwargs)


def connect_error(message: str = "Connection refused") -> httpx.ConnectError:
    """Create a transport error like the one raised for an unreachable host."""
    return httpx.ConnectError(message)
