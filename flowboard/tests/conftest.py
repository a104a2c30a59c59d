"""Shared fixtures for flowboard tests."""

import random

import httpx
import pytest

from flowboard.adapters.sinks import ListSink
from flowboard.config import Settings
from flowboard.sdk.chat_client import ChatClient
from flowboard.session import Session

USERS_CSV = (
    "user,manager\n"
    "alice,bob\n"
    "bob,\n"
    "carol,null\n"
    "dave,bob\n"
    "erin,carol\n"
)


def make_chat(reply: str | None = None, status_code: int = 200) -> ChatClient:
    """A ChatClient wired to an in-process transport instead of the network."""

    def handler(request: httpx.Request) -> httpx.Response:
        if reply is None:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(status_code, json={"reply": reply})

    return ChatClient("http://chat.test/api/chat", transport=httpx.MockTransport(handler))


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def sink():
    return ListSink()


@pytest.fixture
def session(settings, sink):
    """A session whose chat endpoint is unreachable."""
    return Session(
        settings=settings,
        session_id="test-session",
        chat=make_chat(reply=None),
        sink=sink,
        rng=random.Random(0),
    )


@pytest.fixture
def chat_factory():
    """Build chat clients with a canned reply, or unreachable when reply is None."""
    return make_chat
