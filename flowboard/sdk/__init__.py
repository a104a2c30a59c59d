"""Surfaces the UI collaborator talks to: canvas, keyboard and chat client."""

from flowboard.sdk.canvas import (
    DRAG_MIME_TYPE,
    Canvas,
    Connection,
    DragPayload,
    DropEvent,
    identity_projection,
)
from flowboard.sdk.chat_client import ChatClient
from flowboard.sdk.keyboard import KeyEvent, handle_key

__all__ = [
    "Canvas",
    "ChatClient",
    "Connection",
    "DRAG_MIME_TYPE",
    "DragPayload",
    "DropEvent",
    "KeyEvent",
    "handle_key",
    "identity_projection",
]
