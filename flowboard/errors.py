"""Exceptions raised by flowboard outside the node execution path.

Node runs never raise; they report failures through RunResult instead.
"""


class FlowboardError(Exception):
    """Base exception for flowboard."""
    pass


class NodeNotFoundError(FlowboardError, KeyError):
    """Raised when a store mutation targets a node id that does not exist."""

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Node not found: {self.node_id}"


class DropPayloadError(FlowboardError, ValueError):
    """Raised when a drag-and-drop payload cannot be turned into a node."""
    pass


class ChatClientError(FlowboardError):
    """Exception raised when the chat endpoint cannot produce a reply."""
    pass
