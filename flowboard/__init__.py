"""Flowboard - execution and state core for a visual node-graph workflow builder."""

from flowboard.adapters.event_bus import EventBus, NodeCallbacks
from flowboard.adapters.files import InMemoryFile, LocalFile
from flowboard.config import Settings, load_settings
from flowboard.engine.executor import ExecutionEngine
from flowboard.errors import (
    ChatClientError,
    DropPayloadError,
    FlowboardError,
    NodeNotFoundError,
)
from flowboard.models import (
    Edge,
    GraphSnapshot,
    Node,
    NodeKind,
    NodeStatus,
    Position,
    RunResult,
    Topic,
)
from flowboard.session import Session
from flowboard.utils.csv_parser import parse_csv

__all__ = [
    # graph models
    "Edge",
    "GraphSnapshot",
    "Node",
    "NodeKind",
    "NodeStatus",
    "Position",
    "RunResult",
    "Topic",
    # runtime
    "EventBus",
    "ExecutionEngine",
    "NodeCallbacks",
    "Session",
    "InMemoryFile",
    "LocalFile",
    "parse_csv",
    # config
    "Settings",
    "load_settings",
    # errors
    "ChatClientError",
    "DropPayloadError",
    "FlowboardError",
    "NodeNotFoundError",
]
