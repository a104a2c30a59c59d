"""In-memory stores backing one session."""

from flowboard.store.graph_store import GraphStore
from flowboard.store.history import HistoryManager
from flowboard.store.output_log import OutputLog
from flowboard.store.runtime_store import RuntimeStore

__all__ = [
    "GraphStore",
    "HistoryManager",
    "OutputLog",
    "RuntimeStore",
]
