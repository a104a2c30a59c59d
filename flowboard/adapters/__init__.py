"""Adapters between flowboard's core and its collaborators."""

from flowboard.adapters.event_bus import EventBus, NodeCallbacks
from flowboard.adapters.files import FileHandle, InMemoryFile, LocalFile
from flowboard.adapters.sinks import FileSink, ListSink, RunRecorder, RunSink

__all__ = [
    "EventBus",
    "FileHandle",
    "FileSink",
    "InMemoryFile",
    "ListSink",
    "LocalFile",
    "NodeCallbacks",
    "RunRecorder",
    "RunSink",
]
