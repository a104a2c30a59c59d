"""Enumerations shared by the graph models."""

from enum import Enum


class NodeKind(str, Enum):
    """Closed set of node kinds; each maps to at most one runner."""

    start = "start"
    upload = "upload"
    script = "script"
    ai = "ai"
    analysis = "analysis"
    check = "check"
    cloud = "cloud"
    nlp = "nlp"
    db = "db"
    editable = "editable"
    generic = "generic"

    @classmethod
    def _missing_(cls, value):
        # anything unrecognised renders and runs as a generic node
        return cls.generic


class NodeStatus(str, Enum):
    """Execution status of a node, written by the execution engine."""

    idle = "idle"
    running = "running"
    success = "success"
    error = "error"
