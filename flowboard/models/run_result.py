"""Result and trace models for node runs."""

from typing import Any

from pydantic import BaseModel


class RunResult(BaseModel):
    """Outcome of one runner invocation, rendered in the node output box."""

    ok: bool
    msg: str
    data: Any = None


class CsvMeta(BaseModel):
    """Name and size of the most recently uploaded CSV file."""

    name: str
    size: int


class RunRecord(BaseModel):
    """A structured record of one node run, appended to the run sink."""

    model_config = {"extra": "forbid"}

    record_id: str  # UUID for deduping
    session_id: str
    timestamp: str
    sequence: int  # monotonic ordering within the session

    node_id: str
    kind: str
    label: str
    op: str | None = None

    ok: bool
    msg: str
    data: Any = None
