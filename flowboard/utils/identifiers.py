"""ID generation and timestamp utilities."""

import itertools
import uuid
from datetime import datetime, timezone


class IdGenerator:
    """Monotonic id source for one session.

    Ids are never reused, even after the node or edge they named is deleted.
    """

    def __init__(self, prefix: str = "node", start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"


def generate_session_id() -> str:
    """Generate a unique session ID (UUID4)."""
    return str(uuid.uuid4())


def generate_record_id() -> str:
    """Generate a unique run record ID (UUID4)."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()


def local_clock() -> str:
    """Wall-clock time of day used to stamp output log lines."""
    return datetime.now().strftime("%H:%M:%S")
