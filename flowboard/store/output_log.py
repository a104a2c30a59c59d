"""Bounded, append-only execution trace shown in the output panel."""

from collections import deque
from collections.abc import Callable, Iterator

from flowboard.utils.identifiers import local_clock

DEFAULT_CAPACITY = 200


class OutputLog:
    """Keeps the most recent lines, discarding the oldest first."""

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        clock: Callable[[], str] = local_clock,
    ) -> None:
        self._lines: deque[str] = deque(maxlen=capacity)
        self._clock = clock

    def append(self, line: str) -> str:
        entry = f"[{self._clock()}] {line}"
        self._lines.append(entry)
        return entry

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._lines))

    def __len__(self) -> int:
        return len(self._lines)
