"""File handles accepted by the upload topic."""

import asyncio
from pathlib import Path
from typing import Protocol


class FileHandle(Protocol):
    """A user-selected file whose full text can be read."""

    name: str
    size: int

    async def read_text(self) -> str:
        ...


class InMemoryFile:
    """File contents already held in memory (e.g. an HTTP upload body)."""

    def __init__(self, name: str, data: bytes | str) -> None:
        self.name = name
        self._data = data.encode("utf-8") if isinstance(data, str) else data
        self.size = len(self._data)

    async def read_text(self) -> str:
        return self._data.decode("utf-8-sig", errors="replace")


class LocalFile:
    """A file on the local filesystem, read off the event loop."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.name = self.path.name
        self.size = self.path.stat().st_size

    async def read_text(self) -> str:
        return await asyncio.to_thread(
            self.path.read_text, encoding="utf-8-sig", errors="replace"
        )
