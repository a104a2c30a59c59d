"""Session-scoped cache written by runners.

Not part of the undo history: undo and redo never roll these values back,
and nothing clears them automatically.
"""

from dataclasses import dataclass
from typing import Any

from flowboard.models.run_result import CsvMeta


@dataclass
class RuntimeStore:
    csv: list[dict[str, str]] | None = None
    csv_meta: CsvMeta | None = None
    last_ai: str | None = None
    last_analysis: dict[str, Any] | None = None

    @property
    def rows(self) -> list[dict[str, str]]:
        return self.csv or []
