"""Helper functions that compute basic statistics over parsed CSV rows.

Used by the analysis and check runners. Rows are the records produced by
flowboard.utils.csv_parser.parse_csv.
"""

from dataclasses import dataclass
from typing import Any

USER_KEYS = ("user", "username", "email", "id")
MANAGER_KEYS = ("manager", "manager_id", "manager_email", "managerName", "managerId")
MISSING_VALUES = {"", "null", "undefined"}


@dataclass
class UniqueCount:
    """Distinct-value count for the column chosen as the user key."""

    key: Any  # a column name, or the row key-set when no user column exists
    value: int

    @property
    def key_label(self) -> str:
        if isinstance(self.key, list):
            return ",".join(self.key)
        return str(self.key)


def row_count(rows: list[dict[str, str]]) -> int:
    return len(rows)


def unique_users(rows: list[dict[str, str]]) -> UniqueCount:
    """Count distinct values of the first user-identifying column.

    The column is the first of user, username, email, id present in the first
    row. When none is present the key falls back to the key-set of the row
    collection itself (its index strings), and every row is looked up under
    that key-set joined with commas, which normally misses and yields 1.
    """
    if not rows:
        return UniqueCount(key=None, value=0)

    key = next((k for k in USER_KEYS if k in rows[0]), None)
    if key is not None:
        return UniqueCount(key=key, value=len({row.get(key) for row in rows}))

    fallback = [str(i) for i in range(len(rows))]
    lookup = ",".join(fallback)
    return UniqueCount(key=fallback, value=len({row.get(lookup) for row in rows}))


def find_manager_column(rows: list[dict[str, str]]) -> str | None:
    """First manager-identifying column present in the first row."""
    if not rows:
        return None
    columns = rows[0].keys()
    return next((k for k in MANAGER_KEYS if k in columns), None)


def rows_without_manager(rows: list[dict[str, str]]) -> list[dict[str, str]]:
    """Rows whose manager column is empty, "null" or "undefined".

    Returns an empty list when no manager column exists.
    """
    key = find_manager_column(rows)
    if key is None:
        return []
    return [
        row for row in rows if str(row.get(key) or "").strip() in MISSING_VALUES
    ]
