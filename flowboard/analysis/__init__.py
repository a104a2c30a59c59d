"""Statistics over uploaded CSV rows."""

from flowboard.analysis.csv_stats import (
    MANAGER_KEYS,
    USER_KEYS,
    UniqueCount,
    find_manager_column,
    row_count,
    rows_without_manager,
    unique_users,
)

__all__ = [
    "MANAGER_KEYS",
    "USER_KEYS",
    "UniqueCount",
    "find_manager_column",
    "row_count",
    "rows_without_manager",
    "unique_users",
]
