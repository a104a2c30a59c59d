"""Utility functions for flowboard."""

from flowboard.utils.csv_parser import parse_csv, split_csv_line
from flowboard.utils.identifiers import (
    IdGenerator,
    generate_record_id,
    generate_session_id,
    local_clock,
    utc_timestamp,
)

__all__ = [
    "IdGenerator",
    "generate_record_id",
    "generate_session_id",
    "local_clock",
    "parse_csv",
    "split_csv_line",
    "utc_timestamp",
]
