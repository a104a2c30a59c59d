"""Minimal CSV reader used to feed analysis and check nodes.

Not a general CSV dialect: one record per line, double quotes group commas,
and a backslash before a quote makes it a literal quote.
"""

import re

_WRAPPED = re.compile(r'^"(.*)"$', re.DOTALL)


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line into cleaned field values."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for i, ch in enumerate(line):
        if ch == '"' and (i == 0 or line[i - 1] != "\\"):
            in_quotes = not in_quotes
            continue
        if ch == "," and not in_quotes:
            fields.append("".join(current))
            current = []
            continue
        current.append(ch)
    fields.append("".join(current))

    return [_clean_field(field) for field in fields]


def _clean_field(value: str) -> str:
    value = value.strip().replace('\\"', '"')
    return _WRAPPED.sub(r"\1", value)


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into a list of records keyed by the header row.

    Blank lines are skipped. Short rows are padded with empty strings and
    extra cells are dropped. Text with no non-blank lines yields an empty list.
    """
    lines = [line for line in text.replace("\r", "").split("\n") if line.strip()]
    if not lines:
        return []

    headers = split_csv_line(lines[0])
    rows: list[dict[str, str]] = []
    for line in lines[1:]:
        cells = split_csv_line(line)
        rows.append(
            {
                header: cells[idx] if idx < len(cells) else ""
                for idx, header in enumerate(headers)
            }
        )
    return rows
