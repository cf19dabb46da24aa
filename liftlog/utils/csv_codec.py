"""Minimal CSV codec for plan import/export.

Fields containing a comma, quote, CR or LF are quoted with embedded quotes
doubled. Every record, including the last, ends with "\\n". Decoding accepts
"\\n", "\\r\\n" and bare "\\r" line endings, inside or outside quoted fields.
"""

import csv
import io
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

_NEEDS_QUOTES = frozenset(',"\r\n')


def _cell(value: Any) -> str:
    text = "" if value is None else str(value)
    if any(ch in _NEEDS_QUOTES for ch in text):
        return '"' + text.replace('"', '""') + '"'
    return text


def _record(values: Iterable[Any]) -> str:
    return ",".join(_cell(value) for value in values) + "\n"


def encode(headers: Sequence[str], rows: Iterable[Mapping[str, Any] | Sequence[Any]]) -> str:
    """Encode a header row and data rows as CSV text.

    Rows may be mappings (looked up by header, missing keys become empty) or
    positional sequences.
    """
    # csv.writer only quotes a bare CR on some interpreter versions
    lines = [_record(headers)]
    for row in rows:
        if isinstance(row, Mapping):
            lines.append(_record(row.get(h) for h in headers))
        else:
            lines.append(_record(row))
    return "".join(lines)


def decode(text: str) -> tuple[list[str], list[list[str]]]:
    """Decode CSV text into (headers, rows).

    Returns:
        The first record as headers and the remaining records as rows. Empty
        text decodes to no headers and no rows.
    """
    # newline="" keeps line endings inside quoted fields intact. A blank line
    # is a record holding one empty field.
    records = [record or [""] for record in csv.reader(io.StringIO(text, newline=""))]
    if not records:
        return [], []
    return records[0], records[1:]
