"""
CSV parsing collaborator.

Turns one delimited text source into a ``ParseResult``:

- header row -> field names (or "0", "1", ... when ``header=False``)
- delimiter sniffed from the first lines (comma, semicolon, tab, pipe)
- UTF-8 BOM markers dropped
- rows with too few / too many fields are kept and reported as row errors
- empty lines skipped unless ``skip_empty_lines=False``

Cells stay strings; numeric coercion happens when a column is resolved.
"""
from __future__ import annotations

import csv
import io
import logging
import os
from pathlib import Path
from typing import IO, Any, Iterable

from telemplot.core import FileParseError, RowError

from .parsed import ParseMeta, ParseResult

logger = logging.getLogger(__name__)

EXTRA_FIELDS_KEY = "__parsed_extra"
_SNIFF_BYTES = 64 * 1024
_DELIMITERS = ",;\t|"


def source_name(source: Any) -> str | None:
    """Display name of a path or file-like source."""
    if isinstance(source, (str, os.PathLike)):
        return Path(source).name
    name = getattr(source, "name", None)
    return Path(name).name if isinstance(name, str) else None


def _read_text(source: Any) -> str:
    if isinstance(source, (str, os.PathLike)):
        with open(source, "r", encoding="utf-8-sig", newline="") as fh:
            return fh.read()
    raw = source.read()
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8-sig")
    return raw.lstrip("\ufeff")


def _detect_dialect(text: str) -> type[csv.Dialect] | csv.Dialect:
    sample = text[:_SNIFF_BYTES]
    try:
        return csv.Sniffer().sniff(sample, delimiters=_DELIMITERS)
    except csv.Error:
        return csv.excel


def _records(text: str, skip_empty_lines: bool) -> Iterable[list[str]]:
    reader = csv.reader(io.StringIO(text, newline=""), _detect_dialect(text))
    for record in reader:
        if not record:
            if skip_empty_lines:
                continue
            record = [""]
        yield record


def parse_csv(
    source: str | os.PathLike | IO[Any],
    *,
    header: bool = True,
    skip_empty_lines: bool = True,
) -> ParseResult:
    """
    Parse a CSV file path or file-like object.

    Raises FileParseError when the file cannot be read or decoded at all;
    malformed rows only end up in ``ParseResult.errors``.
    """
    name = source_name(source)
    try:
        text = _read_text(source)
        records = list(_records(text, skip_empty_lines))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise FileParseError(name, str(e)) from e

    result = ParseResult()
    if not records:
        return result

    if header:
        fields = records[0]
        body = records[1:]
    else:
        width = max(len(r) for r in records)
        fields = [str(i) for i in range(width)]
        body = records
    result.meta = ParseMeta(fields=list(fields))

    for row_index, record in enumerate(body):
        row: dict[str, Any] = {}
        for key, cell in zip(fields, record):
            row[key] = cell

        if header and len(record) < len(fields):
            result.errors.append(RowError(
                code="TooFewFields",
                message=f"Too few fields: expected {len(fields)} fields but parsed {len(record)}",
                row=row_index,
            ))
        elif header and len(record) > len(fields):
            row[EXTRA_FIELDS_KEY] = record[len(fields):]
            result.errors.append(RowError(
                code="TooManyFields",
                message=f"Too many fields: expected {len(fields)} fields but parsed {len(record)}",
                row=row_index,
            ))
        result.data.append(row)

    logger.debug("parsed %s: %d row(s), %d field(s)", name, len(result.data), len(fields))
    return result
