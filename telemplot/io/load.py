from __future__ import annotations

import os
from pathlib import Path
from typing import IO, Any

from telemplot.core import Dataset

from .csv_parser import parse_csv, source_name
from .mdf_reader import parse_mdf
from .parsed import ParseResult

MDF_SUFFIXES = frozenset({".mf4", ".mdf", ".dat"})


def load_source(
    source: str | os.PathLike | IO[Any],
    *,
    header: bool = True,
    skip_empty_lines: bool = True,
) -> ParseResult:
    """Dispatch a source to the MDF or CSV parser by file suffix."""
    name = source_name(source) or ""
    if Path(name).suffix.lower() in MDF_SUFFIXES and isinstance(source, (str, os.PathLike)):
        return parse_mdf(source, header=header, skip_empty_lines=skip_empty_lines)
    return parse_csv(source, header=header, skip_empty_lines=skip_empty_lines)


def load_dataset(source: str | os.PathLike | IO[Any]) -> Dataset:
    """Parse a source straight into a Dataset (row errors kept on the dataset)."""
    return load_source(source).to_dataset(source_name(source))
