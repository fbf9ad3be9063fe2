# telemplot/io/__init__.py
"""Parsing collaborators: CSV (stdlib csv) and MDF (asammdf) sources -> ParseResult."""

from .parsed import ParseMeta, ParseResult, Parser
from .csv_parser import parse_csv, source_name
from .mdf_reader import AsammdfTableReader, parse_mdf
from .load import load_dataset, load_source

__all__ = [
    "ParseMeta",
    "ParseResult",
    "Parser",
    "parse_csv",
    "parse_mdf",
    "source_name",
    "AsammdfTableReader",
    "load_source",
    "load_dataset",
]
