from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from telemplot.core import Dataset, RowError


@dataclass
class ParseMeta:
    fields: list[str] = field(default_factory=list)


@dataclass
class ParseResult:
    """
    Output of a parsing collaborator for one source.

    data:   rows as {header: cell}
    errors: row-level problems; a non-empty list does not void `data`
    meta:   header names in file order
    """

    data: list[dict[str, Any]] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
    meta: ParseMeta = field(default_factory=ParseMeta)

    def to_dataset(self, source_name: str | None) -> Dataset:
        return Dataset(
            source_name=source_name,
            columns=self.meta.fields,
            rows=self.data,
            parse_errors=self.errors,
        )


class Parser(Protocol):
    """Protocol for parsing collaborators (CSV, MDF, ...)."""

    def __call__(
        self,
        source: Any,
        *,
        header: bool = True,
        skip_empty_lines: bool = True,
    ) -> ParseResult:
        ...
