# telemplot/core/dataset.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Sequence

from .exceptions import DatasetNotFound, InvalidDataset


@dataclass(frozen=True, slots=True)
class RowError:
    """A row-level problem reported by a parsing collaborator."""
    code: str
    message: str
    row: int | None = None


@dataclass(frozen=True, slots=True)
class Dataset:
    """
    Dataset = one parsed tabular source (header names + ordered rows).

    Design goals:
    - immutable: rows and columns are frozen into tuples on construction
    - lenient: rows may miss columns (they resolve to NaN later)
    - ordered: row order is the sample order drawn by the charts
    """
    source_name: str | None = None
    columns: Sequence[str] = field(default_factory=tuple)
    rows: Sequence[Mapping[str, Any]] = field(default_factory=tuple, repr=False)
    parse_errors: Sequence[RowError] = field(default_factory=tuple, repr=False)

    def __post_init__(self) -> None:
        if self.source_name is not None and not isinstance(self.source_name, str):
            raise InvalidDataset("Dataset.source_name must be a string or None.")
        if isinstance(self.columns, str):
            raise InvalidDataset("Dataset.columns must be a sequence of names, not a string.")

        columns = tuple(self.columns)
        for name in columns:
            if not isinstance(name, str):
                raise InvalidDataset("Dataset.columns entries must be strings.")

        rows = tuple(self.rows)
        for row in rows:
            if not isinstance(row, Mapping):
                raise InvalidDataset("Dataset.rows entries must be mappings (e.g., dict).")

        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "parse_errors", tuple(self.parse_errors))

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        return iter(self.rows)

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def degraded(self) -> bool:
        return bool(self.parse_errors)


@dataclass(frozen=True, slots=True)
class DatasetRegistry:
    """
    Append-only, positionally indexed collection of datasets.

    The position is the addressing key used by PathRefs, so removal and
    reordering are not offered. `append` returns a new registry.
    """
    datasets: Sequence[Dataset] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        datasets = tuple(self.datasets)
        for ds in datasets:
            if not isinstance(ds, Dataset):
                raise InvalidDataset("DatasetRegistry entries must be Dataset instances.")
        object.__setattr__(self, "datasets", datasets)

    def __len__(self) -> int:
        return len(self.datasets)

    def __iter__(self) -> Iterator[Dataset]:
        return iter(self.datasets)

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and 0 <= index < len(self.datasets)

    def __getitem__(self, index: int) -> Dataset:
        if index not in self:
            raise DatasetNotFound(str(index))
        return self.datasets[index]

    def append(self, dataset: Dataset) -> "DatasetRegistry":
        if not isinstance(dataset, Dataset):
            raise InvalidDataset("append() expects a Dataset instance.")
        return DatasetRegistry(datasets=self.datasets + (dataset,))

    # ---- field list (consumed by the UI filter) ----
    def fields(self, index: int) -> list[str]:
        return list(self[index].columns)

    def filter_fields(self, index: int, needle: str = "") -> list[str]:
        """Case-insensitive substring search over the column names of one dataset."""
        needle = needle.lower()
        return [name for name in self.fields(index) if needle in name.lower()]
