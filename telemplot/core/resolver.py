# telemplot/core/resolver.py
from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any

import numpy as np

from .dataset import Dataset, DatasetRegistry
from .exceptions import DatasetNotFound

_INDEX_RE = re.compile(r"^\d+$")
_PREFIXED_INT_RE = re.compile(r"^0([xob])([0-9a-f]+)$", re.IGNORECASE)
_INFINITY = {"infinity": math.inf, "+infinity": math.inf, "-infinity": -math.inf}


@dataclass(frozen=True, slots=True)
class PathRef:
    """
    Parsed "<datasetIndex>.<columnName>" reference.

    Only the first "." separates the two parts; anything after it is the
    literal column key ("0.a.b" -> dataset "0", column "a.b").
    """
    dataset: str
    column: str

    @classmethod
    def parse(cls, ref: str) -> "PathRef":
        dataset, _, column = ref.partition(".")
        return cls(dataset=dataset, column=column)

    @property
    def index(self) -> int | None:
        """Dataset position, or None when the left part is not a non-negative integer."""
        if not _INDEX_RE.match(self.dataset):
            return None
        return int(self.dataset)

    def __str__(self) -> str:
        return f"{self.dataset}.{self.column}"


def to_number(value: Any) -> float:
    """
    Best-effort numeric coercion of one cell.

    Absent and non-numeric cells give NaN, a blank cell reads as 0;
    nothing raises.
    """
    if value is None:
        return math.nan
    if isinstance(value, (bool, int, float, np.number)):
        return float(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return math.nan

    s = value.strip()
    if not s:
        return 0.0
    if "_" in s:
        return math.nan

    lowered = s.lower()
    if lowered in _INFINITY:
        return _INFINITY[lowered]
    if lowered in {"nan", "+nan", "-nan", "inf", "+inf", "-inf"}:
        # only the spelled-out form is a number literal
        return math.nan

    m = _PREFIXED_INT_RE.match(s)
    if m:
        kind, digits = m.groups()
        base = {"x": 16, "o": 8, "b": 2}[kind.lower()]
        try:
            return float(int(digits, base))
        except ValueError:
            return math.nan

    try:
        return float(s)
    except ValueError:
        return math.nan


def column_values(dataset: Dataset, column: str) -> np.ndarray:
    """Numeric column of `dataset` in row order (length == row count)."""
    return np.fromiter(
        (to_number(row.get(column)) for row in dataset.rows),
        dtype=np.float64,
        count=dataset.n_rows,
    )


def _shown(ref: Any) -> str:
    # how a reference that is not a string reads in error messages
    if ref is None:
        return "undefined"
    return json.dumps(ref, default=str)


def resolve(ref: Any, registry: DatasetRegistry) -> np.ndarray:
    """
    Resolve a PathRef against the registry.

    Raises DatasetNotFound when the dataset part does not index a loaded
    dataset, or when `ref` is not a reference string at all (an input whose
    `data` is missing reads as "undefined"). A column missing on some (or
    all) rows is not an error.
    """
    if not isinstance(ref, (str, PathRef)):
        shown = _shown(ref)
        raise DatasetNotFound(shown, ref=shown)
    path = ref if isinstance(ref, PathRef) else PathRef.parse(ref)
    index = path.index
    if index is None or index not in registry:
        raise DatasetNotFound(path.dataset, ref=str(ref))
    return column_values(registry[index], path.column)
