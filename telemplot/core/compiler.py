# telemplot/core/compiler.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .dataset import DatasetRegistry
from .exceptions import DatasetNotFound
from .resolver import resolve, to_number
from .visualization import VisualizationSpec


@dataclass(frozen=True, slots=True)
class CompiledChart:
    """
    Renderer-ready form of one VisualizationSpec.

    `data[i]` and `options["series"][i]` belong to `spec.inputs[i]`; an input
    whose reference could not be resolved leaves None in both slots.
    """
    options: dict[str, Any]
    data: list[np.ndarray | None] = field(repr=False)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def n_series(self) -> int:
        return sum(1 for column in self.data if column is not None)


def _normalized_width(width, device_pixel_ratio: float) -> float | None:
    # unset, zero and non-numeric widths all fall back to the renderer default
    value = to_number(width) if width else math.nan
    if math.isnan(value) or value == 0:
        return None
    return value / device_pixel_ratio


def compile_series(spec: VisualizationSpec, registry: DatasetRegistry, *, device_pixel_ratio: float = 1.0):
    """Resolve every input of `spec`; returns (data, series, errors)."""
    data: list[np.ndarray | None] = []
    series: list[dict[str, Any] | None] = []
    errors: list[str] = []

    for item in spec.inputs:
        try:
            column = resolve(item.data, registry)
        except DatasetNotFound as e:
            errors.append(str(e))
            data.append(None)
            series.append(None)
            continue

        descriptor = item.series_fields()
        # keep stroke thickness constant across pixel densities
        descriptor["width"] = _normalized_width(item.width, device_pixel_ratio)
        data.append(column)
        series.append(descriptor)

    return data, series, errors


def compile_visualization(
    spec: VisualizationSpec,
    registry: DatasetRegistry,
    *,
    device_pixel_ratio: float = 1.0,
) -> CompiledChart:
    """Pure: same spec + registry always give the same chart definition."""
    data, series, errors = compile_series(spec, registry, device_pixel_ratio=device_pixel_ratio)

    options: dict[str, Any] = {
        "title": spec.title,
        "height": spec.height,
        # x is a plain linear axis, never implicit calendar time
        "scales": {"x": {"time": False}},
        "series": series,
    }
    if spec.cursor is not None:
        options["cursor"] = spec.cursor

    return CompiledChart(options=options, data=data, errors=errors)
