# telemplot/core/config.py
from __future__ import annotations

import json
from typing import Iterable

from .exceptions import ConfigParseError, ConfigShapeError, InvalidVisualization
from .visualization import VisualizationSpec

INDENT = 4


def to_document(visualizations: Iterable[VisualizationSpec]) -> dict:
    return {"visualizations": [spec.to_dict() for spec in visualizations]}


def serialize(visualizations: Iterable[VisualizationSpec]) -> str:
    """Pretty-printed JSON text of the visualization list (what the user copies)."""
    return json.dumps(to_document(visualizations), indent=INDENT, ensure_ascii=False)


def deserialize(text: str | None) -> list[VisualizationSpec]:
    """
    Parse configuration text back into visualization specs.

    Raises ConfigParseError for empty or non-JSON text and ConfigShapeError
    when the structure is not `{"visualizations": [ {...}, ... ]}`. Field
    values are not checked beyond what compiling needs.
    """
    if not text or not text.strip():
        raise ConfigParseError("Invalid config!")
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Error applying config: {e}") from e

    if not isinstance(document, dict):
        raise ConfigShapeError("Error applying config: the document must be a JSON object.")
    if "visualizations" not in document:
        raise ConfigShapeError("Error applying config: missing 'visualizations' field.")
    raw = document["visualizations"]
    if not isinstance(raw, list):
        raise ConfigShapeError("Error applying config: 'visualizations' must be a list.")

    specs: list[VisualizationSpec] = []
    for position, item in enumerate(raw):
        try:
            specs.append(VisualizationSpec.from_dict(item))
        except InvalidVisualization as e:
            raise ConfigShapeError(f"Error applying config: visualization {position}: {e}") from e
    return specs
