# telemplot/core/visualization.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .exceptions import InvalidVisualization

_INPUT_KEYS = ("label", "data", "stroke", "width")
_VISUALIZATION_KEYS = ("title", "height", "cursor", "inputs")


@dataclass(frozen=True, slots=True)
class InputSpec:
    """
    One series of a chart.

    `data` is the PathRef string. It is kept as the configuration holds it
    (None when absent); a missing or non-string reference is reported when
    the chart is compiled. `label`, `stroke` and `width` are the common
    style fields; everything else the configuration carries for the
    renderer lives in `style` and is forwarded untouched.
    """
    data: Any = None
    label: str | None = None
    stroke: str | None = None
    width: float | None = None
    style: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.style is None:
            object.__setattr__(self, "style", {})
        elif not isinstance(self.style, dict):
            raise InvalidVisualization("InputSpec.style must be a dict.")
        clash = set(self.style) & set(_INPUT_KEYS)
        if clash:
            raise InvalidVisualization(
                f"InputSpec.style must not repeat explicit fields: {sorted(clash)}"
            )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "InputSpec":
        if not isinstance(raw, Mapping):
            raise InvalidVisualization("Each input must be an object.")
        return cls(
            data=raw.get("data"),
            label=raw.get("label"),
            stroke=raw.get("stroke"),
            width=raw.get("width"),
            style={k: v for k, v in raw.items() if k not in _INPUT_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.label is not None:
            out["label"] = self.label
        if self.stroke is not None:
            out["stroke"] = self.stroke
        if self.width is not None:
            out["width"] = self.width
        out.update(self.style)
        if self.data is not None:
            out["data"] = self.data
        return out

    def series_fields(self) -> dict[str, Any]:
        """Every field except `data` (what the renderer sees for this series)."""
        out = self.to_dict()
        out.pop("data", None)
        return out


@dataclass(frozen=True, slots=True)
class VisualizationSpec:
    """
    Declarative description of one chart.

    `cursor` is kept verbatim; charts whose `cursor.sync.key` match share a
    cursor. Unknown top-level keys are kept in `extras`.
    """
    title: str | None = None
    height: float | None = None
    cursor: dict[str, Any] | None = None
    inputs: Sequence[InputSpec] = field(default_factory=tuple)
    extras: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.cursor is not None and not isinstance(self.cursor, dict):
            raise InvalidVisualization("VisualizationSpec.cursor must be a dict or None.")
        if isinstance(self.inputs, (str, bytes)):
            raise InvalidVisualization("VisualizationSpec.inputs must be a sequence of InputSpec.")

        inputs = tuple(self.inputs)
        for item in inputs:
            if not isinstance(item, InputSpec):
                raise InvalidVisualization("VisualizationSpec.inputs entries must be InputSpec instances.")
        object.__setattr__(self, "inputs", inputs)

        if self.extras is None:
            object.__setattr__(self, "extras", {})
        elif not isinstance(self.extras, dict):
            raise InvalidVisualization("VisualizationSpec.extras must be a dict.")

    @property
    def sync_key(self) -> Any | None:
        if not self.cursor:
            return None
        sync = self.cursor.get("sync")
        if not isinstance(sync, Mapping):
            return None
        return sync.get("key")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "VisualizationSpec":
        if not isinstance(raw, Mapping):
            raise InvalidVisualization("Each visualization must be an object.")
        inputs = raw.get("inputs", [])
        if not isinstance(inputs, list):
            raise InvalidVisualization("'inputs' must be a list of objects.")
        cursor = raw.get("cursor")
        if cursor is not None and not isinstance(cursor, dict):
            raise InvalidVisualization("'cursor' must be an object.")
        return cls(
            title=raw.get("title"),
            height=raw.get("height"),
            cursor=cursor,
            inputs=tuple(InputSpec.from_dict(item) for item in inputs),
            extras={k: v for k, v in raw.items() if k not in _VISUALIZATION_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.title is not None:
            out["title"] = self.title
        if self.height is not None:
            out["height"] = self.height
        if self.cursor is not None:
            out["cursor"] = self.cursor
        out.update(self.extras)
        out["inputs"] = [item.to_dict() for item in self.inputs]
        return out


def default_visualizations() -> list[VisualizationSpec]:
    """Steering and speed charts for a vehicle output log, sharing one cursor."""
    cursor = {"sync": {"key": "moo"}}
    return [
        VisualizationSpec(
            title="Steering",
            height=300,
            cursor=dict(cursor, sync=dict(cursor["sync"])),
            inputs=(
                InputSpec(label="time (s)", data="0.TimeOfUpdate"),
                InputSpec(
                    label="Steering Wheel Angle (rad)",
                    stroke="red",
                    width=1,
                    data="0.SteeringWheelAngle",
                ),
            ),
        ),
        VisualizationSpec(
            title="Speed (in vehicle frame)",
            height=300,
            cursor=dict(cursor, sync=dict(cursor["sync"])),
            inputs=(
                InputSpec(label="time (s)", data="0.TimeOfUpdate"),
                InputSpec(label="cdgSpeed_x (m/s)", stroke="blue", width=1, data="0.cdgSpeed_x"),
                InputSpec(label="cdgSpeed_y (m/s)", stroke="green", width=1, data="0.cdgSpeed_y"),
            ),
        ),
    ]
