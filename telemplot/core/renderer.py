# telemplot/core/renderer.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Protocol, Sequence, runtime_checkable

import numpy as np

from .exceptions import MountPointMissing
from .sync import SyncGroup


def mount_id(position: int) -> str:
    """Mount points are keyed by list position, not by spec identity."""
    return f"plot-{position}"


@dataclass(slots=True)
class MountPoint:
    """A slot on the screen a chart is drawn into; `content` is set by the renderer."""
    id: str
    content: Any = field(default=None, repr=False)


class MountSurface:
    """
    The screen area holding one mount point per visualization.

    `layout(n)` replaces the slots with plot-0 .. plot-(n-1), the same way
    the page re-renders its containers whenever the visualization list
    changes.
    """

    def __init__(self, ids: Sequence[str] = ()) -> None:
        self._points: dict[str, MountPoint] = {i: MountPoint(i) for i in ids}

    def __iter__(self) -> Iterator[str]:
        return iter(self._points)

    def __getitem__(self, mount: str) -> MountPoint:
        try:
            return self._points[mount]
        except KeyError as e:
            raise MountPointMissing(mount) from e

    def layout(self, count: int) -> None:
        kept = {}
        for position in range(count):
            key = mount_id(position)
            kept[key] = self._points.get(key) or MountPoint(key)
        self._points = kept


@runtime_checkable
class ChartHandle(Protocol):
    """Live chart instance bound to one mount point and one compiled snapshot."""

    def dispose(self) -> None: ...

    def set_cursor(self, x: float | None) -> None: ...

    def mirror_cursor(self, x: float | None) -> None: ...


class Renderer(Protocol):
    """Rendering collaborator: turns options + columns into a chart on a mount point."""

    def construct(
        self,
        options: dict[str, Any],
        data: Sequence[np.ndarray | None],
        mount: MountPoint,
        *,
        sync: SyncGroup | None = None,
    ) -> ChartHandle:
        ...
