from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np
from matplotlib.figure import Figure

from telemplot.core import MountPoint, SyncGroup

logger = logging.getLogger(__name__)

DPI = 100

# series field -> Line2D keyword
_LINE_KEYS = {
    "label": "label",
    "stroke": "color",
    "width": "linewidth",
    "show": "visible",
    "alpha": "alpha",
}


def line_kwargs(descriptor: dict[str, Any]) -> dict[str, Any]:
    """Map a compiled series descriptor onto matplotlib line properties."""
    kwargs: dict[str, Any] = {}
    for key, value in descriptor.items():
        if value is None:
            continue
        target = _LINE_KEYS.get(key)
        if target is None:
            logger.debug("series field %r has no matplotlib equivalent; ignored", key)
            continue
        kwargs[target] = value
    return kwargs


class MatplotlibChart:
    """One chart on its own Figure, with a vertical crosshair that follows the pointer."""

    def __init__(self, figure: Figure, mount: MountPoint, sync: SyncGroup | None = None):
        self.figure = figure
        self.axes = figure.axes[0]
        self.mount = mount
        self.sync = sync
        self.disposed = False
        self.cursor_x: float | None = None

        x0 = self.axes.get_xlim()[0]
        self._crosshair = self.axes.axvline(x0, color="0.4", linewidth=0.8, visible=False)
        self._cids = [
            figure.canvas.mpl_connect("motion_notify_event", self._on_motion),
            figure.canvas.mpl_connect("axes_leave_event", self._on_leave),
        ]
        mount.content = figure

    @property
    def lines(self):
        return [line for line in self.axes.get_lines() if line is not self._crosshair]

    @property
    def crosshair_visible(self) -> bool:
        return self._crosshair.get_visible()

    # ---- pointer events ----
    def _on_motion(self, event) -> None:
        if event.inaxes is not self.axes:
            return
        self.set_cursor(event.xdata)

    def _on_leave(self, event) -> None:
        if event.inaxes is self.axes:
            self.set_cursor(None)

    # ---- ChartHandle ----
    def set_cursor(self, x: float | None) -> None:
        """Move this chart's cursor and mirror it on the rest of its sync group."""
        self._draw_cursor(x)
        if self.sync is not None:
            self.sync.publish(self, x)

    def mirror_cursor(self, x: float | None) -> None:
        self._draw_cursor(x)

    def _draw_cursor(self, x: float | None) -> None:
        if self.disposed:
            return
        self.cursor_x = x
        if x is None:
            self._crosshair.set_visible(False)
        else:
            self._crosshair.set_xdata([x, x])
            self._crosshair.set_visible(True)
        self.figure.canvas.draw_idle()

    def dispose(self) -> None:
        if self.disposed:
            return
        for cid in self._cids:
            self.figure.canvas.mpl_disconnect(cid)
        self._cids = []
        if self.sync is not None:
            self.sync.leave(self)
        if self.mount.content is self.figure:
            self.mount.content = None
        self.figure.clear()
        self.disposed = True


class MatplotlibRenderer:
    """Rendering collaborator drawing each chart as a matplotlib Figure.

    The first column is the x axis; every other column becomes one line.
    Empty slots (unresolved inputs) are skipped. When the x column itself
    is missing the sample index is used instead.
    """

    def __init__(self, dpi: int = DPI):
        self.dpi = dpi

    def construct(
        self,
        options: dict[str, Any],
        data: Sequence[np.ndarray | None],
        mount: MountPoint,
        *,
        sync: SyncGroup | None = None,
    ) -> MatplotlibChart:
        width = float(options["width"])
        height = float(options["height"])
        if width <= 0 or height <= 0:
            raise ValueError(f"chart size must be positive, got {width}x{height}")

        figure = Figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        axes = figure.add_subplot()
        if options.get("title"):
            axes.set_title(options["title"])

        series = list(options.get("series") or [])
        x = data[0] if data else None
        if series and series[0] is not None and series[0].get("label"):
            axes.set_xlabel(series[0]["label"])

        for column, descriptor in list(zip(data, series))[1:]:
            if column is None or descriptor is None:
                continue
            xs = x if x is not None and len(x) == len(column) else np.arange(len(column))
            axes.plot(xs, column, **line_kwargs(descriptor))

        if any(line.get_label() and not line.get_label().startswith("_") for line in axes.get_lines()):
            axes.legend(loc="upper right")
        axes.grid(True, alpha=0.3)

        return MatplotlibChart(figure, mount, sync)
