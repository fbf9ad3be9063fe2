# telemplot/core/lifecycle.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .compiler import CompiledChart, compile_visualization
from .dataset import DatasetRegistry
from .errors import ErrorSink
from .exceptions import MountPointMissing
from .renderer import ChartHandle, MountSurface, Renderer, mount_id
from .settings import Settings
from .sync import SyncHub
from .visualization import VisualizationSpec

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Generation:
    """All chart handles produced by one rebuild; superseded as a whole."""
    number: int
    handles: dict[str, ChartHandle] = field(default_factory=dict)
    hub: SyncHub = field(default_factory=SyncHub)

    def __len__(self) -> int:
        return len(self.handles)


class ChartLifecycleManager:
    """
    Owns every ChartHandle.

    `rebuild` disposes the previous generation, compiles every spec in list
    order and mounts one handle per spec whose mount point exists. There is
    no diffing: the whole list is rebuilt on each call.
    """

    def __init__(
        self,
        renderer: Renderer,
        surface: MountSurface,
        sink: ErrorSink,
        settings: Settings | None = None,
    ) -> None:
        self._renderer = renderer
        self._surface = surface
        self._sink = sink
        self._settings = settings or Settings()
        self._generation: Generation | None = None
        self._count = 0

    @property
    def generation(self) -> Generation | None:
        return self._generation

    @property
    def handles(self) -> list[ChartHandle]:
        return [] if self._generation is None else list(self._generation.handles.values())

    def rebuild(
        self,
        registry: DatasetRegistry,
        visualizations: Sequence[VisualizationSpec],
    ) -> Generation:
        self.teardown()

        self._count += 1
        generation = Generation(number=self._count)
        # current before mounting, so a pass that stops early is still torn down
        self._generation = generation
        logger.debug(
            "render pass %d: %d visualization(s), %d dataset(s)",
            generation.number, len(visualizations), len(registry),
        )

        for position, spec in enumerate(visualizations):
            compiled = compile_visualization(
                spec, registry, device_pixel_ratio=self._settings.device_pixel_ratio
            )
            self._sink.extend(compiled.errors)

            key = mount_id(position)
            handle = self._mount(key, spec, compiled, generation.hub)
            if handle is not None:
                generation.handles[key] = handle

        return generation

    def teardown(self) -> None:
        """Dispose the current generation (if any)."""
        generation, self._generation = self._generation, None
        if generation is None:
            return
        for key, handle in generation.handles.items():
            try:
                handle.dispose()
            except Exception as e:
                logger.exception("failed to dispose chart %s", key)
                self._sink.append(f"Unable to dispose {key}: {e}")
                continue
            logger.debug("disposed chart %s (generation %d)", key, generation.number)

    def _mount(
        self,
        key: str,
        spec: VisualizationSpec,
        compiled: CompiledChart,
        hub: SyncHub,
    ) -> ChartHandle | None:
        try:
            mount = self._surface[key]
        except MountPointMissing as e:
            self._sink.append(e)
            return None

        options = dict(compiled.options)
        # measured once; not updated on resize
        options["width"] = self._settings.viewport_width
        if options.get("height") is None:
            options["height"] = self._settings.default_height

        sync_key = spec.sync_key
        group = hub.group(sync_key) if sync_key is not None else None

        try:
            handle = self._renderer.construct(options, compiled.data, mount, sync=group)
        except (ValueError, TypeError) as e:
            self._sink.append(f"Unable to render {key}: {e}")
            return None

        if group is not None:
            group.join(handle)
        return handle
