# telemplot/screen.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, Sequence

from telemplot.core import (
    ChartLifecycleManager,
    ConfigError,
    Dataset,
    DatasetRegistry,
    ErrorSink,
    FileParseError,
    MountSurface,
    NoFilesSelected,
    Renderer,
    RowParseErrors,
    Settings,
    VisualizationSpec,
    default_visualizations,
)
from telemplot.core.config import deserialize, serialize
from telemplot.io.csv_parser import source_name
from telemplot.io.load import load_source
from telemplot.io.parsed import ParseResult

logger = logging.getLogger(__name__)


class ScreenController:
    """
    Owner of the screen state: the dataset registry, the visualization list
    and the error sink.

    State cells are only ever replaced wholesale (append for datasets, full
    replace for visualizations). Every change re-runs the render pass once
    the screen is mounted.
    """

    def __init__(
        self,
        renderer: Renderer,
        *,
        parser: Callable[..., Any] | None = None,
        settings: Settings | None = None,
        visualizations: Sequence[VisualizationSpec] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._parser = parser or load_source
        self._sink = ErrorSink()
        self._surface = MountSurface()
        self._lifecycle = ChartLifecycleManager(renderer, self._surface, self._sink, self.settings)

        self._registry = DatasetRegistry()
        self._visualizations: tuple[VisualizationSpec, ...] = tuple(
            default_visualizations() if visualizations is None else visualizations
        )
        self._mounted = False

    # ---- read-only views ----
    @property
    def datasets(self) -> DatasetRegistry:
        return self._registry

    @property
    def visualizations(self) -> tuple[VisualizationSpec, ...]:
        return self._visualizations

    @property
    def errors(self) -> tuple[str, ...]:
        return self._sink.messages

    @property
    def surface(self) -> MountSurface:
        return self._surface

    @property
    def lifecycle(self) -> ChartLifecycleManager:
        return self._lifecycle

    @property
    def raw_config(self) -> str:
        return serialize(self._visualizations)

    def dataset_summaries(self) -> list[tuple[int, str | None]]:
        return [(i, ds.source_name) for i, ds in enumerate(self._registry)]

    def dataset_fields(self, index: int, needle: str = "") -> list[str]:
        return self._registry.filter_fields(index, needle)

    # ---- screen lifetime ----
    def mount(self) -> None:
        self._mounted = True
        self._surface.layout(len(self._visualizations))
        self._render()

    def unmount(self) -> None:
        self._mounted = False
        self._lifecycle.teardown()

    # ---- user operations ----
    async def add_datasets(self, sources: Iterable[Any] | None) -> None:
        """
        Parse every source concurrently; each dataset is appended (and the
        charts re-rendered) as soon as its own parse completes.
        """
        self._sink.clear()
        sources = list(sources or ())
        if not sources:
            self._sink.append(NoFilesSelected())
            return

        pending = [asyncio.ensure_future(self._parse(source)) for source in sources]
        for next_done in asyncio.as_completed(pending):
            try:
                name, result = await next_done
            except FileParseError as e:
                logger.error("error parsing %s: %s", e.source_name, e.reason)
                self._sink.append(e)
                continue
            self._on_parsed(name, result)

    def apply_config(self, text: str | None) -> bool:
        """Replace the visualization list from JSON text; False (state kept) on failure."""
        self._sink.clear()
        try:
            specs = deserialize(text)
        except ConfigError as e:
            logger.error("error applying config: %s", e)
            self._sink.append(e)
            return False

        self._set_visualizations(specs)
        return True

    # ---- internals ----
    async def _parse(self, source: Any):
        name = source_name(source)
        try:
            result = await asyncio.to_thread(
                self._parser,
                source,
                header=self.settings.header,
                skip_empty_lines=self.settings.skip_empty_lines,
            )
        except FileParseError:
            raise
        except Exception as e:
            # any parser failure is confined to its own file
            logger.exception("unexpected failure parsing %s", name)
            raise FileParseError(name, str(e)) from e
        return name, result

    def _on_parsed(self, name: str | None, result: ParseResult) -> None:
        dataset: Dataset = result.to_dataset(name)
        if dataset.degraded:
            for err in dataset.parse_errors:
                logger.error("%s row %s: %s (%s)", name, err.row, err.message, err.code)
            self._sink.append(RowParseErrors(name, dataset.parse_errors))
        else:
            logger.info("parsing complete: %s (%d rows)", name, dataset.n_rows)
        self._set_registry(self._registry.append(dataset))

    def _set_registry(self, registry: DatasetRegistry) -> None:
        self._registry = registry
        self._render()

    def _set_visualizations(self, specs: Sequence[VisualizationSpec]) -> None:
        self._visualizations = tuple(specs)
        if self._mounted:
            self._surface.layout(len(self._visualizations))
        self._render()

    def _render(self) -> None:
        if self._mounted:
            self._lifecycle.rebuild(self._registry, self._visualizations)
