# telemplot/core/__init__.py
"""
Core visualization binding engine for telemplot.

This module defines the renderer-agnostic model and procedures:
- Dataset / DatasetRegistry: parsed tabular sources, addressed by position
- PathRef / resolve: "<datasetIndex>.<columnName>" -> numeric column
- VisualizationSpec / InputSpec: declarative chart descriptions
- compile_visualization: spec -> renderer options + column matrix
- ChartLifecycleManager: render generations of chart handles
- SyncHub / SyncGroup: cursor mirroring between charts
- serialize / deserialize: JSON configuration round-trip
- ErrorSink: user-visible problem log

The core layer is independent from file formats and drawing libraries.
"""

from .dataset import Dataset, DatasetRegistry, RowError
from .resolver import PathRef, resolve, to_number, column_values
from .visualization import InputSpec, VisualizationSpec, default_visualizations
from .compiler import CompiledChart, compile_visualization
from .sync import SyncGroup, SyncHub
from .renderer import ChartHandle, MountPoint, MountSurface, Renderer, mount_id
from .lifecycle import ChartLifecycleManager, Generation
from .config import serialize, deserialize
from .errors import ErrorSink
from .settings import Settings
from .exceptions import (
    CoreError,
    InvalidDataset,
    InvalidVisualization,
    NoFilesSelected,
    FileParseError,
    RowParseErrors,
    DatasetNotFound,
    MountPointMissing,
    ConfigError,
    ConfigParseError,
    ConfigShapeError,
)


__all__ = [
    # datasets
    "Dataset",
    "DatasetRegistry",
    "RowError",

    # resolution / compilation
    "PathRef",
    "resolve",
    "to_number",
    "column_values",
    "CompiledChart",
    "compile_visualization",

    # visualization model
    "InputSpec",
    "VisualizationSpec",
    "default_visualizations",

    # rendering
    "ChartHandle",
    "MountPoint",
    "MountSurface",
    "Renderer",
    "mount_id",
    "ChartLifecycleManager",
    "Generation",
    "SyncGroup",
    "SyncHub",

    # configuration / diagnostics
    "serialize",
    "deserialize",
    "ErrorSink",
    "Settings",

    # exceptions
    "CoreError",
    "InvalidDataset",
    "InvalidVisualization",
    "NoFilesSelected",
    "FileParseError",
    "RowParseErrors",
    "DatasetNotFound",
    "MountPointMissing",
    "ConfigError",
    "ConfigParseError",
    "ConfigShapeError",
]
