# telemplot/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all core-domain exceptions."""


# ---- Validation / construction errors ----
class InvalidDataset(CoreError):
    """Raised when a Dataset / DatasetRegistry is constructed with invalid inputs."""


class InvalidVisualization(CoreError):
    """Raised when a VisualizationSpec / InputSpec is constructed with invalid inputs."""


# ---- Dataset loading ----
class NoFilesSelected(CoreError):
    """Raised when a dataset add is triggered without any source."""

    def __init__(self, message: str = "No files are selected.") -> None:
        super().__init__(message)


class FileParseError(CoreError):
    """Raised by a parsing collaborator when a whole file cannot be read."""

    def __init__(self, source_name: str | None, reason: str) -> None:
        self.source_name = source_name
        self.reason = reason
        super().__init__(
            f'Error parsing "{source_name}". Reason: {reason}. '
            "Please see the log for more details."
        )


class RowParseErrors(CoreError):
    """A file parsed, but some of its rows were malformed (dataset still added)."""

    def __init__(self, source_name: str | None, errors: tuple = ()) -> None:
        self.source_name = source_name
        self.errors = tuple(errors)
        super().__init__(
            f'Parsing "{source_name}" resulted in errors. '
            "Please see the log for more details."
        )


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class DatasetNotFound(CoreError, KeyError):
    """Raised when a PathRef points at a dataset index that is not loaded."""

    def __init__(self, index: str, ref: str | None = None) -> None:
        self.index = index
        self.ref = ref
        super().__init__(index)

    def __str__(self) -> str:
        if self.ref is None:
            return f"Dataset {self.index} is not available!"
        return f"Unable to access {self.ref} because dataset {self.index} is not available!"


class MountPointMissing(CoreError, KeyError):
    """Raised when a chart's mount point does not exist on the surface."""

    def __init__(self, mount_id: str) -> None:
        self.mount_id = mount_id
        super().__init__(mount_id)

    def __str__(self) -> str:
        return f"Plot container not found for {self.mount_id}"


# ---- Configuration document ----
class ConfigError(CoreError):
    """Base error for configuration import failures."""


class ConfigParseError(ConfigError):
    """Raised when the configuration text is empty or not valid JSON."""


class ConfigShapeError(ConfigError):
    """Raised when the JSON document does not have the expected structure."""
