# telemplot/core/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

_ENV_PREFIX = "TELEMPLOT_"


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Screen-level settings.

    - viewport_width: chart width in pixels, read once per chart construction
    - device_pixel_ratio: divides every configured series width
    - default_height: used when a visualization has no height
    - header / skip_empty_lines: options handed to the parsing collaborators
    """
    viewport_width: int = 1280
    device_pixel_ratio: float = 1.0
    default_height: int = 300
    header: bool = True
    skip_empty_lines: bool = True

    def __post_init__(self) -> None:
        if self.viewport_width <= 0:
            raise ValueError("viewport_width must be positive.")
        if self.device_pixel_ratio <= 0:
            raise ValueError("device_pixel_ratio must be positive.")
        if self.default_height <= 0:
            raise ValueError("default_height must be positive.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        settings = cls()
        width = env.get(f"{_ENV_PREFIX}VIEWPORT_WIDTH")
        if width:
            settings = replace(settings, viewport_width=int(width))
        ratio = env.get(f"{_ENV_PREFIX}DEVICE_PIXEL_RATIO")
        if ratio:
            settings = replace(settings, device_pixel_ratio=float(ratio))
        return settings
