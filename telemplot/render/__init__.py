# telemplot/render/__init__.py
"""Rendering collaborators."""

from .mpl import MatplotlibChart, MatplotlibRenderer, line_kwargs

__all__ = ["MatplotlibChart", "MatplotlibRenderer", "line_kwargs"]
