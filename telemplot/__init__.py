# telemplot/__init__.py
"""Declarative multi-chart viewer for tabular telemetry logs."""

__version__ = "0.1.0"
