"""Logging and metrics."""

from __future__ import annotations

from .logging import configure_logging
from .metrics import METRICS, export_prometheus

__all__ = ["configure_logging", "METRICS", "export_prometheus"]
