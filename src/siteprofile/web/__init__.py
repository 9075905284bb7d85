"""HTTP API for profile extraction."""

from __future__ import annotations

from .main import app, run_web_server

__all__ = ["app", "run_web_server"]
