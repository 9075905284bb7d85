"""Configuration models and loaders."""

from __future__ import annotations

from .config import (
    Config,
    FetcherConfig,
    LazyConfig,
    MonitoringConfig,
    WebConfig,
    find_config_file,
    load_config,
    settings,
)

__all__ = [
    "Config",
    "FetcherConfig",
    "LazyConfig",
    "MonitoringConfig",
    "WebConfig",
    "find_config_file",
    "load_config",
    "settings",
]
