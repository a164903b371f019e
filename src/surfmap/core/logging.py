"""
Logging configuration.

The packaged YAML config (`src/surfmap/config/logging.yaml`) sets up handlers and
formatters. Settings then decide the root level (`SURFMAP_LOG_LEVEL`) and
per-logger levels (`app.log_levels`), e.g. DEBUG for `surfmap.core.declutter`
while tuning marker spacing, or WARNING for `uvicorn.access` under the API.
"""

from __future__ import annotations

import copy
import logging.config
from typing import Any

from surfmap.config.settings import Settings, get_logging_config, get_settings


def build_logging_config(settings: Settings) -> dict[str, Any]:
    """Return a `dictConfig` payload with levels taken from settings."""
    # Deep copy: the YAML payload is cached and shared across calls.
    config = copy.deepcopy(get_logging_config())

    level = settings.app.log_level.upper()
    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            # Handlers pass everything; loggers decide what is emitted.
            handler["level"] = "DEBUG"

    loggers = config.setdefault("loggers", {})
    for name, logger_level in settings.app.log_levels.items():
        loggers.setdefault(name, {})["level"] = logger_level.upper()
    return config


def configure_logging(settings: Settings | None = None) -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    logging.config.dictConfig(build_logging_config(settings or get_settings()))
