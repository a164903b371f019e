# src/surfmap/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/surfmap/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `SURFMAP_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (e.g., `SURFMAP_LOG_LEVEL`, `SURFMAP_CATALOG_PATH`)

Design rule:
- Map constants (raster size, marker spacing, nearby radius) live in YAML, not in the
  geometry code. Core functions take them as parameters.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any
from surfmap.core.env import load_dotenv_if_present

import yaml
from pydantic import BaseModel, Field


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `surfmap.config`."""
    text = resources.files("surfmap.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "SurfMap"
    log_level: str = "INFO"
    log_levels: dict[str, str] = Field(default_factory=dict)


class CatalogSettings(BaseModel):
    path: str = "data/catalogs/listings.json"


class MapSettings(BaseModel):
    raster_width: int = Field(2000, gt=0)
    raster_height: int = Field(1000, gt=0)
    min_separation_px: float = Field(24.0, gt=0)


class NearbySettings(BaseModel):
    radius_miles: float = Field(50.0, ge=0)
    include_origin: bool = True


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    map: MapSettings = Field(default_factory=MapSettings)
    nearby: NearbySettings = Field(default_factory=NearbySettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    load_dotenv_if_present()
    data = dict(data)
    log_level = os.getenv("SURFMAP_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    catalog_path = os.getenv("SURFMAP_CATALOG_PATH")
    if catalog_path:
        data.setdefault("catalog", {})["path"] = catalog_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("SURFMAP_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
