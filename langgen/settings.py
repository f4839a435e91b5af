#!/usr/bin/env python3
"""Settings loader for langgen (reads langgen/configs/app.yaml)."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"
LANGUAGES_DIR = CONFIG_DIR / "languages"


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    if not APP_CONFIG_PATH.exists():
        raise FileNotFoundError(f"Missing app config: {APP_CONFIG_PATH}")
    data = yaml.safe_load(APP_CONFIG_PATH.read_text(encoding="utf-8"))
    return data or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    data = load_app_config()
    current: Any = data
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a path string relative to the current directory (unless absolute)."""
    if value is None:
        raise ValueError("path value is required")
    expanded = os.path.expanduser(str(value))
    path = Path(expanded)
    if not path.is_absolute():
        base = base or Path.cwd()
        path = (base / path).resolve()
    return path


def resolve_language_path(value: str) -> Path:
    """
    Find a language definition.

    Accepts a file path, or the bare name of a bundled language
    (``basic`` -> ``langgen/configs/languages/basic.yaml``).
    """
    path = resolve_path(value)
    if path.is_file():
        return path
    bundled = LANGUAGES_DIR / f"{value}.yaml"
    if bundled.is_file():
        return bundled
    raise FileNotFoundError(f"Language definition not found: {value}")


def bundled_languages() -> list:
    return sorted(p.stem for p in LANGUAGES_DIR.glob("*.yaml"))


__all__ = [
    "load_app_config",
    "get_setting",
    "resolve_path",
    "resolve_language_path",
    "bundled_languages",
    "PACKAGE_ROOT",
    "APP_CONFIG_PATH",
    "LANGUAGES_DIR",
]
