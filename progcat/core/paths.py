# -*- coding: utf-8 -*-
"""
Path Resolver - Locate the progcat configuration file and data directory.

Resolves the configuration file using a priority chain:
1. PROGCAT_CONFIG environment variable (highest priority)
2. ~/.progcat/config.json
3. The config.json bundled with the package (default fallback)

The per-user data directory (validated and staging catalogs) follows
the same pattern with PROGCAT_DATA_DIR, the configured ``data_dir`` and
~/.progcat.

License
-------
MIT License
Copyright (c) 2026 progcat contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import os
from pathlib import Path
from typing import Optional


STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

_CONFIG_ENV_VAR = "PROGCAT_CONFIG"
_DATA_ENV_VAR = "PROGCAT_DATA_DIR"
_CONFIG_DIR = ".progcat"
_CONFIG_FILE = "config.json"


def resolve_config_path() -> Path:
    """Resolve the configuration file path.

    Priority:
    1. ``PROGCAT_CONFIG`` environment variable
    2. ``~/.progcat/config.json`` if it exists
    3. bundled ``static/config.json``

    Returns
    -------
    Path
        Resolved path to the configuration file.
    """
    env_path = os.environ.get(_CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    user_config = Path.home() / _CONFIG_DIR / _CONFIG_FILE
    if user_config.exists():
        return user_config

    return STATIC_DIR / _CONFIG_FILE


def resolve_data_dir(configured: Optional[Path] = None) -> Path:
    """Resolve the per-user writable data directory.

    Priority:
    1. ``PROGCAT_DATA_DIR`` environment variable
    2. ``configured`` (the ``data_dir`` config field)
    3. ``~/.progcat``

    Returns
    -------
    Path
        Resolved data directory (not created).
    """
    env_path = os.environ.get(_DATA_ENV_VAR)
    if env_path:
        return Path(env_path)
    if configured is not None:
        return Path(configured)
    return Path.home() / _CONFIG_DIR


def ensure_data_dir(configured: Optional[Path] = None) -> Path:
    """Ensure the data directory exists and return it."""
    data_dir = resolve_data_dir(configured)
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir
