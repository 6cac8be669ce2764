# -*- coding: utf-8 -*-
"""
Configuration Module - Application configuration for progcat.

Provides immutable configuration dataclasses for the remote catalog,
the application window, uploads and the catalog field layout. Loaded
once at startup from a JSON file; missing or malformed files yield the
defaults.

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
import json
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# progcat internal
from progcat.catalog.models import DEFAULT_ROLES, FileRole, RemoteOrigin
from progcat.core.paths import STATIC_DIR, resolve_config_path


@dataclass(frozen=True)
class RemoteCatalogConfig:
    """Where the remote catalog is published.

    Attributes
    ----------
    username : str
    repository : str
    branch : str
    host : str
        Raw-content host serving the repository files.
    enable_updates : bool
        When False only the preinstalled catalog is used.
    url : Optional[str]
        Explicit base URL; overrides the host/username/repository/branch
        template when set.
    """

    username: str = ""
    repository: str = ""
    branch: str = "master"
    host: str = "raw.githubusercontent.com"
    enable_updates: bool = True
    url: Optional[str] = None

    def origin(self) -> RemoteOrigin:
        if self.url:
            return RemoteOrigin(self.url)
        return RemoteOrigin.from_repository(
            self.username, self.repository, self.branch, host=self.host,
        )


@dataclass(frozen=True)
class WindowConfig:
    height: int = 550
    width: int = 900
    title: str = "progcat"


@dataclass(frozen=True)
class UploadConfig:
    """Flashing defaults.

    Attributes
    ----------
    board : Optional[str]
        Board used when neither the request nor the catalog names one.
    port : Optional[str]
        Serial port passed to the flashing tool.
    avrdude : str
        Name or path of the avrdude executable.
    """

    board: Optional[str] = None
    port: Optional[str] = None
    avrdude: str = "avrdude"


@dataclass(frozen=True)
class CatalogLayout:
    """Field names used by the catalog index document.

    Attributes
    ----------
    entries_key : str
        Top-level key holding the entry array.
    path_key : str
        Entry key holding the entry's directory namespace.
    roles : Tuple[FileRole, ...]
        Required file-reference fields of every entry.
    description_role : str
        Role whose file is rendered from markdown into ``markdown``.
    """

    entries_key: str = "entries"
    path_key: str = "path"
    roles: Tuple[FileRole, ...] = DEFAULT_ROLES
    description_role: str = "description"

    def __post_init__(self) -> None:
        if self.description_role not in {role.name for role in self.roles}:
            raise ValueError(
                f"description_role {self.description_role!r} is not one of "
                f"the layout roles"
            )


@dataclass(frozen=True)
class AppConfig:
    """Process-wide progcat configuration.

    Attributes
    ----------
    remote_catalog : Optional[RemoteCatalogConfig]
        Remote catalog location; None means local-only operation.
    window : WindowConfig
    upload : UploadConfig
    layout : CatalogLayout
    preinstalled_dir : Path
        Read-only catalog shipped with the application.
    data_dir : Optional[Path]
        Per-user writable directory holding the validated and staging
        catalogs. None defers to the data directory resolution chain.
    schema_path : Optional[Path]
        Index schema. None uses the bundled schema.
    update_timeout : float
        HTTP timeout for catalog downloads in seconds.
    max_workers : int
        Maximum concurrent downloads and background jobs.
    """

    remote_catalog: Optional[RemoteCatalogConfig] = None
    window: WindowConfig = field(default_factory=WindowConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    layout: CatalogLayout = field(default_factory=CatalogLayout)
    preinstalled_dir: Path = STATIC_DIR / "catalog"
    data_dir: Optional[Path] = None
    schema_path: Optional[Path] = None
    update_timeout: float = 10.0
    max_workers: int = 4

    @property
    def updates_enabled(self) -> bool:
        return (
            self.remote_catalog is not None
            and self.remote_catalog.enable_updates
        )

    def origin(self) -> Optional[RemoteOrigin]:
        """Remote origin, or None when the catalog is local-only."""
        if self.remote_catalog is None:
            return None
        return self.remote_catalog.origin()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ('preinstalled_dir', 'data_dir', 'schema_path'):
            if data[key] is not None:
                data[key] = str(data[key])
        return data

    def save(self, path: Path) -> None:
        """Save config to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)


def _known(cls: type, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v for k, v in data.items()
        if k in cls.__dataclass_fields__
    }


def _parse_layout(data: Dict[str, Any]) -> CatalogLayout:
    kwargs = _known(CatalogLayout, data)
    if 'roles' in kwargs:
        roles = []
        for role in kwargs['roles']:
            if isinstance(role, str):
                roles.append(FileRole(role))
            else:
                roles.append(FileRole(role['name'], bool(role.get('image', False))))
        kwargs['roles'] = tuple(roles)
    return CatalogLayout(**kwargs)


def config_from_dict(data: Dict[str, Any], base_dir: Optional[Path] = None) -> AppConfig:
    """Build an AppConfig from a parsed JSON document.

    Parameters
    ----------
    data : Dict[str, Any]
        Parsed configuration document. Unknown keys are ignored.
    base_dir : Optional[Path]
        Directory relative paths in the document are resolved against.

    Returns
    -------
    AppConfig
    """
    kwargs = _known(AppConfig, data)

    remote = kwargs.get('remote_catalog')
    if remote is not None:
        kwargs['remote_catalog'] = RemoteCatalogConfig(**_known(RemoteCatalogConfig, remote))
    if 'window' in kwargs:
        kwargs['window'] = WindowConfig(**_known(WindowConfig, kwargs['window']))
    if 'upload' in kwargs:
        kwargs['upload'] = UploadConfig(**_known(UploadConfig, kwargs['upload']))
    if 'layout' in kwargs:
        kwargs['layout'] = _parse_layout(kwargs['layout'])

    for key in ('preinstalled_dir', 'data_dir', 'schema_path'):
        value = kwargs.get(key)
        if value is None:
            continue
        value = Path(value).expanduser()
        if base_dir is not None and not value.is_absolute():
            value = base_dir / value
        kwargs[key] = value

    return AppConfig(**kwargs)


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from file, or return defaults.

    Parameters
    ----------
    path : Optional[Path]
        Config file path. Defaults to the config resolution chain
        (``PROGCAT_CONFIG`` > ``~/.progcat/config.json`` > bundled).

    Returns
    -------
    AppConfig
        Loaded or default configuration.
    """
    path = Path(path) if path is not None else resolve_config_path()
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            config = config_from_dict(data, base_dir=path.parent)
            logger.info("Loaded config from %s", path)
            return config
        except Exception as e:
            logger.warning("Failed to load config from %s: %s", path, e)

    return AppConfig()
