# -*- coding: utf-8 -*-
"""
Catalog Models - Data models for catalog indexes and entries.

Defines the in-memory representation of a catalog index document
(CatalogIndex, CatalogEntry, Landing), the file-reference roles an
entry must carry, the three on-disk catalog sources, and the remote
origin a catalog is downloaded from.

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
import copy
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple


class CatalogSource(Enum):
    """On-disk location a catalog is loaded from."""

    PREINSTALLED = "preinstalled"
    VALIDATED = "validated"
    STAGING = "staging"


@dataclass(frozen=True)
class FileRole:
    """A required file reference on every catalog entry.

    Attributes
    ----------
    name : str
        Key of the field in the entry document.
    image : bool
        Whether the localized value is used as an image source and
        needs a ``file://`` URI rather than a plain path.
    """

    name: str
    image: bool = False


DEFAULT_ROLES: Tuple[FileRole, ...] = (
    FileRole("icon", image=True),
    FileRole("description"),
    FileRole("binary"),
)


@dataclass(frozen=True)
class RemoteOrigin:
    """Base location of a remotely published catalog.

    Every file of the catalog, ``index.json`` included, is fetched by
    appending its relative path to ``base_url``.

    Attributes
    ----------
    base_url : str
        URL prefix ending in ``/``.
    """

    base_url: str

    @classmethod
    def from_repository(
        cls,
        username: str,
        repository: str,
        branch: str,
        host: str = "raw.githubusercontent.com",
    ) -> 'RemoteOrigin':
        """Build an origin from a ``host/username/repository/branch`` layout."""
        return cls(f"https://{host}/{username}/{repository}/{branch}/")

    def url_for(self, relative_path: str) -> str:
        """Return the URL of a file given its catalog-relative path."""
        base = self.base_url if self.base_url.endswith('/') else self.base_url + '/'
        return base + relative_path.replace('\\', '/').lstrip('/')


class Landing:
    """Rendered catalog landing page (title + HTML body)."""

    def __init__(self, title: str = "", markdown: str = "") -> None:
        self.title = title
        self.markdown = markdown

    def to_dict(self) -> Dict[str, str]:
        return {'title': self.title, 'markdown': self.markdown}

    def __repr__(self) -> str:
        return f"Landing(title={self.title!r})"


class CatalogEntry:
    """One installable program in a catalog.

    Parameters
    ----------
    path : str
        Directory segment namespacing this entry's files.
    files : Dict[str, str]
        File-reference role name to value. Raw values are relative to
        ``path``; after localization they are absolute paths or URIs.
    extra : Optional[Dict[str, Any]]
        Remaining entry fields (``title`` and anything else the
        publisher declares), passed through untouched.
    path_key : str
        Name of the namespace field in the wire format.
    """

    def __init__(
        self,
        path: str,
        files: Dict[str, str],
        extra: Optional[Dict[str, Any]] = None,
        path_key: str = "path",
    ) -> None:
        self.path = path
        self.files = dict(files)
        self.extra = dict(extra or {})
        self.path_key = path_key
        self.markdown = ""

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        roles: Sequence[FileRole] = DEFAULT_ROLES,
        path_key: str = "path",
    ) -> 'CatalogEntry':
        role_names = {role.name for role in roles}
        files = {name: data[name] for name in role_names if name in data}
        extra = {
            k: copy.deepcopy(v) for k, v in data.items()
            if k not in role_names and k not in (path_key, 'markdown')
        }
        return cls(data[path_key], files, extra, path_key=path_key)

    @property
    def title(self) -> str:
        return str(self.extra.get('title', self.path))

    def __getitem__(self, role: str) -> str:
        return self.files[role]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = copy.deepcopy(self.extra)
        data[self.path_key] = self.path
        data.update(self.files)
        data['markdown'] = self.markdown
        return data

    def __repr__(self) -> str:
        return f"CatalogEntry(path={self.path!r}, title={self.title!r})"


class CatalogIndex:
    """Root document of a catalog.

    Parameters
    ----------
    name : str
        Publisher name (``source.name``).
    entries : List[CatalogEntry]
        Entries in declaration order.
    description : Optional[str]
        Relative path of the publisher's markdown description.
    upload : Optional[Dict[str, Any]]
        Upload defaults declared by the catalog (``{"board": ...}``).
    source_extra : Optional[Dict[str, Any]]
        Other ``source`` fields, passed through.
    extra : Optional[Dict[str, Any]]
        Other top-level fields, passed through.
    entries_key : str
        Name of the entries array in the wire format.
    """

    def __init__(
        self,
        name: str,
        entries: List[CatalogEntry],
        description: Optional[str] = None,
        upload: Optional[Dict[str, Any]] = None,
        source_extra: Optional[Dict[str, Any]] = None,
        extra: Optional[Dict[str, Any]] = None,
        entries_key: str = "entries",
    ) -> None:
        self.name = name
        self.entries = entries
        self.description = description
        self.upload = dict(upload or {})
        self.source_extra = dict(source_extra or {})
        self.extra = dict(extra or {})
        self.entries_key = entries_key
        self.landing = Landing()

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        roles: Sequence[FileRole] = DEFAULT_ROLES,
        entries_key: str = "entries",
        path_key: str = "path",
    ) -> 'CatalogIndex':
        """Build an index from a schema-valid document.

        The document is not modified; every load attempt gets its own
        objects.
        """
        source = data['source']
        entries = [
            CatalogEntry.from_dict(e, roles, path_key=path_key)
            for e in data[entries_key]
        ]
        source_extra = {
            k: copy.deepcopy(v) for k, v in source.items()
            if k not in ('name', 'description')
        }
        extra = {
            k: copy.deepcopy(v) for k, v in data.items()
            if k not in ('source', entries_key, 'upload', 'landing')
        }
        return cls(
            name=source['name'],
            entries=entries,
            description=source.get('description') or None,
            upload=data.get('upload'),
            source_extra=source_extra,
            extra=extra,
            entries_key=entries_key,
        )

    @property
    def board(self) -> Optional[str]:
        """Default upload board declared by the catalog, if any."""
        return self.upload.get('board')

    def pairs(self, roles: Sequence[FileRole]) -> List[Tuple[CatalogEntry, FileRole]]:
        """All (entry, role) pairs, entry-major."""
        return [(entry, role) for entry in self.entries for role in roles]

    def to_dict(self) -> Dict[str, Any]:
        source: Dict[str, Any] = copy.deepcopy(self.source_extra)
        source['name'] = self.name
        if self.description:
            source['description'] = self.description
        data: Dict[str, Any] = copy.deepcopy(self.extra)
        data['source'] = source
        data[self.entries_key] = [e.to_dict() for e in self.entries]
        if self.upload:
            data['upload'] = dict(self.upload)
        data['landing'] = self.landing.to_dict()
        return data

    def __repr__(self) -> str:
        return (
            f"CatalogIndex(name={self.name!r}, "
            f"entries={len(self.entries)})"
        )


class Catalog:
    """A fully loaded, validated and localized catalog.

    Parameters
    ----------
    index : CatalogIndex
        The localized index.
    source_dir : Path
        Directory the catalog was loaded from.
    origin : Optional[RemoteOrigin]
        Remote origin used to download the contents, if any.
    source : Optional[CatalogSource]
        Role the directory was loaded as, when known.
    """

    def __init__(
        self,
        index: CatalogIndex,
        source_dir: Path,
        origin: Optional[RemoteOrigin] = None,
        source: Optional[CatalogSource] = None,
    ) -> None:
        self.index = index
        self.source_dir = Path(source_dir)
        self.origin = origin
        self.source = source

    @property
    def entries(self) -> List[CatalogEntry]:
        return self.index.entries

    def find_entry(self, path: str) -> Optional[CatalogEntry]:
        """Return the entry whose namespace is ``path``, or None."""
        for entry in self.index.entries:
            if entry.path == path:
                return entry
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Wire-format document handed to the presentation layer."""
        return self.index.to_dict()

    def __repr__(self) -> str:
        return f"Catalog(source_dir={str(self.source_dir)!r}, index={self.index!r})"
