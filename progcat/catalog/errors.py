# -*- coding: utf-8 -*-
"""
Catalog Errors - Exceptions raised by catalog loading and uploads.

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
from pathlib import Path
from typing import Optional, Union


class CatalogError(RuntimeError):
    """Base class for all progcat catalog errors."""


class LoadError(CatalogError):
    """A catalog load attempt failed.

    Parameters
    ----------
    path : Union[str, Path]
        File, directory or URL the failure concerns.
    reason : str
        Human-readable cause.
    """

    kind = "load"

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.kind}: {self.path}: {reason}")


class IndexUnreadable(LoadError):
    """Index document missing or unparsable."""

    kind = "index unreadable"


class SchemaInvalid(LoadError):
    """Index document does not conform to the catalog schema."""

    kind = "schema invalid"

    def __init__(
        self,
        path: Union[str, Path],
        reason: str,
        location: Optional[str] = None,
    ) -> None:
        self.location = location
        if location:
            reason = f"{reason} (at {location})"
        super().__init__(path, reason)


class DownloadFailed(LoadError):
    """A file of a remote catalog could not be fetched."""

    kind = "download failed"


class MissingFile(LoadError):
    """A required file of a local catalog is absent."""

    kind = "missing file"


class UploadError(CatalogError):
    """A program could not be flashed onto a board."""


class UploadTargetMissing(UploadError):
    """The entry's binary does not exist on disk."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)
        super().__init__(f"path doesn't exist: {self.path}")


class FlashFailed(UploadError):
    """The flashing tool reported an error."""
