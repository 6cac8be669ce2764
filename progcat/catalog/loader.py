# -*- coding: utf-8 -*-
"""
Catalog Loader - Load a catalog directory into a validated Catalog.

A catalog directory holds an ``index.json`` that locates every file of
the catalog. Loading runs five steps, each of which aborts the load on
failure:

1. read the index
2. validate it against the catalog schema
3. download every referenced file (remote catalogs) or check that it
   exists (local catalogs)
4. rewrite file references into absolute paths and URIs
5. render markdown descriptions into HTML

Any failure surfaces as a single LoadError; no partially loaded
Catalog is ever returned.

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
import logging
import os
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

# Third-party
import requests

logger = logging.getLogger(__name__)

# progcat internal
from progcat.catalog import assets
from progcat.catalog.errors import DownloadFailed, LoadError, MissingFile, SchemaInvalid
from progcat.catalog.fetcher import Fetcher
from progcat.catalog.models import Catalog, CatalogIndex, CatalogSource, RemoteOrigin
from progcat.catalog.store import read_index
from progcat.catalog.validator import SchemaValidator
from progcat.core.config import CatalogLayout


class CatalogLoader:
    """Loads, validates and localizes catalogs.

    Parameters
    ----------
    validator : SchemaValidator
        Validator for index documents.
    fetcher : Fetcher
        Used to download the files of remote catalogs.
    layout : Optional[CatalogLayout]
        Index field names and required roles. Defaults to the
        canonical layout.
    renderer : assets.MarkdownRenderer
        Markdown-to-HTML conversion.
    max_workers : int
        Maximum concurrent downloads per load.
    """

    def __init__(
        self,
        validator: SchemaValidator,
        fetcher: Fetcher,
        layout: Optional[CatalogLayout] = None,
        renderer: assets.MarkdownRenderer = assets.render_html,
        max_workers: int = 4,
    ) -> None:
        self._validator = validator
        self._fetcher = fetcher
        self._layout = layout or CatalogLayout()
        self._renderer = renderer
        self._max_workers = max(1, max_workers)

    @property
    def layout(self) -> CatalogLayout:
        return self._layout

    def load(
        self,
        source_dir: Union[str, Path],
        origin: Optional[RemoteOrigin] = None,
        role: Optional[CatalogSource] = None,
    ) -> Catalog:
        """Load the catalog in ``source_dir``.

        Parameters
        ----------
        source_dir : Union[str, Path]
            Directory containing ``index.json``.
        origin : Optional[RemoteOrigin]
            If set, every referenced file is downloaded from the origin
            into ``source_dir`` first. Partial downloads are left in
            place on failure.
        role : Optional[CatalogSource]
            Recorded on the returned Catalog.

        Returns
        -------
        Catalog

        Raises
        ------
        LoadError
            ``IndexUnreadable``, ``SchemaInvalid``, ``DownloadFailed``
            or ``MissingFile``.
        """
        source_dir = Path(source_dir).absolute()
        logger.info("Loading catalog from %s", source_dir)

        document = read_index(source_dir)
        self._validator.validate(document, path=source_dir / "index.json")
        self._check_layout(document, source_dir / "index.json")
        index = CatalogIndex.from_dict(
            document,
            roles=self._layout.roles,
            entries_key=self._layout.entries_key,
            path_key=self._layout.path_key,
        )

        files = self._referenced_files(index, source_dir)
        if origin is not None:
            self._download(files, source_dir, origin)
        else:
            self._check_exists(files, source_dir)

        try:
            assets.localize(index, source_dir, self._layout.roles)
            assets.render_markdown(
                index, source_dir,
                description_role=self._layout.description_role,
                renderer=self._renderer,
            )
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(source_dir, f"cannot render descriptions: {e}") from e

        logger.info(
            "Catalog %r loaded from %s (%d entries)",
            index.name, source_dir, len(index.entries),
        )
        return Catalog(index, source_dir, origin=origin, source=role)

    def _check_layout(self, document: Dict[str, Any], index_path: Path) -> None:
        """Check the document carries every field the layout reads.

        The schema and the configured layout can disagree; any field
        the layout needs but the document lacks is reported as
        SchemaInvalid rather than surfacing later as a KeyError.
        """
        source = document.get('source')
        if not isinstance(source, dict) or not isinstance(source.get('name'), str):
            raise SchemaInvalid(index_path, "source.name is required")

        entries_key = self._layout.entries_key
        entries = document.get(entries_key)
        if not isinstance(entries, list):
            raise SchemaInvalid(index_path, f"{entries_key!r} must be an array")

        required = [self._layout.path_key] + [r.name for r in self._layout.roles]
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise SchemaInvalid(
                    index_path, "entry must be an object",
                    location=f"$.{entries_key}[{i}]",
                )
            for name in required:
                value = entry.get(name)
                if not isinstance(value, str) or not value:
                    raise SchemaInvalid(
                        index_path, f"entry field {name!r} is missing or empty",
                        location=f"$.{entries_key}[{i}]",
                    )

    def _referenced_files(
        self,
        index: CatalogIndex,
        source_dir: Path,
    ) -> List[Tuple[str, bool]]:
        """Relative paths of every referenced file.

        Returns (relative path, required) pairs; the source description
        is downloaded when declared but not required locally.
        """
        files: List[Tuple[str, bool]] = []
        if index.description:
            files.append((index.description, False))
        for entry, role in index.pairs(self._layout.roles):
            files.append((f"{entry.path}/{entry.files[role.name]}", True))

        root = os.path.normpath(str(source_dir))
        for rel, _ in files:
            target = os.path.normpath(os.path.join(root, rel))
            if os.path.isabs(rel) or os.path.commonpath([root, target]) != root:
                raise SchemaInvalid(
                    source_dir / "index.json",
                    f"file reference {rel!r} leaves the catalog directory",
                )
        return files

    def _check_exists(self, files: List[Tuple[str, bool]], source_dir: Path) -> None:
        for rel, required in files:
            if not required:
                continue
            file_path = source_dir / rel
            if not file_path.is_file():
                raise MissingFile(file_path, "missing catalog file")

    def _download(
        self,
        files: List[Tuple[str, bool]],
        source_dir: Path,
        origin: RemoteOrigin,
    ) -> None:
        """Fetch every file concurrently; fail if any single fetch fails."""
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {
                executor.submit(
                    self._fetcher.fetch, origin.url_for(rel), source_dir / rel,
                ): rel
                for rel, _ in files
            }
            wait(futures)

        for future, rel in futures.items():
            error = future.exception()
            if error is None:
                continue
            if isinstance(error, (requests.RequestException, OSError)):
                logger.warning("Download of %s failed: %s", rel, error)
                raise DownloadFailed(origin.url_for(rel), str(error)) from error
            raise error
