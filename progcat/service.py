# -*- coding: utf-8 -*-
"""
Catalog Service - Request/response boundary for the presentation layer.

Wires the catalog components together from an AppConfig and exposes
the two requests the user interface makes: fetch the catalog to show,
and upload an entry's program onto a board. Neither request raises;
failures come back as None or as an error message.

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
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

# progcat internal
from progcat.catalog.errors import FlashFailed, UploadTargetMissing
from progcat.catalog.fetcher import Fetcher
from progcat.catalog.loader import CatalogLoader
from progcat.catalog.models import Catalog, CatalogEntry
from progcat.catalog.policy import Resolution, ResolutionPolicy
from progcat.catalog.pool import ThreadExecutorPool
from progcat.catalog.refresh import CatalogRefresher
from progcat.catalog.store import LocalStore
from progcat.catalog.validator import SchemaValidator
from progcat.core.config import AppConfig
from progcat.core.paths import ensure_data_dir
from progcat.upload.flasher import AvrdudeFlasher, Flasher


UPLOAD_DONE = "Done"


def upload_program(
    entry: Union[CatalogEntry, Mapping[str, Any]],
    board: str,
    flasher: Flasher,
) -> str:
    """Flash an entry's binary onto ``board``.

    Parameters
    ----------
    entry : Union[CatalogEntry, Mapping[str, Any]]
        Localized catalog entry, as an object or as the dict handed to
        the presentation layer.
    board : str
        Board identifier understood by ``flasher``.
    flasher : Flasher

    Returns
    -------
    str
        ``"Done"``, or the error message.
    """
    if isinstance(entry, CatalogEntry):
        binary, title = entry.files.get('binary', ''), entry.title
    else:
        binary, title = entry.get('binary', ''), entry.get('title', '')

    logger.info("Loading program %r from %s onto board %s", title, binary, board)
    try:
        if not binary or not Path(binary).is_file():
            raise UploadTargetMissing(binary)
        flasher.flash(binary, board)
    except (UploadTargetMissing, FlashFailed) as e:
        logger.error("Load program error: %s", e)
        return str(e)

    logger.info("Load program success: done")
    return UPLOAD_DONE


class CatalogService:
    """Catalog resolution and uploads for one application instance.

    Parameters
    ----------
    config : AppConfig
        Process configuration; read only.
    fetcher : Optional[Fetcher]
    flasher : Optional[Flasher]
        Defaults to an AvrdudeFlasher built from ``config.upload``.
    pool : Optional[ThreadExecutorPool]
        Background job pool; created from ``config.max_workers`` if None.
    """

    def __init__(
        self,
        config: AppConfig,
        fetcher: Optional[Fetcher] = None,
        flasher: Optional[Flasher] = None,
        pool: Optional[ThreadExecutorPool] = None,
    ) -> None:
        self._config = config
        self._pool = pool or ThreadExecutorPool(max_workers=config.max_workers)
        self._fetcher = fetcher or Fetcher(timeout=config.update_timeout)
        self._flasher = flasher or AvrdudeFlasher(
            port=config.upload.port, executable=config.upload.avrdude,
        )
        self.store = LocalStore(
            config.preinstalled_dir, ensure_data_dir(config.data_dir),
        )
        self.loader = CatalogLoader(
            SchemaValidator.from_file(config.schema_path),
            self._fetcher,
            layout=config.layout,
            max_workers=config.max_workers,
        )

        self.refresher: Optional[CatalogRefresher] = None
        origin = config.origin()
        if config.updates_enabled and origin is not None:
            self.refresher = CatalogRefresher(
                self.store, self.loader, self._fetcher, origin, pool=self._pool,
            )
        self.policy = ResolutionPolicy(self.store, self.loader, self.refresher)
        self._catalog: Optional[Catalog] = None

    @property
    def catalog(self) -> Optional[Catalog]:
        """Catalog returned by the most recent resolution."""
        return self._catalog

    def resolve(self) -> Resolution:
        resolution = self.policy.resolve()
        self._catalog = resolution.catalog
        return resolution

    def get_catalog(self) -> Optional[Dict[str, Any]]:
        """Resolve and return the catalog document, or None."""
        logger.info("Loading catalog for window")
        resolution = self.resolve()
        if not resolution.available:
            logger.warning("No valid catalog found for UI")
            return None
        logger.info("UI using catalog sourced from %s", resolution.catalog.source_dir)
        return resolution.catalog.to_dict()

    def default_board(self) -> Optional[str]:
        if self._catalog is not None and self._catalog.index.board:
            return self._catalog.index.board
        return self._config.upload.board

    def upload_program(
        self,
        entry: Union[CatalogEntry, Mapping[str, Any]],
        board: Optional[str] = None,
    ) -> str:
        """Flash ``entry`` onto ``board`` (or the default board)."""
        board = board or self.default_board()
        if not board:
            return "no board selected"
        return upload_program(entry, board, self._flasher)

    def submit_upload(
        self,
        entry: Union[CatalogEntry, Mapping[str, Any]],
        board: Optional[str] = None,
    ) -> Future:
        return self._pool.submit_upload(self.upload_program, entry, board)

    def close(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)
        self._fetcher.close()

    def __enter__(self) -> 'CatalogService':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
