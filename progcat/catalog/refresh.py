# -*- coding: utf-8 -*-
"""
Catalog Refresher - Download a fresh staging catalog in the background.

Each refresh downloads the remote catalog into a private work
directory and, once it has loaded successfully, swaps it in as the
staging catalog. Refreshes carry a generation number; a refresh that
has been superseded by a newer one discards its work instead of
replacing staging. Failures are logged and never raised.

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
import shutil
import threading
from concurrent.futures import Future
from typing import Optional

logger = logging.getLogger(__name__)

# progcat internal
from progcat.catalog.errors import DownloadFailed
from progcat.catalog.fetcher import Fetcher
from progcat.catalog.loader import CatalogLoader
from progcat.catalog.models import CatalogSource, RemoteOrigin
from progcat.catalog.pool import ThreadExecutorPool
from progcat.catalog.store import INDEX_FILE, LocalStore


class CatalogRefresher:
    """Keeps the staging catalog up to date with the remote origin.

    Parameters
    ----------
    store : LocalStore
    loader : CatalogLoader
    fetcher : Fetcher
        Used to fetch the remote ``index.json``.
    origin : RemoteOrigin
    pool : Optional[ThreadExecutorPool]
        Runs scheduled refreshes. Required for ``schedule``.
    """

    def __init__(
        self,
        store: LocalStore,
        loader: CatalogLoader,
        fetcher: Fetcher,
        origin: RemoteOrigin,
        pool: Optional[ThreadExecutorPool] = None,
    ) -> None:
        self._store = store
        self._loader = loader
        self._fetcher = fetcher
        self._origin = origin
        self._pool = pool
        self._generation = 0
        self._lock = threading.Lock()

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def schedule(self) -> Future:
        """Start a refresh in the background, superseding any running one.

        Returns
        -------
        Future
            Future resolving to the refresh's bool result.
        """
        if self._pool is None:
            raise RuntimeError("no pool configured for background refresh")
        generation = self._next_generation()
        logger.debug("Scheduling catalog refresh #%d", generation)
        return self._pool.submit_refresh(self.refresh, generation)

    def refresh(self, generation: Optional[int] = None) -> bool:
        """Download and load the remote catalog into staging.

        Parameters
        ----------
        generation : Optional[int]
            Generation this refresh runs as. None claims a new one.

        Returns
        -------
        bool
            True if staging was replaced with a freshly loaded catalog.
        """
        if generation is None:
            generation = self._next_generation()
        work = self._store.work_dir(generation)

        try:
            if work.exists():
                shutil.rmtree(work)
            index_url = self._origin.url_for(INDEX_FILE)
            try:
                self._fetcher.fetch(index_url, work / INDEX_FILE)
            except Exception as e:
                raise DownloadFailed(index_url, str(e)) from e

            self._loader.load(work, self._origin, role=CatalogSource.STAGING)

            if not self.is_current(generation):
                logger.info("Catalog refresh #%d superseded; discarding", generation)
                shutil.rmtree(work, ignore_errors=True)
                return False

            self._store.install_staging(work)
            logger.info("Catalog refresh #%d downloaded a new catalog", generation)
            return True
        except Exception as e:
            logger.warning("Error with catalog update #%d: %s", generation, e)
            logger.debug("Catalog update failure", exc_info=True)
            shutil.rmtree(work, ignore_errors=True)
            if self.is_current(generation):
                try:
                    self._store.clear(CatalogSource.STAGING)
                except OSError as clear_error:
                    logger.warning("Could not remove staging catalog: %s", clear_error)
            return False
