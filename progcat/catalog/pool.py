# -*- coding: utf-8 -*-
"""
ThreadExecutorPool - Thread pool for background catalog operations.

Provides a managed thread pool for running catalog refreshes and
program uploads in the background without blocking the caller.

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
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)


class ThreadExecutorPool:
    """Manages a pool of worker threads for background catalog operations.

    Parameters
    ----------
    max_workers : int
        Maximum number of concurrent threads. Default 4.
    """

    def __init__(self, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="progcat",
        )

    def submit_refresh(self, refresh: Callable[[int], bool], generation: int) -> Future:
        """Submit a catalog refresh job.

        Parameters
        ----------
        refresh : Callable[[int], bool]
            The refresh callable, normally ``CatalogRefresher.refresh``.
        generation : int
            Generation number passed to ``refresh``.

        Returns
        -------
        Future
            Future resolving to the refresh's bool result.
        """
        return self._executor.submit(refresh, generation)

    def submit_upload(self, upload: Callable[..., str], *args: Any) -> Future:
        """Submit a program upload job.

        Returns
        -------
        Future
            Future resolving to ``"Done"`` or an error message.
        """
        return self._executor.submit(upload, *args)

    def shutdown(self, wait: bool = True) -> None:
        """Shut down the thread pool.

        Parameters
        ----------
        wait : bool
            If True, wait for running tasks to complete.
        """
        self._executor.shutdown(wait=wait)
