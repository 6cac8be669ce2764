# -*- coding: utf-8 -*-
"""
Catalog Fetcher - Download catalog files over HTTP.

Retrieves a single remote file and writes its bytes to a local path.
Contains no catalog policy; callers decide what to fetch and what a
failure means.

Dependencies
------------
requests

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
from pathlib import Path
from typing import Optional

# Third-party
import requests

logger = logging.getLogger(__name__)


class Fetcher:
    """Fetches remote files into local paths.

    Parameters
    ----------
    timeout : float
        HTTP request timeout in seconds. Default 10.0.
    session : Optional[requests.Session]
        Session to reuse connections through. A new one is created
        if None.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch(self, url: str, dest: Path) -> Path:
        """Download ``url`` and write the response body to ``dest``.

        Parameters
        ----------
        url : str
            Remote file URL.
        dest : Path
            Local destination; parent directories are created.

        Returns
        -------
        Path
            ``dest``.

        Raises
        ------
        requests.RequestException
            On connection errors, timeouts and non-2xx responses.
        OSError
            If the file cannot be written.
        """
        logger.debug("Fetching %s -> %s", url, dest)
        resp = self._session.get(url, timeout=self._timeout)
        resp.raise_for_status()

        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(resp.content)
        return dest

    def close(self) -> None:
        self._session.close()
