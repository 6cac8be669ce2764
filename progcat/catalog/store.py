# -*- coding: utf-8 -*-
"""
Local Store - Filesystem locations of the three catalog sources.

A catalog directory holds ``index.json`` plus one asset subdirectory
per entry. The store addresses three of them by role:

- preinstalled: read-only, shipped with the application
- validated: the last catalog that passed the full load pipeline
- staging: a fresh download that has not been validated yet

Promotion moves staging into validated. The previous validated
catalog is renamed aside first and only deleted once the move has
succeeded, so a failed promotion leaves it intact.

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
import os
import shutil
import threading
from pathlib import Path
from typing import Any, Dict, Union

logger = logging.getLogger(__name__)

# progcat internal
from progcat.catalog.errors import IndexUnreadable
from progcat.catalog.models import CatalogSource


INDEX_FILE = "index.json"

_VALIDATED_DIR = "catalog"
_STAGING_DIR = "tmp_catalog"
_BACKUP_SUFFIX = ".previous"
_WORK_SUFFIX = ".partial"


def read_index(source_dir: Union[str, Path]) -> Dict[str, Any]:
    """Read and parse ``source_dir/index.json``.

    Raises
    ------
    IndexUnreadable
        If the file is missing, unreadable, not JSON, or not a JSON
        object.
    """
    index_path = Path(source_dir) / INDEX_FILE
    try:
        with open(index_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise IndexUnreadable(index_path, "no index found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise IndexUnreadable(index_path, str(e)) from e
    except json.JSONDecodeError as e:
        raise IndexUnreadable(index_path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise IndexUnreadable(index_path, "index is not a JSON object")
    return data


class LocalStore:
    """Filesystem-backed catalog directories addressed by role.

    Parameters
    ----------
    preinstalled_dir : Path
        Bundled read-only catalog.
    data_dir : Path
        Per-user writable directory; validated and staging catalogs
        live directly under it.
    """

    def __init__(self, preinstalled_dir: Path, data_dir: Path) -> None:
        self._preinstalled = Path(preinstalled_dir)
        self._data_dir = Path(data_dir)
        self._lock = threading.RLock()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path(self, role: CatalogSource) -> Path:
        """Directory of the catalog playing ``role``."""
        if role is CatalogSource.PREINSTALLED:
            return self._preinstalled
        if role is CatalogSource.VALIDATED:
            return self._data_dir / _VALIDATED_DIR
        if role is CatalogSource.STAGING:
            return self._data_dir / _STAGING_DIR
        raise ValueError(f"unknown catalog source {role!r}")

    def exists(self, role: CatalogSource) -> bool:
        return self.path(role).is_dir()

    def clear(self, role: CatalogSource) -> None:
        """Delete the catalog playing ``role``. Missing is not an error."""
        if role is CatalogSource.PREINSTALLED:
            raise PermissionError("the preinstalled catalog is read-only")
        with self._lock:
            target = self.path(role)
            if target.exists():
                logger.info("Removing %s catalog at %s", role.value, target)
                shutil.rmtree(target)

    def _backup_path(self) -> Path:
        validated = self.path(CatalogSource.VALIDATED)
        return validated.with_name(validated.name + _BACKUP_SUFFIX)

    def recover(self) -> bool:
        """Restore a validated catalog left aside by an interrupted promotion.

        Returns
        -------
        bool
            True if a backup was restored.
        """
        with self._lock:
            backup = self._backup_path()
            if not backup.exists():
                return False
            validated = self.path(CatalogSource.VALIDATED)
            if validated.exists():
                shutil.rmtree(backup)
                return False
            logger.warning("Restoring validated catalog from %s", backup)
            os.replace(backup, validated)
            return True

    def promote(self) -> Path:
        """Move the staging catalog into the validated role.

        Staging no longer exists afterwards. If the move fails, the
        previous validated catalog is put back unchanged.

        Returns
        -------
        Path
            The validated catalog directory.

        Raises
        ------
        FileNotFoundError
            If there is no staging catalog.
        OSError
            If the move fails.
        """
        with self._lock:
            staging = self.path(CatalogSource.STAGING)
            validated = self.path(CatalogSource.VALIDATED)
            if not self.exists(CatalogSource.STAGING):
                raise FileNotFoundError(f"no staging catalog at {staging}")

            self.recover()
            backup = self._backup_path()
            if backup.exists():
                shutil.rmtree(backup)
            if validated.exists():
                os.replace(validated, backup)

            try:
                os.replace(staging, validated)
            except OSError:
                logger.error("Promotion of %s failed; restoring previous catalog", staging)
                if backup.exists():
                    if validated.exists():
                        shutil.rmtree(validated)
                    os.replace(backup, validated)
                raise

            if backup.exists():
                shutil.rmtree(backup, ignore_errors=True)
            logger.info("Promoted staging catalog into %s", validated)
            return validated

    def work_dir(self, token: Union[int, str]) -> Path:
        """Private download directory for one refresh attempt."""
        staging = self.path(CatalogSource.STAGING)
        return staging.with_name(f"{staging.name}.{token}{_WORK_SUFFIX}")

    def install_staging(self, work_dir: Path) -> Path:
        """Replace the staging catalog with ``work_dir`` (moved, not copied)."""
        with self._lock:
            staging = self.path(CatalogSource.STAGING)
            if staging.exists():
                shutil.rmtree(staging)
            os.replace(work_dir, staging)
            logger.info("Installed new staging catalog at %s", staging)
            return staging
