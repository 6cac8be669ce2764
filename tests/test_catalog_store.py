# -*- coding: utf-8 -*-
"""
Tests for progcat.catalog.store — LocalStore and read_index.

Created
-------
2026-10-19
"""

import json
import os
from unittest import mock

import pytest

from progcat.catalog.errors import IndexUnreadable
from progcat.catalog.models import CatalogSource
from progcat.catalog.store import LocalStore, read_index

from conftest import named_index, write_catalog


class TestPaths:

    def test_role_directories(self, tmp_path):
        store = LocalStore(tmp_path / "bundled", tmp_path / "data")
        assert store.path(CatalogSource.PREINSTALLED) == tmp_path / "bundled"
        assert store.path(CatalogSource.VALIDATED) == tmp_path / "data" / "catalog"
        assert store.path(CatalogSource.STAGING) == tmp_path / "data" / "tmp_catalog"

    def test_work_dir_is_sibling_of_staging(self, store):
        work = store.work_dir(3)
        assert work.parent == store.path(CatalogSource.STAGING).parent
        assert work != store.path(CatalogSource.STAGING)


class TestReadIndex:

    def test_reads_object(self, tmp_path):
        write_catalog(tmp_path, index={"source": {"name": "x"}, "entries": []}, files={})
        assert read_index(tmp_path)["source"]["name"] == "x"

    def test_missing(self, tmp_path):
        with pytest.raises(IndexUnreadable):
            read_index(tmp_path)

    def test_not_an_object(self, tmp_path):
        (tmp_path / "index.json").write_text(json.dumps([1, 2]))
        with pytest.raises(IndexUnreadable):
            read_index(tmp_path)


class TestClear:

    def test_clear_staging(self, store):
        write_catalog(store.path(CatalogSource.STAGING))
        store.clear(CatalogSource.STAGING)
        assert not store.exists(CatalogSource.STAGING)

    def test_clear_missing_is_noop(self, store):
        store.clear(CatalogSource.VALIDATED)

    def test_preinstalled_is_read_only(self, store):
        write_catalog(store.path(CatalogSource.PREINSTALLED))
        with pytest.raises(PermissionError):
            store.clear(CatalogSource.PREINSTALLED)
        assert store.exists(CatalogSource.PREINSTALLED)


class TestPromote:

    def test_destructive_move(self, store):
        write_catalog(store.path(CatalogSource.STAGING), index=named_index("new"))
        write_catalog(store.path(CatalogSource.VALIDATED), index=named_index("old"))

        validated = store.promote()

        assert not store.exists(CatalogSource.STAGING)
        assert read_index(validated)["source"]["name"] == "new"
        assert (validated / "p1" / "b.hex").exists()
        assert not store._backup_path().exists()

    def test_promote_without_previous_validated(self, store):
        write_catalog(store.path(CatalogSource.STAGING), index=named_index("new"))
        store.promote()
        assert read_index(store.path(CatalogSource.VALIDATED))["source"]["name"] == "new"

    def test_missing_staging(self, store):
        with pytest.raises(FileNotFoundError):
            store.promote()

    def test_failed_move_keeps_validated(self, store):
        write_catalog(store.path(CatalogSource.STAGING), index=named_index("new"))
        write_catalog(store.path(CatalogSource.VALIDATED), index=named_index("old"))
        staging = store.path(CatalogSource.STAGING)
        real_replace = os.replace

        def failing_replace(src, dst):
            if str(src) == str(staging):
                raise OSError("disk full")
            return real_replace(src, dst)

        with mock.patch('progcat.catalog.store.os.replace', side_effect=failing_replace):
            with pytest.raises(OSError):
                store.promote()

        assert read_index(store.path(CatalogSource.VALIDATED))["source"]["name"] == "old"
        assert store.exists(CatalogSource.STAGING)


class TestRecover:

    def test_restores_backup(self, store):
        backup = store._backup_path()
        write_catalog(backup, index=named_index("old"))
        assert store.recover() is True
        assert read_index(store.path(CatalogSource.VALIDATED))["source"]["name"] == "old"
        assert not backup.exists()

    def test_stale_backup_dropped_when_validated_exists(self, store):
        write_catalog(store._backup_path(), index=named_index("older"))
        write_catalog(store.path(CatalogSource.VALIDATED), index=named_index("current"))
        assert store.recover() is False
        assert read_index(store.path(CatalogSource.VALIDATED))["source"]["name"] == "current"
        assert not store._backup_path().exists()

    def test_nothing_to_recover(self, store):
        assert store.recover() is False


class TestInstallStaging:

    def test_replaces_staging(self, store):
        write_catalog(store.path(CatalogSource.STAGING), index=named_index("old"))
        work = write_catalog(store.work_dir(1), index=named_index("new"))
        store.install_staging(work)
        assert not work.exists()
        assert read_index(store.path(CatalogSource.STAGING))["source"]["name"] == "new"
