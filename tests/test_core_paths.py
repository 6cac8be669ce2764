# -*- coding: utf-8 -*-
"""
Tests for progcat.core.paths — config and data directory resolution.

Created
-------
2026-10-19
"""

import os
from pathlib import Path
from unittest import mock

from progcat.core.paths import (
    STATIC_DIR, ensure_data_dir, resolve_config_path, resolve_data_dir,
)


class TestResolveConfigPath:

    def test_env_var_highest_priority(self):
        with mock.patch.dict(os.environ, {'PROGCAT_CONFIG': '/custom/config.json'}):
            assert resolve_config_path() == Path('/custom/config.json')

    def test_user_config_second_priority(self, tmp_path):
        config_dir = tmp_path / ".progcat"
        config_dir.mkdir()
        (config_dir / "config.json").write_text("{}")

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop('PROGCAT_CONFIG', None)
            with mock.patch('progcat.core.paths.Path.home', return_value=tmp_path):
                assert resolve_config_path() == config_dir / "config.json"

    def test_bundled_fallback(self, tmp_path):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop('PROGCAT_CONFIG', None)
            with mock.patch('progcat.core.paths.Path.home', return_value=tmp_path):
                path = resolve_config_path()
        assert path == STATIC_DIR / "config.json"
        assert path.exists()


class TestResolveDataDir:

    def test_env_var_highest_priority(self, tmp_path):
        with mock.patch.dict(os.environ, {'PROGCAT_DATA_DIR': '/data/progcat'}):
            assert resolve_data_dir(tmp_path) == Path('/data/progcat')

    def test_configured(self, tmp_path):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop('PROGCAT_DATA_DIR', None)
            assert resolve_data_dir(tmp_path / "d") == tmp_path / "d"

    def test_default(self, tmp_path):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop('PROGCAT_DATA_DIR', None)
            with mock.patch('progcat.core.paths.Path.home', return_value=tmp_path):
                assert resolve_data_dir() == tmp_path / ".progcat"

    def test_ensure_creates_directory(self, tmp_path):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop('PROGCAT_DATA_DIR', None)
            data_dir = ensure_data_dir(tmp_path / "new")
            ensure_data_dir(tmp_path / "new")  # Should not raise
        assert data_dir.is_dir()
