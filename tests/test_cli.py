# -*- coding: utf-8 -*-
"""
Tests for progcat.__main__ — command line interface.

Created
-------
2026-10-19
"""

import json
from unittest import mock

import pytest

from progcat.__main__ import main
from progcat.core.config import AppConfig

from conftest import write_catalog


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("PROGCAT_DATA_DIR", raising=False)
    write_catalog(tmp_path / "bundled")
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "preinstalled_dir": "bundled",
        "data_dir": "data",
        "upload": {"board": "uno"},
    }))
    return path


class TestCli:

    def test_catalog(self, config_file, capsys):
        assert main(["--config", str(config_file), "catalog"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["source"]["name"] == "Demo"

    def test_catalog_unavailable(self, tmp_path, capsys, monkeypatch):
        monkeypatch.delenv("PROGCAT_DATA_DIR", raising=False)
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"preinstalled_dir": "none", "data_dir": "data"}))
        assert main(["--config", str(path), "catalog"]) == 1
        assert "no valid catalog" in capsys.readouterr().err

    def test_config(self, config_file, capsys):
        assert main(["--config", str(config_file), "config"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["upload"]["board"] == "uno"

    def test_refresh_disabled(self, config_file):
        assert main(["--config", str(config_file), "refresh"]) == 1

    def test_upload(self, config_file, capsys):
        with mock.patch('progcat.upload.flasher.subprocess.run') as mock_run:
            mock_run.return_value = mock.Mock(returncode=0, stdout='', stderr='')
            code = main(["--config", str(config_file), "upload", "p1", "--port", "COM3"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "Done"
        cmd = mock_run.call_args[0][0]
        assert cmd[cmd.index('-P') + 1] == "COM3"

    def test_upload_unknown_entry(self, config_file):
        assert main(["--config", str(config_file), "upload", "nope"]) == 1
