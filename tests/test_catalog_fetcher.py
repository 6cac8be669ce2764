# -*- coding: utf-8 -*-
"""
Tests for progcat.catalog.fetcher — Fetcher.

Created
-------
2026-10-19
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from progcat.catalog.fetcher import Fetcher


@pytest.fixture
def session():
    return MagicMock()


def _response(content=b"data", status=200):
    resp = MagicMock(status_code=status, content=content)
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    else:
        resp.raise_for_status = MagicMock()
    return resp


class TestFetch:

    def test_writes_body(self, tmp_path, session):
        session.get.return_value = _response(b"hex bytes")
        fetcher = Fetcher(timeout=3.0, session=session)

        dest = fetcher.fetch("https://host/p1/b.hex", tmp_path / "p1" / "b.hex")

        assert dest.read_bytes() == b"hex bytes"
        session.get.assert_called_once_with("https://host/p1/b.hex", timeout=3.0)

    def test_http_error(self, tmp_path, session):
        session.get.return_value = _response(status=404)
        fetcher = Fetcher(session=session)
        with pytest.raises(requests.HTTPError):
            fetcher.fetch("https://host/missing", tmp_path / "missing")
        assert not (tmp_path / "missing").exists()

    def test_network_error(self, tmp_path, session):
        session.get.side_effect = requests.ConnectionError("network down")
        fetcher = Fetcher(session=session)
        with pytest.raises(requests.RequestException):
            fetcher.fetch("https://host/x", tmp_path / "x")

    def test_default_session(self):
        with patch('progcat.catalog.fetcher.requests.Session') as mock_session:
            fetcher = Fetcher()
            fetcher.close()
        mock_session.return_value.close.assert_called_once()
        assert fetcher._timeout == 10.0
