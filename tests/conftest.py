# -*- coding: utf-8 -*-
"""
Shared fixtures for progcat tests.

Created
-------
2026-10-19
"""

import copy
import json
from pathlib import Path

import pytest
import requests

from progcat.catalog.fetcher import Fetcher
from progcat.catalog.loader import CatalogLoader
from progcat.catalog.models import RemoteOrigin
from progcat.catalog.store import LocalStore
from progcat.catalog.validator import SchemaValidator


DEMO_INDEX = {
    "source": {"name": "Demo"},
    "entries": [
        {
            "path": "p1",
            "icon": "i.png",
            "description": "d.md",
            "binary": "b.hex",
        },
    ],
}

DEMO_FILES = {
    "p1/i.png": b"\x89PNG fake",
    "p1/d.md": b"# Blink\n\nBlinks the *LED*.\n",
    "p1/b.hex": b":00000001FF\n",
}

ORIGIN = RemoteOrigin("https://example.test/owner/repo/main/")


def write_catalog(root: Path, index=None, files=None) -> Path:
    """Write a catalog directory with ``index`` and ``files``."""
    root.mkdir(parents=True, exist_ok=True)
    index = DEMO_INDEX if index is None else index
    files = DEMO_FILES if files is None else files
    (root / "index.json").write_text(json.dumps(index), encoding="utf-8")
    for rel, data in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    return root


def named_index(name: str) -> dict:
    index = copy.deepcopy(DEMO_INDEX)
    index["source"]["name"] = name
    return index


class FakeFetcher(Fetcher):
    """Serves files from a dict of URL -> bytes; unknown URLs 404."""

    def __init__(self, files=None) -> None:
        super().__init__(timeout=1.0)
        self.files = dict(files or {})
        self.calls = []

    def fetch(self, url, dest):
        self.calls.append(url)
        if url not in self.files:
            raise requests.HTTPError(f"404 Not Found: {url}")
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(self.files[url])
        return dest


def remote_files(index=None, files=None, origin=ORIGIN) -> dict:
    """URL -> bytes for a remote copy of a catalog, index included."""
    index = DEMO_INDEX if index is None else index
    files = DEMO_FILES if files is None else files
    served = {origin.url_for("index.json"): json.dumps(index).encode("utf-8")}
    for rel, data in files.items():
        served[origin.url_for(rel)] = data
    return served


@pytest.fixture
def validator():
    return SchemaValidator.from_file()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def loader(validator, fetcher):
    return CatalogLoader(validator, fetcher, max_workers=2)


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "static" / "catalog", tmp_path / "data")
