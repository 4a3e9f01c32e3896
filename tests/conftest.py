"""
tests/conftest.py
"""
from __future__ import annotations

import itertools
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from localmedia.config import Settings
from localmedia.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    static = tmp_path / "public"
    static.mkdir()
    (static / "hi.html").write_text("<h1>hello from hi</h1>", encoding="utf-8")
    return Settings(
        data_dir=tmp_path / "data",
        images_dir=tmp_path / "images",
        static_dir=static,
        yt_api_key=None,
    )


@pytest.fixture
def ids():
    """Deterministic id generator: 1, 2, 3, …"""
    return itertools.count(1).__next__


@pytest.fixture
def app(settings, ids):
    return create_app(settings, next_id=ids)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client
