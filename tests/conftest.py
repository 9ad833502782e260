# tests/conftest.py
from __future__ import annotations

import logging

import pytest

from numcore.runtime import _current_runtime


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Every test starts from an unconfigured Runtime (built-in defaults)."""
    token = _current_runtime.set(None)
    yield
    _current_runtime.reset(token)
    logging.getLogger("numcore").setLevel(logging.NOTSET)


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point NUMCORE_HOME at an empty temporary directory."""
    home = tmp_path / "numcore-home"
    monkeypatch.setenv("NUMCORE_HOME", str(home))
    return home
