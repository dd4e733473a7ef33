"""Shared fixtures for dits shim tests."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Callable

import pytest

_DITS_ENV_VARS = (
    "DITS_HOME",
    "DITS_SHIM_CONFIG",
    "DITS_INSTALL_ROOT",
    "DITS_DEBUG",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point DITS_HOME at an empty directory and clear other shim variables."""
    for name in _DITS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "dits-home"
    home.mkdir()
    monkeypatch.setenv("DITS_HOME", str(home))
    return home


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[[Path, str], Path]:
    """Create an executable /bin/sh script at the given path."""

    def _make(path: Path, body: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"#!/bin/sh\n{body}\n")
        mode = os.stat(path).st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
