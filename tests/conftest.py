"""Shared fixtures for mllt tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> text) below ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for name, text in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def tree(tmp_path):
    """Return a helper that writes a file tree below ``tmp_path``."""

    def _make(name: str, files: dict[str, str]) -> Path:
        return write_tree(tmp_path / name, files)

    return _make


@pytest.fixture(autouse=True)
def _clean_mllt_env(monkeypatch):
    """Keep MLLT_* variables from the developer's shell out of config tests."""
    for key in list(os.environ):
        if key.upper().startswith("MLLT_"):
            monkeypatch.delenv(key)
