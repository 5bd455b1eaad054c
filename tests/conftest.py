"""Shared fixtures: throwaway source trees rooted at the working directory."""

import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def tree(tmp_path, monkeypatch):
    """Return a writer that creates files relative to a fresh working directory."""
    monkeypatch.chdir(tmp_path)

    def write(files: dict) -> Path:
        for name, content in files.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return tmp_path

    return write
