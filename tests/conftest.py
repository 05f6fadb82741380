"""
Shared test fixtures and configuration.
"""

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _restore_path(monkeypatch):
    """Package-manager bootstrap mutates PATH; undo it after each test."""
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))


@pytest.fixture
def os_release(tmp_path: Path):
    """Write an os-release file with the given ID and return its path."""

    def _write(distro_id: str) -> Path:
        path = tmp_path / "os-release"
        path.write_text(f'NAME="Test"\nID={distro_id}\nVERSION_ID="1"\n')
        return path

    return _write
