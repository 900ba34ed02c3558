"""Shared fixtures for side-effects-lint tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def write_file():
    """Write a UTF-8 file, creating parent directories."""

    def _write(path: Path, lines: list[str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
