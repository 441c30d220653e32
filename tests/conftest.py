"""Shared pytest fixtures for iniconf tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_ini(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing INI content to a temp file and returning its path.

    Content is written byte-for-byte (no newline translation) so tests
    control line endings exactly.
    """

    def _write(content: str, name: str = "test.ini") -> Path:
        path = tmp_path / name
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """Undo root logger changes made by ``configure_logging`` (CLI runs call it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("iniconf")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
