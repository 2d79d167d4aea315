"""Shared fixtures for the fs_err test suite."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from fs_err.shared import reset_settings
from fs_err.shared.constants import (
    CONFIG_PATH_ENV,
    INLINE_CAUSE_ENV,
    LOG_FAILURES_ENV,
)


@pytest.fixture(autouse=True)
def default_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test with default settings and no FS_ERR_* variables."""
    for name in (CONFIG_PATH_ENV, INLINE_CAUSE_ENV, LOG_FAILURES_ENV):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A temporary directory that is also the current directory.

    Lets tests pass relative paths and assert on exact messages.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.txt"
    path.write_bytes(b"first line\nsecond line\n")
    return path
