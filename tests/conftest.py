"""Shared fixtures: keep session logs out of the user's home directory."""

from pathlib import Path

import pytest

from typenamelint.lib.logger import reset_session


@pytest.fixture(autouse=True)
def isolated_logs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    logs_dir = tmp_path / "logs"
    monkeypatch.setenv("TYPENAMELINT_LOG_DIR", str(logs_dir))
    reset_session()
    yield logs_dir
    reset_session()
