"""Shared pytest fixtures and configuration for all tests."""

import pytest


@pytest.fixture
def source_tree(tmp_path):
    """Factory writing source files under a temporary workspace root."""

    def _write(files):
        for name, content in files.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment toggles that change CLI error handling."""
    for name in (
        "COMMENTREFLOW_VERBOSE",
        "COMMENTREFLOW_RERAISE",
        "COMMENTREFLOW_DEBUG",
        "COMMENTREFLOW_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
