"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from scopedref.config import reset_settings


class CleanupRecorder:
    """Cleanup routine that records every call it receives."""

    def __init__(self, fail_with: Exception | None = None):
        self.calls: list[tuple] = []
        self._fail_with = fail_with

    def __call__(self, *resources):
        self.calls.append(resources)
        if self._fail_with is not None:
            raise self._fail_with

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate each test from SCOPEDREF_* variables and cached settings."""
    for name in (
        "SCOPEDREF_LOG_CLEANUP_FAILURES",
        "SCOPEDREF_CLEANUP_FAILURE_LEVEL",
        "SCOPEDREF_WARN_UNRELEASED",
        "SCOPEDREF_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def recorder():
    """Fresh recording cleanup routine."""
    return CleanupRecorder()


@pytest.fixture
def failing_recorder():
    """Recording cleanup routine that raises after recording."""
    return CleanupRecorder(fail_with=OSError("close failed"))
