"""Shared fixtures for all tests."""

import pytest


@pytest.fixture(autouse=True)
def git_identity(monkeypatch):
    """Give git plumbing commands an author and committer."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
