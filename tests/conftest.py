"""Shared fixtures for ghactivity tests."""

from __future__ import annotations

import typing as typ

import pytest

from tests.helpers.fake_github import FakeGitHub, RecordingReporter

if typ.TYPE_CHECKING:
    from pathlib import Path

TEST_TOKEN = "ghp_test_token"  # noqa: S105 - fake credential


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Return a GitHub fake that knows the ``octocat`` account."""
    return FakeGitHub(users={"octocat": {"login": "octocat", "id": 583231}})


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    """Write an env file holding a token and return its path."""
    path = tmp_path / ".env"
    path.write_text(f'PERSONAL_ACCESS_TOKEN="{TEST_TOKEN}"\n', encoding="utf-8")
    return path


@pytest.fixture
def reporter_factory() -> typ.Callable[..., RecordingReporter]:
    """Return a factory building reporters that answer the given usernames."""

    def _make(*answers: str) -> RecordingReporter:
        return RecordingReporter(answers)

    return _make
