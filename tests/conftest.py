"""Pytest configuration and fixtures."""

import subprocess
from collections.abc import Sequence

import pytest
import structlog

from git_repos_backup.core.models.provider import ProviderConfig, ProviderType
from git_repos_backup.core.models.repository import Repository


class FakeRunner:
    """Records commands and replays canned results instead of spawning processes.

    Markers are matched against whole command-line arguments.
    """

    def __init__(self, outputs: dict[str, str] | None = None, fail_on: Sequence[str] = ()) -> None:
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []
        self._outputs = outputs or {}
        self._fail_on = list(fail_on)

    def __call__(self, args, *, cwd=None, timeout=None) -> str:
        command = list(args)
        self.calls.append(command)
        self.timeouts.append(timeout)
        for marker in self._fail_on:
            if marker in command:
                raise subprocess.CalledProcessError(128, command, output="", stderr=f"fatal: {marker} failed")
        for marker, output in self._outputs.items():
            if marker in command:
                return output
        return ""


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any logging configuration done by a test (e.g. through the CLI)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def gitea_provider(tmp_path) -> ProviderConfig:
    """A Gitea provider using token authentication."""
    return ProviderConfig(
        type=ProviderType.GITEA.value,
        server_url="https://gitea.example.com",
        access_token="faketoken",
        target_dir=str(tmp_path / "backup"),
    )


@pytest.fixture
def sample_repository() -> Repository:
    return Repository(
        id=1,
        login="testuser",
        name="testrepo",
        full_name="testuser/testrepo",
        url="https://gitea.example.com/testuser/testrepo.git",
    )


@pytest.fixture
def make_runner():
    """Build a FakeRunner with canned outputs or failures."""
    return FakeRunner
