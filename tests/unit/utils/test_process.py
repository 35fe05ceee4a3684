"""Tests for process helpers."""

import subprocess

import pytest

from git_repos_backup.utils.process import describe_failure, mask_command, mask_text


@pytest.mark.unit
class TestMasking:
    """Tests for credential masking in command lines and messages."""

    def test_url_token(self) -> None:
        assert mask_text("https://tok@example.com/r.git") == "https://****@example.com/r.git"

    def test_url_basic_auth(self) -> None:
        assert mask_text("fatal: http://u:p@example.com/r.git not found") == (
            "fatal: http://****@example.com/r.git not found"
        )

    def test_password_containing_at_sign(self) -> None:
        assert mask_text("https://u:p@ss@example.com/r.git") == "https://****@example.com/r.git"

    def test_short_password_does_not_mask_other_text(self) -> None:
        command = [
            "git", "-C", "/backup/people/app", "fetch", "--prune",
            "https://u:p@example.com/people/app.git", "refs/heads/*:refs/heads/*",
        ]
        assert mask_command(command) == [
            "git", "-C", "/backup/people/app", "fetch", "--prune",
            "https://****@example.com/people/app.git", "refs/heads/*:refs/heads/*",
        ]

    def test_auth_headers(self) -> None:
        assert mask_command(["-H", "Authorization: Bearer ghp_abc"]) == ["-H", "Authorization: Bearer ****"]
        assert mask_command(["-H", "accept: application/json"]) == ["-H", "accept: application/json"]

    def test_basic_auth_option(self) -> None:
        assert mask_command(["curl", "-u", "u:p", "https://x.org"]) == ["curl", "-u", "****", "https://x.org"]

    def test_url_without_credentials(self) -> None:
        assert mask_text("https://example.com/r.git") == "https://example.com/r.git"
        assert mask_text("git@host:owner/r.git") == "git@host:owner/r.git"


@pytest.mark.unit
class TestDescribeFailure:
    def test_called_process_error(self) -> None:
        error = subprocess.CalledProcessError(128, ["git"], stderr="fatal: nope\n")
        assert describe_failure(error) == "exit status 128: fatal: nope"

    def test_timeout(self) -> None:
        assert describe_failure(subprocess.TimeoutExpired(["git"], 5)) == "timed out after 5s"
