"""Tests for the git-repos-backup CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from git_repos_backup import __version__
from git_repos_backup.cli import cli
from git_repos_backup.core.models.provider import BackupConfig
from git_repos_backup.core.models.report import BackupReport, ProviderReport
from git_repos_backup.core.models.repository import SyncAction


class RecordingService:
    """Stands in for BackupService and captures the config it was given."""

    configs: list[BackupConfig] = []
    report = BackupReport()

    def __init__(self, *args, **kwargs) -> None:
        pass

    def run(self, config: BackupConfig) -> BackupReport:
        RecordingService.configs.append(config)
        return RecordingService.report


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def service(monkeypatch: pytest.MonkeyPatch):
    RecordingService.configs = []
    RecordingService.report = BackupReport(
        providers=[
            ProviderReport(
                provider="github",
                target_dir="/b",
                listed=2,
                filtered=1,
                synced={"owner/a": SyncAction.FETCHED},
            )
        ]
    )
    monkeypatch.setattr("git_repos_backup.services.backup.BackupService", RecordingService)
    return RecordingService


@pytest.mark.unit
class TestCli:
    """Tests for the command-line entry point."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_shows_config_format(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "target_dir" in result.output

    def test_args_config(self, runner: CliRunner, service, tmp_path: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "--provider", "github",
                "--token", "tok",
                "--target-dir", str(tmp_path),
                "--include", "owner/a,owner/b",
                "--exclude", "owner/c",
            ],
        )
        assert result.exit_code == 0, result.output
        provider = service.configs[0].providers[0]
        assert provider.type == "github"
        assert provider.access_token == "tok"
        assert provider.include == ["owner/a", "owner/b"]
        assert provider.exclude == []
        assert "github: 1 synced, 0 failed" in result.output

    def test_target_dir_required_with_provider(self, runner: CliRunner, service) -> None:
        result = runner.invoke(cli, ["--provider", "gitea", "--server-url", "https://g"])
        assert result.exit_code == 2
        assert "--target-dir" in result.output

    def test_config_file(self, runner: CliRunner, service, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text(f"providers:\n  - type: gitea\n    server_url: https://g\n    target_dir: {tmp_path}\n")
        result = runner.invoke(cli, ["--config", str(path), "-v"])
        assert result.exit_code == 0, result.output
        assert service.configs[0].providers[0].server_url == "https://g"

    def test_default_config_file(self, runner: CliRunner, service, tmp_path: Path) -> None:
        with runner.isolated_filesystem(temp_dir=tmp_path):
            Path("config.yaml").write_text("providers:\n  - type: github\n    target_dir: out\n")
            result = runner.invoke(cli, [])
        assert result.exit_code == 0, result.output
        assert service.configs[0].providers[0].target_dir == "out"

    def test_no_configuration(self, runner: CliRunner, service, tmp_path: Path) -> None:
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])
        assert result.exit_code == 2
        assert "No configuration provided" in result.output

    def test_broken_config_file(self, runner: CliRunner, service, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["--config", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert service.configs == []

    def test_failures_set_exit_status(self, runner: CliRunner, service, tmp_path: Path) -> None:
        service.report = BackupReport(
            providers=[
                ProviderReport(provider="gitea", target_dir="/b", failed={"owner/a": "git command failed"}),
                ProviderReport(provider="github", target_dir="/c", error="Unsupported provider type"),
            ]
        )
        result = runner.invoke(cli, ["--provider", "gitea", "--target-dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "owner/a: git command failed" in result.output
        assert "github: skipped" in result.output

    def test_summary_reports_failure_count(self, runner: CliRunner, service, tmp_path: Path) -> None:
        service.report = BackupReport(
            providers=[
                ProviderReport(provider="gitea", target_dir="/b", failed={"owner/a": "x", "owner/b": "y"}),
            ]
        )
        result = runner.invoke(cli, ["--provider", "gitea", "--target-dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "Backup finished with 2 failure(s)" in result.output
