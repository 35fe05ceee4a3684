"""Backup service: list, filter and mirror repositories per provider."""

from collections.abc import Callable
from pathlib import Path

import structlog

from git_repos_backup.core.exceptions import BackupError, FilesystemError
from git_repos_backup.core.models.provider import BackupConfig, ProviderConfig
from git_repos_backup.core.models.report import BackupReport, ProviderReport
from git_repos_backup.git.mirror import MirrorSync
from git_repos_backup.providers.lister import RepositoryLister
from git_repos_backup.utils.filtering import filter_repositories

logger = structlog.get_logger(__name__)

SyncFactory = Callable[[ProviderConfig], MirrorSync]


class BackupService:
    """Runs the backup pipeline once per configured provider.

    Providers are processed in order, one repository at a time:
    1. Ensure the provider's target directory exists
    2. List repositories through the provider API
    3. Apply include/exclude filters
    4. Initialize or fetch each local mirror

    A listing failure skips only that provider and a sync failure skips
    only that repository. An unwritable target directory is fatal.
    """

    def __init__(
        self,
        lister: RepositoryLister | None = None,
        sync_factory: SyncFactory | None = None,
    ) -> None:
        self._lister = lister or RepositoryLister()
        self._sync_factory = sync_factory or MirrorSync

    def run(self, config: BackupConfig) -> BackupReport:
        report = BackupReport()
        for index, provider in enumerate(config.providers, 1):
            logger.info("Processing provider", index=index, provider=provider.type)
            report.providers.append(self.backup_provider(provider))
        return report

    def backup_provider(self, provider: ProviderConfig) -> ProviderReport:
        report = ProviderReport(provider=provider.type, target_dir=provider.target_dir)
        ensure_target_dir(provider.target_dir)

        try:
            repos = self._lister.list_repositories(provider)
        except BackupError as e:
            logger.error("Failed to get repositories", provider=provider.type, error=e.message)
            report.error = e.message
            return report

        report.listed = len(repos)
        logger.info("Repositories found", provider=provider.type, count=len(repos))

        repos = filter_repositories(repos, provider.include, provider.exclude)
        report.filtered = len(repos)
        logger.info("Repositories filtered", provider=provider.type, count=len(repos))

        mirror = self._sync_factory(provider)
        for repo in repos:
            try:
                report.synced[repo.full_name] = mirror.sync_repository(repo)
            except BackupError as e:
                logger.error(
                    "Failed to fetch repository",
                    repository=repo.full_name,
                    error=e.message,
                )
                report.failed[repo.full_name] = e.message

        return report


def ensure_target_dir(target_dir: str) -> Path:
    """Create the provider's target directory if it does not exist."""
    path = Path(target_dir)
    try:
        path.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"Failed to create target directory: {e}",
            details={"path": target_dir},
        ) from e
    return path
