"""Domain models for git-repos-backup."""

from git_repos_backup.core.models.provider import (
    AuthMode,
    BackupConfig,
    ProviderConfig,
    ProviderType,
)
from git_repos_backup.core.models.report import BackupReport, ProviderReport
from git_repos_backup.core.models.repository import Repository, SyncAction

__all__ = [
    "AuthMode",
    "BackupConfig",
    "ProviderConfig",
    "ProviderType",
    "Repository",
    "SyncAction",
    "BackupReport",
    "ProviderReport",
]
