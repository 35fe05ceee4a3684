"""Core domain models and exceptions for git-repos-backup."""

from git_repos_backup.core.exceptions import (
    BackupError,
    ConfigurationError,
    FilesystemError,
    GitCommandError,
    InvalidURLError,
    ParseError,
    ProviderError,
    TransportError,
)
from git_repos_backup.core.models import (
    AuthMode,
    BackupConfig,
    BackupReport,
    ProviderConfig,
    ProviderReport,
    ProviderType,
    Repository,
    SyncAction,
)

__all__ = [
    # Models
    "AuthMode",
    "BackupConfig",
    "ProviderConfig",
    "ProviderType",
    "Repository",
    "SyncAction",
    "BackupReport",
    "ProviderReport",
    # Exceptions
    "BackupError",
    "ConfigurationError",
    "ProviderError",
    "TransportError",
    "ParseError",
    "InvalidURLError",
    "FilesystemError",
    "GitCommandError",
]
