"""Business logic services for git-repos-backup."""

from git_repos_backup.services.backup import BackupService

__all__ = ["BackupService"]
