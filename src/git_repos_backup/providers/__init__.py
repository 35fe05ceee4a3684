"""Provider API clients."""

from git_repos_backup.providers.lister import RepositoryLister

__all__ = ["RepositoryLister"]
