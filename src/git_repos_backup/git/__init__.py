"""Git integration for git-repos-backup."""

from git_repos_backup.git.mirror import MirrorSync, get_repo_path, get_repo_url, repo_exists

__all__ = ["MirrorSync", "get_repo_path", "get_repo_url", "repo_exists"]
