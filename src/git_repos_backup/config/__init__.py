"""Configuration for git-repos-backup."""

from git_repos_backup.config.loader import create_config_from_args, load_config
from git_repos_backup.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "load_config", "create_config_from_args"]
