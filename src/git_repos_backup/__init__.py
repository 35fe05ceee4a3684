"""git-repos-backup: mirror Gitea and GitHub repositories to local bare clones."""

__version__ = "0.1.1"
