"""Bare mirror synchronisation using the git CLI."""

import subprocess
from pathlib import Path

import structlog

from git_repos_backup.core.exceptions import FilesystemError, GitCommandError, InvalidURLError
from git_repos_backup.core.models.provider import AuthMode, ProviderConfig
from git_repos_backup.core.models.repository import Repository, SyncAction
from git_repos_backup.utils.process import (
    CommandRunner,
    describe_failure,
    mask_command,
    mask_text,
    run_command,
)

logger = structlog.get_logger(__name__)

MIN_URL_LENGTH = 10
HTTP_SCHEMES = ("http://", "https://")
FETCH_REFSPEC = "refs/heads/*:refs/heads/*"


def get_repo_url(provider: ProviderConfig, raw_url: str) -> str:
    """Embed the provider's credentials into an HTTP(S) clone URL.

    Non-HTTP URLs (e.g. ``git@host:owner/repo.git``) are returned as-is.
    """
    if len(raw_url) < MIN_URL_LENGTH:
        raise InvalidURLError(f"Invalid repository URL: {raw_url!r}", details={"url": raw_url})

    for scheme in HTTP_SCHEMES:
        if raw_url.startswith(scheme):
            rest = raw_url[len(scheme):]
            mode = provider.auth_mode
            if mode is AuthMode.BASIC:
                return f"{scheme}{provider.username}:{provider.password}@{rest}"
            if mode is AuthMode.TOKEN:
                return f"{scheme}{provider.access_token}@{rest}"
            return raw_url

    return raw_url


def repo_exists(repo_path: str | Path) -> bool:
    """Whether ``repo_path`` holds an initialized bare repository (non-empty HEAD)."""
    head = Path(repo_path) / "HEAD"
    try:
        return head.is_file() and head.stat().st_size > 0
    except OSError:
        return False


def get_repo_path(target_dir: str | Path, login: str, name: str) -> Path:
    """Return ``{target_dir}/{login}/{name}``, creating the directories if absent."""
    repo_path = Path(target_dir) / login / name
    try:
        repo_path.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"Failed to create repository directory: {e}",
            details={"path": str(repo_path)},
        ) from e
    return repo_path


class MirrorSync:
    """Keeps local bare mirrors of a provider's repositories up to date.

    A mirror is created by ``git init --bare`` followed by a fetch; an
    existing mirror is only fetched, so re-running never discards history.
    """

    def __init__(
        self,
        provider: ProviderConfig,
        runner: CommandRunner = run_command,
        git_binary: str = "git",
        timeout: float | None = None,
    ) -> None:
        self._provider = provider
        self._runner = runner
        self._git_binary = git_binary
        self._timeout = timeout

    @property
    def provider(self) -> ProviderConfig:
        return self._provider

    def git_command(self, *args: str) -> list[str]:
        """Build a git command line, disabling TLS verification if configured."""
        command = [self._git_binary]
        if self._provider.skip_ssl_validation:
            command += ["-c", "http.sslVerify=false"]
        command.extend(args)
        return command

    def _run_git(self, *args: str) -> str:
        command = self.git_command(*args)
        safe_command = mask_command(command)
        logger.debug("Running git", command=" ".join(safe_command))
        try:
            return self._runner(command, timeout=self._timeout)
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            stderr = e.stderr if isinstance(getattr(e, "stderr", None), str) else None
            reason = mask_text(describe_failure(e))
            raise GitCommandError(
                f"git command failed: {reason}",
                command=safe_command,
                stderr=mask_text(stderr) if stderr else None,
            ) from e

    def init_bare(self, repo_path: Path) -> None:
        """Create an empty bare repository in ``repo_path``."""
        self._run_git("-C", str(repo_path), "init", "--bare", "--quiet")

    def fetch(self, repo_path: Path, url: str) -> None:
        """Force-fetch all branches and tags from ``url``, pruning deleted refs."""
        self._run_git(
            "-C", str(repo_path),
            "fetch", "--force", "--prune", "--tags",
            url, FETCH_REFSPEC,
        )

    def sync_repository(self, repo: Repository) -> SyncAction:
        """Create or update the local mirror of ``repo``."""
        repo_path = get_repo_path(self._provider.target_dir, repo.login, repo.name)
        url = get_repo_url(self._provider, repo.url)
        log = logger.bind(repository=repo.full_name, path=str(repo_path))

        action = SyncAction.FETCHED
        if not repo_exists(repo_path):
            log.info("Initializing bare mirror")
            self.init_bare(repo_path)
            action = SyncAction.INITIALIZED

        log.info("Fetching repository")
        self.fetch(repo_path, url)
        return action
