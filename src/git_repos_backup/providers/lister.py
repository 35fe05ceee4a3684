"""Repository listing through provider REST APIs.

The HTTP request is made by invoking ``curl``; this module only builds the
command line and translates the JSON payload into ``Repository`` values.
"""

import subprocess

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from git_repos_backup.core.exceptions import ParseError, ProviderError, TransportError
from git_repos_backup.core.models.provider import AuthMode, ProviderConfig, ProviderType
from git_repos_backup.core.models.repository import Repository
from git_repos_backup.utils.process import (
    CommandRunner,
    describe_failure,
    mask_command,
    mask_text,
    run_command,
)

logger = structlog.get_logger(__name__)

GITHUB_API_URL = "https://api.github.com/user/repos"
GITHUB_API_VERSION = "2022-11-28"


class _Owner(BaseModel):
    login: str


class _ApiRepository(BaseModel):
    """Per-item shape shared by the Gitea and GitHub APIs."""

    id: int
    name: str
    full_name: str
    clone_url: str
    owner: _Owner

    def to_repository(self) -> Repository:
        return Repository(
            id=self.id,
            login=self.owner.login,
            name=self.name,
            full_name=self.full_name,
            url=self.clone_url,
        )


class _GiteaSearchResponse(BaseModel):
    """Search envelope; error bodies such as ``{"message": ...}`` have no ``data``."""

    data: list[_ApiRepository]


_GITHUB_RESPONSE = TypeAdapter(list[_ApiRepository])


class RepositoryLister:
    """Lists the repositories visible to a provider's credentials."""

    def __init__(
        self,
        runner: CommandRunner = run_command,
        curl_binary: str = "curl",
        timeout: float | None = None,
    ) -> None:
        self._runner = runner
        self._curl_binary = curl_binary
        self._timeout = timeout

    def list_repositories(self, provider: ProviderConfig) -> list[Repository]:
        """Return repositories in API response order."""
        try:
            kind = ProviderType(provider.type)
        except ValueError as e:
            raise ProviderError(
                f"Unsupported provider type: {provider.type}",
                details={"type": provider.type},
            ) from e

        if kind is ProviderType.GITEA:
            return self._list_gitea(provider)
        return self._list_github(provider)

    @staticmethod
    def api_url(provider: ProviderConfig) -> str:
        """Endpoint listing the authenticated user's repositories."""
        server = provider.server_url.rstrip("/")
        if provider.type == ProviderType.GITEA.value:
            return f"{server}/api/v1/repos/search"
        # GitHub Enterprise serves the API under /api/v3 on its own host
        if server and "github.com" not in server:
            return f"{server}/api/v3/user/repos"
        return GITHUB_API_URL

    def build_command(self, provider: ProviderConfig) -> list[str]:
        """Build the curl command line for ``provider``."""
        command = [self._curl_binary, "-s"]
        if provider.skip_ssl_validation:
            command.append("--insecure")
        command += ["-X", "GET", self.api_url(provider)]

        if provider.type == ProviderType.GITEA.value:
            command += ["-H", "accept: application/json"]
            token_header = f"Authorization: token {provider.access_token}"
        else:
            command += [
                "-H", "accept: application/vnd.github+json",
                "-H", f"X-GitHub-Api-Version: {GITHUB_API_VERSION}",
            ]
            token_header = f"Authorization: Bearer {provider.access_token}"

        mode = provider.auth_mode
        if mode is AuthMode.BASIC:
            command += ["-u", f"{provider.username}:{provider.password}"]
        elif mode is AuthMode.TOKEN:
            command += ["-H", token_header]
        return command

    def _fetch(self, provider: ProviderConfig) -> str:
        command = self.build_command(provider)
        safe_command = mask_command(command)
        logger.debug("Requesting repository list", command=" ".join(safe_command))
        try:
            return self._runner(command, timeout=self._timeout)
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            raise TransportError(
                f"Failed to fetch repositories from {provider.type}: {mask_text(describe_failure(e))}",
                details={"url": self.api_url(provider)},
            ) from e

    def _list_gitea(self, provider: ProviderConfig) -> list[Repository]:
        output = self._fetch(provider)
        try:
            response = _GiteaSearchResponse.model_validate_json(output)
        except ValidationError as e:
            raise ParseError(
                f"Failed to parse Gitea API response: {e}",
                details={"url": self.api_url(provider)},
            ) from e
        return [item.to_repository() for item in response.data]

    def _list_github(self, provider: ProviderConfig) -> list[Repository]:
        output = self._fetch(provider)
        try:
            items = _GITHUB_RESPONSE.validate_json(output)
        except ValidationError as e:
            raise ParseError(
                f"Failed to parse GitHub API response: {e}",
                details={"url": self.api_url(provider)},
            ) from e
        return [item.to_repository() for item in items]
