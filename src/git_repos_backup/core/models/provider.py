"""Provider configuration models."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ProviderType(str, Enum):
    """Supported repository hosting providers."""

    GITEA = "gitea"
    GITHUB = "github"


class AuthMode(str, Enum):
    """Authentication mode in effect for a provider."""

    BASIC = "basic"
    TOKEN = "token"
    NONE = "none"


class ProviderConfig(BaseModel):
    """Configuration for one remote source of repositories.

    ``type`` is kept as a plain string so that an unsupported kind is
    reported when the provider is listed rather than when the config
    file is parsed; see ``ProviderType`` for the accepted values.
    """

    type: str
    server_url: str = ""
    access_token: str = ""
    username: str = ""
    password: str = ""
    use_basic_auth: bool = False
    skip_ssl_validation: bool = False
    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    target_dir: str

    @field_validator("server_url", "access_token", "username", "password", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value):
        return [] if value is None else value

    @property
    def auth_mode(self) -> AuthMode:
        """Basic auth wins over the access token when both are configured."""
        if self.use_basic_auth:
            return AuthMode.BASIC
        if self.access_token:
            return AuthMode.TOKEN
        return AuthMode.NONE


class BackupConfig(BaseModel):
    """Top-level configuration: one or many provider blocks."""

    providers: list[ProviderConfig] = Field(default_factory=list)

    @field_validator("providers", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value):
        return [] if value is None else value
