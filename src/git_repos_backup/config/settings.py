"""Application settings using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level settings loaded from environment variables.

    Provider blocks live in the YAML config file; these settings only
    control how the tool itself runs.
    """

    model_config = SettingsConfigDict(
        env_prefix="GIT_REPOS_BACKUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # Config file used when neither --config nor --provider is given
    default_config_path: str = "config.yaml"

    # External binaries
    git_binary: str = "git"
    curl_binary: str = "curl"

    # Per-invocation timeout in seconds; None waits forever
    command_timeout: float | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
