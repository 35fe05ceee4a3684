"""YAML configuration loading."""

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from git_repos_backup.core.exceptions import ConfigurationError
from git_repos_backup.core.models.provider import BackupConfig, ProviderConfig

logger = structlog.get_logger(__name__)


def load_config(path: str | Path) -> BackupConfig:
    """Load a multi-provider configuration from a YAML file."""
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {e}",
            details={"path": str(config_path)},
        ) from e

    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse config file: {e}",
            details={"path": str(config_path)},
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Failed to parse config file: expected a mapping at the top level",
            details={"path": str(config_path)},
        )

    try:
        config = BackupConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid config file: {e}",
            details={"path": str(config_path)},
        ) from e

    logger.debug("Configuration loaded", path=str(config_path), providers=len(config.providers))
    return config


def split_comma_separated(value: str | None) -> list[str]:
    """Split a comma-separated option, trimming blanks and dropping empty items."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def create_config_from_args(
    provider_type: str,
    target_dir: str,
    server_url: str = "",
    access_token: str = "",
    username: str = "",
    password: str = "",
    use_basic_auth: bool = False,
    skip_ssl_validation: bool = False,
    include: str | None = None,
    exclude: str | None = None,
) -> BackupConfig:
    """Build a single-provider configuration from command-line values.

    The exclude list is dropped when an include list is given.
    """
    include_list = split_comma_separated(include)
    exclude_list = [] if include_list else split_comma_separated(exclude)

    provider = ProviderConfig(
        type=provider_type,
        server_url=server_url,
        access_token=access_token,
        username=username,
        password=password,
        use_basic_auth=use_basic_auth,
        skip_ssl_validation=skip_ssl_validation,
        include=include_list,
        exclude=exclude_list,
        target_dir=target_dir,
    )
    return BackupConfig(providers=[provider])
