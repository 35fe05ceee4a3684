"""CLI for git-repos-backup."""

import sys
from pathlib import Path

import click
import structlog

from git_repos_backup import __version__
from git_repos_backup.config.logging import configure_logging
from git_repos_backup.core.models.provider import ProviderType

logger = structlog.get_logger(__name__)

CONFIG_EXAMPLE = """\b
Configuration file (YAML):
  providers:
    - type: gitea|github
      server_url: URL of the Git server (for Gitea or GitHub Enterprise)
      access_token: API token (used when use_basic_auth is false)
      username: Username for basic authentication
      password: Password for basic authentication
      use_basic_auth: Whether to use basic authentication (default: false)
      skip_ssl_validation: Whether to skip SSL validation (default: false)
      include: List of repository full names to include (optional)
      exclude: List of repository full names to exclude (ignored if include is set)
      target_dir: Directory to mirror repositories into
"""


def _resolve_config(
    config_path: str | None,
    provider: str | None,
    default_config_path: str,
    **provider_args,
):
    """Pick the configuration source: file, command-line arguments or default file."""
    from git_repos_backup.config.loader import create_config_from_args, load_config

    if config_path:
        logger.debug("Loading configuration from file", path=config_path)
        return load_config(config_path)

    if provider:
        if not provider_args.get("target_dir"):
            raise click.UsageError("--target-dir is required when not using a config file")
        logger.debug("Creating configuration from command-line arguments")
        return create_config_from_args(provider_type=provider, **provider_args)

    if Path(default_config_path).is_file():
        logger.debug("Loading configuration from default file", path=default_config_path)
        return load_config(default_config_path)

    raise click.UsageError(
        "No configuration provided. Either specify a config file with --config "
        "or provide the required command-line arguments"
    )


@click.command(epilog=CONFIG_EXAMPLE)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to configuration file (default: config.yaml)")
@click.option(
    "--provider",
    type=click.Choice([p.value for p in ProviderType]),
    help="Provider type",
)
@click.option("--server-url", default="", help="URL of the Git server (required for Gitea, optional for GitHub)")
@click.option("--token", "access_token", default="", envvar="GIT_REPOS_BACKUP_TOKEN", help="API token for authentication")
@click.option("--username", default="", help="Username for basic authentication")
@click.option("--password", default="", envvar="GIT_REPOS_BACKUP_PASSWORD", help="Password for basic authentication")
@click.option("--use-basic-auth", is_flag=True, help="Use basic authentication")
@click.option("--skip-ssl", "skip_ssl_validation", is_flag=True, help="Skip SSL validation")
@click.option("--include", default=None, help="Comma-separated list of repository full names to include")
@click.option("--exclude", default=None, help="Comma-separated list of repository full names to exclude")
@click.option("--target-dir", default="", help="Directory to mirror repositories into")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(__version__, prog_name="git-repos-backup")
def cli(
    config_path: str | None,
    provider: str | None,
    server_url: str,
    access_token: str,
    username: str,
    password: str,
    use_basic_auth: bool,
    skip_ssl_validation: bool,
    include: str | None,
    exclude: str | None,
    target_dir: str,
    verbose: bool,
) -> None:
    """Back up multiple Git repositories from Gitea and GitHub as bare mirrors."""
    from git_repos_backup.config.settings import get_settings
    from git_repos_backup.core.exceptions import BackupError
    from git_repos_backup.git.mirror import MirrorSync
    from git_repos_backup.providers.lister import RepositoryLister
    from git_repos_backup.services.backup import BackupService

    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, json_logs=settings.json_logs)

    try:
        config = _resolve_config(
            config_path,
            provider,
            settings.default_config_path,
            server_url=server_url,
            access_token=access_token,
            username=username,
            password=password,
            use_basic_auth=use_basic_auth,
            skip_ssl_validation=skip_ssl_validation,
            include=include,
            exclude=exclude,
            target_dir=target_dir,
        )
    except BackupError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    lister = RepositoryLister(
        curl_binary=settings.curl_binary,
        timeout=settings.command_timeout,
    )
    service = BackupService(
        lister=lister,
        sync_factory=lambda p: MirrorSync(
            p,
            git_binary=settings.git_binary,
            timeout=settings.command_timeout,
        ),
    )

    try:
        report = service.run(config)
    except BackupError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    for item in report.providers:
        if item.error:
            click.echo(f"{item.provider}: skipped ({item.error})")
            continue
        click.echo(
            f"{item.provider}: {len(item.synced)} synced, {len(item.failed)} failed "
            f"({item.filtered} of {item.listed} repositories selected) -> {item.target_dir}"
        )
        for name, error in item.failed.items():
            click.echo(f"  - {name}: {error}")

    if not report.ok:
        click.echo(f"Backup finished with {report.failed_count} failure(s)")
        sys.exit(1)


if __name__ == "__main__":
    cli()
