"""Include/exclude filtering of listed repositories."""

from collections.abc import Sequence

import structlog

from git_repos_backup.core.models.repository import Repository

logger = structlog.get_logger(__name__)


def filter_repositories(
    repos: list[Repository],
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> list[Repository]:
    """Filter repositories by exact, case-sensitive full name.

    - No include and no exclude: ``repos`` is returned unchanged.
    - A non-empty include list keeps only the listed names and the
      exclude list is ignored entirely.
    - Otherwise every repository not in the exclude list is kept.

    Input order is preserved.
    """
    include_set = set(include or ())
    exclude_set = set(exclude or ())

    if not include_set and not exclude_set:
        return repos

    logger.debug(
        "Applying repository filters",
        include=sorted(include_set),
        exclude=sorted(exclude_set),
    )

    if include_set:
        return [repo for repo in repos if repo.full_name in include_set]
    return [repo for repo in repos if repo.full_name not in exclude_set]
