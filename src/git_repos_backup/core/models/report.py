"""Run summary models."""

from pydantic import BaseModel, Field

from git_repos_backup.core.models.repository import SyncAction


class ProviderReport(BaseModel):
    """Outcome of processing a single provider."""

    provider: str
    target_dir: str
    listed: int = 0
    filtered: int = 0
    synced: dict[str, SyncAction] = Field(default_factory=dict)
    failed: dict[str, str] = Field(default_factory=dict)
    error: str | None = None  # set when listing failed and the provider was skipped

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed


class BackupReport(BaseModel):
    """Outcome of a whole backup run."""

    providers: list[ProviderReport] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(p.ok for p in self.providers)

    @property
    def failed_count(self) -> int:
        return sum(len(p.failed) + (1 if p.error else 0) for p in self.providers)
