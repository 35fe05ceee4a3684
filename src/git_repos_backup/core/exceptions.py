"""Exception hierarchy for git-repos-backup."""

from typing import Any


class BackupError(Exception):
    """Base exception for all backup errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(BackupError):
    """Configuration file or arguments are missing or invalid."""


class ProviderError(BackupError):
    """Provider kind is not supported."""


class TransportError(BackupError):
    """The external HTTP client invocation failed."""


class ParseError(BackupError):
    """A provider response could not be decoded."""


class InvalidURLError(BackupError):
    """A clone URL is malformed."""


class FilesystemError(BackupError):
    """A local directory could not be created."""


class GitCommandError(BackupError):
    """A git invocation exited with an error or timed out."""

    def __init__(
        self,
        message: str,
        command: list[str],
        stderr: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.command = command
        self.stderr = stderr
