"""External process invocation.

The lister and the sync engine never call subprocess directly; they take a
``CommandRunner`` so tests can substitute a fake.
"""

import re
import subprocess
from collections.abc import Sequence
from typing import Protocol

MASK = "****"

_URL_USERINFO = re.compile(r"(?P<scheme>https?://)[^/\s]+@")
_AUTH_HEADER = re.compile(r"^(?P<prefix>Authorization:\s*\S+\s+)\S.*$", re.IGNORECASE)


class CommandRunner(Protocol):
    """Runs an external command and returns its stdout.

    Implementations raise ``subprocess.CalledProcessError`` on a non-zero
    exit, ``subprocess.TimeoutExpired`` on timeout and ``OSError`` when the
    binary cannot be started.
    """

    def __call__(
        self,
        args: Sequence[str],
        *,
        cwd: str | None = None,
        timeout: float | None = None,
    ) -> str: ...


def run_command(
    args: Sequence[str],
    *,
    cwd: str | None = None,
    timeout: float | None = None,
) -> str:
    """Run a command and return stdout."""
    result = subprocess.run(
        list(args),
        cwd=cwd,
        capture_output=True,
        text=True,
        errors="replace",
        check=True,
        timeout=timeout,
    )
    return result.stdout


def mask_text(text: str) -> str:
    """Hide the userinfo part of every HTTP(S) URL in ``text``."""
    return _URL_USERINFO.sub(rf"\g<scheme>{MASK}@", text)


def mask_command(args: Sequence[str]) -> list[str]:
    """Copy of a command line with URL credentials, auth headers and ``-u`` values hidden."""
    masked = []
    previous = None
    for arg in args:
        if previous == "-u":
            arg = MASK
        else:
            arg = _AUTH_HEADER.sub(rf"\g<prefix>{MASK}", mask_text(arg))
        masked.append(arg)
        previous = arg
    return masked


def describe_failure(error: BaseException) -> str:
    """Short human-readable reason for a failed invocation."""
    if isinstance(error, subprocess.CalledProcessError):
        stderr = (error.stderr or "").strip() if isinstance(error.stderr, str) else ""
        reason = f"exit status {error.returncode}"
        return f"{reason}: {stderr}" if stderr else reason
    if isinstance(error, subprocess.TimeoutExpired):
        return f"timed out after {error.timeout}s"
    return str(error)
