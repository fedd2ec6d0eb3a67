"""Error kinds raised by the service check engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svcwatch.runner.command import ExecutionResult


class CheckError(Exception):
    """Base class for every failure a service check can surface."""


class InvalidServiceName(CheckError):
    """Raised when a service name fails the platform allow-list."""


class InvalidTarget(CheckError):
    """Raised when an SSH target URL is malformed or has the wrong scheme."""


class UnsupportedPlatform(CheckError):
    """Raised when no strategy exists for the resolved OS / platform."""


class MissingConfiguration(CheckError):
    """Raised when a required check field (service name, SSH target) is absent."""


class CommandFailed(CheckError):
    """Raised on non-zero exit, timeout, or spawn failure of a subprocess.

    ``result`` holds whatever stdout/stderr was captured before the failure.
    """

    def __init__(self, message: str, result: ExecutionResult) -> None:
        self.result = result
        super().__init__(message)
