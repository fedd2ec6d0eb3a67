"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from svcwatch.errors import CommandFailed
from svcwatch.runner.command import ExecutionResult, trim_output


class SpyRunner:
    """Stands in for run_command: records argv and replays a canned result."""

    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        fail: bool = False,
        reason: str = "Command exited with status 3",
    ) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.fail = fail
        self.reason = reason
        self.calls: list[tuple[list[str], int]] = []

    def __call__(self, args: Sequence[str], timeout_ms: int) -> ExecutionResult:
        self.calls.append((list(args), timeout_ms))
        result = ExecutionResult(exit_failed=self.fail, stdout=self.stdout, stderr=self.stderr)
        if self.fail:
            message = trim_output(self.stderr or self.stdout or self.reason)
            raise CommandFailed(message, result)
        return result

    @property
    def last_args(self) -> list[str]:
        return self.calls[-1][0]


@pytest.fixture
def spy_runner() -> SpyRunner:
    return SpyRunner()


@pytest.fixture
def make_runner() -> type[SpyRunner]:
    """Factory for spies with canned output, e.g. ``make_runner(stdout="active")``."""
    return SpyRunner
