"""Bounded command execution — local subprocess and the SSH wrapper around it.

Every command runs without a shell, under a hard wall-clock timeout, with its
diagnostic output trimmed before it leaves this module.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from svcwatch.config import settings
from svcwatch.errors import CommandFailed
from svcwatch.runner.safety import escape_shell_arg
from svcwatch.runner.target import SSH_DEFAULT_PORT, ParsedTarget

logger = logging.getLogger(__name__)

OUTPUT_MAX_CHARS = 200
DEFAULT_TIMEOUT_MS = 5_000


@dataclass(frozen=True)
class ExecutionResult:
    """Captured outcome of one subprocess run."""

    exit_failed: bool
    stdout: str = ""
    stderr: str = ""


CommandRunner = Callable[[Sequence[str], int], ExecutionResult]


def trim_output(output: str | bytes | None) -> str:
    """Strip whitespace and cap at OUTPUT_MAX_CHARS, marking the cut with '...'."""
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")
    text = (output or "").strip()
    if len(text) > OUTPUT_MAX_CHARS:
        text = text[:OUTPUT_MAX_CHARS] + "..."
    return text


def _as_text(output: str | bytes | None) -> str:
    # TimeoutExpired carries raw bytes even in text mode
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output or ""


def _fail(result: ExecutionResult, reason: str) -> CommandFailed:
    message = trim_output(result.stderr or result.stdout or reason)
    return CommandFailed(message or "Failed to execute command", result)


def run_command(args: Sequence[str], timeout_ms: int = DEFAULT_TIMEOUT_MS) -> ExecutionResult:
    """Run ``args`` (no shell) and return the captured output.

    Raises CommandFailed on non-zero exit, spawn failure, or timeout. On
    timeout the child is killed before this returns.
    """
    cmd = [str(a) for a in args]
    logger.debug("Running %s (timeout %dms)", cmd, timeout_ms)
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout_ms / 1000,
            encoding="utf-8",
            errors="replace",
        )
    except subprocess.TimeoutExpired as e:
        result = ExecutionResult(
            exit_failed=True, stdout=_as_text(e.stdout), stderr=_as_text(e.stderr),
        )
        raise _fail(result, f"Command timed out after {timeout_ms}ms")
    except FileNotFoundError as e:
        raise _fail(ExecutionResult(exit_failed=True), f"Command not found: {e}")
    except OSError as e:
        raise _fail(ExecutionResult(exit_failed=True), f"Error: {type(e).__name__}: {e}")

    result = ExecutionResult(
        exit_failed=proc.returncode != 0,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
    if result.exit_failed:
        raise _fail(result, f"Command exited with status {proc.returncode}")
    return result


# ── SSH transport ────────────────────────────────────────────────────────────


def build_ssh_command(target: ParsedTarget, remote_args: Sequence[str]) -> list[str]:
    """Build the local ssh argv that runs ``remote_args`` on ``target``.

    The remote side re-tokenizes the trailing argument with its own shell, so
    each token is quoted on its own and the quoted words are space-joined.
    """
    cmd = [
        settings.ssh_path,
        "-o",
        "BatchMode=yes",
        "-o",
        f"ConnectTimeout={settings.ssh_connect_timeout}",
    ]
    if target.port is not None and target.port != SSH_DEFAULT_PORT:
        cmd += ["-p", str(target.port)]
    cmd += [target.user_host, " ".join(escape_shell_arg(a) for a in remote_args)]
    return cmd


def run_over_ssh(
    target: ParsedTarget,
    remote_args: Sequence[str],
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    runner: CommandRunner = run_command,
) -> ExecutionResult:
    """Run ``remote_args`` on ``target`` through the ssh client."""
    return runner(build_ssh_command(target, remote_args), timeout_ms)
