"""Platform check strategies — systemd and Windows SCM, locally or over SSH.

Each strategy validates the service name, builds the platform status query,
runs it once through the injected runner, and interprets the output into a
CheckOutcome. Validation always happens before anything is spawned.
"""

from __future__ import annotations

from svcwatch.config import settings
from svcwatch.errors import CommandFailed, MissingConfiguration
from svcwatch.health.models import CheckOutcome, Status
from svcwatch.runner.command import CommandRunner, run_over_ssh, trim_output
from svcwatch.runner.safety import (
    quote_powershell_literal,
    validate_linux_service_name,
    validate_windows_service_name,
)
from svcwatch.runner.target import ParsedTarget


def _running(service_name: str) -> CheckOutcome:
    return CheckOutcome(status=Status.UP, message=f"Service '{service_name}' is running.")


def _down(service_name: str, state: str) -> CheckOutcome:
    return CheckOutcome(status=Status.DOWN, message=f"Service '{service_name}' is {state}.")


# ── Command builders ─────────────────────────────────────────────────────────


def systemctl_is_active(service_name: str) -> list[str]:
    return [settings.systemctl_path, "is-active", service_name]


def powershell_service_status(service_name: str) -> list[str]:
    command = f"(Get-Service -Name {quote_powershell_literal(service_name)}).Status"
    return [settings.powershell_path, "-NoProfile", "-NonInteractive", "-Command", command]


# ── Linux (systemd) ──────────────────────────────────────────────────────────


def check_linux_local(
    service_name: str, *, runner: CommandRunner, timeout_ms: int,
    target: ParsedTarget | None = None,
) -> CheckOutcome:
    """``systemctl is-active`` on this host; exit status decides."""
    validate_linux_service_name(service_name)

    try:
        runner(systemctl_is_active(service_name), timeout_ms)
    except CommandFailed as e:
        output = trim_output(e.result.stderr or e.result.stdout)
        return CheckOutcome(
            status=Status.DOWN,
            message=output or f"Service '{service_name}' is not running.",
        )

    return _running(service_name)


def check_linux_remote(
    service_name: str, *, runner: CommandRunner, timeout_ms: int,
    target: ParsedTarget | None = None,
) -> CheckOutcome:
    """``systemctl is-active`` over SSH; the printed state must be ``active``."""
    validate_linux_service_name(service_name)
    if target is None:
        raise MissingConfiguration("SSH Target is required.")

    try:
        result = run_over_ssh(target, systemctl_is_active(service_name), timeout_ms, runner)
    except CommandFailed as e:
        return _down(service_name, trim_output(str(e)) or "not running")

    status = trim_output(result.stdout)
    if status != "active":
        return _down(service_name, status or "not running")
    return _running(service_name)


# ── Windows (Service Control Manager via PowerShell) ─────────────────────────


def check_windows_local(
    service_name: str, *, runner: CommandRunner, timeout_ms: int,
    target: ParsedTarget | None = None,
) -> CheckOutcome:
    """``Get-Service`` on this host; anything on stderr means not found."""
    validate_windows_service_name(service_name)

    try:
        result = runner(powershell_service_status(service_name), timeout_ms)
    except CommandFailed:
        return _down(service_name, "not running/found")

    # Get-Service writes "Cannot find any service" to stderr with exit 0
    if result.stderr.strip():
        return _down(service_name, "not running/found")

    status = trim_output(result.stdout)
    if status == "Running":
        return _running(service_name)
    return _down(service_name, status or "not running")


def check_windows_remote(
    service_name: str, *, runner: CommandRunner, timeout_ms: int,
    target: ParsedTarget | None = None,
) -> CheckOutcome:
    """``Get-Service`` over SSH to an OpenSSH-for-Windows host.

    Transport failures and unknown services are reported the same way, since
    ssh's exit status does not tell them apart.
    """
    validate_windows_service_name(service_name)
    if target is None:
        raise MissingConfiguration("SSH Target is required.")

    try:
        result = run_over_ssh(target, powershell_service_status(service_name), timeout_ms, runner)
    except CommandFailed:
        return _down(service_name, "not running/found")

    status = trim_output(result.stdout)
    if status == "Running":
        return _running(service_name)
    return _down(service_name, status or "not running")
