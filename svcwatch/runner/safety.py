"""Safety layer — service-name allow-lists and shell argument quoting."""

from __future__ import annotations

import re

from svcwatch.errors import InvalidServiceName

# ── Allow-lists ──────────────────────────────────────────────────────────────

# systemd unit names, including template instances (getty@tty1)
_LINUX_SERVICE_NAME = re.compile(r"^[a-zA-Z0-9._\-@]+$")

# Windows service key names
_WINDOWS_SERVICE_NAME = re.compile(r"^[A-Za-z0-9._-]+$")


def validate_linux_service_name(name: str) -> None:
    """Raise InvalidServiceName unless ``name`` is a plain systemd unit name."""
    if not name or not _LINUX_SERVICE_NAME.fullmatch(name):
        raise InvalidServiceName(
            "Invalid service name. Please use the internal Service Name (no spaces)."
        )


def validate_windows_service_name(name: str) -> None:
    """Raise InvalidServiceName unless ``name`` is a plain Windows service name."""
    if not name or not _WINDOWS_SERVICE_NAME.fullmatch(name):
        raise InvalidServiceName(
            "Invalid service name. Only alphanumeric characters "
            "and '.', '_', '-' are allowed."
        )


# ── Quoting ──────────────────────────────────────────────────────────────────


def escape_shell_arg(value: str) -> str:
    """Quote ``value`` as exactly one literal POSIX shell word.

    Unlike ``shlex.quote`` the result is always single-quoted, so the remote
    command line has the same shape for every input.
    """
    if value == "":
        return "''"
    return "'" + str(value).replace("'", "'\"'\"'") + "'"


def quote_powershell_literal(value: str) -> str:
    """Wrap ``value`` in a PowerShell single-quoted string literal."""
    return "'" + value.replace("'", "''") + "'"
