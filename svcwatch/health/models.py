"""Check request / outcome models shared by the dispatcher and strategies."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

# C0 controls except tab and newline, plus DEL
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


class Status(str, Enum):
    UP = "up"
    DOWN = "down"


class CheckMethod(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


class Platform(str, Enum):
    LINUX = "linux"
    WINDOWS = "windows"


# Values stored by older monitor rows
_METHOD_ALIASES = {"ssh": CheckMethod.REMOTE.value}
_PLATFORM_ALIASES = {"win32": Platform.WINDOWS.value}


def normalize_method(value: str | None) -> str:
    method = str(value or CheckMethod.LOCAL.value).strip().lower()
    return _METHOD_ALIASES.get(method, method)


def normalize_platform(value: str | None) -> str:
    platform = str(value or Platform.LINUX.value).strip().lower()
    return _PLATFORM_ALIASES.get(platform, platform)


@dataclass(frozen=True)
class CheckRequest:
    """A single service check invocation."""

    service_name: str
    check_method: str = CheckMethod.LOCAL.value  # local | remote (alias: ssh)
    remote_target: str | None = None  # ssh://[user@]host[:port]
    remote_platform: str | None = None  # linux | windows (alias: win32)
    timeout_ms: int = 5_000


@dataclass
class CheckOutcome:
    """Normalized result of one service check.

    ``latency_ms`` and ``timestamp`` are bookkeeping and do not take part in
    equality, so repeated checks of an unchanged service compare equal.
    """

    status: Status
    message: str = ""
    latency_ms: float = field(default=0.0, compare=False)
    timestamp: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        self.message = _CONTROL_CHARS.sub("", self.message)
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    @property
    def ok(self) -> bool:
        return self.status == Status.UP

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "message": self.message,
            "latency_ms": self.latency_ms,
            "timestamp": self.timestamp,
        }
