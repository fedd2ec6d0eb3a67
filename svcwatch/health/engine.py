"""Service check engine — picks a strategy for a request and runs it.

Supports: systemd (Linux) and the Windows service manager, each checked on
this host or on a remote host through the ssh client.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from typing import Any

from svcwatch.config import settings
from svcwatch.errors import CheckError, MissingConfiguration, UnsupportedPlatform
from svcwatch.health.models import (
    CheckMethod,
    CheckOutcome,
    CheckRequest,
    Platform,
    Status,
    normalize_method,
    normalize_platform,
)
from svcwatch.health.strategies import (
    check_linux_local,
    check_linux_remote,
    check_windows_local,
    check_windows_remote,
)
from svcwatch.runner.command import CommandRunner, run_command
from svcwatch.runner.target import ParsedTarget, parse_ssh_url

logger = logging.getLogger(__name__)

Strategy = Callable[..., CheckOutcome]

# Dispatcher
STRATEGIES: dict[tuple[str, str], Strategy] = {
    (CheckMethod.LOCAL.value, Platform.LINUX.value): check_linux_local,
    (CheckMethod.LOCAL.value, Platform.WINDOWS.value): check_windows_local,
    (CheckMethod.REMOTE.value, Platform.LINUX.value): check_linux_remote,
    (CheckMethod.REMOTE.value, Platform.WINDOWS.value): check_windows_remote,
}

# sys.platform values this host can check locally
_HOST_PLATFORMS = {
    "linux": Platform.LINUX.value,
    "win32": Platform.WINDOWS.value,
}


class ServiceChecker:
    """Runs service checks for one host platform.

    The host platform and the command runner are injected so checks for any
    OS can be exercised from any OS.
    """

    def __init__(
        self,
        platform: str | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        self.platform = platform or sys.platform
        self.runner = runner

    def check(self, request: CheckRequest) -> CheckOutcome:
        """Run one check. Raises CheckError subclasses for bad configuration."""
        if not request.service_name:
            raise MissingConfiguration("Service Name is required.")

        method = normalize_method(request.check_method)
        target: ParsedTarget | None = None

        if method == CheckMethod.REMOTE.value:
            if not request.remote_target:
                raise MissingConfiguration("SSH Target is required.")
            os_name = normalize_platform(request.remote_platform)
            if (method, os_name) not in STRATEGIES:
                raise UnsupportedPlatform(
                    f"System Service SSH monitoring is not supported on {request.remote_platform}"
                )
            target = parse_ssh_url(request.remote_target)
        elif method == CheckMethod.LOCAL.value:
            os_name = _HOST_PLATFORMS.get(self.platform, "")
            if not os_name:
                raise UnsupportedPlatform(
                    f"System Service monitoring is not supported on {self.platform}"
                )
        else:
            raise UnsupportedPlatform(f"Unknown check method: {request.check_method}")

        strategy = STRATEGIES[(method, os_name)]
        logger.debug(
            "Checking service %r (%s/%s)", request.service_name, method, os_name,
        )
        return strategy(
            request.service_name,
            runner=self.runner,
            timeout_ms=request.timeout_ms,
            target=target,
        )


def execute_check(check_def: Any, checker: ServiceChecker | None = None) -> CheckOutcome:
    """Run a registry check definition, never raising for check errors.

    Configuration and validation errors become a DOWN outcome carrying the
    error text, which is what a scheduler persists.
    """
    checker = checker or ServiceChecker()
    t0 = time.perf_counter()
    try:
        outcome = checker.check(check_def.to_request(settings.default_timeout_ms))
    except CheckError as e:
        logger.warning("Check %s failed: %s", check_def.id, e)
        outcome = CheckOutcome(status=Status.DOWN, message=str(e))
    outcome.latency_ms = round((time.perf_counter() - t0) * 1000, 1)
    return outcome
