"""Check registry — loads checks.yaml into typed service check definitions.

Entry fields mirror the monitor columns a scheduler persists:
``service_name``, ``check_method``, ``ssh_url`` and ``ssh_platform``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from svcwatch.config import settings
from svcwatch.health.models import CheckRequest

logger = logging.getLogger(__name__)


# ── Data models ──────────────────────────────────────────────────────────────


@dataclass
class ServiceCheckDef:
    """Definition of a single service check from the registry."""

    id: str
    service_name: str = ""
    check_method: str = "local"  # local | ssh
    ssh_url: str = ""
    ssh_platform: str = "linux"  # linux | win32
    timeout_ms: int | None = None

    def to_request(self, default_timeout_ms: int = 5_000) -> CheckRequest:
        return CheckRequest(
            service_name=self.service_name,
            check_method=self.check_method,
            remote_target=self.ssh_url or None,
            remote_platform=self.ssh_platform or None,
            timeout_ms=self.timeout_ms or default_timeout_ms,
        )


# ── Registry ─────────────────────────────────────────────────────────────────


class CheckRegistry:
    """Loads and caches service checks from checks.yaml."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or Path(settings.checks_file)
        self._checks: list[ServiceCheckDef] = []
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._path

    def load(self, force: bool = False) -> list[ServiceCheckDef]:
        """Parse checks.yaml and return the check list."""
        if self._loaded and not force:
            return self._checks

        self._checks = []
        if not self._path.exists():
            logger.warning("Registry file not found: %s", self._path)
            self._loaded = True
            return self._checks

        with open(self._path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        for entry in raw.get("checks") or []:
            try:
                self._checks.append(_parse_check(entry))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.error("Skipping invalid check entry %r: %s", entry, e)

        self._loaded = True
        logger.info("Loaded %d service checks from %s", len(self._checks), self._path)
        return self._checks

    def get(self, check_id: str) -> ServiceCheckDef | None:
        for check in self.load():
            if check.id == check_id:
                return check
        return None


# ── Parsers ──────────────────────────────────────────────────────────────────


def _parse_check(raw: dict[str, Any]) -> ServiceCheckDef:
    timeout = raw.get("timeout_ms")
    return ServiceCheckDef(
        id=str(raw["id"]),
        service_name=str(raw.get("service_name") or ""),
        check_method=str(raw.get("check_method") or "local"),
        ssh_url=str(raw.get("ssh_url") or ""),
        ssh_platform=str(raw.get("ssh_platform") or "linux"),
        timeout_ms=int(timeout) if timeout is not None else None,
    )
