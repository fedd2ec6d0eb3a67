"""Tests for the check registry."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from svcwatch.checks.registry import CheckRegistry, ServiceCheckDef
from svcwatch.health.engine import ServiceChecker, execute_check
from svcwatch.health.models import CheckRequest, Status


@pytest.fixture
def sample_yaml(tmp_path: Path) -> Path:
    """Create a minimal checks.yaml for testing."""
    data = {
        "checks": [
            {"id": "web", "service_name": "nginx"},
            {
                "id": "db-remote",
                "service_name": "postgresql",
                "check_method": "ssh",
                "ssh_url": "ssh://ops@db1:2222",
                "ssh_platform": "linux",
                "timeout_ms": 8000,
            },
            {"service_name": "no-id"},
        ]
    }
    path = tmp_path / "checks.yaml"
    path.write_text(yaml.dump(data), encoding="utf-8")
    return path


class TestCheckRegistry:
    def test_load(self, sample_yaml: Path) -> None:
        checks = CheckRegistry(sample_yaml).load()
        assert [c.id for c in checks] == ["web", "db-remote"]

    def test_defaults(self, sample_yaml: Path) -> None:
        web = CheckRegistry(sample_yaml).get("web")
        assert web == ServiceCheckDef(id="web", service_name="nginx")
        assert web.check_method == "local"
        assert web.ssh_platform == "linux"
        assert web.timeout_ms is None

    def test_remote_fields(self, sample_yaml: Path) -> None:
        db = CheckRegistry(sample_yaml).get("db-remote")
        assert db is not None
        assert db.ssh_url == "ssh://ops@db1:2222"
        assert db.timeout_ms == 8000

    def test_get_unknown(self, sample_yaml: Path) -> None:
        assert CheckRegistry(sample_yaml).get("nope") is None

    def test_missing_file(self, tmp_path: Path) -> None:
        assert CheckRegistry(tmp_path / "missing.yaml").load() == []

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "checks.yaml"
        path.write_text("", encoding="utf-8")
        assert CheckRegistry(path).load() == []

    def test_cached_until_forced(self, sample_yaml: Path) -> None:
        registry = CheckRegistry(sample_yaml)
        assert len(registry.load()) == 2
        sample_yaml.write_text(yaml.dump({"checks": [{"id": "only", "service_name": "x"}]}), encoding="utf-8")
        assert len(registry.load()) == 2
        assert [c.id for c in registry.load(force=True)] == ["only"]


class TestToRequest:
    def test_local(self) -> None:
        req = ServiceCheckDef(id="web", service_name="nginx").to_request(5000)
        assert req == CheckRequest(
            service_name="nginx", check_method="local", remote_target=None,
            remote_platform="linux", timeout_ms=5000,
        )

    def test_remote_keeps_own_timeout(self) -> None:
        req = ServiceCheckDef(
            id="db", service_name="postgresql", check_method="ssh",
            ssh_url="ssh://db1", ssh_platform="win32", timeout_ms=8000,
        ).to_request(5000)
        assert req.check_method == "ssh"
        assert req.remote_target == "ssh://db1"
        assert req.remote_platform == "win32"
        assert req.timeout_ms == 8000


class TestNonStringFields:
    @pytest.fixture
    def odd_yaml(self, tmp_path: Path) -> Path:
        path = tmp_path / "checks.yaml"
        path.write_text(
            "checks:\n"
            "  - {id: odd, service_name: cron, check_method: ssh, ssh_url: ssh://h, ssh_platform: 1}\n"
            "  - {id: flag, service_name: cron, check_method: true}\n",
            encoding="utf-8",
        )
        return path

    def test_scalars_coerced_to_str(self, odd_yaml: Path) -> None:
        odd, flag = CheckRegistry(odd_yaml).load()
        assert odd.ssh_platform == "1"
        assert flag.check_method == "True"

    def test_execute_check_reports_down(self, odd_yaml: Path) -> None:
        odd, flag = CheckRegistry(odd_yaml).load()
        checker = ServiceChecker(platform="linux", runner=lambda args, timeout: pytest.fail("spawned"))

        for check, expected in ((odd, "not supported on 1"), (flag, "Unknown check method: True")):
            outcome = execute_check(check, checker)
            assert outcome.status == Status.DOWN
            assert expected in outcome.message
