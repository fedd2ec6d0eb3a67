from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "SVCWATCH_",
        "extra": "ignore",
    }

    # External programs (must be resolvable on PATH)
    systemctl_path: str = "systemctl"
    powershell_path: str = "powershell"
    ssh_path: str = "ssh"

    # SSH transport
    ssh_connect_timeout: int = 5  # seconds, passed as -o ConnectTimeout=

    # Hard upper bound for a single check, including the SSH hop
    default_timeout_ms: int = 5_000

    # Check registry (absolute or relative to CWD)
    checks_file: str = "checks.yaml"

    # Logging
    log_level: str = "INFO"


settings = Settings()
