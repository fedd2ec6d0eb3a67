"""SSH target parsing — ``ssh://[user@]host[:port]`` to a user-host / port pair."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

from svcwatch.errors import InvalidTarget

SSH_SCHEME = "ssh"
SSH_DEFAULT_PORT = 22


@dataclass(frozen=True)
class ParsedTarget:
    """Destination handed to the ssh client."""

    user_host: str
    port: int | None = None


def parse_ssh_url(ssh_url: str) -> ParsedTarget:
    """Parse an SSH URL without touching the network.

    Raises InvalidTarget for non-strings, malformed URLs, a scheme other than
    ``ssh``, a missing hostname, or an out-of-range port.
    """
    if not isinstance(ssh_url, str) or not ssh_url.strip():
        raise InvalidTarget("Invalid SSH URL.")

    try:
        url = urlsplit(ssh_url.strip())
    except ValueError:
        raise InvalidTarget("Invalid SSH URL.")

    if not url.scheme:
        raise InvalidTarget("Invalid SSH URL.")
    if url.scheme.lower() != SSH_SCHEME:
        raise InvalidTarget("SSH URL must start with ssh://")
    if not url.hostname:
        raise InvalidTarget("SSH URL requires a hostname.")

    try:
        port = url.port
    except ValueError:
        raise InvalidTarget("SSH URL has an invalid port.")
    if port is not None and not 1 <= port <= 65535:
        raise InvalidTarget("SSH URL has an invalid port.")

    user_host = url.hostname
    if url.username:
        user_host = f"{unquote(url.username)}@{url.hostname}"

    # ssh would read a leading dash as an option
    if user_host.startswith("-"):
        raise InvalidTarget("Invalid SSH URL.")

    return ParsedTarget(user_host=user_host, port=port)
