"""Entry point for svcwatch — `svcwatch` console script."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from svcwatch.checks.registry import CheckRegistry
from svcwatch.config import settings
from svcwatch.errors import CheckError
from svcwatch.health.engine import ServiceChecker, execute_check
from svcwatch.health.models import CheckOutcome, CheckRequest, Status

console = Console()

EXIT_UP = 0
EXIT_DOWN = 1
EXIT_CONFIG_ERROR = 2


def _status_style(status: Status) -> str:
    return "green" if status == Status.UP else "red"


def run_check(args: argparse.Namespace) -> int:
    """Check a single service and print the outcome."""
    request = CheckRequest(
        service_name=args.service,
        check_method="remote" if args.ssh else "local",
        remote_target=args.ssh,
        remote_platform=args.platform,
        timeout_ms=args.timeout_ms or settings.default_timeout_ms,
    )

    try:
        outcome = ServiceChecker().check(request)
    except CheckError as e:
        if args.json:
            print(json.dumps({"status": "error", "error": type(e).__name__, "message": str(e)}))
        else:
            console.print(f"[bold red]{type(e).__name__}:[/bold red] {e}")
        return EXIT_CONFIG_ERROR

    if args.json:
        print(json.dumps(outcome.to_dict()))
    else:
        style = _status_style(outcome.status)
        console.print(
            Panel.fit(
                outcome.message,
                title=f"{args.service} — {outcome.status.value.upper()}",
                border_style=style,
            )
        )
    return EXIT_UP if outcome.ok else EXIT_DOWN


def run_all(args: argparse.Namespace) -> int:
    """Run every check from the registry once, sequentially."""
    registry = CheckRegistry(Path(args.file) if args.file else None)
    checks = registry.load()
    if not checks:
        console.print(f"[yellow]No checks configured in {registry.path}[/yellow]")
        return EXIT_UP

    checker = ServiceChecker()
    results: list[tuple[str, CheckOutcome]] = []
    with console.status("[bold green]Checking services..."):
        for check_def in checks:
            results.append((check_def.id, execute_check(check_def, checker)))

    table = Table(title="Service status")
    table.add_column("Check")
    table.add_column("Status")
    table.add_column("Latency", justify="right")
    table.add_column("Message")
    for check_id, outcome in results:
        style = _status_style(outcome.status)
        table.add_row(
            check_id,
            f"[{style}]{outcome.status.value}[/{style}]",
            f"{outcome.latency_ms:.0f}ms",
            outcome.message,
        )
    console.print(table)

    return EXIT_UP if all(o.ok for _, o in results) else EXIT_DOWN


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="System service health checks")
    sub = parser.add_subparsers(dest="command")

    check_parser = sub.add_parser("check", help="Check one service")
    check_parser.add_argument("service", help="Internal service name (e.g. nginx)")
    check_parser.add_argument("--ssh", metavar="URL", help="Check over SSH, e.g. ssh://user@host:22")
    check_parser.add_argument(
        "--platform", choices=["linux", "windows"], default=None,
        help="Remote OS (SSH only, default linux)",
    )
    check_parser.add_argument("--timeout-ms", type=int, default=None)
    check_parser.add_argument("--json", action="store_true", help="Print the outcome as JSON")

    all_parser = sub.add_parser("check-all", help="Run every check in the registry")
    all_parser.add_argument("--file", default=None, help="Path to checks.yaml")

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        if args.platform and not args.ssh:
            parser.error("--platform applies to SSH checks only; add --ssh URL")
        return run_check(args)
    if args.command == "check-all":
        return run_all(args)

    parser.print_help()
    return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
