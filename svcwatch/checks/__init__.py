from svcwatch.checks.registry import CheckRegistry, ServiceCheckDef

__all__ = [
    "CheckRegistry",
    "ServiceCheckDef",
]
