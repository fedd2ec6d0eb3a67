"""svcwatch: system service health checks over local and SSH transports."""

__version__ = "0.1.0"
