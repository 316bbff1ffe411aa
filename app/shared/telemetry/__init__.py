"""Telemetry: logging setup with request-id correlation."""

from app.shared.telemetry.logging import RequestIdFilter, get_logger, setup_logging

__all__ = ["RequestIdFilter", "get_logger", "setup_logging"]
