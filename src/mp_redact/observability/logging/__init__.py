"""Observability – structlog logger helpers."""
from mp_redact.observability.logging.factory import JsonLoggerFactory, configure_logging
from mp_redact.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "configure_logging", "get_logger"]
