"""Observability - structured logging."""

from .logger import VERBOSE, ExporterLogger, LogContext, clear_all_context, configure_logging

__all__ = [
    "VERBOSE",
    "ExporterLogger",
    "configure_logging",
    "clear_all_context",
    "LogContext",
]
