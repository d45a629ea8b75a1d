"""
structlog setup for the API process.

Events are rendered one per line: JSON for log shippers, or the structlog
console renderer when ``LOG_FORMAT=text``.
"""

from __future__ import annotations

import logging

import structlog


def resolve_level(level: str) -> int:
    """Map a level name such as ``"info"`` to its numeric ``logging`` value."""
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return numeric


def _renderer(fmt: str):
    if fmt == "text":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(level: str = "info", fmt: str = "json") -> None:
    shared = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if fmt != "text":
        # The console renderer formats tracebacks itself.
        shared.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*shared, _renderer(fmt)],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        cache_logger_on_first_use=False,
    )
