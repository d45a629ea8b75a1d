"""
Server entry point.

Validates configuration, then serves the API with uvicorn. Missing row store
credentials stop the process before it binds a port.
"""

from __future__ import annotations

import sys

import uvicorn
from pydantic import ValidationError

from .core.config import get_settings


def _describe_missing(exc: ValidationError) -> str:
    names = []
    for err in exc.errors():
        name = ".".join(str(part) for part in err.get("loc", ())).upper()
        if name and name not in names:
            names.append(name)
    return ", ".join(names)


def run() -> None:
    """CLI entry point for the API server."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        print(
            f"Configuration error: missing or invalid {_describe_missing(exc)}. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY.",
            file=sys.stderr,
        )
        sys.exit(1)

    uvicorn.run(
        "amicus_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
