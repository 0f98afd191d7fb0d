"""Logging de la CLI (stdlib logging + RichHandler)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO", *, console: Console | None = None) -> None:
    """Configura el root logger una sola vez por proceso."""

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    root = logging.getLogger()
    root.setLevel(numeric)
    for handler in root.handlers:
        if isinstance(handler, RichHandler):
            handler.setLevel(numeric)
            return

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=False)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)

    # httpx loguea cada request a INFO.
    logging.getLogger("httpx").setLevel(max(numeric, logging.WARNING))
