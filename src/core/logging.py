"""Configuración de logging.

Los módulos usan `logging.getLogger(__name__)`; este helper solo decide el
handler (Rich) y el nivel, una única vez por proceso.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_INITIALIZED = False


def init_logging(level: str | int = "WARNING", *, console: Console | None = None) -> None:
    global _INITIALIZED
    root = logging.getLogger()
    root.setLevel(level)
    if _INITIALIZED:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    # httpx loguea cada request en INFO; solo interesa en modo debug.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _INITIALIZED = True
