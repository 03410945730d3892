"""Configuración de logging (idempotente)."""

from __future__ import annotations

import logging
import sys

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: int | str = logging.WARNING, *, rich: bool = False) -> None:
    """Configura el logger raíz una sola vez.

    Si alguien ya instaló handlers (pytest, una app que nos embebe), no se
    toca nada.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    root = logging.getLogger()
    if root.handlers:
        _CONFIGURED = True
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    if rich:
        from rich.logging import RichHandler

        logging.basicConfig(
            level=level,
            format="%(name)s | %(message)s",
            datefmt="%H:%M:%S",
            handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        )
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", stream=sys.stderr)
    _CONFIGURED = True
