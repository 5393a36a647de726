"""Configuración de logging con salida enriquecida en consola."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Instala un ``RichHandler`` en stderr y devuelve el logger del paquete."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=True,
        show_path=level <= logging.DEBUG,
    )
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler])

    logger = logging.getLogger("directorio")
    logger.setLevel(level)
    return logger


__all__ = ["setup_logging"]
