"""Errores de carga del directorio, uno por cargador."""

from __future__ import annotations

from enum import Enum


class DirectoryError(Exception):
    """Error de carga visible para el usuario."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.message == self.message  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class ListFetchError(DirectoryError):
    """Falló la carga de una página del listado."""


class DetailFetchError(DirectoryError):
    """Falló la carga del detalle de un usuario."""


class ErrorPolicy(str, Enum):
    """Cuándo se limpian los errores tras una carga exitosa."""

    CONSERVAR = "conservar"
    LIMPIAR_PROPIO = "limpiar_propio"
    LIMPIAR_TODOS = "limpiar_todos"


__all__ = ["DetailFetchError", "DirectoryError", "ErrorPolicy", "ListFetchError"]
