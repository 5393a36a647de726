"""Definiciones de modelos de dominio del directorio."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Resumen de usuario tal como lo devuelve el listado paginado."""

    id: int
    first_name: str
    last_name: str
    email: str
    avatar: str | None = None

    @property
    def nombre_completo(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True, slots=True)
class UserDetail(UserSummary):
    """Registro extendido de un usuario, obtenido en cada selección."""


@dataclass(frozen=True, slots=True)
class Advisory:
    """Mensaje auxiliar ("support") que acompaña al detalle."""

    text: str
    url: str


@dataclass(frozen=True, slots=True)
class UserPage:
    """Una página del listado junto con sus metadatos de paginación.

    Attributes
    ----------
    users:
        Resúmenes de la página, en el orden del servidor.
    total_pages:
        Total de páginas reportado por el servidor.
    total:
        Total de usuarios del directorio; ``None`` si la respuesta no lo incluye.
    """

    users: Tuple[UserSummary, ...]
    total_pages: int
    total: int | None = None


@dataclass(frozen=True, slots=True)
class UserDetailResult:
    """Detalle de un usuario con su mensaje auxiliar opcional."""

    detail: UserDetail
    advisory: Advisory | None = None


__all__ = ["Advisory", "UserDetail", "UserDetailResult", "UserPage", "UserSummary"]
