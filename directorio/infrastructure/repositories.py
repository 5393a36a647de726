"""Implementaciones de repositorios para acceso a datos."""

from __future__ import annotations

from typing import Any

from directorio.infrastructure.api_client import APIClient, APIError
from directorio.models.user import (
    Advisory,
    UserDetail,
    UserDetailResult,
    UserPage,
    UserSummary,
)


class UserRepository:
    """Repositorio de usuarios basado en un cliente API.

    Convierte los diccionarios crudos del servicio en modelos de dominio y
    rechaza con :class:`APIError` las respuestas con forma inesperada.
    """

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def obtener_pagina(self, page: int) -> UserPage:
        """Devuelve la página ``page`` del listado."""

        datos = self._api_client.obtener_usuarios(page)
        crudos = datos.get("data")
        if not isinstance(crudos, list):
            raise APIError("La respuesta del listado no contiene usuarios.")

        total_pages = _entero(datos.get("total_pages"), "total_pages")
        if total_pages is None:
            raise APIError("La respuesta del listado no informa total_pages.")

        return UserPage(
            users=tuple(_usuario(UserSummary, item) for item in crudos),
            total_pages=total_pages,
            total=_entero(datos.get("total"), "total"),
        )

    def obtener_detalle(self, user_id: int) -> UserDetailResult:
        """Devuelve el detalle del usuario y su mensaje auxiliar, si existe."""

        datos = self._api_client.obtener_usuario(user_id)
        crudo = datos.get("data")
        if not isinstance(crudo, dict):
            raise APIError(f"La respuesta del detalle del usuario {user_id} no contiene datos.")

        soporte = datos.get("support")
        advisory = None
        if isinstance(soporte, dict):
            texto = str(soporte.get("text") or "")
            url = str(soporte.get("url") or "")
            if texto or url:
                advisory = Advisory(text=texto, url=url)

        return UserDetailResult(detail=_usuario(UserDetail, crudo), advisory=advisory)

    def obtener_avatar(self, url: str) -> bytes:
        """Devuelve los bytes de la imagen de avatar publicada en ``url``."""

        datos = self._api_client.obtener_imagen(url)
        if not datos:
            raise APIError(f"El avatar en {url} está vacío.", url=url)
        return datos


def _entero(valor: Any, campo: str) -> int | None:
    if valor is None:
        return None
    if isinstance(valor, bool):
        raise APIError(f"Valor inválido para {campo}: {valor!r}.")
    try:
        return int(valor)
    except (TypeError, ValueError) as exc:
        raise APIError(f"Valor inválido para {campo}: {valor!r}.") from exc


def _usuario(tipo: type[UserSummary], datos: Any) -> Any:
    if not isinstance(datos, dict):
        raise APIError("Formato inesperado al leer un usuario.")

    user_id = _entero(datos.get("id"), "id")
    if user_id is None:
        raise APIError("Usuario sin identificador en la respuesta.")

    return tipo(
        id=user_id,
        first_name=str(datos.get("first_name") or ""),
        last_name=str(datos.get("last_name") or ""),
        email=str(datos.get("email") or ""),
        avatar=datos.get("avatar") or None,
    )


__all__ = ["UserRepository"]
