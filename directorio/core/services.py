"""Servicios de aplicación que coordinan el acceso a datos."""

from __future__ import annotations

import logging
from typing import Callable, List

from directorio.core import state as transiciones
from directorio.core.errors import DetailFetchError, ErrorPolicy, ListFetchError
from directorio.core.state import DirectoryState
from directorio.infrastructure.api_client import APIError
from directorio.infrastructure.repositories import UserRepository
from directorio.models.user import UserDetailResult, UserPage, UserSummary

logger = logging.getLogger(__name__)

Suscriptor = Callable[[DirectoryState], None]


class DirectoryService:
    """Orquesta las cargas del listado y del detalle.

    Mantiene la instantánea vigente de :class:`DirectoryState` y notifica a
    los suscriptores cada vez que cambia. Las cargas tienen dos formas:

    * síncrona (:meth:`cargar_pagina`, :meth:`seleccionar_usuario`), que
      hace la petición en el mismo hilo;
    * en dos pasos (``iniciar_*`` y luego ``aplicar_*``), para que la
      interfaz haga la petición en un hilo aparte y aplique el resultado
      con la secuencia que recibió al iniciar.
    """

    def __init__(
        self,
        repository: UserRepository,
        *,
        politica_errores: ErrorPolicy = ErrorPolicy.CONSERVAR,
    ) -> None:
        self._repository = repository
        self._estado = DirectoryState(politica_errores=politica_errores)
        self._suscriptores: List[Suscriptor] = []

    @property
    def estado(self) -> DirectoryState:
        return self._estado

    def suscribir(self, suscriptor: Suscriptor) -> Callable[[], None]:
        """Registra ``suscriptor`` y devuelve la función para darlo de baja."""

        self._suscriptores.append(suscriptor)

        def _baja() -> None:
            if suscriptor in self._suscriptores:
                self._suscriptores.remove(suscriptor)

        return _baja

    # ------------------------------------------------------------------
    # Listado paginado
    # ------------------------------------------------------------------
    def iniciar_carga_pagina(self, page: int) -> int:
        self._actualizar(transiciones.iniciar_carga_lista(self._estado, page))
        logger.debug("Cargando página %s (secuencia %s)", page, self._estado.secuencia_lista)
        return self._estado.secuencia_lista

    def obtener_pagina(self, page: int) -> UserPage:
        return self._repository.obtener_pagina(page)

    def aplicar_pagina(self, secuencia: int, resultado: UserPage) -> None:
        if secuencia != self._estado.secuencia_lista:
            logger.debug("Descartada página obsoleta (secuencia %s)", secuencia)
        self._actualizar(transiciones.completar_carga_lista(self._estado, secuencia, resultado))

    def aplicar_error_pagina(self, secuencia: int, exc: BaseException | str) -> None:
        error = ListFetchError(f"No se pudieron cargar los usuarios: {_describir(exc)}")
        if secuencia == self._estado.secuencia_lista:
            logger.warning(error.message)
        self._actualizar(transiciones.fallar_carga_lista(self._estado, secuencia, error))

    def cargar_pagina(self, page: int) -> None:
        """Carga ``page`` de forma síncrona; los errores quedan en el estado."""

        secuencia = self.iniciar_carga_pagina(page)
        try:
            resultado = self.obtener_pagina(page)
        except APIError as exc:
            self.aplicar_error_pagina(secuencia, exc)
            return
        self.aplicar_pagina(secuencia, resultado)

    def recargar(self) -> None:
        self.cargar_pagina(self._estado.pagina.current_page)

    def pagina_siguiente(self) -> None:
        pagina = self._estado.pagina
        if pagina.tiene_siguiente:
            self.cargar_pagina(pagina.current_page + 1)

    def pagina_anterior(self) -> None:
        pagina = self._estado.pagina
        if pagina.tiene_anterior:
            self.cargar_pagina(pagina.current_page - 1)

    # ------------------------------------------------------------------
    # Selección y detalle
    # ------------------------------------------------------------------
    def iniciar_seleccion(self, usuario: UserSummary) -> int:
        self._actualizar(transiciones.seleccionar_usuario(self._estado, usuario))
        logger.debug(
            "Seleccionado usuario %s (secuencia %s)", usuario.id, self._estado.secuencia_detalle
        )
        return self._estado.secuencia_detalle

    def obtener_detalle(self, user_id: int) -> UserDetailResult:
        return self._repository.obtener_detalle(user_id)

    def obtener_avatar(self, url: str) -> bytes:
        return self._repository.obtener_avatar(url)

    def aplicar_detalle(self, secuencia: int, resultado: UserDetailResult) -> None:
        if secuencia != self._estado.secuencia_detalle:
            logger.debug("Descartado detalle obsoleto (secuencia %s)", secuencia)
        self._actualizar(transiciones.completar_carga_detalle(self._estado, secuencia, resultado))

    def aplicar_error_detalle(self, secuencia: int, exc: BaseException | str) -> None:
        error = DetailFetchError(f"No se pudo cargar el detalle del usuario: {_describir(exc)}")
        if secuencia == self._estado.secuencia_detalle:
            logger.warning(error.message)
        self._actualizar(transiciones.fallar_carga_detalle(self._estado, secuencia, error))

    def seleccionar_usuario(self, usuario: UserSummary) -> None:
        """Selecciona ``usuario`` y carga su detalle de forma síncrona."""

        secuencia = self.iniciar_seleccion(usuario)
        try:
            resultado = self.obtener_detalle(usuario.id)
        except APIError as exc:
            self.aplicar_error_detalle(secuencia, exc)
            return
        self.aplicar_detalle(secuencia, resultado)

    def limpiar_seleccion(self) -> None:
        self._actualizar(transiciones.limpiar_seleccion(self._estado))

    def descartar_errores(self) -> None:
        self._actualizar(transiciones.descartar_errores(self._estado))

    # ------------------------------------------------------------------
    # Notificación
    # ------------------------------------------------------------------
    def _actualizar(self, nuevo: DirectoryState) -> None:
        if nuevo is self._estado:
            return
        self._estado = nuevo
        for suscriptor in list(self._suscriptores):
            suscriptor(nuevo)


def _describir(exc: BaseException | str) -> str:
    if isinstance(exc, str):
        return exc
    return str(exc) or type(exc).__name__


__all__ = ["DirectoryService"]
