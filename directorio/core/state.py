"""Estado del directorio como una instantánea inmutable.

Cada operación es una función pura que recibe un :class:`DirectoryState`
y devuelve uno nuevo. Las cargas se etiquetan con un número de secuencia
por cargador; una respuesta cuya secuencia no sea la última emitida se
descarta y el estado se devuelve sin cambios.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Tuple

from directorio.core.errors import DetailFetchError, ErrorPolicy, ListFetchError
from directorio.models.user import (
    Advisory,
    UserDetail,
    UserDetailResult,
    UserPage,
    UserSummary,
)


@dataclass(frozen=True, slots=True)
class PageState:
    """Página actual y totales informados por el servidor."""

    current_page: int = 1
    total_pages: int = 0
    total_users: int | None = None

    @property
    def tiene_anterior(self) -> bool:
        return self.current_page > 1

    @property
    def tiene_siguiente(self) -> bool:
        return self.current_page < self.total_pages


@dataclass(frozen=True, slots=True)
class SelectionState:
    """Usuario seleccionado y, una vez cargados, su detalle y aviso."""

    selected: UserSummary | None = None
    detail: UserDetail | None = None
    advisory: Advisory | None = None

    @property
    def selected_user_id(self) -> int | None:
        return self.selected.id if self.selected is not None else None

    @property
    def vacia(self) -> bool:
        return self.selected is None and self.detail is None and self.advisory is None


@dataclass(frozen=True, slots=True)
class DirectoryState:
    """Instantánea completa de la vista del directorio."""

    users: Tuple[UserSummary, ...] = ()
    pagina: PageState = field(default_factory=PageState)
    seleccion: SelectionState = field(default_factory=SelectionState)
    cargando_lista: bool = False
    cargando_detalle: bool = False
    error_lista: ListFetchError | None = None
    error_detalle: DetailFetchError | None = None
    secuencia_lista: int = 0
    secuencia_detalle: int = 0
    politica_errores: ErrorPolicy = ErrorPolicy.CONSERVAR

    @property
    def mensaje_error(self) -> str | None:
        """Texto del banner de errores, o ``None`` si no hay ninguno."""

        mensajes = [
            error.message for error in (self.error_lista, self.error_detalle) if error is not None
        ]
        return "\n".join(mensajes) if mensajes else None


# ----------------------------------------------------------------------
# Listado paginado
# ----------------------------------------------------------------------
def iniciar_carga_lista(estado: DirectoryState, page: int) -> DirectoryState:
    """Marca el inicio de la carga de ``page`` y emite una nueva secuencia."""

    if page < 1:
        raise ValueError(f"El número de página debe ser >= 1 (recibido {page}).")

    return replace(
        estado,
        pagina=replace(estado.pagina, current_page=page),
        cargando_lista=True,
        secuencia_lista=estado.secuencia_lista + 1,
    )


def completar_carga_lista(
    estado: DirectoryState, secuencia: int, resultado: UserPage
) -> DirectoryState:
    """Reemplaza la colección y el total de páginas con ``resultado``."""

    if secuencia != estado.secuencia_lista:
        return estado

    nuevo = replace(
        estado,
        users=tuple(resultado.users),
        pagina=replace(
            estado.pagina,
            total_pages=resultado.total_pages,
            total_users=resultado.total,
        ),
        cargando_lista=False,
    )
    return _limpiar_por_exito(nuevo, origen=ListFetchError)


def fallar_carga_lista(
    estado: DirectoryState, secuencia: int, error: ListFetchError
) -> DirectoryState:
    """Registra el error de listado sin tocar la colección previa."""

    if secuencia != estado.secuencia_lista:
        return estado
    return replace(estado, cargando_lista=False, error_lista=error)


# ----------------------------------------------------------------------
# Selección y detalle
# ----------------------------------------------------------------------
def seleccionar_usuario(estado: DirectoryState, usuario: UserSummary) -> DirectoryState:
    """Selecciona ``usuario`` descartando el detalle de la selección previa."""

    return replace(
        estado,
        seleccion=SelectionState(selected=usuario),
        cargando_detalle=True,
        secuencia_detalle=estado.secuencia_detalle + 1,
    )


def completar_carga_detalle(
    estado: DirectoryState, secuencia: int, resultado: UserDetailResult
) -> DirectoryState:
    if secuencia != estado.secuencia_detalle or estado.seleccion.selected is None:
        return estado

    nuevo = replace(
        estado,
        seleccion=replace(
            estado.seleccion, detail=resultado.detail, advisory=resultado.advisory
        ),
        cargando_detalle=False,
    )
    return _limpiar_por_exito(nuevo, origen=DetailFetchError)


def fallar_carga_detalle(
    estado: DirectoryState, secuencia: int, error: DetailFetchError
) -> DirectoryState:
    if secuencia != estado.secuencia_detalle or estado.seleccion.selected is None:
        return estado
    return replace(estado, cargando_detalle=False, error_detalle=error)


def limpiar_seleccion(estado: DirectoryState) -> DirectoryState:
    """Elimina usuario, detalle y aviso a la vez.

    Avanza la secuencia de detalle para que una respuesta en vuelo no
    vuelva a poblar una selección ya cerrada.
    """

    if estado.seleccion.vacia and not estado.cargando_detalle:
        return estado

    return replace(
        estado,
        seleccion=SelectionState(),
        cargando_detalle=False,
        secuencia_detalle=estado.secuencia_detalle + 1,
    )


# ----------------------------------------------------------------------
# Errores
# ----------------------------------------------------------------------
def descartar_errores(estado: DirectoryState) -> DirectoryState:
    if estado.error_lista is None and estado.error_detalle is None:
        return estado
    return replace(estado, error_lista=None, error_detalle=None)


def _limpiar_por_exito(estado: DirectoryState, *, origen: type) -> DirectoryState:
    politica = estado.politica_errores
    if politica is ErrorPolicy.LIMPIAR_TODOS:
        return descartar_errores(estado)
    if politica is ErrorPolicy.LIMPIAR_PROPIO:
        if origen is ListFetchError:
            return replace(estado, error_lista=None)
        return replace(estado, error_detalle=None)
    return estado


__all__ = [
    "DirectoryState",
    "PageState",
    "SelectionState",
    "completar_carga_detalle",
    "completar_carga_lista",
    "descartar_errores",
    "fallar_carga_detalle",
    "fallar_carga_lista",
    "iniciar_carga_lista",
    "limpiar_seleccion",
    "seleccionar_usuario",
]
