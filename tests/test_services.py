"""Tests de DirectoryService con un repositorio sobre un cliente falso."""

from __future__ import annotations

import pytest

from directorio.core.errors import ErrorPolicy
from directorio.core.services import DirectoryService
from directorio.models.user import UserSummary


@pytest.fixture
def service(repository) -> DirectoryService:
    return DirectoryService(repository)


def test_carga_inicial_primera_pagina(service, fake_client):
    service.cargar_pagina(1)

    estado = service.estado
    assert fake_client.llamadas == ["users?page=1"]
    assert len(estado.users) == 6
    assert estado.pagina.total_pages == 2
    assert estado.pagina.tiene_siguiente
    assert not estado.pagina.tiene_anterior
    assert not estado.cargando_lista


def test_navegacion_entre_paginas(service, fake_client):
    service.cargar_pagina(1)
    service.pagina_siguiente()

    estado = service.estado
    assert estado.pagina.current_page == 2
    assert [u.id for u in estado.users] == [7, 8, 9, 10, 11, 12]
    assert not estado.pagina.tiene_siguiente
    assert estado.pagina.tiene_anterior

    # Sin página siguiente no se hace ninguna petición.
    service.pagina_siguiente()
    assert fake_client.llamadas == ["users?page=1", "users?page=2"]

    service.pagina_anterior()
    assert service.estado.pagina.current_page == 1


def test_fallo_de_listado_conserva_usuarios(service, fake_client):
    service.cargar_pagina(1)
    previos = service.estado.users

    fake_client.fallos.add(("lista", 2))
    service.cargar_pagina(2)

    estado = service.estado
    assert estado.users == previos
    assert estado.error_lista is not None
    assert "No se pudieron cargar los usuarios" in estado.mensaje_error
    assert not estado.cargando_lista


def test_seleccion_con_aviso(service):
    service.cargar_pagina(2)
    usuario = service.estado.users[0]
    assert usuario.id == 7

    service.seleccionar_usuario(usuario)

    seleccion = service.estado.seleccion
    assert seleccion.selected_user_id == 7
    assert seleccion.detail.id == 7
    assert seleccion.advisory.text == "Buy now"
    assert seleccion.advisory.url == "https://x"


def test_seleccion_sin_aviso(service):
    service.seleccionar_usuario(UserSummary(id=1, first_name="a", last_name="b", email="c"))
    assert service.estado.seleccion.detail.id == 1
    assert service.estado.seleccion.advisory is None


def test_fallo_de_detalle(service, fake_client):
    fake_client.fallos.add(("detalle", 7))
    service.seleccionar_usuario(UserSummary(id=7, first_name="a", last_name="b", email="c"))

    estado = service.estado
    assert estado.seleccion.selected_user_id == 7
    assert estado.seleccion.detail is None
    assert estado.seleccion.advisory is None
    assert estado.error_detalle is not None
    assert estado.error_lista is None
    assert not estado.cargando_detalle


def test_limpiar_seleccion(service):
    service.seleccionar_usuario(UserSummary(id=7, first_name="a", last_name="b", email="c"))
    service.limpiar_seleccion()
    service.limpiar_seleccion()
    assert service.estado.seleccion.vacia


def test_pasos_separados_descartan_respuestas_obsoletas(service):
    primera = service.iniciar_carga_pagina(1)
    segunda = service.iniciar_carga_pagina(2)

    service.aplicar_pagina(segunda, service.obtener_pagina(2))
    service.aplicar_pagina(primera, service.obtener_pagina(1))

    assert service.estado.pagina.current_page == 2
    assert [u.id for u in service.estado.users][0] == 7

    service.aplicar_error_pagina(primera, RuntimeError("tarde"))
    assert service.estado.error_lista is None


def test_suscriptores_reciben_cambios(service):
    recibidos = []
    baja = service.suscribir(recibidos.append)

    service.cargar_pagina(1)
    assert [e.cargando_lista for e in recibidos] == [True, False]

    baja()
    service.cargar_pagina(2)
    assert len(recibidos) == 2


def test_sin_cambios_no_notifica(service):
    recibidos = []
    service.suscribir(recibidos.append)
    service.limpiar_seleccion()
    service.descartar_errores()
    assert recibidos == []


def test_politica_configurable(repository, fake_client):
    service = DirectoryService(repository, politica_errores=ErrorPolicy.LIMPIAR_PROPIO)
    fake_client.fallos.add(("lista", 1))
    service.cargar_pagina(1)
    assert service.estado.error_lista is not None

    fake_client.fallos.clear()
    service.recargar()
    assert service.estado.error_lista is None
    assert len(service.estado.users) == 6


def test_error_como_texto(service):
    secuencia = service.iniciar_seleccion(UserSummary(id=9, first_name="a", last_name="b", email="c"))
    service.aplicar_error_detalle(secuencia, "sin conexión")
    assert service.estado.error_detalle.message.endswith("sin conexión")
