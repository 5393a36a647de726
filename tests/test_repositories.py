"""Tests de conversión de respuestas crudas a modelos."""

from __future__ import annotations

import pytest

from directorio.infrastructure.api_client import APIError
from directorio.models.user import UserDetail, UserSummary


def test_obtener_pagina(repository):
    pagina = repository.obtener_pagina(1)

    assert pagina.total_pages == 2
    assert pagina.total == 12
    assert len(pagina.users) == 6
    primero = pagina.users[0]
    assert isinstance(primero, UserSummary)
    assert primero.id == 1
    assert primero.nombre_completo == "Nombre1 Apellido1"
    assert primero.avatar.endswith("1-image.jpg")


def test_pagina_sin_total_de_usuarios(repository, fake_client):
    fake_client.paginas[3] = {"data": [], "total_pages": 2}
    pagina = repository.obtener_pagina(3)
    assert pagina.users == ()
    assert pagina.total_pages == 2
    assert pagina.total is None


def test_avatar_ausente(repository, fake_client):
    fake_client.paginas[3] = {
        "data": [{"id": 5, "first_name": "A", "last_name": "B", "email": "e", "avatar": ""}],
        "total_pages": 1,
    }
    assert repository.obtener_pagina(3).users[0].avatar is None


@pytest.mark.parametrize(
    "payload",
    [
        {"total_pages": 2},
        {"data": {}, "total_pages": 2},
        {"data": []},
        {"data": [], "total_pages": "muchas"},
        {"data": [{"first_name": "sin id"}], "total_pages": 1},
        {"data": ["no es un dict"], "total_pages": 1},
    ],
)
def test_pagina_con_forma_inesperada(repository, fake_client, payload):
    fake_client.paginas[3] = payload
    with pytest.raises(APIError):
        repository.obtener_pagina(3)


def test_obtener_detalle_con_aviso(repository):
    resultado = repository.obtener_detalle(7)
    assert isinstance(resultado.detail, UserDetail)
    assert resultado.detail.id == 7
    assert resultado.advisory.text == "Buy now"
    assert resultado.advisory.url == "https://x"


def test_obtener_detalle_sin_aviso(repository):
    assert repository.obtener_detalle(1).advisory is None


def test_detalle_sin_datos(repository, fake_client):
    fake_client.detalles[2] = {"support": {"text": "t", "url": "u"}}
    with pytest.raises(APIError):
        repository.obtener_detalle(2)


def test_error_del_cliente_se_propaga(repository):
    with pytest.raises(APIError) as info:
        repository.obtener_detalle(99)
    assert info.value.status == 404


@pytest.mark.parametrize("soporte", [{}, {"text": "", "url": ""}, {"text": None}, None, "texto"])
def test_aviso_vacio_se_omite(repository, fake_client, soporte):
    fake_client.detalles[2] = {"data": {"id": 2, "first_name": "A"}, "support": soporte}
    assert repository.obtener_detalle(2).advisory is None


def test_aviso_solo_con_texto(repository, fake_client):
    fake_client.detalles[2] = {"data": {"id": 2}, "support": {"text": "Hola"}}
    assert repository.obtener_detalle(2).advisory.text == "Hola"
    assert repository.obtener_detalle(2).advisory.url == ""


def test_obtener_avatar(repository, fake_client):
    url = "https://reqres.in/img/faces/7-image.jpg"
    fake_client.imagenes[url] = b"\x89PNG"
    assert repository.obtener_avatar(url) == b"\x89PNG"


def test_avatar_vacio(repository, fake_client):
    fake_client.imagenes["https://x/a.jpg"] = b""
    with pytest.raises(APIError):
        repository.obtener_avatar("https://x/a.jpg")
