"""Fixtures compartidos: respuestas del servicio y dobles de prueba."""

from __future__ import annotations

from typing import Dict, List

import pytest

from directorio.infrastructure.api_client import APIError
from directorio.infrastructure.repositories import UserRepository


def usuario_crudo(user_id: int) -> dict:
    return {
        "id": user_id,
        "email": f"usuario{user_id}@reqres.in",
        "first_name": f"Nombre{user_id}",
        "last_name": f"Apellido{user_id}",
        "avatar": f"https://reqres.in/img/faces/{user_id}-image.jpg",
    }


def pagina_cruda(page: int, ids: List[int], total_pages: int = 2) -> dict:
    return {
        "page": page,
        "per_page": 6,
        "total": 12,
        "total_pages": total_pages,
        "data": [usuario_crudo(user_id) for user_id in ids],
    }


class FakeAPIClient:
    """Cliente en memoria con respuestas por página y por usuario."""

    def __init__(self) -> None:
        self.paginas: Dict[int, dict] = {
            1: pagina_cruda(1, [1, 2, 3, 4, 5, 6]),
            2: pagina_cruda(2, [7, 8, 9, 10, 11, 12]),
        }
        self.detalles: Dict[int, dict] = {
            7: {
                "data": usuario_crudo(7),
                "support": {"text": "Buy now", "url": "https://x"},
            },
            1: {"data": usuario_crudo(1)},
        }
        self.imagenes: Dict[str, bytes] = {}
        self.fallos: set = set()
        self.llamadas: List[str] = []

    def obtener_usuarios(self, page: int) -> dict:
        self.llamadas.append(f"users?page={page}")
        if ("lista", page) in self.fallos or page not in self.paginas:
            raise APIError("Error HTTP 500 al consultar /users.", status=500)
        return self.paginas[page]

    def obtener_imagen(self, url: str) -> bytes:
        self.llamadas.append(url)
        if url not in self.imagenes:
            raise APIError("Error HTTP 404 al consultar la imagen.", status=404)
        return self.imagenes[url]

    def obtener_usuario(self, user_id: int) -> dict:
        self.llamadas.append(f"users/{user_id}")
        if ("detalle", user_id) in self.fallos or user_id not in self.detalles:
            raise APIError("Error HTTP 404 al consultar /users.", status=404)
        return self.detalles[user_id]


@pytest.fixture
def fake_client() -> FakeAPIClient:
    return FakeAPIClient()


@pytest.fixture
def repository(fake_client: FakeAPIClient) -> UserRepository:
    return UserRepository(fake_client)  # type: ignore[arg-type]
