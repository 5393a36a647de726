"""Cliente HTTP del servicio de usuarios.

Encapsula las dos peticiones GET que consume el directorio. Cualquier
respuesta fuera del rango 2xx, error de conexión o cuerpo que no sea JSON
se informa como :class:`APIError`.
"""

from __future__ import annotations

import json
import logging
import socket
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://reqres.in/api"


class APIError(Exception):
    """Fallo al comunicarse con el servicio de usuarios."""

    def __init__(self, message: str, *, status: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.url = url


class APIClient:
    """Provee acceso a los endpoints de listado y detalle de usuarios."""

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        *,
        timeout: float = 10.0,
        api_key: str | None = None,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key

    def obtener_usuarios(self, page: int) -> dict:
        """Recupera una página del listado (``GET /users?page=n``)."""

        url = f"{self.api_base}/users?{urlencode({'page': page})}"
        return self._get_json(url)

    def obtener_usuario(self, user_id: int) -> dict:
        """Recupera el detalle de un usuario (``GET /users/{id}``)."""

        url = f"{self.api_base}/users/{user_id}"
        return self._get_json(url)

    def obtener_imagen(self, url: str) -> bytes:
        """Descarga una imagen (por ejemplo, el avatar de un usuario).

        La URL viene del propio servicio y puede apuntar a otro host, así
        que no se envía la clave de API.
        """

        _status, raw = self._get(url, {"Accept": "image/*"})
        return raw

    # ------------------------------------------------------------------
    # Transporte
    # ------------------------------------------------------------------
    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["x-api-key"] = self._api_key
        return headers

    def _get(self, url: str, headers: dict[str, str]) -> tuple[int, bytes]:
        logger.debug("GET %s", url)
        request = Request(url, headers=headers)
        try:
            with urlopen(request, timeout=self.timeout) as response:
                status = getattr(response, "status", 200)
                raw = response.read()
        except HTTPError as exc:
            logger.warning("GET %s respondió HTTP %s", url, exc.code)
            raise APIError(f"Error HTTP {exc.code} al consultar {url}.", status=exc.code, url=url) from exc
        except URLError as exc:
            if isinstance(exc.reason, socket.timeout):
                message = f"La consulta a {url} expiró por timeout."
            else:
                message = f"No se pudo conectar al servicio: {exc.reason}."
            logger.warning(message)
            raise APIError(message, url=url) from exc
        except (TimeoutError, socket.timeout) as exc:
            logger.warning("GET %s expiró por timeout", url)
            raise APIError(f"La consulta a {url} expiró por timeout.", url=url) from exc

        if not 200 <= status < 300:
            logger.warning("GET %s respondió HTTP %s", url, status)
            raise APIError(f"Error HTTP {status} al consultar {url}.", status=status, url=url)
        return status, raw

    def _get_json(self, url: str) -> dict:
        status, raw = self._get(url, self._headers())
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise APIError(f"Respuesta inválida del servicio ({exc}).", status=status, url=url) from exc

        if not isinstance(payload, dict):
            raise APIError("Formato inesperado en la respuesta del servicio.", status=status, url=url)
        return payload


__all__ = ["APIClient", "APIError", "DEFAULT_API_BASE"]
