"""Configuración de la aplicación."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from directorio.core.errors import ErrorPolicy
from directorio.infrastructure.api_client import DEFAULT_API_BASE

ENV_PREFIX = "DIRECTORIO_"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Parámetros de conexión y comportamiento del directorio.

    Attributes
    ----------
    api_base:
        URL base del servicio; los endpoints son ``/users`` y ``/users/{id}``.
    timeout:
        Segundos de espera por petición.
    api_key:
        Clave opcional enviada en la cabecera ``x-api-key``.
    politica_errores:
        Cuándo se limpian los errores tras una carga exitosa.
    nivel_log:
        Nivel de ``logging`` para la consola.
    """

    api_base: str = DEFAULT_API_BASE
    timeout: float = 10.0
    api_key: str | None = None
    politica_errores: ErrorPolicy = ErrorPolicy.CONSERVAR
    nivel_log: str = "WARNING"

    @classmethod
    def desde_entorno(cls, entorno: Mapping[str, str] | None = None) -> "AppConfig":
        """Construye la configuración a partir de variables ``DIRECTORIO_*``."""

        entorno = os.environ if entorno is None else entorno
        defaults = cls()

        api_base = entorno.get(f"{ENV_PREFIX}API_BASE", "").strip() or defaults.api_base

        timeout_texto = entorno.get(f"{ENV_PREFIX}TIMEOUT", "").strip()
        timeout = defaults.timeout
        if timeout_texto:
            try:
                timeout = float(timeout_texto)
            except ValueError as exc:
                raise ValueError(f"{ENV_PREFIX}TIMEOUT no es un número: {timeout_texto!r}") from exc
            if timeout <= 0:
                raise ValueError(f"{ENV_PREFIX}TIMEOUT debe ser positivo: {timeout_texto!r}")

        api_key = entorno.get(f"{ENV_PREFIX}API_KEY", "").strip() or None

        politica_texto = entorno.get(f"{ENV_PREFIX}POLITICA_ERRORES", "").strip().lower()
        politica = defaults.politica_errores
        if politica_texto:
            try:
                politica = ErrorPolicy(politica_texto)
            except ValueError as exc:
                validas = ", ".join(p.value for p in ErrorPolicy)
                raise ValueError(
                    f"{ENV_PREFIX}POLITICA_ERRORES inválida: {politica_texto!r} (use {validas})"
                ) from exc

        nivel_log = entorno.get(f"{ENV_PREFIX}LOG_LEVEL", "").strip().upper() or defaults.nivel_log
        if not isinstance(logging.getLevelName(nivel_log), int):
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL desconocido: {nivel_log!r}")

        return cls(
            api_base=api_base,
            timeout=timeout,
            api_key=api_key,
            politica_errores=politica,
            nivel_log=nivel_log,
        )


__all__ = ["AppConfig", "ENV_PREFIX"]
