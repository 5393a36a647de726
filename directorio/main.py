"""Punto de entrada de la aplicación.

Lee la configuración, crea los componentes de infraestructura, servicios y
estado, y arranca la interfaz gráfica principal.
"""

from __future__ import annotations

import sys

from PyQt6.QtWidgets import QApplication

from directorio.core.config import AppConfig
from directorio.core.services import DirectoryService
from directorio.infrastructure.api_client import APIClient
from directorio.infrastructure.repositories import UserRepository
from directorio.logging_config import setup_logging
from directorio.ui.main_window import MainWindow


def build_service(config: AppConfig) -> DirectoryService:
    """Ensambla cliente, repositorio y servicio a partir de ``config``."""

    api_client = APIClient(config.api_base, timeout=config.timeout, api_key=config.api_key)
    repository = UserRepository(api_client)
    return DirectoryService(repository, politica_errores=config.politica_errores)


def main() -> None:
    """Arranca la aplicación PyQt6 con las dependencias configuradas."""

    config = AppConfig.desde_entorno()
    logger = setup_logging(config.nivel_log)
    logger.info("Usando servicio en %s", config.api_base)

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    window = MainWindow(service=build_service(config))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover - punto de entrada interactivo
    main()
