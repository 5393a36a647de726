"""Ventana principal de la aplicación."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

from PyQt6.QtCore import Qt, QThread
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from directorio.core.services import DirectoryService
from directorio.core.state import DirectoryState
from directorio.models.user import UserSummary
from directorio.ui.detail_dialog import UserDetailDialog
from directorio.ui.workers import FetchWorker

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _TableColumns:
    id: int = 0
    nombre: int = 1
    email: int = 2


class MainWindow(QMainWindow):
    """Ventana principal con el listado paginado de usuarios."""

    def __init__(self, *, service: DirectoryService) -> None:
        super().__init__()
        self.service = service
        self._columns = _TableColumns()
        self._hilos: List[Tuple[QThread, FetchWorker]] = []

        self.setWindowTitle("Directorio de usuarios")
        self.resize(720, 480)

        self.lbl_error = QLabel("")
        self.lbl_error.setWordWrap(True)
        self.lbl_error.setStyleSheet("color: #b91c1c; font-weight: 600;")
        self.btn_descartar = QPushButton("Descartar")
        self.btn_descartar.clicked.connect(self.service.descartar_errores)

        self.banner = QWidget()
        banner_layout = QHBoxLayout(self.banner)
        banner_layout.setContentsMargins(8, 4, 8, 4)
        banner_layout.addWidget(self.lbl_error, 1)
        banner_layout.addWidget(self.btn_descartar)
        self.banner.setStyleSheet("background-color: #fee2e2;")
        self.banner.setVisible(False)

        self.table = QTableWidget(columnCount=3)
        self.table.setHorizontalHeaderLabels(["ID", "Nombre", "Email"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.cellClicked.connect(self._on_row_clicked)

        self.btn_anterior = QPushButton("Anterior")
        self.btn_anterior.clicked.connect(self._on_prev_page)
        self.btn_siguiente = QPushButton("Siguiente")
        self.btn_siguiente.clicked.connect(self._on_next_page)
        self.lbl_pagina = QLabel("Página 1 de 0")

        paginacion = QHBoxLayout()
        paginacion.addStretch(1)
        paginacion.addWidget(self.btn_anterior)
        paginacion.addWidget(self.lbl_pagina)
        paginacion.addWidget(self.btn_siguiente)
        paginacion.addStretch(1)

        titulo = QLabel("Directorio de usuarios")
        titulo.setStyleSheet("font-size: 16pt; font-weight: 700;")
        subtitulo = QLabel("Haga clic en un usuario para ver más detalles")

        layout = QVBoxLayout()
        layout.addWidget(titulo)
        layout.addWidget(subtitulo)
        layout.addWidget(self.banner)
        layout.addWidget(self.table)
        layout.addLayout(paginacion)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

        self.detail_dialog = UserDetailDialog(self)
        self.detail_dialog.finished.connect(self._on_detail_closed)
        self._avatar_solicitado: int | None = None

        self._baja = self.service.suscribir(self._render)
        self._render(self.service.estado)
        self._cargar_pagina(self.service.estado.pagina.current_page)

    # ------------------------------------------------------------------
    # Eventos y acciones
    # ------------------------------------------------------------------
    def _cargar_pagina(self, page: int) -> None:
        secuencia = self.service.iniciar_carga_pagina(page)
        self._ejecutar(
            secuencia,
            lambda: self.service.obtener_pagina(page),
            self._on_page_loaded,
            self._on_page_failed,
        )

    def _on_prev_page(self) -> None:
        pagina = self.service.estado.pagina
        if pagina.tiene_anterior:
            self._cargar_pagina(pagina.current_page - 1)

    def _on_next_page(self) -> None:
        pagina = self.service.estado.pagina
        if pagina.tiene_siguiente:
            self._cargar_pagina(pagina.current_page + 1)

    def _on_row_clicked(self, row: int, _column: int) -> None:
        usuarios = self.service.estado.users
        if row < 0 or row >= len(usuarios):
            return
        usuario: UserSummary = usuarios[row]
        secuencia = self.service.iniciar_seleccion(usuario)
        self._ejecutar(
            secuencia,
            lambda: self.service.obtener_detalle(usuario.id),
            self._on_detail_loaded,
            self._on_detail_failed,
        )

    def _on_page_loaded(self, secuencia: int, resultado: Any) -> None:
        self.service.aplicar_pagina(secuencia, resultado)

    def _on_page_failed(self, secuencia: int, exc: Any) -> None:
        self.service.aplicar_error_pagina(secuencia, exc)

    def _on_detail_loaded(self, secuencia: int, resultado: Any) -> None:
        self.service.aplicar_detalle(secuencia, resultado)

    def _on_detail_failed(self, secuencia: int, exc: Any) -> None:
        self.service.aplicar_error_detalle(secuencia, exc)

    def _on_detail_closed(self, _resultado: int) -> None:
        self.service.limpiar_seleccion()

    def _cargar_avatar(self, secuencia: int, url: str) -> None:
        self._avatar_solicitado = secuencia
        self._ejecutar(
            secuencia,
            lambda: self.service.obtener_avatar(url),
            self._on_avatar_loaded,
            self._on_avatar_failed,
        )

    def _on_avatar_loaded(self, secuencia: int, datos: Any) -> None:
        estado = self.service.estado
        detalle = estado.seleccion.detail
        if secuencia != estado.secuencia_detalle or detalle is None:
            return
        if not self.detail_dialog.mostrar_avatar(detalle.id, datos):
            logger.warning("El avatar del usuario %s no es una imagen válida", detalle.id)

    def _on_avatar_failed(self, secuencia: int, exc: Any) -> None:
        logger.warning("No se pudo cargar el avatar (secuencia %s): %s", secuencia, exc)

    # ------------------------------------------------------------------
    # Hilos
    # ------------------------------------------------------------------
    def _ejecutar(
        self,
        secuencia: int,
        tarea: Callable[[], Any],
        on_finished: Callable[[int, Any], None],
        on_error: Callable[[int, Any], None],
    ) -> None:
        hilo = QThread(self)
        worker = FetchWorker(secuencia, tarea)
        worker.moveToThread(hilo)

        hilo.started.connect(worker.run)
        worker.finished.connect(hilo.quit)
        worker.error.connect(hilo.quit)
        worker.finished.connect(on_finished)
        worker.error.connect(on_error)
        hilo.finished.connect(self._limpiar_hilos_terminados)

        self._hilos.append((hilo, worker))
        hilo.start()

    def _limpiar_hilos_terminados(self) -> None:
        for hilo, worker in list(self._hilos):
            if hilo.isFinished():
                self._hilos.remove((hilo, worker))
                worker.deleteLater()
                hilo.deleteLater()

    def detener_hilos(self) -> None:
        """Espera a que terminen las peticiones en curso."""

        for hilo, _worker in list(self._hilos):
            hilo.quit()
            hilo.wait()

    def closeEvent(self, event) -> None:
        self._baja()
        self.detener_hilos()
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Renderizado
    # ------------------------------------------------------------------
    def _render(self, estado: DirectoryState) -> None:
        mensaje = estado.mensaje_error
        self.banner.setVisible(mensaje is not None)
        self.lbl_error.setText(mensaje or "")

        pagina = estado.pagina
        texto = f"Página {pagina.current_page} de {pagina.total_pages}"
        if pagina.total_users is not None:
            texto = f"{texto} ({pagina.total_users} usuarios)"
        self.lbl_pagina.setText(texto)
        self.btn_anterior.setEnabled(pagina.tiene_anterior and not estado.cargando_lista)
        self.btn_siguiente.setEnabled(pagina.tiene_siguiente and not estado.cargando_lista)

        if estado.cargando_lista:
            self.statusBar().showMessage("Cargando usuarios...", 0)
        else:
            self.statusBar().clearMessage()

        self._populate_table(estado.users, estado.seleccion.selected_user_id)

        if estado.seleccion.selected is None:
            self.detail_dialog.hide()
        else:
            self.detail_dialog.mostrar(estado)
            if not self.detail_dialog.isVisible():
                self.detail_dialog.show()

            detalle = estado.seleccion.detail
            if (
                detalle is not None
                and detalle.avatar
                and self._avatar_solicitado != estado.secuencia_detalle
            ):
                self._cargar_avatar(estado.secuencia_detalle, detalle.avatar)

    def _populate_table(self, usuarios: Tuple[UserSummary, ...], seleccionado: int | None) -> None:
        self.table.setRowCount(len(usuarios))

        for row, usuario in enumerate(usuarios):
            items = {
                self._columns.id: QTableWidgetItem(str(usuario.id)),
                self._columns.nombre: QTableWidgetItem(usuario.nombre_completo),
                self._columns.email: QTableWidgetItem(usuario.email),
            }
            for column, item in items.items():
                item.setFlags(item.flags() & ~Qt.ItemFlag.ItemIsEditable)
                self.table.setItem(row, column, item)

        self.table.resizeColumnsToContents()

        filas = [row for row, usuario in enumerate(usuarios) if usuario.id == seleccionado]
        self.table.blockSignals(True)
        if filas:
            self.table.selectRow(filas[0])
        else:
            self.table.clearSelection()
        self.table.blockSignals(False)


__all__ = ["MainWindow"]
