"""Panel de detalle del usuario seleccionado."""

from __future__ import annotations

import html

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import (
    QDialog,
    QFormLayout,
    QFrame,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from directorio.core.state import DirectoryState

AVATAR_SIZE = 128


class UserDetailDialog(QDialog):
    """Diálogo no modal que refleja la selección del directorio.

    Cualquier forma de cerrarlo (botón Cerrar, Escape o el gestor de
    ventanas) termina en ``reject()`` y emite ``finished``; la ventana
    principal conecta esa señal para limpiar la selección.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Detalle del usuario")
        self.setMinimumWidth(420)
        self._avatar_de: int | None = None

        self.lbl_estado = QLabel("")
        self.lbl_estado.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_estado.setWordWrap(True)
        self.lbl_estado.setTextFormat(Qt.TextFormat.PlainText)

        self.lbl_avatar = QLabel()
        self.lbl_avatar.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_avatar.setFixedSize(AVATAR_SIZE, AVATAR_SIZE)
        self.lbl_avatar.setVisible(False)

        self.lbl_nombre = QLabel("")
        self.lbl_nombre.setStyleSheet("font-size: 14pt; font-weight: 700;")
        self.lbl_nombre.setTextFormat(Qt.TextFormat.PlainText)
        self.lbl_email = QLabel("")
        self.lbl_email.setTextFormat(Qt.TextFormat.PlainText)
        self.lbl_id = QLabel("")

        self.datos = QWidget()
        form = QFormLayout(self.datos)
        form.addRow(self.lbl_avatar)
        form.addRow(self.lbl_nombre)
        form.addRow("Email", self.lbl_email)
        form.addRow("ID de usuario", self.lbl_id)

        self.lbl_aviso_titulo = QLabel("Mensaje del patrocinador")
        self.lbl_aviso_titulo.setStyleSheet("font-weight: 700;")
        self.lbl_aviso_texto = QLabel("")
        self.lbl_aviso_texto.setWordWrap(True)
        self.lbl_aviso_texto.setTextFormat(Qt.TextFormat.PlainText)
        self.lbl_aviso_enlace = QLabel("")
        self.lbl_aviso_enlace.setOpenExternalLinks(True)
        self.lbl_aviso_enlace.setTextFormat(Qt.TextFormat.RichText)

        self.aviso = QFrame()
        self.aviso.setFrameShape(QFrame.Shape.StyledPanel)
        aviso_layout = QVBoxLayout(self.aviso)
        aviso_layout.addWidget(self.lbl_aviso_titulo)
        aviso_layout.addWidget(self.lbl_aviso_texto)
        aviso_layout.addWidget(self.lbl_aviso_enlace)

        self.btn_cerrar = QPushButton("Cerrar")
        self.btn_cerrar.clicked.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(self.lbl_estado)
        layout.addWidget(self.datos)
        layout.addWidget(self.aviso)
        layout.addWidget(self.btn_cerrar)

    def mostrar(self, estado: DirectoryState) -> None:
        """Actualiza el contenido a partir de la instantánea ``estado``."""

        seleccion = estado.seleccion
        detalle = seleccion.detail

        if detalle is None or detalle.id != self._avatar_de:
            self._limpiar_avatar()

        if estado.cargando_detalle:
            self._mostrar_mensaje("Cargando detalles...")
        elif detalle is None:
            mensaje = "Detalles del usuario no disponibles"
            if estado.error_detalle is not None:
                mensaje = f"{mensaje}\n{estado.error_detalle.message}"
            self._mostrar_mensaje(mensaje)
        else:
            self.lbl_estado.setVisible(False)
            self.datos.setVisible(True)
            self.lbl_nombre.setText(detalle.nombre_completo)
            self.lbl_email.setText(detalle.email)
            self.lbl_id.setText(str(detalle.id))

            advisory = seleccion.advisory
            self.aviso.setVisible(advisory is not None)
            if advisory is not None:
                self.lbl_aviso_texto.setText(advisory.text)
                self.lbl_aviso_texto.setVisible(bool(advisory.text))
                self.lbl_aviso_enlace.setText(
                    f'<a href="{html.escape(advisory.url, quote=True)}">Más información</a>'
                )
                self.lbl_aviso_enlace.setVisible(bool(advisory.url))

    def mostrar_avatar(self, user_id: int, datos: bytes) -> bool:
        """Muestra la imagen ``datos`` como avatar de ``user_id``.

        Devuelve ``False`` si los bytes no son una imagen válida.
        """

        pixmap = QPixmap()
        if not pixmap.loadFromData(datos):
            self._limpiar_avatar()
            return False

        self._avatar_de = user_id
        self.lbl_avatar.setPixmap(
            pixmap.scaled(
                AVATAR_SIZE,
                AVATAR_SIZE,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        )
        self.lbl_avatar.setVisible(True)
        return True

    def _limpiar_avatar(self) -> None:
        self._avatar_de = None
        self.lbl_avatar.clear()
        self.lbl_avatar.setVisible(False)

    def _mostrar_mensaje(self, mensaje: str) -> None:
        self.lbl_estado.setText(mensaje)
        self.lbl_estado.setVisible(True)
        self.datos.setVisible(False)
        self.aviso.setVisible(False)


__all__ = ["UserDetailDialog"]
