"""Ejecución de peticiones en hilos secundarios."""

from __future__ import annotations

from typing import Any, Callable

from PyQt6.QtCore import QObject, pyqtSignal


class FetchWorker(QObject):
    """Ejecuta ``tarea`` fuera del hilo de la interfaz.

    Emite ``finished`` con la secuencia y el resultado, o ``error`` con la
    secuencia y la excepción. La secuencia viaja con la señal para que el
    hilo de la interfaz descarte respuestas obsoletas.
    """

    finished = pyqtSignal(int, object)
    error = pyqtSignal(int, object)

    def __init__(self, secuencia: int, tarea: Callable[[], Any]) -> None:
        super().__init__()
        self.secuencia = secuencia
        self._tarea = tarea

    def run(self) -> None:
        try:
            resultado = self._tarea()
        except Exception as exc:  # pragma: no cover - mostrado en UI
            self.error.emit(self.secuencia, exc)
            return
        self.finished.emit(self.secuencia, resultado)


__all__ = ["FetchWorker"]
