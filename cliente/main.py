"""Inicializacion de la aplicacion de cliente."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QApplication

from cliente.backend.controller import AppController
from cliente.backend.gateway import RestInventoryGateway
from cliente.frontend.main_window import MainWindow
from parametros import API_URL

LOGGER = logging.getLogger(__name__)


def main() -> int:
    """Ejecuta la aplicacion grafica."""
    app = QApplication(sys.argv)
    icon_path = Path(__file__).resolve().parent / "utilities" / "icono.ico"
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))
    else:
        LOGGER.warning("No se encontro icono de aplicacion en: %s", icon_path)

    gateway = RestInventoryGateway(base_url=API_URL)
    LOGGER.info("Backend de inventario: %s", API_URL)
    controller = AppController(repository=gateway)
    window = MainWindow(controller=controller)
    if not app.windowIcon().isNull():
        window.setWindowIcon(app.windowIcon())
    window.showMaximized()

    LOGGER.info("Aplicacion iniciada.")
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
