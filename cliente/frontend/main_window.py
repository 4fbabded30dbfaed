"""Ventana principal del tablero de la fruteria."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QGuiApplication
from PyQt6.QtWidgets import (
    QApplication,
    QButtonGroup,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from cliente.backend.controller import AppController
from cliente.frontend.inventory_pages import (
    CaducidadPage,
    DashboardPage,
    EntradasPage,
    ProductosPage,
    SalidasPage,
    TablePage,
)
from cliente.frontend.styles import WINDOW_QSS


class MainWindow(QMainWindow):
    """Ventana principal con menu lateral y paginas del inventario."""

    def __init__(self, controller: AppController) -> None:
        super().__init__()
        self._controller = controller

        self._stack: QStackedWidget
        self._nav_group: QButtonGroup
        self._pages: list[TablePage] = []
        self._exit_button: QPushButton

        self.setWindowTitle("Frutería - Control de inventario")
        screen = QGuiApplication.primaryScreen()
        geo = screen.availableGeometry()  # tamaño usable (sin taskbar/dock)
        w = int(geo.width() * 0.75)
        h = int(geo.height() * 0.85)
        self.resize(w, h)
        self.setMinimumSize(int(w * 0.70), int(h * 0.70))
        self._build_ui()
        self.setStyleSheet(WINDOW_QSS)
        self._show_page(0)

    def _build_ui(self) -> None:
        """Construye menu lateral y stack de paginas."""
        central = QWidget(self)
        root_layout = QHBoxLayout(central)
        root_layout.setContentsMargins(16, 16, 16, 16)
        root_layout.setSpacing(16)

        self._stack = QStackedWidget(central)
        self._pages = [
            DashboardPage(self._controller, self._stack),
            ProductosPage(self._controller, self._stack),
            EntradasPage(self._controller, self._stack),
            SalidasPage(self._controller, self._stack),
            CaducidadPage(self._controller, self._stack),
        ]
        for page in self._pages:
            self._stack.addWidget(page)

        root_layout.addWidget(self._build_nav(central))
        root_layout.addWidget(self._stack, 1)
        self.setCentralWidget(central)

    def _build_nav(self, parent: QWidget) -> QFrame:
        """Construye la tarjeta de navegacion."""
        card = QFrame(parent)
        card.setObjectName("navCard")
        card.setFixedWidth(240)
        layout = QVBoxLayout(card)
        layout.setContentsMargins(20, 24, 20, 24)
        layout.setSpacing(10)

        title_label = QLabel("Frutería", card)
        title_label.setObjectName("titleLabel")
        title_label.setFont(QFont("Segoe UI", 20, QFont.Weight.Bold))
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title_label)
        layout.addSpacing(12)

        self._nav_group = QButtonGroup(card)
        self._nav_group.setExclusive(True)
        for index, text in enumerate(("Dashboard", "Productos", "Entradas", "Salidas", "Caducidad")):
            button = QPushButton(text, card)
            button.setCheckable(True)
            self._nav_group.addButton(button, index)
            layout.addWidget(button)
        self._nav_group.idClicked.connect(self._show_page)

        layout.addStretch(1)
        self._exit_button = QPushButton("Salir", card)
        self._exit_button.setObjectName("exitButton")
        self._exit_button.clicked.connect(self._on_exit_clicked)
        layout.addWidget(self._exit_button)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 30))
        card.setGraphicsEffect(shadow)
        return card

    def _show_page(self, index: int) -> None:
        """Muestra la pagina indicada recargando sus datos del servidor."""
        button = self._nav_group.button(index)
        if button is not None:
            button.setChecked(True)
        page = self._pages[index]
        page.refresh()
        self._stack.setCurrentWidget(page)

    def _on_exit_clicked(self, _checked: bool = False) -> None:
        """Cierra la aplicacion a traves del controller."""
        self._controller.on_exit(QApplication.instance())
