"""Dialogo para crear o editar productos."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QDate, Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QDoubleSpinBox,
    QFormLayout,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import show_error, show_info
from cliente.frontend.styles import DIALOG_QSS
from servidor.domain.models import Producto
from shared.catalogs import CATEGORIAS, UNIDADES
from shared.errors import RepositoryError, ValidationError
from shared.protocol import ProductoDraft

if TYPE_CHECKING:
    from cliente.backend.controller import AppController


class ProductDialog(QDialog):
    """Dialogo modal para registrar o modificar un producto."""

    def __init__(
        self,
        controller: AppController,
        producto: Producto | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._producto = producto

        self._nombre_input: QLineEdit
        self._categoria_input: QComboBox
        self._precio_input: QDoubleSpinBox
        self._stock_input: QDoubleSpinBox
        self._unidad_input: QComboBox
        self._caducidad_input: QDateEdit
        self._proveedor_input: QLineEdit

        self.setWindowTitle("Editar producto" if producto else "Nuevo producto")
        self.setModal(True)
        self.setMinimumSize(480, 520)

        self._build_ui()
        self.setStyleSheet(DIALOG_QSS)
        if producto is not None:
            self._load_producto(producto)

    def _build_ui(self) -> None:
        """Construye widgets del dialogo."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(18, 18, 18, 18)

        card = QFrame(self)
        card.setObjectName("dialogCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(12)

        title_label = QLabel(self.windowTitle(), card)
        title_label.setObjectName("titleLabel")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._nombre_input = QLineEdit(card)
        self._nombre_input.setPlaceholderText("Manzana Roja")

        self._categoria_input = QComboBox(card)
        self._categoria_input.addItems(CATEGORIAS)

        self._precio_input = QDoubleSpinBox(card)
        self._precio_input.setDecimals(2)
        self._precio_input.setRange(0.0, 1_000_000.0)
        self._precio_input.setPrefix("$ ")

        self._stock_input = QDoubleSpinBox(card)
        self._stock_input.setDecimals(2)
        self._stock_input.setRange(0.0, 1_000_000.0)

        self._unidad_input = QComboBox(card)
        for code, label in UNIDADES:
            self._unidad_input.addItem(label, code)

        self._caducidad_input = QDateEdit(card)
        self._caducidad_input.setCalendarPopup(True)
        self._caducidad_input.setDisplayFormat("dd/MM/yyyy")
        self._caducidad_input.setDate(QDate.currentDate())

        self._proveedor_input = QLineEdit(card)
        self._proveedor_input.setPlaceholderText("Huerta del Valle")

        form_layout = QFormLayout()
        form_layout.setSpacing(10)
        form_layout.addRow(self._field_label("Nombre", card), self._nombre_input)
        form_layout.addRow(self._field_label("Categoría", card), self._categoria_input)
        form_layout.addRow(self._field_label("Precio", card), self._precio_input)
        form_layout.addRow(self._field_label("Stock", card), self._stock_input)
        form_layout.addRow(self._field_label("Unidad", card), self._unidad_input)
        form_layout.addRow(self._field_label("Caducidad", card), self._caducidad_input)
        form_layout.addRow(self._field_label("Proveedor", card), self._proveedor_input)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch(1)

        cancel_button = QPushButton("Cancelar", card)
        cancel_button.setObjectName("cancelButton")
        save_button = QPushButton("Guardar", card)

        cancel_button.clicked.connect(self.reject)
        save_button.clicked.connect(self._on_save_clicked)

        buttons_layout.addWidget(cancel_button)
        buttons_layout.addWidget(save_button)

        card_layout.addWidget(title_label)
        card_layout.addLayout(form_layout)
        card_layout.addSpacing(4)
        card_layout.addLayout(buttons_layout)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 35))
        card.setGraphicsEffect(shadow)

        root_layout.addWidget(card)
        self._nombre_input.setFocus()

    @staticmethod
    def _field_label(text: str, parent: QWidget) -> QLabel:
        label = QLabel(text, parent)
        label.setObjectName("fieldLabel")
        return label

    def _load_producto(self, producto: Producto) -> None:
        """Precarga el formulario con los datos del producto a editar."""
        self._nombre_input.setText(producto.nombre)
        self._categoria_input.setCurrentText(producto.categoria)
        self._precio_input.setValue(producto.precio)
        self._stock_input.setValue(producto.stock)
        index = self._unidad_input.findData(producto.unidad)
        if index >= 0:
            self._unidad_input.setCurrentIndex(index)
        fecha = producto.fecha_caducidad
        self._caducidad_input.setDate(QDate(fecha.year, fecha.month, fecha.day))
        self._proveedor_input.setText(producto.proveedor)

    def _build_draft(self) -> ProductoDraft:
        return ProductoDraft(
            nombre=self._nombre_input.text(),
            categoria=self._categoria_input.currentText(),
            precio=self._precio_input.value(),
            stock=self._stock_input.value(),
            unidad=str(self._unidad_input.currentData()),
            fecha_caducidad=self._caducidad_input.date().toPyDate(),
            proveedor=self._proveedor_input.text(),
        )

    def _on_save_clicked(self) -> None:
        """Valida y guarda el producto usando el controller."""
        producto_id = self._producto.id if self._producto is not None else None
        try:
            producto = self._controller.on_save_producto(self._build_draft(), producto_id)
        except (ValidationError, RepositoryError) as exc:
            show_error(self, "Error al guardar el producto", str(exc))
            return

        show_info(self, "Producto guardado", f"Producto guardado: {producto.nombre}")
        self.accept()
