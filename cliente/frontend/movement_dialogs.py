"""Dialogos para registrar entradas y salidas de stock."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QDate, Qt
from PyQt6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QDoubleSpinBox,
    QFormLayout,
    QFrame,
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
from servidor.services.inventory_utils import format_cantidad
from shared.catalogs import MOTIVOS_SALIDA
from shared.errors import RepositoryError, ValidationError
from shared.protocol import RegisterEntradaRequest, RegisterSalidaRequest

if TYPE_CHECKING:
    from cliente.backend.controller import AppController


class _MovementDialog(QDialog):
    """Base comun: selector de producto, cantidad y fecha."""

    _TITLE = ""

    def __init__(
        self,
        controller: AppController,
        productos: list[Producto],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._productos = productos

        self.setWindowTitle(self._TITLE)
        self.setModal(True)
        self.setMinimumSize(480, 440)

        self._card = QFrame(self)
        self._card.setObjectName("dialogCard")
        self._form_layout = QFormLayout()
        self._form_layout.setSpacing(10)

        self._producto_input = QComboBox(self._card)
        self._producto_input.setEditable(True)
        self._producto_input.setInsertPolicy(QComboBox.InsertPolicy.NoInsert)
        for producto in productos:
            self._producto_input.addItem(self._producto_label(producto), producto.id)

        self._cantidad_input = QDoubleSpinBox(self._card)
        self._cantidad_input.setDecimals(2)
        self._cantidad_input.setRange(0.0, 1_000_000.0)
        self._cantidad_input.setValue(1.0)

        self._fecha_input = QDateEdit(self._card)
        self._fecha_input.setCalendarPopup(True)
        self._fecha_input.setDisplayFormat("dd/MM/yyyy")
        self._fecha_input.setDate(QDate.currentDate())

        self._add_row("Producto", self._producto_input)
        self._add_row("Cantidad", self._cantidad_input)
        self._add_row("Fecha", self._fecha_input)
        self._build_extra_fields()
        self._build_layout()
        self.setStyleSheet(DIALOG_QSS)

    def _build_extra_fields(self) -> None:
        raise NotImplementedError

    def _submit(self) -> str:
        """Envia el movimiento al controller y retorna el mensaje de exito."""
        raise NotImplementedError

    @staticmethod
    def _producto_label(producto: Producto) -> str:
        return f"{producto.nombre} (Stock: {format_cantidad(producto.stock, producto.unidad)})"

    def _add_row(self, text: str, widget: QWidget) -> None:
        label = QLabel(text, self._card)
        label.setObjectName("fieldLabel")
        self._form_layout.addRow(label, widget)

    def _build_layout(self) -> None:
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(18, 18, 18, 18)

        card_layout = QVBoxLayout(self._card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(12)

        title_label = QLabel(self._TITLE, self._card)
        title_label.setObjectName("titleLabel")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch(1)
        cancel_button = QPushButton("Cancelar", self._card)
        cancel_button.setObjectName("cancelButton")
        save_button = QPushButton("Registrar", self._card)
        cancel_button.clicked.connect(self.reject)
        save_button.clicked.connect(self._on_save_clicked)
        buttons_layout.addWidget(cancel_button)
        buttons_layout.addWidget(save_button)

        card_layout.addWidget(title_label)
        card_layout.addLayout(self._form_layout)
        card_layout.addLayout(buttons_layout)
        root_layout.addWidget(self._card)

    def _selected_producto_id(self) -> int | str:
        producto_id = self._producto_input.currentData()
        if producto_id is None:
            raise ValidationError("Por favor seleccione un producto.")
        return producto_id

    def _on_save_clicked(self) -> None:
        try:
            message = self._submit()
        except (ValidationError, RepositoryError) as exc:
            show_error(self, f"Error: {self._TITLE.lower()}", str(exc))
            return

        show_info(self, self._TITLE, message)
        self.accept()


class EntradaDialog(_MovementDialog):
    """Formulario de registro de entradas de stock."""

    _TITLE = "Registrar entrada"

    def _build_extra_fields(self) -> None:
        self._proveedor_input = QLineEdit(self._card)
        self._proveedor_input.setPlaceholderText("Nombre del proveedor")

        self._precio_input = QDoubleSpinBox(self._card)
        self._precio_input.setDecimals(2)
        self._precio_input.setRange(0.0, 1_000_000.0)
        self._precio_input.setPrefix("$ ")

        self._add_row("Proveedor", self._proveedor_input)
        self._add_row("Precio de compra", self._precio_input)

    def _submit(self) -> str:
        result = self._controller.on_register_entrada(
            RegisterEntradaRequest(
                producto_id=self._selected_producto_id(),
                cantidad=self._cantidad_input.value(),
                fecha=self._fecha_input.date().toPyDate(),
                proveedor=self._proveedor_input.text(),
                precio_compra=self._precio_input.value(),
            )
        )
        producto = result.producto
        return (
            "Entrada registrada y stock actualizado. Stock actual de "
            f"{producto.nombre}: {format_cantidad(producto.stock, producto.unidad)}"
        )


class SalidaDialog(_MovementDialog):
    """Formulario de registro de salidas de stock."""

    _TITLE = "Registrar salida"

    def _build_extra_fields(self) -> None:
        self._motivo_input = QComboBox(self._card)
        self._motivo_input.addItems(MOTIVOS_SALIDA)

        self._cliente_input = QLineEdit(self._card)
        self._cliente_input.setPlaceholderText("Cliente o destino")

        self._disponible_label = QLabel(self._card)
        self._disponible_label.setObjectName("helpLabel")
        self._producto_input.currentIndexChanged.connect(self._refresh_disponible)
        self._refresh_disponible()

        self._add_row("Motivo", self._motivo_input)
        self._add_row("Cliente / destino", self._cliente_input)
        self._form_layout.addRow(self._disponible_label)

    def _refresh_disponible(self, _index: int = 0) -> None:
        """Muestra el stock disponible del producto seleccionado."""
        index = self._producto_input.currentIndex()
        if 0 <= index < len(self._productos):
            producto = self._productos[index]
            disponible = format_cantidad(producto.stock, producto.unidad)
            self._disponible_label.setText(f"Stock disponible: {disponible}")
        else:
            self._disponible_label.setText("")

    def _submit(self) -> str:
        result = self._controller.on_register_salida(
            RegisterSalidaRequest(
                producto_id=self._selected_producto_id(),
                cantidad=self._cantidad_input.value(),
                fecha=self._fecha_input.date().toPyDate(),
                motivo=self._motivo_input.currentText(),
                cliente=self._cliente_input.text(),
            )
        )
        producto = result.producto
        return (
            "Salida registrada y stock actualizado. Stock actual de "
            f"{producto.nombre}: {format_cantidad(producto.stock, producto.unidad)}"
        )
