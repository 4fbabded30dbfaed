"""Paginas de tablas del tablero: dashboard, productos, movimientos y caducidad."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QFrame,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QProgressBar,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import confirm, show_error, show_info
from cliente.frontend.movement_dialogs import EntradaDialog, SalidaDialog
from cliente.frontend.product_dialog import ProductDialog
from servidor.domain.models import Entrada, Salida
from servidor.services.expiry import (
    ESTADO_LABELS,
    EstadoCaducidad,
    classify_expiry,
    format_dias_restantes,
    progress_color,
    progress_fraction,
)
from servidor.services.inventory_utils import (
    format_cantidad,
    format_fecha,
    format_mxn,
    total_entrada,
)
from shared.errors import RepositoryError, ValidationError

if TYPE_CHECKING:
    from cliente.backend.controller import AppController

LOGGER = logging.getLogger(__name__)

_ID_ROLE = Qt.ItemDataRole.UserRole
_SORT_ROLE = Qt.ItemDataRole.UserRole.value + 1


@dataclass(frozen=True, slots=True)
class TableCell:
    """Celda con texto visible, clave de orden opcional y color opcional."""

    text: str
    sort_key: float | str | None = None
    color: str | None = None


Cell = Union[str, TableCell]

_ESTADO_COLORS: dict[EstadoCaducidad, str] = {
    EstadoCaducidad.VIGENTE: "#52c41a",
    EstadoCaducidad.POR_CADUCAR: "#faad14",
    EstadoCaducidad.CADUCADO: "#cf1322",
}


class SortableItem(QTableWidgetItem):
    """Item que ordena por su clave cruda (numero o fecha ISO) si la tiene."""

    def __lt__(self, other: QTableWidgetItem) -> bool:
        mine = self.data(_SORT_ROLE)
        theirs = other.data(_SORT_ROLE)
        if mine is not None and theirs is not None:
            return mine < theirs
        return super().__lt__(other)


class TablePage(QWidget):
    """Pagina con titulo, barra de botones y una tabla de solo lectura."""

    _TITLE = ""
    _HEADERS: tuple[str, ...] = ()

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._controller = controller

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)

        title_label = QLabel(self._TITLE, self)
        title_label.setObjectName("titleLabel")
        self._toolbar = QHBoxLayout()
        self._toolbar.setSpacing(10)

        self._table = self._build_table(self._HEADERS)

        layout.addWidget(title_label)
        layout.addLayout(self._toolbar)
        layout.addWidget(self._table)

    def _build_table(self, headers: Sequence[str]) -> QTableWidget:
        table = QTableWidget(0, len(headers), self)
        table.setHorizontalHeaderLabels(list(headers))
        table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        table.setSortingEnabled(True)
        table.verticalHeader().setVisible(False)
        table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        return table

    def _add_button(self, text: str, slot: Any, object_name: str = "") -> QPushButton:
        button = QPushButton(text, self)
        if object_name:
            button.setObjectName(object_name)
        button.clicked.connect(slot)
        self._toolbar.addWidget(button)
        return button

    @staticmethod
    def _fill_table(
        table: QTableWidget,
        rows: Sequence[tuple[Any, Sequence[Cell]]],
    ) -> None:
        """Carga filas ``(id, celdas)`` guardando el id en la primera columna.

        Una celda puede ser texto plano o un ``TableCell``.
        """
        sorting = table.isSortingEnabled()
        table.setSortingEnabled(False)
        table.setRowCount(len(rows))
        for row_index, (record_id, cells) in enumerate(rows):
            for column, cell in enumerate(cells):
                if isinstance(cell, TableCell):
                    item = SortableItem(cell.text)
                    if cell.sort_key is not None:
                        item.setData(_SORT_ROLE, cell.sort_key)
                    if cell.color:
                        item.setForeground(QColor(cell.color))
                else:
                    item = SortableItem(cell)
                if column == 0:
                    item.setData(_ID_ROLE, record_id)
                table.setItem(row_index, column, item)
        table.setSortingEnabled(sorting)

    def _selected_id(self) -> Any | None:
        row = self._table.currentRow()
        if row < 0:
            show_info(self, self._TITLE, "Selecciona una fila primero.")
            return None
        item = self._table.item(row, 0)
        return item.data(_ID_ROLE) if item is not None else None

    def refresh(self) -> None:
        """Recarga la tabla desde el repositorio."""
        try:
            self._reload()
        except (ValidationError, RepositoryError) as exc:
            show_error(self, f"Error al cargar {self._TITLE.lower()}", str(exc))
            return
        LOGGER.debug("Pagina recargada: %s", self._TITLE)

    def _reload(self) -> None:
        raise NotImplementedError


class DashboardPage(TablePage):
    """Resumen de stock total, productos por caducar y ultimos movimientos."""

    _TITLE = "Dashboard"
    _HEADERS = ("Producto", "Cantidad", "Fecha", "Tipo")

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(controller, parent)
        self._stock_value = self._add_stat_card("Stock total")
        self._caducar_value = self._add_stat_card("Productos por caducar (7 días)")
        self._entradas_value = self._add_stat_card("Entradas recientes")
        self._salidas_value = self._add_stat_card("Salidas recientes")
        self._table.setSortingEnabled(False)

    def _add_stat_card(self, text: str) -> QLabel:
        card = QFrame(self)
        card.setObjectName("statCard")
        card_layout = QVBoxLayout(card)
        value_label = QLabel("-", card)
        value_label.setObjectName("statValue")
        caption = QLabel(text, card)
        caption.setObjectName("statLabel")
        card_layout.addWidget(value_label)
        card_layout.addWidget(caption)
        self._toolbar.addWidget(card)
        return value_label

    def _reload(self) -> None:
        stats = self._controller.dashboard_stats()
        self._stock_value.setText(format_cantidad(stats.stock_total))
        self._caducar_value.setText(str(stats.productos_por_caducar))
        self._entradas_value.setText(str(len(stats.entradas_recientes)))
        self._salidas_value.setText(str(len(stats.salidas_recientes)))

        rows: list[tuple[Any, Sequence[Cell]]] = []
        for entrada in stats.entradas_recientes:
            rows.append(self._movement_row(entrada, "Entrada"))
        for salida in stats.salidas_recientes:
            rows.append(self._movement_row(salida, "Salida"))
        self._fill_table(self._table, rows)

    @staticmethod
    def _movement_row(movimiento: Entrada | Salida, tipo: str) -> tuple[Any, Sequence[Cell]]:
        return (
            movimiento.id,
            (
                movimiento.nombre_producto,
                TableCell(format_cantidad(movimiento.cantidad), movimiento.cantidad),
                TableCell(format_fecha(movimiento.fecha), movimiento.fecha.isoformat()),
                tipo,
            ),
        )


class ProductosPage(TablePage):
    """Catalogo de productos con su estado de caducidad."""

    _TITLE = "Productos"
    _HEADERS = ("Nombre", "Categoría", "Precio", "Stock", "Caducidad", "Estado", "Proveedor")

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(controller, parent)
        self._productos: dict[str, Any] = {}
        self._add_button("Nuevo producto", self._on_new_clicked)
        self._add_button("Editar", self._on_edit_clicked)
        self._add_button("Eliminar", self._on_delete_clicked, object_name="dangerButton")
        self._toolbar.addStretch(1)

    def _reload(self) -> None:
        productos = self._controller.list_productos()
        hoy = self._controller.today()
        self._productos = {str(producto.id): producto for producto in productos}

        rows: list[tuple[Any, Sequence[Cell]]] = []
        for producto in productos:
            estado = classify_expiry(producto.fecha_caducidad, hoy).estado
            rows.append(
                (
                    producto.id,
                    (
                        producto.nombre,
                        producto.categoria,
                        TableCell(format_mxn(producto.precio), producto.precio),
                        TableCell(
                            format_cantidad(producto.stock, producto.unidad),
                            producto.stock,
                        ),
                        TableCell(
                            format_fecha(producto.fecha_caducidad),
                            producto.fecha_caducidad.isoformat(),
                        ),
                        TableCell(ESTADO_LABELS[estado], color=_ESTADO_COLORS[estado]),
                        producto.proveedor,
                    ),
                )
            )
        self._fill_table(self._table, rows)

    def _on_new_clicked(self, _checked: bool = False) -> None:
        if ProductDialog(controller=self._controller, parent=self).exec():
            self.refresh()

    def _on_edit_clicked(self, _checked: bool = False) -> None:
        producto_id = self._selected_id()
        if producto_id is None:
            return
        producto = self._productos.get(str(producto_id))
        dialog = ProductDialog(controller=self._controller, producto=producto, parent=self)
        if dialog.exec():
            self.refresh()

    def _on_delete_clicked(self, _checked: bool = False) -> None:
        producto_id = self._selected_id()
        if producto_id is None:
            return
        if not confirm(self, "Eliminar producto", "¿Está seguro de eliminar este producto?"):
            return
        try:
            self._controller.on_delete_producto(producto_id)
        except (ValidationError, RepositoryError) as exc:
            show_error(self, "Error al eliminar el producto", str(exc))
            return
        self.refresh()


class _MovementsPage(TablePage):
    """Base de entradas y salidas: registrar y eliminar con reversa de stock."""

    _KIND = ""

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(controller, parent)
        self._add_button(f"Registrar {self._KIND}", self._on_register_clicked)
        self._add_button("Eliminar", self._on_delete_clicked, object_name="dangerButton")
        self._toolbar.addStretch(1)

    def _open_dialog(self) -> bool:
        raise NotImplementedError

    def _delete(self, record_id: Any) -> None:
        raise NotImplementedError

    def _on_register_clicked(self, _checked: bool = False) -> None:
        try:
            accepted = self._open_dialog()
        except (ValidationError, RepositoryError) as exc:
            show_error(self, f"Error al registrar la {self._KIND}", str(exc))
            return
        if accepted:
            self.refresh()

    def _on_delete_clicked(self, _checked: bool = False) -> None:
        record_id = self._selected_id()
        if record_id is None:
            return
        if not confirm(
            self,
            f"Eliminar {self._KIND}",
            f"¿Está seguro de eliminar esta {self._KIND}?\nEsto revertirá el stock del producto.",
        ):
            return
        try:
            self._delete(record_id)
        except (ValidationError, RepositoryError) as exc:
            show_error(self, f"Error al eliminar la {self._KIND}", str(exc))
            return
        show_info(self, self._TITLE, f"{self._KIND.capitalize()} eliminada y stock actualizado.")
        self.refresh()


class EntradasPage(_MovementsPage):
    """Historial de entradas de stock."""

    _TITLE = "Entradas"
    _KIND = "entrada"
    _HEADERS = ("Producto", "Cantidad", "Fecha", "Proveedor", "Precio de compra", "Total")

    def _reload(self) -> None:
        snapshot = self._controller.load_snapshot()
        self._fill_table(
            self._table,
            [
                (
                    entrada.id,
                    (
                        entrada.nombre_producto,
                        TableCell(format_cantidad(entrada.cantidad), entrada.cantidad),
                        TableCell(format_fecha(entrada.fecha), entrada.fecha.isoformat()),
                        entrada.proveedor,
                        TableCell(format_mxn(entrada.precio_compra), entrada.precio_compra),
                        TableCell(format_mxn(total_entrada(entrada)), total_entrada(entrada)),
                    ),
                )
                for entrada in snapshot.entradas
            ],
        )

    def _open_dialog(self) -> bool:
        productos = self._controller.list_productos()
        return bool(EntradaDialog(self._controller, productos, parent=self).exec())

    def _delete(self, record_id: Any) -> None:
        self._controller.on_delete_entrada(record_id)


class SalidasPage(_MovementsPage):
    """Historial de salidas de stock."""

    _TITLE = "Salidas"
    _KIND = "salida"
    _HEADERS = ("Producto", "Cantidad", "Fecha", "Motivo", "Cliente / destino")

    def _reload(self) -> None:
        snapshot = self._controller.load_snapshot()
        self._fill_table(
            self._table,
            [
                (
                    salida.id,
                    (
                        salida.nombre_producto,
                        TableCell(format_cantidad(salida.cantidad), salida.cantidad),
                        TableCell(format_fecha(salida.fecha), salida.fecha.isoformat()),
                        salida.motivo,
                        salida.cliente,
                    ),
                )
                for salida in snapshot.salidas
            ],
        )

    def _open_dialog(self) -> bool:
        productos = self._controller.list_productos()
        return bool(SalidaDialog(self._controller, productos, parent=self).exec())

    def _delete(self, record_id: Any) -> None:
        self._controller.on_delete_salida(record_id)


class CaducidadPage(TablePage):
    """Control de caducidad con barra de dias restantes."""

    _TITLE = "Caducidad"
    _HEADERS = ("Producto", "Stock", "Caducidad", "Días restantes", "Estado", "Progreso")

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(controller, parent)
        self._summary_label = QLabel(self)
        self._summary_label.setObjectName("statLabel")
        self._toolbar.addWidget(self._summary_label)
        self._toolbar.addStretch(1)
        self._table.setSortingEnabled(False)

    def _reload(self) -> None:
        grupos = self._controller.expiry_overview()
        self._summary_label.setText(
            " | ".join(
                f"{ESTADO_LABELS[estado]}: {len(items)}" for estado, items in grupos.items()
            )
        )

        ordered = [
            item
            for estado in (
                EstadoCaducidad.CADUCADO,
                EstadoCaducidad.POR_CADUCAR,
                EstadoCaducidad.VIGENTE,
            )
            for item in grupos[estado]
        ]
        self._fill_table(
            self._table,
            [
                (
                    item.producto.id,
                    (
                        item.producto.nombre,
                        format_cantidad(item.producto.stock, item.producto.unidad),
                        format_fecha(item.producto.fecha_caducidad),
                        format_dias_restantes(item.clasificacion.dias_restantes),
                        TableCell(
                            ESTADO_LABELS[item.clasificacion.estado],
                            color=_ESTADO_COLORS[item.clasificacion.estado],
                        ),
                        "",
                    ),
                )
                for item in ordered
            ],
        )

        for row, item in enumerate(ordered):
            dias = item.clasificacion.dias_restantes
            bar = QProgressBar(self._table)
            bar.setRange(0, 100)
            bar.setValue(int(progress_fraction(dias) * 100))
            bar.setFormat(f"{max(dias, 0)}d")
            bar.setStyleSheet(
                f"QProgressBar::chunk {{ background-color: {progress_color(dias)}; }}"
            )
            self._table.setCellWidget(row, 5, bar)
