"""Controlador principal del cliente."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any

from servidor.domain.models import Entrada, Producto, Salida
from servidor.services.expiry import (
    EstadoCaducidad,
    ProductoCaducidad,
    classify_expiry,
    group_by_estado,
)
from servidor.services.inventory_utils import recent_movements, stock_total
from servidor.services.repository import InventoryRepository
from servidor.services.stock_ledger import MovementResult, StockLedger
from shared.errors import RepositoryError
from shared.protocol import (
    ProductoDraft,
    RecordId,
    RegisterEntradaRequest,
    RegisterSalidaRequest,
)

from .validators import validate_producto_draft

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class InventorySnapshot:
    """Colecciones leidas del repositorio en una misma carga de pagina."""

    productos: list[Producto]
    entradas: list[Entrada]
    salidas: list[Salida]


@dataclass(slots=True)
class DashboardStats:
    """Indicadores del tablero principal."""

    stock_total: float
    productos_por_caducar: int
    entradas_recientes: list[Entrada]
    salidas_recientes: list[Salida]


class AppController:
    """Coordina acciones de UI y servicios de negocio.

    Los ``ValidationError`` se propagan tal cual para mostrarse al usuario;
    los ``RepositoryError`` se registran con detalle y se relanzan con un
    mensaje generico por accion.
    """

    def __init__(
        self,
        repository: InventoryRepository,
        ledger: StockLedger | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repository = repository
        self._ledger = ledger or StockLedger(repository)
        self._today = today

    def today(self) -> date:
        """Fecha de referencia usada para clasificar caducidades."""
        return self._today()

    def load_snapshot(self) -> InventorySnapshot:
        """Lee productos, entradas y salidas de forma independiente."""
        with self._repository_action("No fue posible cargar el inventario."):
            snapshot = InventorySnapshot(
                productos=self._repository.list_productos(),
                entradas=self._repository.list_entradas(),
                salidas=self._repository.list_salidas(),
            )
        LOGGER.info(
            "Inventario cargado: %s productos, %s entradas, %s salidas",
            len(snapshot.productos),
            len(snapshot.entradas),
            len(snapshot.salidas),
        )
        return snapshot

    def list_productos(self) -> list[Producto]:
        """Lista productos para formularios y tablas."""
        with self._repository_action("No fue posible cargar los productos."):
            return self._repository.list_productos()

    def dashboard_stats(self, hoy: date | None = None) -> DashboardStats:
        """Calcula los indicadores del tablero principal."""
        reference = hoy or self.today()
        snapshot = self.load_snapshot()
        por_caducar = sum(
            1
            for producto in snapshot.productos
            if classify_expiry(producto.fecha_caducidad, reference).estado
            is EstadoCaducidad.POR_CADUCAR
        )
        return DashboardStats(
            stock_total=stock_total(snapshot.productos),
            productos_por_caducar=por_caducar,
            entradas_recientes=recent_movements(snapshot.entradas),
            salidas_recientes=recent_movements(snapshot.salidas),
        )

    def expiry_overview(
        self,
        hoy: date | None = None,
    ) -> dict[EstadoCaducidad, list[ProductoCaducidad]]:
        """Agrupa productos por estado de caducidad."""
        return group_by_estado(self.list_productos(), hoy or self.today())

    def on_register_entrada(self, request: RegisterEntradaRequest) -> MovementResult[Entrada]:
        """Registra una entrada y actualiza el stock del producto."""
        with self._repository_action("No fue posible registrar la entrada."):
            result = self._ledger.record_entrada(request)
        LOGGER.info("Accion ejecutada: registrar entrada %s", result.movimiento.id)
        return result

    def on_register_salida(self, request: RegisterSalidaRequest) -> MovementResult[Salida]:
        """Registra una salida y actualiza el stock del producto."""
        with self._repository_action("No fue posible registrar la salida."):
            result = self._ledger.record_salida(request)
        LOGGER.info("Accion ejecutada: registrar salida %s", result.movimiento.id)
        return result

    def on_delete_entrada(self, entrada_id: RecordId) -> MovementResult[Entrada]:
        """Elimina una entrada revirtiendo el stock."""
        with self._repository_action("No fue posible eliminar la entrada."):
            result = self._ledger.delete_entrada(entrada_id)
        LOGGER.info("Accion ejecutada: eliminar entrada %s", entrada_id)
        return result

    def on_delete_salida(self, salida_id: RecordId) -> MovementResult[Salida]:
        """Elimina una salida devolviendo el stock."""
        with self._repository_action("No fue posible eliminar la salida."):
            result = self._ledger.delete_salida(salida_id)
        LOGGER.info("Accion ejecutada: eliminar salida %s", salida_id)
        return result

    def on_save_producto(
        self,
        draft: ProductoDraft,
        producto_id: RecordId | None = None,
    ) -> Producto:
        """Crea un producto nuevo o actualiza uno existente."""
        validate_producto_draft(draft)

        if producto_id is None:
            with self._repository_action("No fue posible guardar el producto."):
                producto = self._repository.create_producto(
                    Producto(
                        id=None,
                        nombre=draft.nombre.strip(),
                        categoria=draft.categoria,
                        precio=round(draft.precio, 2),
                        stock=draft.stock,
                        unidad=draft.unidad,
                        fecha_caducidad=draft.fecha_caducidad,
                        proveedor=draft.proveedor.strip(),
                    )
                )
            LOGGER.info("Producto creado: id=%s, nombre=%s", producto.id, producto.nombre)
            return producto

        campos: dict[str, Any] = {
            "nombre": draft.nombre.strip(),
            "categoria": draft.categoria,
            "precio": round(draft.precio, 2),
            "stock": draft.stock,
            "unidad": draft.unidad,
            "fechaCaducidad": draft.fecha_caducidad,
            "proveedor": draft.proveedor.strip(),
        }
        with self._repository_action("No fue posible guardar el producto."):
            producto = self._repository.update_producto(producto_id, campos)
        LOGGER.info("Producto actualizado: id=%s", producto_id)
        return producto

    def on_delete_producto(self, producto_id: RecordId) -> None:
        """Elimina un producto. Sus movimientos historicos se conservan."""
        with self._repository_action("No fue posible eliminar el producto."):
            self._repository.delete_producto(producto_id)
        LOGGER.info("Producto eliminado: id=%s", producto_id)

    def on_exit(
        self,
        app: QApplication | Callable[[], None] | None,
    ) -> None:
        """Cierra la aplicacion."""
        LOGGER.info("Accion ejecutada: salir")

        if callable(app):
            app()
            return

        if app is not None:
            app.quit()

    @staticmethod
    @contextmanager
    def _repository_action(message: str) -> Iterator[None]:
        """Traduce fallos del repositorio a un mensaje generico de la accion."""
        try:
            yield
        except RepositoryError as exc:
            LOGGER.exception("%s Detalle: %s", message, exc)
            raise RepositoryError(message) from exc
