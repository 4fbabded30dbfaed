"""Libro de stock: aplica entradas y salidas al stock de cada producto."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from servidor.domain.models import Entrada, Producto, Salida
from servidor.services.inventory_utils import round_cantidad
from servidor.services.movement_validator import MovementValidator
from servidor.services.repository import (
    InventoryRepository,
    find_entrada,
    find_salida,
)
from shared.catalogs import MOTIVOS_SALIDA, normalize_choice
from shared.errors import RepositoryError
from shared.protocol import RecordId, RegisterEntradaRequest, RegisterSalidaRequest

LOGGER = logging.getLogger(__name__)

M = TypeVar("M", Entrada, Salida)


@dataclass(slots=True)
class MovementResult(Generic[M]):
    """Movimiento afectado y producto con el stock ya actualizado."""

    movimiento: M
    producto: Producto


class StockLedger:
    """Mantiene el stock de los productos sincronizado con sus movimientos.

    Cada operacion hace dos escrituras independientes: primero el
    movimiento y luego el stock del producto. No hay rollback; si falla la
    segunda escritura queda registrado en el log y el error se propaga.
    El nuevo stock siempre se calcula como el ultimo stock leido mas o
    menos la cantidad del movimiento, no desde el historial completo, y se
    redondea a la misma precision con que se capturan las cantidades.
    """

    def __init__(
        self,
        repository: InventoryRepository,
        validator: MovementValidator | None = None,
    ) -> None:
        self._repository = repository
        self._validator = validator or MovementValidator(repository)

    def record_entrada(self, request: RegisterEntradaRequest) -> MovementResult[Entrada]:
        """Registra una entrada y suma su cantidad al stock."""
        producto = self._validator.validate_entrada(request)

        entrada = self._repository.create_entrada(
            Entrada(
                id=None,
                producto_id=producto.id,
                nombre_producto=producto.nombre,
                cantidad=round_cantidad(request.cantidad),
                fecha=request.fecha,
                proveedor=request.proveedor.strip(),
                precio_compra=round(request.precio_compra, 2),
            )
        )
        LOGGER.info(
            "Entrada %s registrada: producto=%s, cantidad=%s",
            entrada.id,
            producto.id,
            entrada.cantidad,
        )

        actualizado = self._write_stock(
            producto,
            producto.stock + entrada.cantidad,
            movimiento=f"entrada {entrada.id}",
        )
        return MovementResult(movimiento=entrada, producto=actualizado)

    def record_salida(self, request: RegisterSalidaRequest) -> MovementResult[Salida]:
        """Registra una salida y descuenta su cantidad del stock."""
        producto = self._validator.validate_salida(request)

        salida = self._repository.create_salida(
            Salida(
                id=None,
                producto_id=producto.id,
                nombre_producto=producto.nombre,
                cantidad=round_cantidad(request.cantidad),
                fecha=request.fecha,
                motivo=normalize_choice(request.motivo, MOTIVOS_SALIDA) or request.motivo,
                cliente=request.cliente.strip(),
            )
        )
        LOGGER.info(
            "Salida %s registrada: producto=%s, cantidad=%s, motivo=%s",
            salida.id,
            producto.id,
            salida.cantidad,
            salida.motivo,
        )

        actualizado = self._write_stock(
            producto,
            producto.stock - salida.cantidad,
            movimiento=f"salida {salida.id}",
        )
        return MovementResult(movimiento=salida, producto=actualizado)

    def delete_entrada(self, entrada_id: RecordId) -> MovementResult[Entrada]:
        """Elimina una entrada y revierte su cantidad del stock."""
        entrada = find_entrada(self._repository, entrada_id)
        producto = self._validator.validate_entrada_reversal(entrada)

        self._repository.delete_entrada(entrada.id)
        LOGGER.info("Entrada %s eliminada: producto=%s", entrada.id, producto.id)

        actualizado = self._write_stock(
            producto,
            producto.stock - entrada.cantidad,
            movimiento=f"entrada {entrada.id} (eliminada)",
        )
        return MovementResult(movimiento=entrada, producto=actualizado)

    def delete_salida(self, salida_id: RecordId) -> MovementResult[Salida]:
        """Elimina una salida y devuelve su cantidad al stock."""
        salida = find_salida(self._repository, salida_id)
        producto = self._validator.validate_salida_reversal(salida)

        self._repository.delete_salida(salida.id)
        LOGGER.info("Salida %s eliminada: producto=%s", salida.id, producto.id)

        actualizado = self._write_stock(
            producto,
            producto.stock + salida.cantidad,
            movimiento=f"salida {salida.id} (eliminada)",
        )
        return MovementResult(movimiento=salida, producto=actualizado)

    def _write_stock(self, producto: Producto, nuevo_stock: float, movimiento: str) -> Producto:
        """Persiste el stock; si falla, deja constancia del desfase y propaga."""
        nuevo_stock = round_cantidad(nuevo_stock)
        try:
            actualizado = self._repository.update_producto(producto.id, {"stock": nuevo_stock})
        except RepositoryError:
            LOGGER.error(
                "Stock desincronizado: %s aplicada pero el producto %s sigue con "
                "stock=%s (esperado %s).",
                movimiento,
                producto.id,
                producto.stock,
                nuevo_stock,
            )
            raise

        LOGGER.info(
            "Stock actualizado: producto=%s, %s -> %s",
            producto.id,
            producto.stock,
            actualizado.stock,
        )
        return actualizado
