"""Validaciones de negocio para entradas y salidas de stock."""

from __future__ import annotations

import logging

from parametros import MIN_LONGITUD_TEXTO
from servidor.domain.models import Entrada, Producto, Salida
from servidor.services.inventory_utils import (
    format_cantidad,
    is_valid_amount,
    round_cantidad,
)
from servidor.services.repository import InventoryRepository, find_producto
from shared.catalogs import MOTIVOS_SALIDA, normalize_choice
from shared.errors import InsufficientStockError, ValidationError
from shared.protocol import RegisterEntradaRequest, RegisterSalidaRequest

LOGGER = logging.getLogger(__name__)


class MovementValidator:
    """Rechaza movimientos que romperian el invariante de stock no negativo.

    Cada validacion vuelve a leer el producto desde el repositorio para no
    operar sobre datos obsoletos, y retorna ese producto al llamador.
    """

    def __init__(self, repository: InventoryRepository) -> None:
        self._repository = repository

    def validate_entrada(self, request: RegisterEntradaRequest) -> Producto:
        """Valida una entrada nueva. No hay tope de stock para ingresos."""
        problems: list[str] = []
        if not is_valid_amount(request.cantidad):
            problems.append("La cantidad debe ser un numero mayor a 0")
        if len(request.proveedor.strip()) < MIN_LONGITUD_TEXTO:
            problems.append(
                f"El nombre del proveedor debe tener al menos {MIN_LONGITUD_TEXTO} caracteres"
            )
        if not is_valid_amount(request.precio_compra):
            problems.append("El precio de compra debe ser un numero mayor a 0")
        self._raise_if_any(problems)

        return find_producto(self._repository, request.producto_id)

    def validate_salida(self, request: RegisterSalidaRequest) -> Producto:
        """Valida una salida nueva, incluyendo que exista stock suficiente."""
        problems: list[str] = []
        if not is_valid_amount(request.cantidad):
            problems.append("La cantidad debe ser un numero mayor a 0")
        if len(request.cliente.strip()) < MIN_LONGITUD_TEXTO:
            problems.append(
                f"El cliente o destino debe tener al menos {MIN_LONGITUD_TEXTO} caracteres"
            )
        if normalize_choice(request.motivo, MOTIVOS_SALIDA) is None:
            problems.append(
                "Motivo invalido. Opciones: " + ", ".join(MOTIVOS_SALIDA)
            )
        self._raise_if_any(problems)

        producto = find_producto(self._repository, request.producto_id)
        if round_cantidad(request.cantidad) > round_cantidad(producto.stock):
            LOGGER.info(
                "Salida rechazada por stock insuficiente: producto=%s, disponible=%s, "
                "solicitado=%s",
                producto.id,
                producto.stock,
                request.cantidad,
            )
            raise InsufficientStockError(
                "Stock insuficiente. "
                f"Stock disponible: {format_cantidad(producto.stock, producto.unidad)}. "
                f"Cantidad solicitada: {format_cantidad(request.cantidad, producto.unidad)}",
                disponible=producto.stock,
                solicitado=request.cantidad,
            )
        return producto

    def validate_entrada_reversal(self, entrada: Entrada) -> Producto:
        """Valida que eliminar la entrada no deje stock negativo."""
        producto = find_producto(self._repository, entrada.producto_id)
        if round_cantidad(producto.stock) < round_cantidad(entrada.cantidad):
            raise InsufficientStockError(
                "Stock insuficiente para revertir la entrada: el stock actual "
                f"({format_cantidad(producto.stock, producto.unidad)}) es menor a la "
                f"cantidad de la entrada ({format_cantidad(entrada.cantidad, producto.unidad)}).",
                disponible=producto.stock,
                solicitado=entrada.cantidad,
            )
        return producto

    def validate_salida_reversal(self, salida: Salida) -> Producto:
        """Revertir una salida solo suma stock; basta con que exista el producto."""
        return find_producto(self._repository, salida.producto_id)

    @staticmethod
    def _raise_if_any(problems: list[str]) -> None:
        if problems:
            raise ValidationError("; ".join(problems) + ".")
