"""Excepciones compartidas del proyecto."""

from __future__ import annotations


class ValidationError(Exception):
    """Error de validacion de datos de entrada."""


class NotFoundError(ValidationError):
    """El producto o movimiento referenciado no existe."""


class InsufficientStockError(ValidationError):
    """La operacion dejaria el stock de un producto en negativo."""

    def __init__(self, message: str, disponible: float, solicitado: float) -> None:
        super().__init__(message)
        self.disponible = disponible
        self.solicitado = solicitado


class RepositoryError(Exception):
    """Fallo de red o de almacenamiento en el repositorio de inventario."""
