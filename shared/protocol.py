"""DTOs del protocolo cliente-servidor."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

RecordId = Union[int, str]


@dataclass(slots=True)
class RegisterEntradaRequest:
    """Solicitud para registrar un ingreso de stock."""

    producto_id: RecordId
    cantidad: float
    fecha: date
    proveedor: str
    precio_compra: float


@dataclass(slots=True)
class RegisterSalidaRequest:
    """Solicitud para registrar un egreso de stock."""

    producto_id: RecordId
    cantidad: float
    fecha: date
    motivo: str
    cliente: str


@dataclass(slots=True)
class ProductoDraft:
    """DTO para capturar datos del dialogo de producto."""

    nombre: str
    categoria: str
    precio: float
    stock: float
    unidad: str
    fecha_caducidad: date
    proveedor: str
