"""Modelos de dominio de inventario."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from shared.errors import RepositoryError
from shared.protocol import RecordId


@dataclass(slots=True)
class Producto:
    """Representa un producto en inventario."""

    id: RecordId | None
    nombre: str
    categoria: str
    precio: float
    stock: float
    unidad: str
    fecha_caducidad: date
    proveedor: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Producto:
        """Construye un producto desde el JSON del backend."""
        try:
            return cls(
                id=data.get("id"),
                nombre=str(data["nombre"]),
                categoria=str(data.get("categoria", "")),
                precio=round(float(data["precio"]), 2),
                stock=float(data["stock"]),
                unidad=str(data.get("unidad", "")),
                fecha_caducidad=date_from_wire(data["fechaCaducidad"]),
                proveedor=str(data.get("proveedor", "")),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RepositoryError(f"Producto con formato invalido: {data!r}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Serializa el producto al formato del backend (sin id si es nuevo)."""
        payload: dict[str, Any] = {
            "nombre": self.nombre,
            "categoria": self.categoria,
            "precio": round(self.precio, 2),
            "stock": compact_number(self.stock),
            "unidad": self.unidad,
            "fechaCaducidad": self.fecha_caducidad.isoformat(),
            "proveedor": self.proveedor,
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload


@dataclass(slots=True)
class Entrada:
    """Movimiento de ingreso de stock ("entrada")."""

    id: RecordId | None
    producto_id: RecordId
    nombre_producto: str
    cantidad: float
    fecha: date
    proveedor: str
    precio_compra: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Entrada:
        """Construye una entrada desde el JSON del backend."""
        try:
            return cls(
                id=data.get("id"),
                producto_id=data["productoId"],
                nombre_producto=str(data.get("nombreProducto", "")),
                cantidad=float(data["cantidad"]),
                fecha=date_from_wire(data["fecha"]),
                proveedor=str(data.get("proveedor", "")),
                precio_compra=round(float(data.get("precioCompra", 0)), 2),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RepositoryError(f"Entrada con formato invalido: {data!r}") from exc

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "productoId": self.producto_id,
            "nombreProducto": self.nombre_producto,
            "cantidad": compact_number(self.cantidad),
            "fecha": self.fecha.isoformat(),
            "proveedor": self.proveedor,
            "precioCompra": round(self.precio_compra, 2),
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload


@dataclass(slots=True)
class Salida:
    """Movimiento de egreso de stock ("salida")."""

    id: RecordId | None
    producto_id: RecordId
    nombre_producto: str
    cantidad: float
    fecha: date
    motivo: str
    cliente: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Salida:
        """Construye una salida desde el JSON del backend."""
        try:
            return cls(
                id=data.get("id"),
                producto_id=data["productoId"],
                nombre_producto=str(data.get("nombreProducto", "")),
                cantidad=float(data["cantidad"]),
                fecha=date_from_wire(data["fecha"]),
                motivo=str(data.get("motivo", "")),
                cliente=str(data.get("cliente", "")),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RepositoryError(f"Salida con formato invalido: {data!r}") from exc

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "productoId": self.producto_id,
            "nombreProducto": self.nombre_producto,
            "cantidad": compact_number(self.cantidad),
            "fecha": self.fecha.isoformat(),
            "motivo": self.motivo,
            "cliente": self.cliente,
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload


def date_from_wire(value: Any) -> date:
    """Parsea fechas ``YYYY-MM-DD``; tolera timestamps ISO completos."""
    text = str(value).strip()
    return date.fromisoformat(text[:10])


def compact_number(value: float) -> int | float:
    """Emite enteros sin decimales para cantidades exactas."""
    if float(value).is_integer():
        return int(value)
    return value
