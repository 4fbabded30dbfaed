"""Utilidades de formato y agregacion para el tablero de inventario."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import date
from typing import TypeVar

from parametros import DECIMALES_CANTIDAD, MOVIMIENTOS_RECIENTES
from servidor.domain.models import Entrada, Producto
from shared.errors import ValidationError

T = TypeVar("T")


def format_mxn(amount: float) -> str:
    """Formatea un monto en pesos mexicanos con dos decimales."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_fecha(value: date) -> str:
    """Formatea una fecha como DD/MM/YYYY."""
    return value.strftime("%d/%m/%Y")


def parse_fecha(text: str) -> date:
    """Parsea una fecha ``YYYY-MM-DD`` ingresada por el usuario."""
    normalized = text.strip()
    try:
        return date.fromisoformat(normalized)
    except ValueError as exc:
        raise ValidationError(
            f"Fecha invalida: {normalized!r}. Usa el formato AAAA-MM-DD."
        ) from exc


def format_cantidad(value: float, unidad: str = "") -> str:
    """Formatea una cantidad con a lo mas dos decimales y su unidad."""
    text = _format_number(value)
    unidad_clean = unidad.strip()
    if unidad_clean:
        return f"{text} {unidad_clean}"
    return text


def round_cantidad(value: float) -> float:
    """Redondea cantidades y stock a la precision que captura la UI."""
    # + 0.0 evita -0.0
    return round(value, DECIMALES_CANTIDAD) + 0.0


def is_valid_amount(value: float) -> bool:
    """Una cantidad o precio debe ser finito y mayor a 0 tras redondear."""
    return math.isfinite(value) and round_cantidad(value) > 0


def total_entrada(entrada: Entrada) -> float:
    """Costo total de una entrada: cantidad por precio de compra."""
    return round(entrada.cantidad * entrada.precio_compra, 2)


def stock_total(productos: Iterable[Producto]) -> float:
    """Suma el stock de todos los productos."""
    return sum(producto.stock for producto in productos)


def recent_movements(
    movimientos: Sequence[T],
    limit: int = MOVIMIENTOS_RECIENTES,
) -> list[T]:
    """Ultimos movimientos registrados, del mas reciente al mas antiguo."""
    if limit <= 0:
        return []
    return list(reversed(movimientos[-limit:]))


def _format_number(value: float) -> str:
    """Formats number with at most two decimals and no trailing zeros."""
    rounded_integer = round(value)
    if math.isclose(value, rounded_integer, abs_tol=1e-9):
        return str(int(rounded_integer))

    formatted = f"{value:.2f}".rstrip("0").rstrip(".")
    if formatted == "-0":
        return "0"
    return formatted
