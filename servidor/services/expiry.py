"""Clasificacion de productos segun proximidad de caducidad."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from parametros import DIAS_BARRA_CADUCIDAD, DIAS_POR_CADUCAR
from servidor.domain.models import Producto


class EstadoCaducidad(str, Enum):
    """Estado derivado de la fecha de caducidad de un producto."""

    VIGENTE = "vigente"
    POR_CADUCAR = "porCaducar"
    CADUCADO = "caducado"


ESTADO_LABELS: dict[EstadoCaducidad, str] = {
    EstadoCaducidad.VIGENTE: "Vigente",
    EstadoCaducidad.POR_CADUCAR: "Por caducar",
    EstadoCaducidad.CADUCADO: "Caducado",
}


@dataclass(frozen=True, slots=True)
class ExpiryClassification:
    """Resultado de clasificar una fecha de caducidad."""

    estado: EstadoCaducidad
    dias_restantes: int


@dataclass(frozen=True, slots=True)
class ProductoCaducidad:
    """Producto acompanado de su clasificacion para la vista de caducidad."""

    producto: Producto
    clasificacion: ExpiryClassification


def classify_expiry(fecha_caducidad: date, hoy: date) -> ExpiryClassification:
    """Clasifica una fecha de caducidad respecto del dia indicado.

    Ambas fechas se comparan a nivel de dia calendario; si se recibe un
    ``datetime`` se descarta la hora.
    """
    dias = (_as_date(fecha_caducidad) - _as_date(hoy)).days

    if dias < 0:
        estado = EstadoCaducidad.CADUCADO
    elif dias <= DIAS_POR_CADUCAR:
        estado = EstadoCaducidad.POR_CADUCAR
    else:
        estado = EstadoCaducidad.VIGENTE

    return ExpiryClassification(estado=estado, dias_restantes=dias)


def progress_fraction(dias_restantes: int) -> float:
    """Fraccion de la barra de caducidad, entre 0 y 1."""
    if dias_restantes < 0:
        return 0.0
    return min(dias_restantes / DIAS_BARRA_CADUCIDAD, 1.0)


def progress_color(dias_restantes: int) -> str:
    """Color hexadecimal de la barra segun dias restantes."""
    if dias_restantes < 0:
        return "#cf1322"
    if dias_restantes <= 3:
        return "#faad14"
    if dias_restantes <= DIAS_POR_CADUCAR:
        return "#fadb14"
    return "#52c41a"


def format_dias_restantes(dias_restantes: int) -> str:
    """Texto legible de los dias restantes."""
    if dias_restantes < 0:
        return f"Caducado hace {abs(dias_restantes)} días"
    if dias_restantes == 1:
        return "1 día"
    return f"{dias_restantes} días"


def group_by_estado(
    productos: Iterable[Producto],
    hoy: date,
) -> dict[EstadoCaducidad, list[ProductoCaducidad]]:
    """Agrupa productos por estado conservando el orden recibido."""
    grupos: dict[EstadoCaducidad, list[ProductoCaducidad]] = {
        estado: [] for estado in EstadoCaducidad
    }
    for producto in productos:
        clasificacion = classify_expiry(producto.fecha_caducidad, hoy)
        grupos[clasificacion.estado].append(
            ProductoCaducidad(producto=producto, clasificacion=clasificacion)
        )
    return grupos


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
