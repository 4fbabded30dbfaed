"""Validaciones para entradas del cliente."""

from __future__ import annotations

import math
from pathlib import Path

from parametros import MIN_LONGITUD_TEXTO
from servidor.services.inventory_utils import is_valid_amount
from shared.catalogs import CATEGORIAS, UNIDADES_VALIDAS
from shared.errors import ValidationError
from shared.protocol import ProductoDraft


def validate_producto_draft(draft: ProductoDraft) -> None:
    """Valida los campos del formulario de producto."""
    problems: list[str] = []

    if len(draft.nombre.strip()) < MIN_LONGITUD_TEXTO:
        problems.append(f"El nombre debe tener al menos {MIN_LONGITUD_TEXTO} caracteres")
    if draft.categoria not in CATEGORIAS:
        problems.append("Selecciona una categoria: " + ", ".join(CATEGORIAS))
    if not is_valid_amount(draft.precio):
        problems.append("El precio debe ser mayor a 0")
    if not math.isfinite(draft.stock) or draft.stock < 0:
        problems.append("El stock debe ser un numero no negativo")
    if draft.unidad not in UNIDADES_VALIDAS:
        problems.append("Selecciona una unidad: " + ", ".join(sorted(UNIDADES_VALIDAS)))
    if len(draft.proveedor.strip()) < MIN_LONGITUD_TEXTO:
        problems.append(
            f"El nombre del proveedor debe tener al menos {MIN_LONGITUD_TEXTO} caracteres"
        )

    if problems:
        raise ValidationError("Corrige los campos del producto: " + "; ".join(problems) + ".")


def validate_output_dir(path: Path) -> None:
    """Valida que la ruta de salida sea utilizable para archivos CSV."""
    if path.exists() and not path.is_dir():
        raise ValidationError(f"La ruta no es un directorio: {path}")

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ValidationError(f"No se pudo crear/acceder al directorio: {path}") from exc
