"""Reporte de productos agrupados por estado de caducidad."""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Sequence, TextIO

from cliente.backend.gateway import RestInventoryGateway
from cliente.backend.validators import validate_output_dir
from parametros import API_URL, DEFAULT_REPORT_FILENAME, OUTPUT_DIR
from servidor.services.expiry import (
    ESTADO_LABELS,
    EstadoCaducidad,
    ProductoCaducidad,
    format_dias_restantes,
    group_by_estado,
)
from servidor.services.inventory_utils import format_cantidad, format_fecha, parse_fecha
from servidor.services.repository import InventoryRepository
from shared.errors import RepositoryError, ValidationError

LOGGER = logging.getLogger(__name__)

REPORT_HEADERS: tuple[str, ...] = (
    "Estado",
    "Producto",
    "Stock",
    "Fecha Caducidad",
    "Dias Restantes",
    "Proveedor",
)

REPORT_ORDER: tuple[EstadoCaducidad, ...] = (
    EstadoCaducidad.CADUCADO,
    EstadoCaducidad.POR_CADUCAR,
    EstadoCaducidad.VIGENTE,
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parsea argumentos CLI del reporte."""
    parser = argparse.ArgumentParser(
        description="Lista los productos agrupados por estado de caducidad."
    )
    parser.add_argument(
        "--api-url",
        default=API_URL,
        help="URL base del backend REST (default: %(default)s).",
    )
    parser.add_argument(
        "--fecha",
        default=None,
        help="Fecha de referencia AAAA-MM-DD; por defecto, hoy.",
    )
    parser.add_argument(
        "--csv",
        dest="csv_path",
        type=Path,
        nargs="?",
        const=OUTPUT_DIR / DEFAULT_REPORT_FILENAME,
        default=None,
        help="Escribe el reporte completo en CSV (sin ruta: %(const)s).",
    )
    parser.add_argument(
        "--solo-alertas",
        action="store_true",
        help="Omite los productos vigentes.",
    )
    return parser.parse_args(argv)


def configure_logging() -> None:
    """Configura logging para salida en consola."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def build_report_rows(
    grupos: dict[EstadoCaducidad, list[ProductoCaducidad]],
    solo_alertas: bool = False,
) -> list[list[str]]:
    """Construye filas del reporte, primero caducados y luego por caducar."""
    rows: list[list[str]] = []
    for estado in REPORT_ORDER:
        if solo_alertas and estado is EstadoCaducidad.VIGENTE:
            continue
        items = sorted(grupos.get(estado, []), key=lambda item: item.clasificacion.dias_restantes)
        for item in items:
            producto = item.producto
            rows.append(
                [
                    ESTADO_LABELS[estado],
                    producto.nombre,
                    format_cantidad(producto.stock, producto.unidad),
                    format_fecha(producto.fecha_caducidad),
                    str(item.clasificacion.dias_restantes),
                    producto.proveedor,
                ]
            )
    return rows


def write_text_report(
    grupos: dict[EstadoCaducidad, list[ProductoCaducidad]],
    stream: TextIO,
    solo_alertas: bool = False,
) -> None:
    """Escribe el reporte legible agrupado por estado."""
    for estado in REPORT_ORDER:
        if solo_alertas and estado is EstadoCaducidad.VIGENTE:
            continue
        items = sorted(grupos.get(estado, []), key=lambda item: item.clasificacion.dias_restantes)
        stream.write(f"{ESTADO_LABELS[estado]} ({len(items)})\n")
        for item in items:
            producto = item.producto
            stream.write(
                f"  - {producto.nombre}: "
                f"{format_cantidad(producto.stock, producto.unidad)}, "
                f"caduca {format_fecha(producto.fecha_caducidad)} "
                f"({format_dias_restantes(item.clasificacion.dias_restantes)})\n"
            )


def write_csv_report(path: Path, rows: Sequence[Sequence[str]]) -> None:
    """Escribe el reporte en CSV UTF-8."""
    validate_output_dir(path.parent)
    with path.open("w", newline="", encoding="utf-8") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerow(REPORT_HEADERS)
        writer.writerows(rows)


def run_report(
    repository: InventoryRepository,
    hoy: date,
    stream: TextIO,
    csv_path: Path | None = None,
    solo_alertas: bool = False,
) -> int:
    """Genera el reporte y retorna el codigo de salida."""
    try:
        productos = repository.list_productos()
    except (RepositoryError, ValidationError):
        LOGGER.exception("No fue posible obtener los productos.")
        return 1

    grupos = group_by_estado(productos, hoy)
    LOGGER.info(
        "Productos clasificados al %s: %s",
        hoy.isoformat(),
        ", ".join(f"{ESTADO_LABELS[estado]}={len(grupos[estado])}" for estado in REPORT_ORDER),
    )
    write_text_report(grupos, stream, solo_alertas=solo_alertas)

    if csv_path is not None:
        try:
            write_csv_report(csv_path, build_report_rows(grupos, solo_alertas=solo_alertas))
        except (ValidationError, OSError):
            LOGGER.exception("No fue posible escribir el CSV: %s", csv_path)
            return 1
        LOGGER.info("Reporte CSV escrito en: %s", csv_path)

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Punto de entrada CLI."""
    configure_logging()
    args = parse_args(argv)
    try:
        hoy = parse_fecha(args.fecha) if args.fecha else date.today()
    except ValidationError as exc:
        LOGGER.error("%s", exc)
        return 2

    return run_report(
        repository=RestInventoryGateway(base_url=args.api_url),
        hoy=hoy,
        stream=sys.stdout,
        csv_path=args.csv_path,
        solo_alertas=args.solo_alertas,
    )


if __name__ == "__main__":
    raise SystemExit(main())
