"""Tests para el reporte CLI de caducidades."""

from __future__ import annotations

import csv
import io
import tempfile
import unittest
from datetime import date, timedelta
from pathlib import Path
from unittest import mock

from parametros import DEFAULT_REPORT_FILENAME, OUTPUT_DIR
from scripts.expiry_report import REPORT_HEADERS, main, parse_args, run_report
from servidor.domain.models import Producto
from servidor.services.repository import InMemoryInventoryRepository
from shared.errors import NotFoundError, RepositoryError

HOY = date(2026, 3, 10)


class ExpiryReportTests(unittest.TestCase):
    """Valida salida de texto, CSV y codigos de salida del reporte."""

    def setUp(self) -> None:
        self.repository = InMemoryInventoryRepository(
            productos=[
                self._producto(1, "Platano", dias=20),
                self._producto(2, "Mango", dias=6),
                self._producto(3, "Fresa", dias=2),
                self._producto(4, "Guayaba", dias=-1),
            ]
        )

    def test_text_report_groups_by_estado(self) -> None:
        """Debe listar caducados primero y ordenar por dias restantes."""
        stream = io.StringIO()

        status_code = run_report(self.repository, HOY, stream)

        self.assertEqual(status_code, 0)
        lines = stream.getvalue().splitlines()
        self.assertEqual(lines[0], "Caducado (1)")
        self.assertIn("Guayaba", lines[1])
        self.assertIn("Caducado hace 1 día", lines[1])
        self.assertEqual(lines[2], "Por caducar (2)")
        self.assertIn("Fresa", lines[3])
        self.assertIn("Mango", lines[4])
        self.assertEqual(lines[5], "Vigente (1)")
        self.assertIn("caduca 30/03/2026", lines[6])

    def test_solo_alertas_skips_vigentes(self) -> None:
        """Con solo_alertas no se listan productos vigentes."""
        stream = io.StringIO()

        run_report(self.repository, HOY, stream, solo_alertas=True)

        self.assertNotIn("Platano", stream.getvalue())
        self.assertNotIn("Vigente", stream.getvalue())

    def test_csv_report(self) -> None:
        """Debe escribir encabezados y una fila por producto."""
        with tempfile.TemporaryDirectory() as temp_dir:
            csv_path = Path(temp_dir) / "reportes" / "caducidad.csv"

            status_code = run_report(self.repository, HOY, io.StringIO(), csv_path=csv_path)

            self.assertEqual(status_code, 0)
            with csv_path.open("r", newline="", encoding="utf-8") as csv_file:
                rows = list(csv.reader(csv_file))

        self.assertEqual(tuple(rows[0]), REPORT_HEADERS)
        self.assertEqual(rows[1], ["Caducado", "Guayaba", "4 kg", "09/03/2026", "-1", "Huerta del Valle"])
        self.assertEqual([row[1] for row in rows[1:]], ["Guayaba", "Fresa", "Mango", "Platano"])

    def test_csv_path_under_file_fails(self) -> None:
        """Si el directorio destino es un archivo, el reporte retorna 1."""
        with tempfile.TemporaryDirectory() as temp_dir:
            blocker = Path(temp_dir) / "bloqueo"
            blocker.write_text("x", encoding="utf-8")

            with self.assertLogs("scripts.expiry_report", level="ERROR"):
                status_code = run_report(
                    self.repository,
                    HOY,
                    io.StringIO(),
                    csv_path=blocker / "caducidad.csv",
                )

        self.assertEqual(status_code, 1)

    def test_repository_failure_returns_one(self) -> None:
        """Si el backend no responde el reporte retorna 1 sin escribir."""
        stream = io.StringIO()

        with mock.patch.object(
            self.repository,
            "list_productos",
            side_effect=RepositoryError("timeout"),
        ):
            with self.assertLogs("scripts.expiry_report", level="ERROR"):
                status_code = run_report(self.repository, HOY, stream)

        self.assertEqual(status_code, 1)
        self.assertEqual(stream.getvalue(), "")

    def test_missing_endpoint_returns_one(self) -> None:
        """Un 404 del backend termina con codigo 1 y sin traceback."""
        with mock.patch.object(
            self.repository,
            "list_productos",
            side_effect=NotFoundError("Recurso no encontrado: /productos"),
        ):
            with self.assertLogs("scripts.expiry_report", level="ERROR"):
                status_code = run_report(self.repository, HOY, io.StringIO())

        self.assertEqual(status_code, 1)

    def test_main_rejects_bad_fecha(self) -> None:
        """Una fecha de referencia invalida retorna 2."""
        with self.assertLogs("scripts.expiry_report", level="ERROR"):
            status_code = main(["--fecha", "10/03/2026"])

        self.assertEqual(status_code, 2)

    def test_csv_flag_without_path_uses_default_output(self) -> None:
        """--csv sin ruta escribe en el directorio de salida por defecto."""
        self.assertEqual(parse_args(["--csv"]).csv_path, OUTPUT_DIR / DEFAULT_REPORT_FILENAME)
        self.assertEqual(parse_args(["--csv", "r.csv"]).csv_path, Path("r.csv"))
        self.assertIsNone(parse_args([]).csv_path)

    @staticmethod
    def _producto(producto_id: int, nombre: str, dias: int) -> Producto:
        return Producto(
            id=producto_id,
            nombre=nombre,
            categoria="Frutas",
            precio=25.0,
            stock=4,
            unidad="kg",
            fecha_caducidad=HOY + timedelta(days=dias),
            proveedor="Huerta del Valle",
        )


if __name__ == "__main__":
    unittest.main()
