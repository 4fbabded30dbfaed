"""Tests para el formato JSON de los modelos de dominio."""

from __future__ import annotations

import unittest
from datetime import date

from servidor.domain.models import Entrada, Producto, Salida, compact_number
from shared.errors import RepositoryError


class WireFormatTests(unittest.TestCase):
    """Valida la conversion entre modelos y JSON del backend."""

    def test_producto_to_dict_uses_backend_keys(self) -> None:
        """Debe usar camelCase, fecha ISO y omitir id en productos nuevos."""
        producto = Producto(
            id=None,
            nombre="Jitomate",
            categoria="Verduras",
            precio=18.499,
            stock=12.0,
            unidad="kg",
            fecha_caducidad=date(2026, 3, 20),
            proveedor="Rancho Norte",
        )

        self.assertEqual(
            producto.to_dict(),
            {
                "nombre": "Jitomate",
                "categoria": "Verduras",
                "precio": 18.5,
                "stock": 12,
                "unidad": "kg",
                "fechaCaducidad": "2026-03-20",
                "proveedor": "Rancho Norte",
            },
        )

    def test_producto_from_dict_tolerates_timestamp(self) -> None:
        """Una fecha con hora se reduce al dia calendario."""
        producto = Producto.from_dict(
            {
                "id": "7",
                "nombre": "Pera",
                "categoria": "Frutas",
                "precio": "30.129",
                "stock": 4,
                "unidad": "kg",
                "fechaCaducidad": "2026-03-20T00:00:00.000Z",
                "proveedor": "Huerta del Valle",
            }
        )

        self.assertEqual(producto.id, "7")
        self.assertEqual(producto.precio, 30.13)
        self.assertEqual(producto.fecha_caducidad, date(2026, 3, 20))

    def test_movement_round_trip_keeps_name_snapshot(self) -> None:
        """Entradas y salidas conservan el nombre capturado."""
        entrada = Entrada.from_dict(
            {
                "id": 1,
                "productoId": 3,
                "nombreProducto": "Manzana Roja",
                "cantidad": 20,
                "fecha": "2026-03-10",
                "proveedor": "Huerta del Valle",
                "precioCompra": 30,
            }
        )
        salida = Salida.from_dict(
            {
                "id": 2,
                "productoId": 3,
                "nombreProducto": "Manzana Roja",
                "cantidad": 1.5,
                "fecha": "2026-03-11",
                "motivo": "Uso Interno",
                "cliente": "Cocina",
            }
        )

        self.assertEqual(entrada.to_dict()["nombreProducto"], "Manzana Roja")
        self.assertEqual(entrada.to_dict()["cantidad"], 20)
        self.assertEqual(salida.to_dict()["cantidad"], 1.5)
        self.assertEqual(salida.to_dict()["id"], 2)

    def test_invalid_date_is_repository_error(self) -> None:
        """Una fecha ilegible en el backend es un RepositoryError."""
        with self.assertRaises(RepositoryError):
            Salida.from_dict(
                {
                    "productoId": 1,
                    "cantidad": 1,
                    "fecha": "mañana",
                    "motivo": "Venta",
                    "cliente": "Cliente",
                }
            )

    def test_compact_number(self) -> None:
        """Debe convertir flotantes exactos a enteros."""
        self.assertEqual(compact_number(5.0), 5)
        self.assertIsInstance(compact_number(5.0), int)
        self.assertEqual(compact_number(5.25), 5.25)


if __name__ == "__main__":
    unittest.main()
