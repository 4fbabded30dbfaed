"""Tests del gateway REST con una sesion HTTP simulada."""

from __future__ import annotations

import json
import unittest
from datetime import date
from unittest import mock

import requests

from cliente.backend.gateway import RestInventoryGateway
from servidor.domain.models import Entrada, Salida
from shared.errors import NotFoundError, RepositoryError

PRODUCTO_JSON = {
    "id": 1,
    "nombre": "Manzana Roja",
    "categoria": "Frutas",
    "precio": 42.5,
    "stock": 10,
    "unidad": "kg",
    "fechaCaducidad": "2026-03-15",
    "proveedor": "Huerta del Valle",
}


class RestInventoryGatewayTests(unittest.TestCase):
    """Valida rutas, cuerpos JSON y traduccion de errores HTTP."""

    def setUp(self) -> None:
        self.session = mock.Mock(spec=requests.Session)
        self.session.headers = {}
        self.gateway = RestInventoryGateway(
            base_url="http://api.local/",
            timeout=3.0,
            session=self.session,
        )

    def test_list_productos_parses_wire_format(self) -> None:
        """Debe mapear camelCase y fechas ISO a modelos de dominio."""
        self.session.request.return_value = self._response(200, [PRODUCTO_JSON])

        productos = self.gateway.list_productos()

        self.session.request.assert_called_once_with(
            "GET", "http://api.local/productos", json=None, timeout=3.0
        )
        self.assertEqual(productos[0].nombre, "Manzana Roja")
        self.assertEqual(productos[0].fecha_caducidad, date(2026, 3, 15))
        self.assertEqual(productos[0].stock, 10)
        self.assertEqual(self.session.headers["Content-Type"], "application/json")

    def test_update_producto_sends_patch_with_compact_numbers(self) -> None:
        """El PATCH de stock debe enviar enteros cuando la cantidad es exacta."""
        self.session.request.return_value = self._response(200, {**PRODUCTO_JSON, "stock": 30})

        producto = self.gateway.update_producto(1, {"stock": 30.0})

        self.session.request.assert_called_once_with(
            "PATCH", "http://api.local/productos/1", json={"stock": 30}, timeout=3.0
        )
        self.assertEqual(producto.stock, 30)

    def test_create_entrada_posts_without_id(self) -> None:
        """Debe enviar la entrada sin id y con la fecha como AAAA-MM-DD."""
        created = {
            "id": "a1f3",
            "productoId": 1,
            "nombreProducto": "Manzana Roja",
            "cantidad": 20,
            "fecha": "2026-03-10",
            "proveedor": "Huerta del Valle",
            "precioCompra": 30,
        }
        self.session.request.return_value = self._response(201, created)

        entrada = self.gateway.create_entrada(
            Entrada(
                id=None,
                producto_id=1,
                nombre_producto="Manzana Roja",
                cantidad=20,
                fecha=date(2026, 3, 10),
                proveedor="Huerta del Valle",
                precio_compra=30.0,
            )
        )

        _, kwargs = self.session.request.call_args
        self.assertNotIn("id", kwargs["json"])
        self.assertEqual(kwargs["json"]["fecha"], "2026-03-10")
        self.assertEqual(kwargs["json"]["productoId"], 1)
        self.assertEqual(entrada.id, "a1f3")

    def test_delete_salida_accepts_empty_body(self) -> None:
        """Un DELETE con cuerpo vacio no debe fallar."""
        self.session.request.return_value = self._response(200, None)

        self.gateway.delete_salida(3)

        self.session.request.assert_called_once_with(
            "DELETE", "http://api.local/salidas/3", json=None, timeout=3.0
        )

    def test_list_salidas(self) -> None:
        """Debe mapear salidas con motivo y cliente."""
        self.session.request.return_value = self._response(
            200,
            [
                {
                    "id": 2,
                    "productoId": 1,
                    "nombreProducto": "Manzana Roja",
                    "cantidad": 2.5,
                    "fecha": "2026-03-11",
                    "motivo": "Merma",
                    "cliente": "Compostaje",
                }
            ],
        )

        salidas = self.gateway.list_salidas()

        self.assertEqual(
            salidas,
            [
                Salida(
                    id=2,
                    producto_id=1,
                    nombre_producto="Manzana Roja",
                    cantidad=2.5,
                    fecha=date(2026, 3, 11),
                    motivo="Merma",
                    cliente="Compostaje",
                )
            ],
        )

    def test_network_error_becomes_repository_error(self) -> None:
        """Un fallo de conexion se traduce a RepositoryError."""
        self.session.request.side_effect = requests.ConnectionError("refused")

        with self.assertLogs("cliente.backend.gateway", level="ERROR"):
            with self.assertRaises(RepositoryError) as ctx:
                self.gateway.list_entradas()

        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_http_500_becomes_repository_error(self) -> None:
        """Un estado de error del servidor se traduce a RepositoryError."""
        self.session.request.return_value = self._response(500, {"error": "boom"})

        with self.assertLogs("cliente.backend.gateway", level="ERROR"):
            with self.assertRaises(RepositoryError):
                self.gateway.update_producto(1, {"stock": 3})

    def test_http_404_becomes_not_found(self) -> None:
        """Un 404 se reporta como NotFoundError."""
        self.session.request.return_value = self._response(404, {})

        with self.assertRaises(NotFoundError):
            self.gateway.delete_entrada(99)

    def test_malformed_payload_becomes_repository_error(self) -> None:
        """Un producto sin campos obligatorios es un RepositoryError."""
        self.session.request.return_value = self._response(200, [{"id": 1, "nombre": "X"}])

        with self.assertRaises(RepositoryError):
            self.gateway.list_productos()

    @staticmethod
    def _response(status_code: int, payload: object) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.url = "http://api.local/"
        response._content = b"" if payload is None else json.dumps(payload).encode("utf-8")  # noqa: SLF001
        return response


if __name__ == "__main__":
    unittest.main()
