"""Tests para las validaciones de entradas y salidas."""

from __future__ import annotations

import unittest
from datetime import date

from servidor.domain.models import Entrada, Producto, Salida
from servidor.services.movement_validator import MovementValidator
from servidor.services.repository import InMemoryInventoryRepository
from shared.errors import InsufficientStockError, NotFoundError, ValidationError
from shared.protocol import RegisterEntradaRequest, RegisterSalidaRequest

FECHA = date(2026, 3, 10)


class MovementValidatorTests(unittest.TestCase):
    """Valida reglas de negocio antes de escribir movimientos."""

    def setUp(self) -> None:
        self.repository = InMemoryInventoryRepository(
            productos=[
                Producto(
                    id=1,
                    nombre="Manzana Roja",
                    categoria="Frutas",
                    precio=42.5,
                    stock=10,
                    unidad="kg",
                    fecha_caducidad=date(2026, 3, 15),
                    proveedor="Huerta del Valle",
                )
            ]
        )
        self.validator = MovementValidator(self.repository)

    def test_valid_entrada_returns_fresh_producto(self) -> None:
        """Debe retornar el producto leido del repositorio."""
        producto = self.validator.validate_entrada(self._entrada_request())

        self.assertEqual(producto.id, 1)
        self.assertEqual(producto.stock, 10)

    def test_entrada_rejects_bad_fields_together(self) -> None:
        """Debe listar todos los campos invalidos en un solo mensaje."""
        request = self._entrada_request(cantidad=0, proveedor=" ab ", precio_compra=0)

        with self.assertRaises(ValidationError) as ctx:
            self.validator.validate_entrada(request)

        message = str(ctx.exception)
        self.assertIn("cantidad", message)
        self.assertIn("proveedor", message)
        self.assertIn("precio de compra", message)

    def test_entrada_unknown_producto(self) -> None:
        """Un producto inexistente es un error de validacion."""
        with self.assertRaises(NotFoundError):
            self.validator.validate_entrada(self._entrada_request(producto_id=99))

    def test_entrada_has_no_stock_ceiling(self) -> None:
        """Las entradas no tienen tope de cantidad."""
        producto = self.validator.validate_entrada(self._entrada_request(cantidad=1_000_000))
        self.assertEqual(producto.id, 1)

    def test_salida_exceeding_stock_reports_available_and_requested(self) -> None:
        """El error de stock insuficiente debe informar disponible y solicitado."""
        with self.assertRaises(InsufficientStockError) as ctx:
            self.validator.validate_salida(self._salida_request(cantidad=12))

        self.assertEqual(ctx.exception.disponible, 10)
        self.assertEqual(ctx.exception.solicitado, 12)
        self.assertIn("Stock disponible: 10 kg", str(ctx.exception))
        self.assertIn("Cantidad solicitada: 12 kg", str(ctx.exception))
        self.assertIsInstance(ctx.exception, ValidationError)

    def test_non_finite_amounts_are_rejected(self) -> None:
        """NaN e infinito no son cantidades ni precios validos."""
        for valor in (float("nan"), float("inf"), float("-inf")):
            with self.subTest(valor=valor):
                with self.assertRaises(ValidationError) as ctx:
                    self.validator.validate_entrada(
                        self._entrada_request(cantidad=valor, precio_compra=valor)
                    )
                self.assertIn("cantidad", str(ctx.exception))
                self.assertIn("precio de compra", str(ctx.exception))

                with self.assertRaises(ValidationError):
                    self.validator.validate_salida(self._salida_request(cantidad=valor))

        self.assertEqual(self.repository.list_productos()[0].stock, 10)

    def test_amount_rounding_to_zero_is_rejected(self) -> None:
        """Una cantidad que se redondea a 0.00 se rechaza."""
        with self.assertRaises(ValidationError):
            self.validator.validate_salida(self._salida_request(cantidad=0.001))

    def test_stock_comparison_uses_rounded_values(self) -> None:
        """Un stock con residuo binario permite retirar lo que se muestra."""
        self.repository.update_producto(1, {"stock": 0.3 - 0.1})

        producto = self.validator.validate_salida(self._salida_request(cantidad=0.2))

        self.assertAlmostEqual(producto.stock, 0.2)

    def test_salida_equal_to_stock_is_allowed(self) -> None:
        """Se puede retirar exactamente el stock disponible."""
        producto = self.validator.validate_salida(self._salida_request(cantidad=10))
        self.assertEqual(producto.stock, 10)

    def test_salida_rejects_short_cliente_and_unknown_motivo(self) -> None:
        """Debe validar destino y motivo."""
        with self.assertRaises(ValidationError) as ctx:
            self.validator.validate_salida(self._salida_request(cliente="yo", motivo="Robo"))

        self.assertIn("cliente", str(ctx.exception))
        self.assertIn("Motivo invalido", str(ctx.exception))

    def test_salida_motivo_is_case_insensitive(self) -> None:
        """Debe aceptar motivos sin importar mayusculas."""
        producto = self.validator.validate_salida(self._salida_request(motivo="uso interno"))
        self.assertEqual(producto.id, 1)

    def test_salida_non_positive_cantidad(self) -> None:
        """Una cantidad cero o negativa se rechaza antes de consultar stock."""
        with self.assertRaises(ValidationError):
            self.validator.validate_salida(self._salida_request(cantidad=-1))

    def test_entrada_reversal_requires_enough_stock(self) -> None:
        """No se puede revertir una entrada mayor al stock actual."""
        entrada = self._entrada(cantidad=20)

        with self.assertRaises(InsufficientStockError) as ctx:
            self.validator.validate_entrada_reversal(entrada)

        self.assertIn("Stock insuficiente para revertir", str(ctx.exception))

    def test_entrada_reversal_within_stock(self) -> None:
        """Revertir una entrada menor o igual al stock es valido."""
        producto = self.validator.validate_entrada_reversal(self._entrada(cantidad=10))
        self.assertEqual(producto.id, 1)

    def test_salida_reversal_only_needs_producto(self) -> None:
        """Revertir una salida no tiene limite de stock."""
        salida = Salida(
            id=5,
            producto_id=1,
            nombre_producto="Manzana Roja",
            cantidad=500,
            fecha=FECHA,
            motivo="Venta",
            cliente="Mercado Central",
        )
        self.assertEqual(self.validator.validate_salida_reversal(salida).id, 1)

        salida.producto_id = 42
        with self.assertRaises(NotFoundError):
            self.validator.validate_salida_reversal(salida)

    @staticmethod
    def _entrada_request(
        producto_id: int = 1,
        cantidad: float = 5,
        proveedor: str = "Huerta del Valle",
        precio_compra: float = 30.0,
    ) -> RegisterEntradaRequest:
        return RegisterEntradaRequest(
            producto_id=producto_id,
            cantidad=cantidad,
            fecha=FECHA,
            proveedor=proveedor,
            precio_compra=precio_compra,
        )

    @staticmethod
    def _salida_request(
        cantidad: float = 5,
        motivo: str = "Venta",
        cliente: str = "Mercado Central",
    ) -> RegisterSalidaRequest:
        return RegisterSalidaRequest(
            producto_id=1,
            cantidad=cantidad,
            fecha=FECHA,
            motivo=motivo,
            cliente=cliente,
        )

    @staticmethod
    def _entrada(cantidad: float) -> Entrada:
        return Entrada(
            id=7,
            producto_id=1,
            nombre_producto="Manzana Roja",
            cantidad=cantidad,
            fecha=FECHA,
            proveedor="Huerta del Valle",
            precio_compra=30.0,
        )


if __name__ == "__main__":
    unittest.main()
