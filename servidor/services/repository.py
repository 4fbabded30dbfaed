"""Contrato del repositorio de inventario e implementacion en memoria."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Protocol

from servidor.domain.models import Entrada, Producto, Salida
from shared.errors import NotFoundError, RepositoryError
from shared.protocol import RecordId

LOGGER = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistencia externa de productos, entradas y salidas."""

    def list_productos(self) -> list[Producto]:
        """Obtiene todos los productos."""

    def create_producto(self, producto: Producto) -> Producto:
        """Crea un producto y lo retorna con su id asignado."""

    def update_producto(self, producto_id: RecordId, campos: dict[str, Any]) -> Producto:
        """Actualiza parcialmente un producto (semantica PATCH)."""

    def delete_producto(self, producto_id: RecordId) -> None:
        """Elimina un producto."""

    def list_entradas(self) -> list[Entrada]:
        """Obtiene todas las entradas en orden de registro."""

    def create_entrada(self, entrada: Entrada) -> Entrada:
        """Persiste una entrada nueva."""

    def delete_entrada(self, entrada_id: RecordId) -> None:
        """Elimina una entrada."""

    def list_salidas(self) -> list[Salida]:
        """Obtiene todas las salidas en orden de registro."""

    def create_salida(self, salida: Salida) -> Salida:
        """Persiste una salida nueva."""

    def delete_salida(self, salida_id: RecordId) -> None:
        """Elimina una salida."""


def find_producto(repository: InventoryRepository, producto_id: RecordId) -> Producto:
    """Busca un producto fresco en el repositorio por id."""
    for producto in repository.list_productos():
        if _same_id(producto.id, producto_id):
            return producto
    raise NotFoundError(f"Producto no encontrado: {producto_id}")


def find_entrada(repository: InventoryRepository, entrada_id: RecordId) -> Entrada:
    """Busca una entrada por id."""
    for entrada in repository.list_entradas():
        if _same_id(entrada.id, entrada_id):
            return entrada
    raise NotFoundError(f"Entrada no encontrada: {entrada_id}")


def find_salida(repository: InventoryRepository, salida_id: RecordId) -> Salida:
    """Busca una salida por id."""
    for salida in repository.list_salidas():
        if _same_id(salida.id, salida_id):
            return salida
    raise NotFoundError(f"Salida no encontrada: {salida_id}")


def _same_id(left: RecordId | None, right: RecordId | None) -> bool:
    """Compara ids tolerando "3" frente a 3 segun como los serialice el backend."""
    if left is None or right is None:
        return False
    return str(left) == str(right)


class InMemoryInventoryRepository:
    """Implementacion local del repositorio usando diccionarios en memoria."""

    _PRODUCTO_FIELDS: dict[str, str] = {
        "nombre": "nombre",
        "categoria": "categoria",
        "precio": "precio",
        "stock": "stock",
        "unidad": "unidad",
        "fechaCaducidad": "fecha_caducidad",
        "fecha_caducidad": "fecha_caducidad",
        "proveedor": "proveedor",
    }

    def __init__(
        self,
        productos: list[Producto] | None = None,
        entradas: list[Entrada] | None = None,
        salidas: list[Salida] | None = None,
    ) -> None:
        self._productos: dict[str, Producto] = {}
        self._entradas: dict[str, Entrada] = {}
        self._salidas: dict[str, Salida] = {}
        self._next_id = 1

        for producto in productos or []:
            self.create_producto(producto)
        for entrada in entradas or []:
            self.create_entrada(entrada)
        for salida in salidas or []:
            self.create_salida(salida)

    def list_productos(self) -> list[Producto]:
        return [replace(producto) for producto in self._productos.values()]

    def create_producto(self, producto: Producto) -> Producto:
        created = replace(producto, id=self._assign_id(producto.id))
        self._productos[str(created.id)] = created
        LOGGER.debug("Producto creado en memoria: %s", created.id)
        return replace(created)

    def update_producto(self, producto_id: RecordId, campos: dict[str, Any]) -> Producto:
        current = self._get(self._productos, producto_id, "Producto")
        changes: dict[str, Any] = {}
        for key, value in campos.items():
            attribute = self._PRODUCTO_FIELDS.get(key)
            if attribute is None:
                raise RepositoryError(f"Campo de producto desconocido: {key}")
            changes[attribute] = value

        updated = replace(current, **changes)
        self._productos[str(producto_id)] = updated
        return replace(updated)

    def delete_producto(self, producto_id: RecordId) -> None:
        self._get(self._productos, producto_id, "Producto")
        del self._productos[str(producto_id)]

    def list_entradas(self) -> list[Entrada]:
        return [replace(entrada) for entrada in self._entradas.values()]

    def create_entrada(self, entrada: Entrada) -> Entrada:
        created = replace(entrada, id=self._assign_id(entrada.id))
        self._entradas[str(created.id)] = created
        return replace(created)

    def delete_entrada(self, entrada_id: RecordId) -> None:
        self._get(self._entradas, entrada_id, "Entrada")
        del self._entradas[str(entrada_id)]

    def list_salidas(self) -> list[Salida]:
        return [replace(salida) for salida in self._salidas.values()]

    def create_salida(self, salida: Salida) -> Salida:
        created = replace(salida, id=self._assign_id(salida.id))
        self._salidas[str(created.id)] = created
        return replace(created)

    def delete_salida(self, salida_id: RecordId) -> None:
        self._get(self._salidas, salida_id, "Salida")
        del self._salidas[str(salida_id)]

    def _assign_id(self, requested: RecordId | None) -> RecordId:
        if requested is not None:
            if isinstance(requested, int):
                self._next_id = max(self._next_id, requested + 1)
            return requested

        assigned = self._next_id
        self._next_id += 1
        return assigned

    @staticmethod
    def _get(store: dict[str, Any], record_id: RecordId, label: str) -> Any:
        try:
            return store[str(record_id)]
        except KeyError:
            raise NotFoundError(f"{label} inexistente: {record_id}") from None
