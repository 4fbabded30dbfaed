"""Gateway de comunicacion cliente-servidor via API REST."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import requests

from parametros import API_URL, REQUEST_TIMEOUT_SECONDS
from servidor.domain.models import Entrada, Producto, Salida, compact_number
from shared.errors import NotFoundError, RepositoryError
from shared.protocol import RecordId

LOGGER = logging.getLogger(__name__)


class RestInventoryGateway:
    """Implementacion del repositorio de inventario sobre el backend REST.

    Traduce cualquier fallo de red, estado HTTP de error o cuerpo no JSON
    en ``RepositoryError``. Un 404 se reporta como ``NotFoundError``.
    """

    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    def list_productos(self) -> list[Producto]:
        """Obtiene todos los productos."""
        data = self._request("GET", "/productos", action="listar productos")
        return [Producto.from_dict(item) for item in self._as_list(data, "productos")]

    def create_producto(self, producto: Producto) -> Producto:
        """Crea un producto nuevo."""
        payload = producto.to_dict()
        payload.pop("id", None)
        data = self._request("POST", "/productos", json=payload, action="crear producto")
        return Producto.from_dict(data)

    def update_producto(self, producto_id: RecordId, campos: dict[str, Any]) -> Producto:
        """Actualiza parcialmente un producto (PATCH)."""
        data = self._request(
            "PATCH",
            f"/productos/{producto_id}",
            json=self._to_wire(campos),
            action=f"actualizar producto {producto_id}",
        )
        return Producto.from_dict(data)

    def delete_producto(self, producto_id: RecordId) -> None:
        """Elimina un producto."""
        self._request(
            "DELETE",
            f"/productos/{producto_id}",
            action=f"eliminar producto {producto_id}",
        )

    def list_entradas(self) -> list[Entrada]:
        """Obtiene todas las entradas."""
        data = self._request("GET", "/entradas", action="listar entradas")
        return [Entrada.from_dict(item) for item in self._as_list(data, "entradas")]

    def create_entrada(self, entrada: Entrada) -> Entrada:
        """Persiste una entrada nueva."""
        payload = entrada.to_dict()
        payload.pop("id", None)
        data = self._request("POST", "/entradas", json=payload, action="crear entrada")
        return Entrada.from_dict(data)

    def delete_entrada(self, entrada_id: RecordId) -> None:
        """Elimina una entrada."""
        self._request(
            "DELETE",
            f"/entradas/{entrada_id}",
            action=f"eliminar entrada {entrada_id}",
        )

    def list_salidas(self) -> list[Salida]:
        """Obtiene todas las salidas."""
        data = self._request("GET", "/salidas", action="listar salidas")
        return [Salida.from_dict(item) for item in self._as_list(data, "salidas")]

    def create_salida(self, salida: Salida) -> Salida:
        """Persiste una salida nueva."""
        payload = salida.to_dict()
        payload.pop("id", None)
        data = self._request("POST", "/salidas", json=payload, action="crear salida")
        return Salida.from_dict(data)

    def delete_salida(self, salida_id: RecordId) -> None:
        """Elimina una salida."""
        self._request(
            "DELETE",
            f"/salidas/{salida_id}",
            action=f"eliminar salida {salida_id}",
        )

    def _request(
        self,
        method: str,
        path: str,
        action: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Ejecuta una llamada HTTP y retorna el cuerpo JSON decodificado."""
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(method, url, json=json, timeout=self._timeout)
        except requests.RequestException as exc:
            LOGGER.exception("Fallo de red al %s: %s %s", action, method, url)
            raise RepositoryError(f"No fue posible {action}.") from exc

        if response.status_code == 404:
            raise NotFoundError(f"Recurso no encontrado al {action}: {path}")

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            LOGGER.exception(
                "Respuesta HTTP %s al %s: %s %s",
                response.status_code,
                action,
                method,
                url,
            )
            raise RepositoryError(f"No fue posible {action}.") from exc

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            LOGGER.exception("Respuesta no JSON al %s: %s %s", action, method, url)
            raise RepositoryError(f"Respuesta invalida del servidor al {action}.") from exc

    @staticmethod
    def _as_list(data: Any, collection: str) -> list[dict[str, Any]]:
        if not isinstance(data, list):
            raise RepositoryError(f"Se esperaba una lista de {collection}.")
        return data

    @staticmethod
    def _to_wire(campos: dict[str, Any]) -> dict[str, Any]:
        """Normaliza campos de un PATCH al formato JSON del backend."""
        payload: dict[str, Any] = {}
        for key, value in campos.items():
            if isinstance(value, date):
                value = value.isoformat()
            elif isinstance(value, float):
                value = compact_number(value)
            payload[key] = value
        return payload
