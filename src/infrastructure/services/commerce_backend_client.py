"""
Commerce Backend Client

Async JSON-over-HTTP client for the order management backend. Every call
is bounded by a timeout; any non-success status, transport failure,
timeout or unexpected payload shape surfaces as a BackendError.
"""

import asyncio
import logging
from typing import Any, Iterable, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from src.domain.entities.cart_entity import CartLine
from src.domain.entities.product_entity import CatalogProduct
from src.domain.value_objects.coordinates import Coordinates
from src.dtos import CreatedResource, LoginResult, OrderDetail, OrderSummary, ProductPayload
from src.infrastructure.utilities.constants import AddressDefaults, HttpSettings
from src.infrastructure.utilities.exceptions import (
    AuthError,
    BackendError,
    ReferenceNotFoundError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CommerceBackendClient:
    """Client for the products, customers, addresses and orders API"""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_seconds),
            limits=httpx.Limits(
                max_keepalive_connections=HttpSettings.MAX_KEEPALIVE_CONNECTIONS,
                max_connections=HttpSettings.MAX_CONNECTIONS,
            ),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )
        logger.info("CommerceBackendClient initialized with base_url: %s", self.base_url)

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json_data: Optional[dict] = None,
        auth_token: Optional[str] = None,
    ) -> Any:
        """Perform one call and return the decoded JSON body"""
        headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else None
        logger.debug("[REQUEST] %s %s (%s)", method, path, operation)

        try:
            response = await asyncio.wait_for(
                self._client.request(method, path, json=json_data, headers=headers),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise BackendError(
                f"{operation} timed out after {self.timeout_seconds}s", operation
            ) from e
        except httpx.HTTPError as e:
            raise BackendError(f"{operation} failed: {e}", operation) from e

        logger.debug("[RESPONSE] %s %s -> %s", method, path, response.status_code)

        if response.status_code not in HttpSettings.SUCCESS_STATUSES:
            raise BackendError(
                f"{operation} returned HTTP {response.status_code}",
                operation,
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"{operation} returned a non-JSON body", operation) from e

    @staticmethod
    def _parse(model: Type[ModelT], data: Any, operation: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise BackendError(f"{operation} returned an unexpected payload: {e}", operation) from e

    @staticmethod
    def _parse_list(model: Type[ModelT], data: Any, operation: str) -> List[ModelT]:
        try:
            return TypeAdapter(List[model]).validate_python(data)
        except ValidationError as e:
            raise BackendError(f"{operation} returned an unexpected payload: {e}", operation) from e

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def login(self, telegram_id: int, name: str, last_name: str) -> LoginResult:
        """POST /auth/telegram-login"""
        operation = "login"
        try:
            data = await self._request(
                "POST",
                "/auth/telegram-login",
                operation,
                json_data={"telegramId": str(telegram_id), "name": name, "lastName": last_name},
            )
        except BackendError as e:
            if e.status_code is not None:
                raise AuthError(f"Login rejected for {telegram_id}: {e}", e.status_code) from e
            raise
        return self._parse(LoginResult, data, operation)

    async def list_products(self) -> List[CatalogProduct]:
        """GET /products"""
        operation = "list_products"
        data = await self._request("GET", "/products", operation)
        payloads = self._parse_list(ProductPayload, data if data is not None else [], operation)
        try:
            return [
                CatalogProduct(
                    id=p.id,
                    name=p.name,
                    price=p.price,
                    currency=p.currency,
                    description=p.description or "",
                )
                for p in payloads
            ]
        except ValueError as e:
            raise BackendError(f"{operation} returned an invalid product: {e}", operation) from e

    async def create_address(self, auth_token: str, location: Coordinates) -> int:
        """POST /addresses"""
        operation = "create_address"
        data = await self._request(
            "POST",
            "/addresses",
            operation,
            json_data={
                "name": AddressDefaults.NAME,
                "description": AddressDefaults.DESCRIPTION,
                "coordinateX": location.lat,
                "coordinateY": location.lng,
            },
            auth_token=auth_token,
        )
        return self._parse(CreatedResource, data, operation).id

    async def associate_address(self, auth_token: str, customer_id: int, address_id: int) -> None:
        """POST /customers/{customerId}/addresses/{addressId}"""
        await self._request(
            "POST",
            f"/customers/{customer_id}/addresses/{address_id}",
            "associate_address",
            json_data={},
            auth_token=auth_token,
        )

    async def create_order(
        self,
        auth_token: str,
        customer_id: int,
        address_id: int,
        delivery_price: float,
        lines: Iterable[CartLine],
    ) -> int:
        """POST /orders"""
        operation = "create_order"
        data = await self._request(
            "POST",
            "/orders",
            operation,
            json_data={
                "customerId": customer_id,
                "addressId": address_id,
                "deliveryPrice": delivery_price,
                "products": [
                    {"productId": line.product_id, "quantity": line.quantity} for line in lines
                ],
            },
            auth_token=auth_token,
        )
        return self._parse(CreatedResource, data, operation).id

    async def list_customer_orders(self, auth_token: str, customer_id: int) -> List[OrderSummary]:
        """GET /orders/customer/{customerId}"""
        operation = "list_customer_orders"
        data = await self._request(
            "GET", f"/orders/customer/{customer_id}", operation, auth_token=auth_token
        )
        return self._parse_list(OrderSummary, data if data is not None else [], operation)

    async def get_order(self, auth_token: str, order_id: int) -> OrderDetail:
        """GET /orders/{orderId}"""
        operation = "get_order"
        try:
            data = await self._request("GET", f"/orders/{order_id}", operation, auth_token=auth_token)
        except BackendError as e:
            if e.status_code == HttpSettings.NOT_FOUND:
                raise ReferenceNotFoundError(
                    f"Order {order_id} not found", "❌ Order not found"
                ) from e
            raise
        return self._parse(OrderDetail, data, operation)
