"""
Storefront API Client

HTTP client for the storefront's cart, product and order endpoints.
Requests carry the shopper's identity token when one is set.
"""

import json
import logging
from decimal import Decimal
from typing import Any, AsyncIterator, Optional

import httpx

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base exception for storefront client errors"""
    pass


class StorefrontRequestError(StorefrontError):
    """The storefront answered with an error status"""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"Storefront returned {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class StorefrontClient:
    """
    Client for the storefront APIs.

    Usage:
        client = StorefrontClient("http://localhost:8001")
        user_client = client.authorized(identity_token)

        rows = await user_client.list_cart_rows()
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize storefront client.

        Args:
            base_url: Base URL of the storefront API
            token: Identity token sent as a bearer credential
            timeout: Request timeout in seconds
            http_client: Shared HTTP client (a new one is created if omitted)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    def authorized(self, token: str) -> "StorefrontClient":
        """Client bound to an identity token, sharing this client's connections"""
        return StorefrontClient(self.base_url, token=token, http_client=self._http_client)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Make an HTTP request and decode the JSON answer"""
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                params=params,
                json=body,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise StorefrontError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise StorefrontRequestError(response.status_code, response.text)

        if not response.content:
            return None
        return response.json()

    # ==================== Cart APIs ====================

    async def list_cart_rows(self) -> list[dict]:
        """Get all cart rows of the current user"""
        return await self._request("GET", "/api/cart")

    async def find_cart_rows(self, product_id: str, size: Optional[str] = None) -> list[dict]:
        """Get the rows matching a (product, size) key"""
        return await self._request(
            "GET",
            "/api/cart/items",
            params={"product_id": product_id, "size": size},
        )

    async def insert_cart_row(
        self,
        product_id: str,
        quantity: int,
        size: Optional[str] = None,
    ) -> dict:
        """Insert a cart row"""
        return await self._request(
            "POST",
            "/api/cart/items",
            body={"product_id": product_id, "quantity": quantity, "size": size},
        )

    async def update_cart_row(self, row_id: str, quantity: int) -> dict:
        """Overwrite the quantity of one row"""
        return await self._request(
            "PATCH",
            f"/api/cart/items/{row_id}",
            body={"quantity": quantity},
        )

    async def set_cart_quantity(
        self,
        product_id: str,
        quantity: int,
        size: Optional[str] = None,
    ) -> list[dict]:
        """Overwrite the quantity of the rows matching a key"""
        return await self._request(
            "PUT",
            "/api/cart/items",
            body={"product_id": product_id, "quantity": quantity, "size": size},
        )

    async def delete_cart_rows(self, product_id: str, size: Optional[str] = None) -> dict:
        """Delete the rows matching a key"""
        return await self._request(
            "DELETE",
            "/api/cart/items",
            params={"product_id": product_id, "size": size},
        )

    async def clear_cart(self) -> dict:
        """Delete all rows of the current user"""
        return await self._request("DELETE", "/api/cart")

    async def cart_events(self) -> AsyncIterator[dict]:
        """
        Follow the server-sent change stream of the user's cart.

        Yields one decoded CartChange document per event until the
        server closes the stream.
        """
        url = f"{self.base_url}/api/cart/events"
        headers = self._headers()
        headers["Accept"] = "text/event-stream"

        try:
            async with self._http_client.stream("GET", url, headers=headers, timeout=None) as response:
                if response.status_code >= 400:
                    await response.aread()
                    raise StorefrontRequestError(response.status_code, response.text)

                async for line in response.aiter_lines():
                    if line.startswith("data:"):
                        yield json.loads(line[len("data:"):].strip())
        except httpx.HTTPError as e:
            raise StorefrontError(f"Cart event stream failed: {e}") from e

    # ==================== Product APIs ====================

    async def get_products(self, product_ids: list[str]) -> list[dict]:
        """Batch lookup of products by ID"""
        if not product_ids:
            return []
        return await self._request("GET", "/api/products", params={"ids": product_ids})

    # ==================== Order APIs ====================

    async def create_order(
        self,
        store_name: str,
        customer: str,
        customer_details: str,
        total: Decimal,
        status: str = "pending",
    ) -> dict:
        """Insert an order"""
        return await self._request(
            "POST",
            "/api/orders",
            body={
                "store_name": store_name,
                "customer": customer,
                "customer_details": customer_details,
                "total": str(total),
                "status": status,
            },
        )

    async def create_order_item(
        self,
        order_id: str,
        product_id: str,
        quantity: int,
        price: Decimal,
        size: Optional[str] = None,
    ) -> dict:
        """Insert an order line"""
        return await self._request(
            "POST",
            f"/api/orders/{order_id}/items",
            body={
                "product_id": product_id,
                "quantity": quantity,
                "price": str(price),
                "size": size,
            },
        )
