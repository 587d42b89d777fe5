"""
WooCommerce REST client.

GET requests only. Errors are not caught here: `httpx.HTTPStatusError` and
`httpx.RequestError` reach the caller, which maps them to the widget's
error taxonomy.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from commerce_widget.models.commerce import Credentials, Customer, Order
from commerce_widget.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_API_PREFIX = "/wp-json/wc/v3"


class CommerceClient:
    """Async client for the customers and orders endpoints."""

    def __init__(
        self,
        credentials: Credentials,
        api_prefix: str = DEFAULT_API_PREFIX,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = credentials.base_url.rstrip("/") + api_prefix
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=(credentials.consumer_key, credentials.consumer_secret),
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "CommerceClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def list_customers(
        self,
        email: str,
        per_page: Optional[int] = None,
        page: Optional[int] = None,
    ) -> List[Customer]:
        """`GET /customers?email=...`, optionally paginated."""
        params: Dict[str, Any] = {"email": email}
        if per_page is not None:
            params["per_page"] = per_page
        if page is not None:
            params["page"] = page
        payload = await self._get("/customers", params)
        return [Customer.model_validate(item) for item in payload]

    async def list_orders(self, customer_id: int) -> List[Order]:
        """`GET /orders?customer=...`, a single page in API order."""
        payload = await self._get("/orders", {"customer": customer_id})
        return [Order.model_validate(item) for item in payload]

    async def _get(self, path: str, params: Dict[str, Any]) -> List[dict]:
        logger.info("WooCommerce GET", extra={"path": path, "params": params})
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise ValueError(f"Expected a JSON array from {path}")
        return payload
