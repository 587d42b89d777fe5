"""
Identity Resolution Service.

Turns a contact email into WooCommerce records: a customer plus that
customer's orders for the dashboard, or one page of matching customers for
the user search. Credentials are read from the provider on every call and
each call opens and closes its own HTTP client.
"""

from __future__ import annotations

from typing import Callable, List, Optional

import httpx

from commerce_widget.config.settings import Settings
from commerce_widget.models.commerce import Credentials, Customer, DetailResult
from commerce_widget.services.commerce_client import CommerceClient
from commerce_widget.services.config_provider import (
    ConfigurationProvider,
    load_credentials,
)
from commerce_widget.utils.error_handling import HttpError, SearchFailed, UnknownError
from commerce_widget.utils.logging_config import get_logger

logger = get_logger(__name__)

ClientFactory = Callable[[Credentials], CommerceClient]


class IdentityResolutionService:
    """Resolve emails against the WooCommerce REST API."""

    def __init__(
        self,
        provider: ConfigurationProvider,
        settings: Optional[Settings] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        self.provider = provider
        self.settings = settings or Settings()
        self.client_factory = client_factory or self._default_client

    @property
    def page_size(self) -> int:
        return self.settings.page_size

    def _default_client(self, credentials: Credentials) -> CommerceClient:
        return CommerceClient(
            credentials,
            api_prefix=self.settings.api_prefix,
            timeout=self.settings.http_timeout_seconds,
        )

    async def resolve_customer(self, email: str) -> DetailResult:
        """
        Find the customer for `email` and fetch their orders.

        The first customer in API order wins. No match is a valid empty
        result. A failure at either request raises `SearchFailed`; a found
        customer is never returned without its orders.
        """
        credentials = load_credentials(self.provider)

        try:
            async with self.client_factory(credentials) as client:
                customers = await client.list_customers(email)
                if not customers:
                    logger.info("No customer for email", extra={"email": email})
                    return DetailResult()

                customer = customers[0]
                orders = await client.list_orders(customer.id)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.error(
                "Customer resolution failed",
                extra={"email": email, "error": str(exc)},
            )
            raise SearchFailed(f"Customer lookup for {email} failed: {exc}") from exc

        logger.info(
            "Customer resolved",
            extra={
                "email": email,
                "customer_id": customer.id,
                "order_count": len(orders),
            },
        )
        return DetailResult(customer=customer, orders=orders)

    async def fetch_customer_page(self, query: str, page: int) -> List[Customer]:
        """
        Fetch one fixed-size page of customers matching `query`.

        Raises `HttpError` when the API answers with an error status and
        `UnknownError` for any other request failure.
        """
        credentials = load_credentials(self.provider)

        try:
            async with self.client_factory(credentials) as client:
                customers = await client.list_customers(
                    query, per_page=self.page_size, page=page
                )
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error(
                "Customer search rejected",
                extra={"query": query, "page": page, "status": status},
            )
            raise HttpError(status, exc.response.reason_phrase) from exc
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.error(
                "Customer search failed",
                extra={"query": query, "page": page, "error": str(exc)},
            )
            raise UnknownError(str(exc)) from exc

        logger.info(
            "Customer page fetched",
            extra={"query": query, "page": page, "count": len(customers)},
        )
        return customers
