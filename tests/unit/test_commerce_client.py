"""
WooCommerce client tests against httpx.MockTransport.

Run with: pytest tests/unit/test_commerce_client.py -v
"""

import base64

import httpx
import pytest

from commerce_widget.models.commerce import Credentials
from commerce_widget.services.commerce_client import CommerceClient
from conftest import make_customer, make_order

CREDENTIALS = Credentials(
    base_url="https://shop.example.com/",
    consumer_key="ck_test",
    consumer_secret="cs_test",
)


@pytest.mark.asyncio
async def test_list_customers_sends_basic_auth_and_email(woo):
    woo.queue("/customers", [make_customer(7, "jane@example.com")])

    async with woo.client_factory(CREDENTIALS) as client:
        customers = await client.list_customers("jane@example.com")

    assert [c.id for c in customers] == [7]
    request = woo.requests[0]
    assert request.method == "GET"
    assert request.url.host == "shop.example.com"
    assert request.url.path == "/wp-json/wc/v3/customers"
    assert dict(request.url.params) == {"email": "jane@example.com"}
    token = base64.b64encode(b"ck_test:cs_test").decode()
    assert request.headers["Authorization"] == f"Basic {token}"


@pytest.mark.asyncio
async def test_list_customers_paginated(woo):
    woo.queue("/customers", [])

    async with woo.client_factory(CREDENTIALS) as client:
        await client.list_customers("jane", per_page=20, page=3)

    params = woo.requests[0].url.params
    assert params["email"] == "jane"
    assert params["per_page"] == "20"
    assert params["page"] == "3"


@pytest.mark.asyncio
async def test_list_orders_keeps_api_order(woo):
    woo.queue("/orders", [make_order(3), make_order(1), make_order(2)])

    async with woo.client_factory(CREDENTIALS) as client:
        orders = await client.list_orders(7)

    assert [o.id for o in orders] == [3, 1, 2]
    assert woo.requests[0].url.params["customer"] == "7"


@pytest.mark.asyncio
async def test_error_status_raises(woo):
    woo.queue("/customers", {"code": "woocommerce_rest_cannot_view"}, status_code=401)

    async with woo.client_factory(CREDENTIALS) as client:
        with pytest.raises(httpx.HTTPStatusError):
            await client.list_customers("jane@example.com")


@pytest.mark.asyncio
async def test_non_array_payload_raises(woo):
    woo.queue("/customers", {"unexpected": True})

    async with woo.client_factory(CREDENTIALS) as client:
        with pytest.raises(ValueError):
            await client.list_customers("jane@example.com")


@pytest.mark.asyncio
async def test_client_is_closed_on_exit(woo):
    client = woo.client_factory(CREDENTIALS)
    async with client:
        pass
    assert client._client.is_closed


def test_base_url_without_trailing_slash():
    client = CommerceClient(
        Credentials(base_url="https://shop.example.com", consumer_key="k", consumer_secret="s")
    )
    assert client.base_url == "https://shop.example.com/wp-json/wc/v3"
