"""
Pytest configuration shared by the unit tests.

Puts src/ on sys.path so the tests run from a plain checkout, and provides
an in-process fake of the WooCommerce REST API built on httpx.MockTransport.
"""

import os
import sys
from pathlib import Path
from typing import Dict, List

import httpx
import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add src/ to sys.path if missing."""
    src_root = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

os.environ.setdefault("ENVIRONMENT", "dev")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")

from commerce_widget.config.settings import Settings  # noqa: E402
from commerce_widget.services.commerce_client import CommerceClient  # noqa: E402
from commerce_widget.services.config_provider import InMemorySettingsStore  # noqa: E402
from commerce_widget.services.host_channel import LocalHostChannel  # noqa: E402
from commerce_widget.services.identity_resolution import (  # noqa: E402
    IdentityResolutionService,
)


def make_customer(customer_id: int, email: str = None) -> Dict:
    return {
        "id": customer_id,
        "email": email or f"user{customer_id}@example.com",
        "first_name": "User",
        "last_name": str(customer_id),
        "username": f"user{customer_id}",
        "role": "customer",
    }


def make_order(order_id: int) -> Dict:
    return {
        "id": order_id,
        "number": str(order_id),
        "status": "completed",
        "total": "19.99",
        "date_created": "2024-03-01T10:15:00",
        "currency": "EUR",
    }


class FakeWooCommerce:
    """
    Scripted WooCommerce API.

    Responses are queued per path and consumed in order; every request is
    recorded in `requests`.
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._responses: Dict[str, List[httpx.Response]] = {}

    def queue(self, path: str, payload=None, status_code: int = 200) -> None:
        self._responses.setdefault(path, []).append(
            httpx.Response(status_code, json=payload if payload is not None else [])
        )

    def fail(self, path: str, exc: Exception) -> None:
        self._responses.setdefault(path, []).append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.split("/wp-json/wc/v3", 1)[-1]
        queued = self._responses.get(path)
        if not queued:
            return httpx.Response(404, json={"code": "rest_no_route"})
        response = queued.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def client_factory(self, credentials):
        return CommerceClient(credentials, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def settings():
    return Settings(context_timeout_seconds=0.05)


@pytest.fixture
def store():
    return InMemorySettingsStore(
        {
            "woocommerce_url": "https://shop.example.com/",
            "woocommerce_consumer_key": "ck_test",
            "woocommerce_consumer_secret": "cs_test",
        }
    )


@pytest.fixture
def woo():
    return FakeWooCommerce()


@pytest.fixture
def service(store, settings, woo):
    return IdentityResolutionService(store, settings, client_factory=woo.client_factory)


@pytest.fixture
def channel():
    return LocalHostChannel()
