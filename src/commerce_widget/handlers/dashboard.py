"""Dashboard: the contact's WooCommerce customer record and orders."""

from __future__ import annotations

from typing import Dict, List, Optional

from commerce_widget.config.settings import Settings
from commerce_widget.handlers.base import HostView
from commerce_widget.models.commerce import Customer, Order
from commerce_widget.models.host import InboundContext
from commerce_widget.services.host_bridge import HostBridge
from commerce_widget.services.host_channel import HostChannel
from commerce_widget.services.identity_resolution import IdentityResolutionService
from commerce_widget.utils.error_handling import AppError, SearchFailed, to_user_message
from commerce_widget.utils.logging_config import get_logger

logger = get_logger(__name__)

NO_CUSTOMER_MESSAGE = "No WooCommerce customer found for this email."
NO_ORDERS_MESSAGE = "No orders found for this customer."


class DashboardView(HostView):
    """Detail view resolving the current contact's email to customer and orders."""

    def __init__(
        self,
        channel: HostChannel,
        service: IdentityResolutionService,
        settings: Optional[Settings] = None,
    ):
        super().__init__(HostBridge(channel, settings))
        self.service = service
        self.customer: Optional[Customer] = None
        self.orders: List[Order] = []
        self.search_error: Optional[str] = None
        self.last_search_error: Optional[AppError] = None

    @property
    def error(self) -> Optional[str]:
        return self.bridge.error

    @property
    def is_loading(self) -> bool:
        return self.bridge.is_loading

    def handle_context(self, context: InboundContext) -> None:
        email = context.contact_email
        if email:
            self._spawn(self.resolve(email))

    async def resolve(self, email: str) -> None:
        """Look up `email` and replace the displayed customer and orders."""
        generation = self._next_generation()
        self.search_error = None
        self.last_search_error = None

        try:
            result = await self.service.resolve_customer(email)
        except Exception as exc:
            if not self._is_current(generation, email=email):
                return
            self.customer = None
            self.orders = []
            self.last_search_error = (
                exc if isinstance(exc, AppError) else SearchFailed(str(exc))
            )
            self.search_error = to_user_message(self.last_search_error)
            logger.error(
                "Error searching WooCommerce data",
                extra={"email": email, "error": str(exc)},
            )
            return

        if not self._is_current(generation, email=email):
            return
        self.customer = result.customer
        self.orders = result.orders

    def contact_details(self) -> Optional[Dict[str, str]]:
        """Contact and agent fields for display, or None before any context."""
        if self.context is None or self.context.data is None:
            return None
        return self.context.display_fields()

    def status_message(self) -> Optional[str]:
        """The message shown in place of customer data, if any."""
        if self.search_error:
            return self.search_error
        if self.customer is None:
            return NO_CUSTOMER_MESSAGE
        if not self.orders:
            return NO_ORDERS_MESSAGE
        return None
