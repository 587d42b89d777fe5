"""
Host Messaging Bridge.

Owns the widget's listener on the host channel, decodes inbound context
events and asks the host for context with a bounded wait. Each outstanding
request carries a token; only the current token may report a timeout, so a
superseded or already-answered request never raises a stale error.
"""

from __future__ import annotations

import asyncio
import itertools
from typing import Any, Callable, List, Optional

from commerce_widget.config.settings import Settings
from commerce_widget.models.host import InboundContext, decode_host_message
from commerce_widget.services.host_channel import HostChannel
from commerce_widget.utils.error_handling import (
    AppError,
    ContextTimeout,
    FormatError,
    HostRequestFailed,
    ParseError,
    to_user_message,
)
from commerce_widget.utils.logging_config import get_logger

logger = get_logger(__name__)

ContextCallback = Callable[[InboundContext], None]


class HostBridge:
    """Single channel between one view and the host application."""

    def __init__(
        self,
        channel: HostChannel,
        settings: Optional[Settings] = None,
        decode_error_message: Optional[str] = None,
    ):
        settings = settings or Settings()
        self.channel = channel
        self.fetch_message = settings.fetch_info_message
        self.timeout_seconds = settings.context_timeout_seconds
        self.decode_error_message = decode_error_message

        self.context: Optional[InboundContext] = None
        self.error: Optional[str] = None
        self.last_error: Optional[AppError] = None
        self.is_loading = False

        self._listener = self.on_message
        self._attached = False
        self._subscribers: List[ContextCallback] = []
        self._tokens = itertools.count(1)
        self._pending_token: Optional[int] = None
        self._waiters: List[asyncio.Future] = []

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> "HostBridge":
        """Register the message listener; a no-op when already attached."""
        if not self._attached:
            self.channel.add_listener(self._listener)
            self._attached = True
            logger.info("Host listener attached")
        return self

    def detach(self) -> None:
        """Remove the message listener; a no-op when not attached."""
        if self._attached:
            self.channel.remove_listener(self._listener)
            self._attached = False
            logger.info("Host listener detached")

    def __enter__(self) -> "HostBridge":
        return self.attach()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.detach()

    def subscribe(self, callback: ContextCallback) -> Callable[[], None]:
        """Call `callback` with every accepted context; returns an unsubscriber."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def on_message(self, raw: Any) -> None:
        """Handle one inbound host payload without ever raising."""
        try:
            context = decode_host_message(raw)
        except (ParseError, FormatError) as exc:
            self.is_loading = False
            self._report(exc, self.decode_error_message)
            return

        self.context = context
        self.error = None
        self.last_error = None
        self.is_loading = False
        self._pending_token = None
        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(context)

        logger.info(
            "Host context received",
            extra={"event": context.event, "has_email": bool(context.contact_email)},
        )
        for callback in list(self._subscribers):
            callback(context)

    async def request_context(self) -> Optional[InboundContext]:
        """
        Ask the host for context and wait up to the timeout window.

        Returns the received context, or the current one when this request
        was superseded. Returns None after reporting a timeout or a failed
        post.
        """
        token = next(self._tokens)
        self._pending_token = token
        self.is_loading = True
        self.error = None
        self.last_error = None

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            try:
                self.channel.post_message(self.fetch_message, "*")
            except Exception as exc:
                if self._pending_token == token:
                    self._pending_token = None
                    self.is_loading = False
                self._report(HostRequestFailed(str(exc)))
                return None

            try:
                return await asyncio.wait_for(waiter, self.timeout_seconds)
            except asyncio.TimeoutError:
                if self._pending_token != token:
                    logger.debug("Stale context request expired", extra={"token": token})
                    return self.context
                self._pending_token = None
                self.is_loading = False
                self._report(ContextTimeout(self.timeout_seconds))
                return None
        finally:
            self._waiters.remove(waiter)

    def _report(self, error: AppError, message: Optional[str] = None) -> None:
        self.last_error = error
        self.error = message or to_user_message(error)
        logger.error(
            "Host bridge error",
            extra={"error_type": type(error).__name__, "error": str(error)},
        )
