"""Messaging channel to the host frame."""

from __future__ import annotations

from typing import Any, Callable, List, Protocol, Tuple

Listener = Callable[[Any], None]


class HostChannel(Protocol):
    """What the widget needs from the embedding page's message channel."""

    def add_listener(self, listener: Listener) -> None:
        ...

    def remove_listener(self, listener: Listener) -> None:
        ...

    def post_message(self, message: str, target_origin: str = "*") -> None:
        ...


class LocalHostChannel:
    """
    In-process channel.

    `deliver` plays the host's part by dispatching a payload to every
    registered listener; outbound messages are recorded in `sent`.
    """

    def __init__(self) -> None:
        self.listeners: List[Listener] = []
        self.sent: List[Tuple[str, str]] = []

    def add_listener(self, listener: Listener) -> None:
        self.listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def post_message(self, message: str, target_origin: str = "*") -> None:
        self.sent.append((message, target_origin))

    def deliver(self, raw: Any) -> None:
        for listener in list(self.listeners):
            listener(raw)
