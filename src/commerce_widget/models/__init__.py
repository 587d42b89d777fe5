"""Pydantic models for host messages, commerce records and search state."""

from commerce_widget.models.commerce import (  # noqa: F401
    Credentials,
    Customer,
    DetailResult,
    Order,
)
from commerce_widget.models.host import (  # noqa: F401
    ContextData,
    InboundContext,
    Person,
    decode_host_message,
)
from commerce_widget.models.search import SearchAccumulator, SearchState  # noqa: F401
