"""Host (Chatwoot) context models and the shared inbound-message decoder."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from commerce_widget.utils.error_handling import FormatError, ParseError

NOT_AVAILABLE = "Not available"


class Person(BaseModel):
    """A contact or agent as sent by the host; every field is optional."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    email: Optional[str] = None
    name: Optional[str] = None


class ContextData(BaseModel):
    """The `data` block of a host event."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    contact: Optional[Person] = None
    current_agent: Optional[Person] = Field(default=None, alias="currentAgent")


class InboundContext(BaseModel):
    """Conversation context pushed by the host; replaced wholesale on each message."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    event: Optional[str] = None
    data: Optional[ContextData] = None

    @property
    def contact_email(self) -> Optional[str]:
        if self.data and self.data.contact and self.data.contact.email:
            return self.data.contact.email
        return None

    def display_fields(self) -> Dict[str, str]:
        """Contact and agent details with a placeholder for missing values."""
        contact = (self.data.contact if self.data else None) or Person()
        agent = (self.data.current_agent if self.data else None) or Person()
        return {
            "contact_email": contact.email or NOT_AVAILABLE,
            "contact_name": contact.name or NOT_AVAILABLE,
            "agent_email": agent.email or NOT_AVAILABLE,
            "agent_name": agent.name or NOT_AVAILABLE,
        }


def decode_host_message(raw: Any) -> InboundContext:
    """
    Normalise a host message into an `InboundContext`.

    Strings (and bytes) are parsed as JSON; mappings are taken as they are.
    Raises `ParseError` for malformed JSON and `FormatError` for any other
    shape, including JSON that does not decode to an object.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            payload = json.loads(raw)
        except (ValueError, UnicodeDecodeError) as exc:
            raise ParseError(f"Host message is not valid JSON: {exc}") from exc
    elif isinstance(raw, Mapping):
        payload = raw
    else:
        raise FormatError(f"Invalid data format: {type(raw).__name__}")

    if not isinstance(payload, Mapping):
        raise FormatError(f"Invalid data format: {type(payload).__name__}")

    try:
        return InboundContext.model_validate(dict(payload))
    except ValidationError as exc:
        raise FormatError(
            f"Invalid data format: {exc.error_count()} field error(s)"
        ) from exc
