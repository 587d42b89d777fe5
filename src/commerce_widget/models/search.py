"""Search session models."""

from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from commerce_widget.models.commerce import Customer


class SearchState(str, Enum):
    """Lifecycle of the user search view."""

    IDLE = "idle"
    SEARCHING = "searching"
    POPULATED = "populated"
    EMPTY = "empty"
    ERRORED = "errored"


class SearchAccumulator(BaseModel):
    """Customers gathered across pages for a single query, unique by id."""

    query: str = ""
    page: int = Field(default=1, ge=1)
    results: List[Customer] = Field(default_factory=list)
    has_more: bool = False
    error: Optional[str] = None

    def reset(self, query: str) -> None:
        """Start a new session for `query`."""
        self.query = query
        self.page = 1
        self.results = []
        self.has_more = False
        self.error = None

    def merge(self, page_items: Iterable[Customer], page_size: int) -> int:
        """Append unseen customers in arrival order; return how many were added."""
        items = list(page_items)
        seen = {customer.id for customer in self.results}
        added = 0
        for customer in items:
            if customer.id in seen:
                continue
            seen.add(customer.id)
            self.results.append(customer)
            added += 1
        self.has_more = len(items) == page_size
        return added
