"""User search: paginated customer lookup by email."""

from __future__ import annotations

from typing import List, Optional

from commerce_widget.config.settings import Settings
from commerce_widget.handlers.base import HostView
from commerce_widget.models.commerce import Customer
from commerce_widget.models.host import InboundContext
from commerce_widget.models.search import SearchAccumulator, SearchState
from commerce_widget.services.host_bridge import HostBridge
from commerce_widget.services.host_channel import HostChannel
from commerce_widget.services.identity_resolution import IdentityResolutionService
from commerce_widget.utils.error_handling import (
    AppError,
    NotFound,
    UnknownError,
    to_user_message,
)
from commerce_widget.utils.logging_config import get_logger

logger = get_logger(__name__)

DECODE_ERROR_MESSAGE = (
    "Failed to process Chatwoot data. Please try searching manually."
)
NO_CONTEXT_NOTICE = (
    "Chatwoot data not provided. You can still search manually using the form above."
)


class UserSearchView(HostView):
    """
    Search view accumulating customers page by page.

    `search()` starts a new session (page 1, empty results) and `load_more()`
    appends the next page. A response for an older session is dropped, and
    errors leave already accumulated results in place.
    """

    def __init__(
        self,
        channel: HostChannel,
        service: IdentityResolutionService,
        settings: Optional[Settings] = None,
    ):
        super().__init__(
            HostBridge(channel, settings, decode_error_message=DECODE_ERROR_MESSAGE)
        )
        self.service = service
        self.search_email = ""
        self.accumulator = SearchAccumulator()
        self.state = SearchState.IDLE
        self.last_error: Optional[AppError] = None

    @property
    def results(self) -> List[Customer]:
        return self.accumulator.results

    @property
    def has_more(self) -> bool:
        return self.accumulator.has_more

    @property
    def is_loading(self) -> bool:
        return self.state is SearchState.SEARCHING

    @property
    def has_host_context(self) -> bool:
        return self.context is not None

    @property
    def error(self) -> Optional[str]:
        return self.accumulator.error or self.bridge.error

    def notice(self) -> Optional[str]:
        return None if self.has_host_context else NO_CONTEXT_NOTICE

    def handle_context(self, context: InboundContext) -> None:
        email = context.contact_email
        if email:
            self.search_email = email
            self._spawn(self.search(email))

    async def search(self, query: Optional[str] = None) -> None:
        """Start a new search for `query` (default: the current search email)."""
        if query is not None:
            self.search_email = query
        self.accumulator.reset(self.search_email)
        generation = self._next_generation()
        await self._fetch(generation, page=1)

    async def load_more(self) -> bool:
        """Fetch the next page; returns False when there is nothing to load."""
        if not self.accumulator.has_more or self.is_loading:
            return False
        await self._fetch(self._generation, page=self.accumulator.page + 1)
        return True

    async def _fetch(self, generation: int, page: int) -> None:
        acc = self.accumulator
        query = acc.query
        self.state = SearchState.SEARCHING
        acc.error = None
        self.last_error = None

        try:
            items = await self.service.fetch_customer_page(query, page)
        except Exception as exc:
            if not self._is_current(generation, query=query, page=page):
                return
            self._fail(exc if isinstance(exc, AppError) else UnknownError(str(exc)))
            return

        if not self._is_current(generation, query=query, page=page):
            return

        acc.page = page
        if not items and page == 1:
            acc.results = []
            acc.has_more = False
            self._fail(NotFound(query), state=SearchState.EMPTY)
            return

        added = acc.merge(items, self.service.page_size)
        self.state = SearchState.POPULATED
        logger.info(
            "Search results merged",
            extra={
                "query": query,
                "page": page,
                "added": added,
                "total": len(acc.results),
                "has_more": acc.has_more,
            },
        )

    def _fail(self, error: AppError, state: SearchState = SearchState.ERRORED) -> None:
        self.last_error = error
        self.accumulator.error = to_user_message(error)
        self.state = state
        if state is SearchState.EMPTY:
            logger.info("No users found", extra={"query": self.accumulator.query})
            return
        logger.error(
            "Error fetching users",
            extra={"query": self.accumulator.query, "error": str(error)},
        )
