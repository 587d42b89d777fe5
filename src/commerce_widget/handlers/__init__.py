"""Views consuming host context: the dashboard and the user search."""

from commerce_widget.handlers.dashboard import DashboardView  # noqa: F401
from commerce_widget.handlers.user_search import UserSearchView  # noqa: F401
