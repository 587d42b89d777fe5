"""
Widget entrypoint.

Wires settings, the credential store and the resolution service into the
two views served by the dashboard app.
"""

from dataclasses import dataclass
from typing import Optional

from commerce_widget.config.settings import Settings
from commerce_widget.handlers.dashboard import DashboardView
from commerce_widget.handlers.user_search import UserSearchView
from commerce_widget.services.config_provider import (
    ConfigurationProvider,
    build_settings_store,
)
from commerce_widget.services.host_channel import HostChannel
from commerce_widget.services.identity_resolution import IdentityResolutionService


@dataclass
class WidgetApp:
    """Both views sharing one resolution service."""

    settings: Settings
    service: IdentityResolutionService
    dashboard: DashboardView
    user_search: UserSearchView


def create_app(
    channel: HostChannel,
    settings: Optional[Settings] = None,
    provider: Optional[ConfigurationProvider] = None,
) -> WidgetApp:
    """Instantiate the views for `channel` with environment defaults."""
    settings = settings or Settings.from_environment()
    provider = provider or build_settings_store(settings)
    service = IdentityResolutionService(provider, settings)

    return WidgetApp(
        settings=settings,
        service=service,
        dashboard=DashboardView(channel, service, settings),
        user_search=UserSearchView(channel, service, settings),
    )
