"""
Environment-specific configuration settings.

Credentials are not part of these settings; they come from a
configuration provider and are read on every resolution attempt.
"""

from dataclasses import dataclass
import os
from typing import Optional


@dataclass
class Settings:
    """Widget settings with defaults matching the Chatwoot dashboard app."""

    # Environment
    environment: str = "dev"

    # Commerce API
    api_prefix: str = "/wp-json/wc/v3"
    http_timeout_seconds: float = 30.0
    page_size: int = 20

    # Host bridge
    fetch_info_message: str = "chatwoot-dashboard-app:fetch-info"
    context_timeout_seconds: float = 5.0

    # Credential source: a Secrets Manager id, or None for environment variables
    credentials_secret_id: Optional[str] = None

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        common = dict(
            environment=env,
            page_size=int(os.environ.get("SEARCH_PAGE_SIZE", "20")),
            context_timeout_seconds=float(
                os.environ.get("CONTEXT_TIMEOUT_SECONDS", "5")
            ),
            credentials_secret_id=os.environ.get("CREDENTIALS_SECRET_ID") or None,
        )

        # Production stores sit behind slower hosting
        if env == "prod":
            return cls(
                http_timeout_seconds=float(
                    os.environ.get("HTTP_TIMEOUT_SECONDS", "60")
                ),
                **common,
            )

        return cls(
            http_timeout_seconds=float(os.environ.get("HTTP_TIMEOUT_SECONDS", "30")),
            **common,
        )
