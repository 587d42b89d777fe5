"""
Credential providers.

The widget never caches WooCommerce credentials: every resolution attempt
asks its provider again, so a settings change applies to the next search.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, Optional, Protocol

import boto3

from commerce_widget.config.settings import Settings
from commerce_widget.models.commerce import Credentials
from commerce_widget.utils.error_handling import ConfigurationMissing
from commerce_widget.utils.logging_config import get_logger

logger = get_logger(__name__)

URL_KEY = "woocommerce_url"
CONSUMER_KEY_KEY = "woocommerce_consumer_key"
CONSUMER_SECRET_KEY = "woocommerce_consumer_secret"
CREDENTIAL_KEYS = (URL_KEY, CONSUMER_KEY_KEY, CONSUMER_SECRET_KEY)


class ConfigurationProvider(Protocol):
    """Key-value source of settings."""

    def get(self, key: str) -> Optional[str]:
        ...

    def get_many(self, keys: Iterable[str]) -> Dict[str, Optional[str]]:
        """Read several keys from one snapshot of the source."""
        ...


class InMemorySettingsStore:
    """Settings page storage; an empty value counts as unset."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def get_many(self, keys: Iterable[str]) -> Dict[str, Optional[str]]:
        return {key: self._values.get(key) for key in keys}

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class EnvironmentSettingsStore:
    """Read settings from upper-cased environment variables."""

    def get(self, key: str) -> Optional[str]:
        return os.environ.get(key.upper())

    def get_many(self, keys: Iterable[str]) -> Dict[str, Optional[str]]:
        return {key: self.get(key) for key in keys}


class SecretsManagerSettingsStore:
    """
    Read settings from a JSON secret in AWS Secrets Manager.

    `get_many` reads the secret once per call; all keys come from the same
    secret version.
    """

    def __init__(self, secret_id: str, client=None):
        self.secret_id = secret_id
        self.client = client or boto3.client("secretsmanager")

    def get(self, key: str) -> Optional[str]:
        return self.get_many((key,))[key]

    def get_many(self, keys: Iterable[str]) -> Dict[str, Optional[str]]:
        secret = self._load_secret()
        values: Dict[str, Optional[str]] = {}
        for key in keys:
            value = secret.get(key)
            values[key] = str(value) if value is not None else None
        return values

    def _load_secret(self) -> Dict[str, Any]:
        try:
            secret_value = self.client.get_secret_value(SecretId=self.secret_id)[
                "SecretString"
            ]
            secret = json.loads(secret_value)
        except Exception as exc:
            logger.warning(
                "Failed to load credentials secret",
                extra={"secret_id": self.secret_id, "error": str(exc)},
            )
            return {}
        return secret if isinstance(secret, dict) else {}


def build_settings_store(settings: Settings) -> ConfigurationProvider:
    """Pick the credential source configured for this deployment."""
    if settings.credentials_secret_id:
        return SecretsManagerSettingsStore(settings.credentials_secret_id)
    return EnvironmentSettingsStore()


def load_credentials(provider: ConfigurationProvider) -> Credentials:
    """Read all three credentials or raise `ConfigurationMissing`."""
    raw = provider.get_many(CREDENTIAL_KEYS)
    values = {key: (raw.get(key) or "").strip() for key in CREDENTIAL_KEYS}
    missing = [key for key, value in values.items() if not value]
    if missing:
        logger.warning("WooCommerce settings missing", extra={"missing": missing})
        raise ConfigurationMissing(missing)

    return Credentials(
        base_url=values[URL_KEY],
        consumer_key=values[CONSUMER_KEY_KEY],
        consumer_secret=values[CONSUMER_SECRET_KEY],
    )
