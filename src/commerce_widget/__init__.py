"""Chatwoot dashboard app that looks up the current contact in WooCommerce."""

__version__ = "0.1.0"
