"""
Import validation tests.

These tests ensure all modules can be imported successfully, catching
issues like missing dependencies or circular imports.

Run with: pytest tests/unit/test_imports.py -v
"""

import importlib

import pytest


@pytest.mark.parametrize("module_name", [
    "commerce_widget.app",
    "commerce_widget.config.settings",
    "commerce_widget.handlers.base",
    "commerce_widget.handlers.dashboard",
    "commerce_widget.handlers.user_search",
    "commerce_widget.models.commerce",
    "commerce_widget.models.host",
    "commerce_widget.models.search",
    "commerce_widget.services.commerce_client",
    "commerce_widget.services.config_provider",
    "commerce_widget.services.host_bridge",
    "commerce_widget.services.host_channel",
    "commerce_widget.services.identity_resolution",
    "commerce_widget.utils.error_handling",
    "commerce_widget.utils.logging_config",
])
def test_module_import(module_name: str):
    """Each module should import without errors."""
    try:
        importlib.import_module(module_name)
    except ImportError as e:
        pytest.fail(f"Failed to import {module_name}: {e}")


def test_logger_is_configured_once():
    from commerce_widget.utils.logging_config import get_logger

    first = get_logger("commerce_widget.test")
    second = get_logger("commerce_widget.test")
    assert first is second
    assert len(first.handlers) == 1
