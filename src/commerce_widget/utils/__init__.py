"""Shared helpers: logging and the error taxonomy."""
