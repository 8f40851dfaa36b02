"""Observability exports."""

from cargo_export.observability.logging import configure_logging

__all__ = ["configure_logging"]
