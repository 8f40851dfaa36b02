"""Configuration exports."""

from cargo_export.config.loader import DEFAULT_CONFIG_PATH, load_export_config
from cargo_export.config.models import ExportConfig

__all__ = ["DEFAULT_CONFIG_PATH", "ExportConfig", "load_export_config"]
