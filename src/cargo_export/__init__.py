"""cargo-export package entrypoints."""

from cargo_export.cli import app
from cargo_export.constants import PACKAGE_VERSION
from cargo_export.runtime_env import load_runtime_env

__all__ = ["app", "main", "__version__"]
__version__ = PACKAGE_VERSION


def main() -> None:
    """Launch the CLI."""
    load_runtime_env()
    app()
