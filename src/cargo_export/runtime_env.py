"""Runtime environment loading helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

LOGGER = logging.getLogger(__name__)

DISABLE_DOTENV_ENV = "CARGO_EXPORT_DISABLE_DOTENV"
_TRUTHY = {"1", "true", "yes", "on"}


def dotenv_disabled() -> bool:
    return os.getenv(DISABLE_DOTENV_ENV, "").strip().lower() in _TRUTHY


def load_runtime_env(*, filename: str = ".env") -> Path | None:
    """Load ``filename`` from cwd or a parent, keeping already-set variables.

    Returns the file that was read, or ``None`` when loading was disabled or
    no file was found.
    """
    if dotenv_disabled():
        return None

    dotenv_path = find_dotenv(filename=filename, usecwd=True)
    if not dotenv_path:
        return None

    load_dotenv(dotenv_path=dotenv_path, override=False)
    LOGGER.debug("Loaded environment from %s", dotenv_path)
    return Path(dotenv_path)
