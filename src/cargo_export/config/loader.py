"""Configuration loading and override resolution."""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any, Mapping

import yaml

from cargo_export.config.models import ExportConfig

DEFAULT_CONFIG_PATH = Path("cargo-export.yaml")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Configuration file must deserialize to a mapping")
    return data


def apply_overrides(
    raw_config: dict[str, Any],
    env: Mapping[str, str],
    cli_overrides: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Apply precedence: CLI > env > YAML defaults."""
    merged = dict(raw_config)
    if env.get("CARGO_EXPORT_BUILD_COMMAND"):
        merged["build_command"] = shlex.split(env["CARGO_EXPORT_BUILD_COMMAND"])
    if env.get("CARGO_EXPORT_KINDS"):
        merged["kinds"] = env["CARGO_EXPORT_KINDS"]
    if env.get("CARGO_EXPORT_TAG"):
        merged["tag"] = env["CARGO_EXPORT_TAG"]
    fail_on_empty = _parse_flag(env.get("CARGO_EXPORT_FAIL_ON_EMPTY"))
    if fail_on_empty is not None:
        merged["fail_on_empty"] = fail_on_empty

    if cli_overrides:
        for key, value in cli_overrides.items():
            # Unset CLI options and empty repeatable options keep lower layers.
            if value is None or value == [] or value == ():
                continue
            merged[key] = value
    return merged


def _parse_flag(raw: str | None) -> bool | None:
    if raw is None:
        return None
    normalized = raw.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"Invalid boolean value: {raw!r}")


def load_export_config(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> ExportConfig:
    """Load and validate export config.

    An explicit ``config_path`` must exist; the default file is optional.
    """
    active_env = os.environ if env is None else env
    if config_path is not None:
        raw = _load_yaml(config_path)
    elif DEFAULT_CONFIG_PATH.exists():
        raw = _load_yaml(DEFAULT_CONFIG_PATH)
    else:
        raw = {}
    merged = apply_overrides(raw, active_env, cli_overrides)
    return ExportConfig.model_validate(merged)
