"""Pydantic models for export configuration."""

from __future__ import annotations

from pydantic import Field, field_validator

from cargo_export.constants import DEFAULT_BUILD_TOOL
from cargo_export.schemas.base import StrictSchemaModel
from cargo_export.schemas.enums import normalize_target_kinds


class ExportConfig(StrictSchemaModel):
    """Settings for one export run."""

    build_command: list[str] = Field(
        default_factory=lambda: [DEFAULT_BUILD_TOOL], min_length=1
    )
    kinds: frozenset[str] = Field(default_factory=frozenset)
    tag: str | None = None
    default_options: bool = True
    fail_on_empty: bool = False
    include_unit_tests: bool = False
    verbose: bool = False

    @field_validator("build_command")
    @classmethod
    def validate_build_command(cls, value: list[str]) -> list[str]:
        if not value[0].strip():
            raise ValueError("build_command must start with an executable")
        return value

    @field_validator("kinds", mode="before")
    @classmethod
    def normalize_kinds(cls, value: object) -> frozenset[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return normalize_target_kinds(value.split(","))
        if isinstance(value, (list, tuple, set, frozenset)):
            return normalize_target_kinds(list(value))
        raise ValueError("kinds must be a list of target kinds")

    @field_validator("tag")
    @classmethod
    def normalize_tag(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        if not stripped:
            return None
        if "/" in stripped or "\\" in stripped:
            raise ValueError("tag must not contain path separators")
        return stripped
