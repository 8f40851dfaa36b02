"""Build event and export result models."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field

from cargo_export.schemas.base import FrozenSchemaModel
from cargo_export.schemas.enums import HARNESS_KINDS


class BuildEvent(FrozenSchemaModel):
    """One artifact-production record parsed from the build log."""

    reason: str = Field(min_length=1)
    package_name: str = Field(min_length=1)
    target_name: str = Field(min_length=1)
    target_kinds: frozenset[str] = Field(default_factory=frozenset)
    profile_is_test: bool = False
    executable_path: Path | None = None

    @property
    def is_unit_test_harness(self) -> bool:
        """A lib/bin/example target compiled with its unit tests."""
        return self.profile_is_test and not self.target_kinds & HARNESS_KINDS


class ResolvedArtifact(FrozenSchemaModel):
    """Executable ready to be copied under its final name."""

    source_path: Path
    destination_name: str = Field(min_length=1)
    executable: bool = True
    package_name: str = Field(min_length=1)
    target_name: str = Field(min_length=1)


class ExportSummary(FrozenSchemaModel):
    """Outcome of one materialization batch."""

    output_dir: Path
    exported: tuple[ResolvedArtifact, ...] = ()

    @property
    def count(self) -> int:
        return len(self.exported)
