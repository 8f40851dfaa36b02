"""Deterministic destination naming for exported artifacts."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

from cargo_export.schemas.enums import TargetKind, normalize_target_kinds
from cargo_export.schemas.events import BuildEvent, ResolvedArtifact

LOGGER = logging.getLogger(__name__)

_PLATFORM_SUFFIX_RE = re.compile(r"^\.[A-Za-z0-9]+$")
_UNSAFE_CHARS_RE = re.compile(r"[\\/\x00]")


class ArtifactResolver:
    """Filters build events by kind and assigns collision-free names.

    Names depend only on arrival order: the first event for a base name keeps
    it, later ones get ``-2``, ``-3`` and so on. The counter belongs to this
    instance, so use one resolver per export run.
    """

    def __init__(
        self,
        kinds: Iterable[str] | None = None,
        *,
        tag: str | None = None,
        include_unit_tests: bool = False,
    ) -> None:
        self.kinds = normalize_target_kinds(list(kinds or []))
        self.include_unit_tests = include_unit_tests
        self.tag = tag.strip() if tag and tag.strip() else None
        self._base_counts: dict[str, int] = {}
        self._assigned: set[str] = set()

    def resolve(self, events: Iterable[BuildEvent]) -> Iterator[ResolvedArtifact]:
        for event in events:
            artifact = self.resolve_event(event)
            if artifact is not None:
                yield artifact

    def resolve_event(self, event: BuildEvent) -> ResolvedArtifact | None:
        if event.executable_path is None:
            return None
        if not self.accepts(event):
            LOGGER.debug(
                "Skipping %s/%s with kinds %s",
                event.package_name,
                event.target_name,
                sorted(self.kinds_of(event)),
            )
            return None

        suffix = platform_suffix(event.executable_path)
        destination_name = self._claim(self.base_name(event), suffix)
        return ResolvedArtifact(
            source_path=event.executable_path,
            destination_name=destination_name,
            executable=True,
            package_name=event.package_name,
            target_name=event.target_name,
        )

    def accepts(self, event: BuildEvent) -> bool:
        if not self.kinds:
            return True
        return bool(self.kinds_of(event) & self.kinds)

    def kinds_of(self, event: BuildEvent) -> frozenset[str]:
        """Kinds matched against the filter; unit-test harnesses only on request."""
        if self.include_unit_tests and event.is_unit_test_harness:
            return event.target_kinds | {TargetKind.TEST.value}
        return event.target_kinds

    def base_name(self, event: BuildEvent) -> str:
        name = event.package_name
        if event.target_name != event.package_name:
            name = f"{name}-{event.target_name}"
        if self.tag:
            name = f"{name}-{self.tag}"
        return name

    def _claim(self, base: str, suffix: str) -> str:
        base = safe_file_name(base)
        occurrence = self._base_counts.get(base, 0) + 1
        candidate = _with_occurrence(base, occurrence) + suffix
        # A literal target name can collide with a numbered repeat.
        while candidate in self._assigned:
            occurrence += 1
            candidate = _with_occurrence(base, occurrence) + suffix
        self._base_counts[base] = occurrence
        self._assigned.add(candidate)
        return candidate


def platform_suffix(source_path: Path) -> str:
    """Return the executable extension carried by ``source_path``, if any."""
    suffix = source_path.suffix
    if _PLATFORM_SUFFIX_RE.match(suffix):
        return suffix
    return ""


def safe_file_name(name: str) -> str:
    """Keep a log-derived name inside the output directory."""
    cleaned = _UNSAFE_CHARS_RE.sub("_", name)
    if cleaned.strip(".") == "":
        return "_" * max(len(cleaned), 1)
    return cleaned


def _with_occurrence(base: str, occurrence: int) -> str:
    if occurrence == 1:
        return base
    return f"{base}-{occurrence}"
