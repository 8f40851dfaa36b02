"""Enum definitions for build-log contracts."""

from __future__ import annotations

from enum import Enum


class TargetKind(str, Enum):
    TEST = "test"
    BENCH = "bench"
    BIN = "bin"
    EXAMPLE = "example"


class MessageReason(str, Enum):
    COMPILER_ARTIFACT = "compiler-artifact"
    COMPILER_MESSAGE = "compiler-message"
    BUILD_SCRIPT_EXECUTED = "build-script-executed"
    BUILD_FINISHED = "build-finished"


HARNESS_KINDS = frozenset({TargetKind.TEST.value, TargetKind.BENCH.value})


def normalize_target_kinds(raw_values: list[str] | tuple[str, ...] | None) -> frozenset[str]:
    """Normalize requested kind labels into canonical values."""
    if not raw_values:
        return frozenset()
    normalized: set[str] = set()
    for raw_value in raw_values:
        value = raw_value.value if isinstance(raw_value, TargetKind) else raw_value
        label = value.strip().lower()
        if not label:
            continue
        try:
            normalized.add(TargetKind(label).value)
        except ValueError as exc:
            raise ValueError(f"Unsupported target kind: {raw_value}") from exc
    return frozenset(normalized)
