"""Schema contract exports."""

from cargo_export.schemas.enums import MessageReason, TargetKind, normalize_target_kinds
from cargo_export.schemas.events import BuildEvent, ExportSummary, ResolvedArtifact

__all__ = [
    "BuildEvent",
    "ExportSummary",
    "MessageReason",
    "ResolvedArtifact",
    "TargetKind",
    "normalize_target_kinds",
]
