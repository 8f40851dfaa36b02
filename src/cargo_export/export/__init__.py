"""Artifact materialization exports."""

from cargo_export.export.materializer import Materializer, ensure_executable

__all__ = ["Materializer", "ensure_executable"]
