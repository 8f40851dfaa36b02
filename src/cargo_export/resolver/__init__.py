"""Artifact resolution exports."""

from cargo_export.resolver.naming import ArtifactResolver, platform_suffix, safe_file_name

__all__ = ["ArtifactResolver", "platform_suffix", "safe_file_name"]
