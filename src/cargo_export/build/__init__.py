"""Build tool adapter exports."""

from cargo_export.build.process import BuildProcess, build_command, normalize_returncode

__all__ = ["BuildProcess", "build_command", "normalize_returncode"]
