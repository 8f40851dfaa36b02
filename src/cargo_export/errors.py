"""Export error taxonomy.

Every error carries the process exit code the CLI reports for it. Parse-stage
anomalies never become errors; they are dropped by the message parser.
"""

from __future__ import annotations

from pathlib import Path

from cargo_export.constants import (
    EXIT_BUILD_NOT_LAUNCHED,
    EXIT_EXPORT_FAILED,
    EXIT_NOTHING_EXPORTED,
)


class ExportError(Exception):
    """Base class for failures surfaced to the caller."""

    exit_code = 1


class BuildLaunchError(ExportError):
    """The build tool could not be started."""

    exit_code = EXIT_BUILD_NOT_LAUNCHED

    def __init__(self, command: list[str], cause: OSError) -> None:
        self.command = command
        self.cause = cause
        super().__init__(f"Unable to launch build tool {command[0]!r}: {cause}")


class BuildFailedError(ExportError):
    """The build tool exited non-zero; its status is propagated unchanged."""

    def __init__(self, exit_code: int) -> None:
        self.exit_code = exit_code
        super().__init__(f"Build tool exited with status {exit_code}")


class MaterializeError(ExportError):
    """Creating the output directory or copying an artifact failed."""

    exit_code = EXIT_EXPORT_FAILED

    def __init__(
        self,
        *,
        destination: Path,
        cause: OSError,
        artifact_name: str | None = None,
        source_path: Path | None = None,
    ) -> None:
        self.destination = destination
        self.cause = cause
        self.artifact_name = artifact_name
        self.source_path = source_path
        if artifact_name is None:
            message = f"Unable to create output directory '{destination}': {cause}"
        else:
            message = (
                f"Unable to export '{artifact_name}' from '{source_path}' "
                f"to '{destination}': {cause}"
            )
        super().__init__(message)


class NothingExportedError(ExportError):
    """No artifact matched while the caller required at least one."""

    exit_code = EXIT_NOTHING_EXPORTED

    def __init__(self, kinds: frozenset[str]) -> None:
        self.kinds = kinds
        label = ", ".join(sorted(kinds)) if kinds else "any kind"
        super().__init__(f"No artifacts exported for requested kinds: {label}")


class BuildInterruptedError(BuildFailedError):
    """The export was interrupted and the build tool was stopped."""

    def __init__(self, exit_code: int) -> None:
        super().__init__(exit_code)
        self.args = (f"Interrupted; build tool stopped with status {exit_code}",)
