"""Copy resolved artifacts into the output directory."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Iterable

from cargo_export.errors import MaterializeError
from cargo_export.schemas.events import ExportSummary, ResolvedArtifact

LOGGER = logging.getLogger(__name__)


class Materializer:
    """Writes artifacts under their resolved names, aborting on first failure."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir

    def prepare(self) -> Path:
        """Create the output directory (and parents) before any copy."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise MaterializeError(destination=self.output_dir, cause=exc) from exc
        if not self.output_dir.is_dir():
            raise MaterializeError(
                destination=self.output_dir,
                cause=NotADirectoryError(f"Not a directory: {self.output_dir}"),
            )
        return self.output_dir

    def materialize(self, artifacts: Iterable[ResolvedArtifact]) -> ExportSummary:
        self.prepare()
        exported: list[ResolvedArtifact] = []
        for artifact in artifacts:
            self.copy_artifact(artifact)
            exported.append(artifact)
        return ExportSummary(output_dir=self.output_dir, exported=tuple(exported))

    def copy_artifact(self, artifact: ResolvedArtifact) -> Path:
        destination = self.output_dir / artifact.destination_name
        staging = self.output_dir / f".{artifact.destination_name}.partial"
        LOGGER.info("Copying '%s' to '%s'", artifact.source_path, destination)
        try:
            shutil.copyfile(artifact.source_path, staging)
            shutil.copymode(artifact.source_path, staging)
            if artifact.executable:
                ensure_executable(staging)
            os.replace(staging, destination)
        except OSError as exc:
            with contextlib.suppress(OSError):
                staging.unlink(missing_ok=True)
            raise MaterializeError(
                destination=destination,
                cause=exc,
                artifact_name=artifact.destination_name,
                source_path=artifact.source_path,
            ) from exc
        return destination


def ensure_executable(path: Path) -> None:
    """Grant execute permission wherever read permission is granted."""
    if os.name == "nt":
        return
    mode = path.stat().st_mode
    exec_bits = stat.S_IXUSR
    if mode & stat.S_IRGRP:
        exec_bits |= stat.S_IXGRP
    if mode & stat.S_IROTH:
        exec_bits |= stat.S_IXOTH
    if mode & exec_bits != exec_bits:
        path.chmod(stat.S_IMODE(mode) | exec_bits)
