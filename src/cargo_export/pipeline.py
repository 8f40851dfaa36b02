"""Single-invocation export pipeline: build, parse, resolve, materialize."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence

from cargo_export.build.process import BuildProcess, build_command
from cargo_export.config.models import ExportConfig
from cargo_export.constants import EXIT_SIGNAL_BASE
from cargo_export.errors import (
    BuildFailedError,
    BuildInterruptedError,
    NothingExportedError,
)
from cargo_export.export.materializer import Materializer
from cargo_export.messages.parser import parse_messages
from cargo_export.resolver.naming import ArtifactResolver
from cargo_export.schemas.events import ExportSummary, ResolvedArtifact

LOGGER = logging.getLogger(__name__)

ProcessFactory = Callable[[list[str]], BuildProcess]

_SIGINT_STATUS = EXIT_SIGNAL_BASE + 2


class ExportPipeline:
    """Runs one export.

    Build output is streamed through the parser and resolver while the build
    runs; only resolved artifacts are kept. Copying starts once the build has
    exited successfully, so a failed build leaves the output directory alone.
    """

    def __init__(
        self,
        config: ExportConfig,
        output_dir: Path,
        *,
        process_factory: ProcessFactory = BuildProcess,
    ) -> None:
        self.config = config
        self.output_dir = output_dir
        self._process_factory = process_factory

    def run(self, forwarded_args: Sequence[str]) -> ExportSummary:
        command = build_command(
            forwarded_args,
            build_tool=self.config.build_command,
            default_options=self.config.default_options,
        )
        artifacts = self.collect(command)
        LOGGER.debug("Resolved %d artifact(s)", len(artifacts))

        summary = Materializer(self.output_dir).materialize(artifacts)
        if summary.count == 0 and self.config.fail_on_empty:
            raise NothingExportedError(self.config.kinds)
        return summary

    def collect(self, command: list[str]) -> list[ResolvedArtifact]:
        """Run the build and return resolved artifacts once it succeeds."""
        resolver = ArtifactResolver(
            self.config.kinds,
            tag=self.config.tag,
            include_unit_tests=self.config.include_unit_tests,
        )
        with self._process_factory(command) as process:
            try:
                artifacts = list(resolver.resolve(parse_messages(process.lines())))
                exit_code = process.wait()
            except KeyboardInterrupt:
                status = process.terminate()
                raise BuildInterruptedError(status or _SIGINT_STATUS) from None

        if exit_code != 0:
            raise BuildFailedError(exit_code)
        return artifacts
