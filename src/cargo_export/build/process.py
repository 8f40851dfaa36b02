"""Build tool process adapter."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Iterator, Sequence

from cargo_export.constants import (
    EXIT_SIGNAL_BASE,
    MESSAGE_FORMAT_OPTION,
    NO_RUN_OPTION,
    NO_RUN_SUBCOMMANDS,
)
from cargo_export.errors import BuildLaunchError

LOGGER = logging.getLogger(__name__)


def build_command(
    forwarded_args: Sequence[str],
    *,
    build_tool: Sequence[str],
    default_options: bool = True,
) -> list[str]:
    """Assemble the build tool invocation.

    Default options go right after the build subcommand: structured messages
    always, and ``--no-run`` for test and bench builds.
    """
    if not build_tool:
        raise ValueError("build tool command must not be empty")
    if not forwarded_args:
        raise ValueError("missing build tool subcommand (e.g. `-- test`)")

    subcommand, *rest = forwarded_args
    inserted: list[str] = []
    if default_options:
        if not any(arg.startswith("--message-format") for arg in rest):
            inserted.append(MESSAGE_FORMAT_OPTION)
        if subcommand in NO_RUN_SUBCOMMANDS and NO_RUN_OPTION not in rest:
            inserted.append(NO_RUN_OPTION)
    return [*build_tool, subcommand, *inserted, *rest]


def normalize_returncode(returncode: int) -> int:
    """Map a signal death (negative return code) to the shell convention."""
    if returncode < 0:
        return EXIT_SIGNAL_BASE - returncode
    return returncode


class BuildProcess:
    """Runs the build tool and exposes its stdout as lines.

    Standard error is inherited so diagnostics reach the caller unmodified.
    """

    def __init__(self, command: Sequence[str], *, cwd: Path | None = None) -> None:
        self.command = list(command)
        self.cwd = cwd
        self._process: subprocess.Popen[str] | None = None

    def __enter__(self) -> "BuildProcess":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        if exc_type is not None:
            self.terminate()

    def start(self) -> None:
        LOGGER.debug("Running build command: %s", " ".join(self.command))
        try:
            self._process = subprocess.Popen(
                self.command,
                stdout=subprocess.PIPE,
                stderr=None,
                stdin=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=self.cwd,
            )
        except OSError as exc:
            raise BuildLaunchError(self.command, exc) from exc

    def lines(self) -> Iterator[str]:
        process = self._require_process()
        assert process.stdout is not None
        for line in process.stdout:
            yield line.rstrip("\r\n")

    def wait(self) -> int:
        process = self._require_process()
        if process.stdout is not None:
            process.stdout.close()
        return normalize_returncode(process.wait())

    def terminate(self) -> int | None:
        """Stop the child if still running and return its status."""
        process = self._process
        if process is None:
            return None
        if process.poll() is None:
            LOGGER.debug("Terminating build process %s", process.pid)
            process.terminate()
            try:
                process.wait(timeout=10)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
        if process.stdout is not None:
            process.stdout.close()
        return normalize_returncode(process.returncode)

    def _require_process(self) -> subprocess.Popen[str]:
        if self._process is None:
            raise RuntimeError("build process has not been started")
        return self._process
