"""Package-wide constants."""

from __future__ import annotations

PACKAGE_VERSION = "0.3.0"

DEFAULT_BUILD_TOOL = "cargo"
MESSAGE_FORMAT_OPTION = "--message-format=json"
NO_RUN_OPTION = "--no-run"
NO_RUN_SUBCOMMANDS = frozenset({"test", "bench"})

EXIT_NOTHING_EXPORTED = 66
EXIT_EXPORT_FAILED = 74
EXIT_BUILD_NOT_LAUNCHED = 127
EXIT_SIGNAL_BASE = 128
