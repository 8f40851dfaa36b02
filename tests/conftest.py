"""Shared fixtures: cargo-style build records and a fake build tool."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable

import pytest


def artifact_record(
    *,
    package: str,
    target: str | None = None,
    kinds: list[str] | None = None,
    executable: str | Path | None = None,
    profile_test: bool = False,
    package_id: str | None = None,
) -> str:
    """Render one ``compiler-artifact`` line the way cargo prints it."""
    target_name = target or package
    return json.dumps(
        {
            "reason": "compiler-artifact",
            "package_id": package_id
            or f"path+file:///work/{package}#{package}@0.1.0",
            "manifest_path": f"/work/{package}/Cargo.toml",
            "target": {
                "kind": kinds or ["bin"],
                "crate_types": ["bin"],
                "name": target_name,
                "src_path": f"/work/{package}/src/main.rs",
                "edition": "2021",
                "doc": True,
                "doctest": False,
                "test": True,
            },
            "profile": {
                "opt_level": "0",
                "debuginfo": 2,
                "debug_assertions": True,
                "overflow_checks": True,
                "test": profile_test,
            },
            "features": [],
            "filenames": [str(executable)] if executable else [],
            "executable": str(executable) if executable else None,
            "fresh": False,
        }
    )


FAKE_BUILD_TOOL = '''
import json
import pathlib
import sys

spec = json.loads(pathlib.Path(sys.argv[1]).read_text(encoding="utf-8"))
pathlib.Path(spec["argv_log"]).write_text(json.dumps(sys.argv[2:]), encoding="utf-8")
for line in spec["lines"]:
    print(line, flush=True)
sys.stderr.write("   Compiling fake v0.1.0\\n")
sys.exit(spec["exit_code"])
'''


FakeBuildTool = Callable[..., list[str]]


@pytest.fixture
def fake_build_tool(tmp_path: Path) -> FakeBuildTool:
    """Return a factory producing a build command that replays given lines."""
    script = tmp_path / "fake_cargo.py"
    script.write_text(FAKE_BUILD_TOOL, encoding="utf-8")

    def _factory(lines: list[str], *, exit_code: int = 0) -> list[str]:
        spec_path = tmp_path / "fake_cargo.json"
        spec_path.write_text(
            json.dumps(
                {
                    "lines": lines,
                    "exit_code": exit_code,
                    "argv_log": str(tmp_path / "fake_cargo_argv.json"),
                }
            ),
            encoding="utf-8",
        )
        return [sys.executable, str(script), str(spec_path)]

    return _factory


@pytest.fixture
def make_executable(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Create a fake build output file under a hashed name."""
    build_dir = tmp_path / "target" / "debug" / "deps"

    def _factory(file_name: str, content: bytes = b"\x7fELF fake") -> Path:
        build_dir.mkdir(parents=True, exist_ok=True)
        path = build_dir / file_name
        path.write_bytes(content)
        path.chmod(0o755)
        return path

    return _factory


@pytest.fixture
def build_record() -> Callable[..., str]:
    return artifact_record
