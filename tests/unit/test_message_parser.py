"""Build-log message parser tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cargo_export.messages import package_name_from_id, parse_line, parse_messages


def test_artifact_record_becomes_build_event(build_record) -> None:  # type: ignore[no-untyped-def]
    """A compiler-artifact line with an executable yields one event."""
    line = build_record(
        package="app", kinds=["bin"], executable="/tmp/build/app-ab12"
    )

    events = list(parse_messages([line]))

    assert len(events) == 1
    event = events[0]
    assert event.reason == "compiler-artifact"
    assert event.package_name == "app"
    assert event.target_name == "app"
    assert event.target_kinds == frozenset({"bin"})
    assert event.profile_is_test is False
    assert event.executable_path == Path("/tmp/build/app-ab12")


def test_library_without_executable_is_dropped(build_record) -> None:  # type: ignore[no-untyped-def]
    """Pure library artifacts carry no executable and never reach the resolver."""
    line = build_record(package="mylib", kinds=["lib"], executable=None)
    assert list(parse_messages([line])) == []


def test_noise_lines_are_skipped_without_failing(build_record) -> None:  # type: ignore[no-untyped-def]
    """Diagnostic text between records is ignored and order is preserved."""
    lines = [
        build_record(package="a", executable="/tmp/a-1"),
        "warning: unused variable `x`",
        "",
        "{not json",
        "[1, 2, 3]",
        '"just a string"',
        build_record(package="b", executable="/tmp/b-2"),
    ]

    events = list(parse_messages(lines))

    assert [event.package_name for event in events] == ["a", "b"]


@pytest.mark.parametrize(
    "payload",
    [
        {"reason": "compiler-message", "message": {"rendered": "warning"}},
        {"reason": "build-script-executed", "package_id": "x 0.1.0 (path+file:///x)"},
        {"reason": "build-finished", "success": True},
        {"reason": "some-future-reason", "executable": "/tmp/x"},
        {"executable": "/tmp/x"},
        {"reason": ["compiler-artifact"], "executable": "/tmp/x"},
    ],
)
def test_other_reasons_are_dropped(payload: dict[str, object]) -> None:
    """Only compiler-artifact records are forwarded."""
    assert parse_line(json.dumps(payload)) is None


def test_artifact_missing_required_fields_is_skipped() -> None:
    """A compiler-artifact record without a target is treated as noise."""
    line = json.dumps(
        {
            "reason": "compiler-artifact",
            "package_id": "app 0.1.0 (path+file:///work/app)",
            "executable": "/tmp/app",
        }
    )
    assert parse_line(line) is None


def test_unknown_fields_are_ignored(build_record) -> None:  # type: ignore[no-untyped-def]
    """New fields added by future toolchains do not break parsing."""
    payload = json.loads(build_record(package="app", executable="/tmp/app-1"))
    payload["brand_new_field"] = {"nested": True}
    payload["target"]["another_new_field"] = 3

    event = parse_line(json.dumps(payload))

    assert event is not None
    assert event.package_name == "app"


def test_bytes_lines_and_trailing_newlines_are_accepted(build_record) -> None:  # type: ignore[no-untyped-def]
    line = build_record(package="app", executable="/tmp/app-1") + "\n"
    event = parse_line(line.encode("utf-8"))
    assert event is not None
    assert event.executable_path == Path("/tmp/app-1")


def test_profile_test_flag_is_carried(build_record) -> None:  # type: ignore[no-untyped-def]
    line = build_record(
        package="mylib", kinds=["lib"], executable="/tmp/mylib-9f", profile_test=True
    )
    event = parse_line(line)
    assert event is not None
    assert event.profile_is_test is True
    assert event.target_kinds == frozenset({"lib"})
    assert event.is_unit_test_harness is True


@pytest.mark.parametrize(
    ("package_id", "expected"),
    [
        ("app 0.1.0 (path+file:///work/app)", "app"),
        ("serde 1.0.197 (registry+https://github.com/rust-lang/crates.io-index)", "serde"),
        ("path+file:///work/my-app#0.1.0", "my-app"),
        ("path+file:///work/dir#my-app@0.1.0", "my-app"),
        ("registry+https://github.com/rust-lang/crates.io-index#serde@1.0.197", "serde"),
        ("git+https://github.com/org/repo?branch=main#tool@0.2.0", "tool"),
        ("path+file:///work/dir#renamed", "renamed"),
        ("path+file:///work/app", "app"),
        ("path+file:///work/app#1.0.0-beta.1", "app"),
    ],
)
def test_package_name_from_id(package_id: str, expected: str) -> None:
    """Both legacy and package-id-spec encodings resolve to the package name."""
    assert package_name_from_id(package_id) == expected


def test_legacy_package_id_in_record(build_record) -> None:  # type: ignore[no-untyped-def]
    line = build_record(
        package="ignored",
        target="worker",
        executable="/tmp/worker-1",
        package_id="service 0.3.1 (path+file:///srv/service)",
    )
    event = parse_line(line)
    assert event is not None
    assert event.package_name == "service"
    assert event.target_name == "worker"
