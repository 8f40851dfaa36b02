"""Build-log message parser."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

import orjson
from pydantic import ValidationError

from cargo_export.messages.package_id import package_name_from_id
from cargo_export.messages.records import CompilerArtifactRecord
from cargo_export.schemas.enums import MessageReason
from cargo_export.schemas.events import BuildEvent

LOGGER = logging.getLogger(__name__)

KNOWN_REASONS = frozenset(reason.value for reason in MessageReason)


def parse_messages(lines: Iterable[str | bytes]) -> Iterator[BuildEvent]:
    """Yield executable artifact events from a build log, in log order.

    Malformed lines, unknown reasons, other message kinds and artifacts
    without an executable are skipped without raising.
    """
    for line in lines:
        event = parse_line(line)
        if event is not None:
            yield event


def parse_line(line: str | bytes) -> BuildEvent | None:
    payload = _decode(line)
    if payload is None:
        return None
    reason = payload.get("reason")
    if not isinstance(reason, str) or reason not in KNOWN_REASONS:
        LOGGER.debug("Skipping record with unrecognized reason: %r", reason)
        return None
    if reason != MessageReason.COMPILER_ARTIFACT.value:
        return None

    try:
        record = CompilerArtifactRecord.model_validate(payload)
    except ValidationError as exc:
        LOGGER.debug("Skipping malformed artifact record: %s", exc)
        return None
    if not record.executable:
        return None

    package_name = package_name_from_id(record.package_id)
    if package_name is None:
        LOGGER.debug("Skipping artifact with unusable package id: %r", record.package_id)
        return None
    return BuildEvent(
        reason=record.reason,
        package_name=package_name,
        target_name=record.target.name,
        target_kinds=frozenset(record.target.kind),
        profile_is_test=record.profile.test,
        executable_path=Path(record.executable),
    )


def _decode(line: str | bytes) -> dict[str, Any] | None:
    text = line.strip()
    if not text:
        return None
    try:
        payload = orjson.loads(text)
    except orjson.JSONDecodeError:
        LOGGER.debug("Skipping non-JSON build output: %r", text[:200])
        return None
    if not isinstance(payload, dict):
        return None
    return payload
