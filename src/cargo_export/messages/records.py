"""Raw build-log record shapes.

Only the fields needed for artifact export are declared; anything else the
build tool adds is ignored so new message fields never break parsing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _LenientRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class TargetRecord(_LenientRecord):
    name: str = Field(min_length=1)
    kind: list[str] = Field(default_factory=list)


class ProfileRecord(_LenientRecord):
    test: bool = False


class CompilerArtifactRecord(_LenientRecord):
    """``compiler-artifact`` message as emitted by ``--message-format=json``."""

    reason: str
    package_id: str = Field(min_length=1)
    target: TargetRecord
    profile: ProfileRecord = Field(default_factory=ProfileRecord)
    executable: str | None = None
