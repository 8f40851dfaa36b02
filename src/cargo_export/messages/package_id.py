"""Package name extraction from Cargo package identifiers."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

_VERSION_RE = re.compile(r"^\d+(\.\d+)*([-+].*)?$")


def package_name_from_id(package_id: str) -> str | None:
    """Return the package name encoded in a Cargo ``package_id``.

    Two encodings exist. Older toolchains emit ``name version (source)``;
    newer ones emit a package-id spec such as
    ``path+file:///work/app#0.1.0`` or
    ``registry+https://github.com/rust-lang/crates.io-index#serde@1.0.0``.
    """
    value = package_id.strip()
    if not value:
        return None
    if " " in value:
        return value.split(" ", 1)[0]

    source, _, fragment = value.partition("#")
    if fragment:
        name, at, _ = fragment.partition("@")
        if at:
            return name or None
        if not _VERSION_RE.match(fragment):
            return fragment
    return _last_path_segment(source)


def _last_path_segment(source: str) -> str | None:
    kind, plus, rest = source.partition("+")
    url = rest if plus and "/" not in kind else source
    path = urlsplit(url).path if "://" in url else url
    segment = path.rstrip("/").rsplit("/", 1)[-1]
    return segment or None
