"""Build-log parsing exports."""

from cargo_export.messages.package_id import package_name_from_id
from cargo_export.messages.parser import parse_line, parse_messages

__all__ = ["package_name_from_id", "parse_line", "parse_messages"]
