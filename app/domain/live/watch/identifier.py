"""Structural check for watch identifiers (canonical hyphenated UUIDs)."""

import re

from pydantic import BaseModel

# 8-4-4-4-12 hex, version nibble 1-8, variant nibble 8/9/a/b
_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-8][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


class IdentifierVerdict(BaseModel):
    valid: bool


def validate_identifier(value: object) -> IdentifierVerdict:
    """Return whether `value` is a canonical UUID string. Never raises."""
    if not isinstance(value, str) or not value:
        return IdentifierVerdict(valid=False)
    return IdentifierVerdict(valid=_UUID_PATTERN.fullmatch(value) is not None)


def is_valid_identifier(value: object) -> bool:
    return validate_identifier(value).valid
