"""Field-error accumulator and reusable rule helpers.

A Validator collects one message per field; the first failure recorded for a
field wins. Create a fresh instance per validation pass.
"""

import re
from typing import Any, Dict, Iterable, Pattern

from pydantic import EmailStr, HttpUrl, TypeAdapter, ValidationError


# Optional +country code, then 7-15 digits with spaces, dots, dashes or parentheses
PHONE_RX: Pattern[str] = re.compile(
    r"^(?=(?:\D*\d){7,15}\D*$)\+?\(?[0-9]{1,4}\)?(?:[-. ]?\(?[0-9]{1,4}\)?){1,5}$"
)

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(HttpUrl)


class Validator:
    """Accumulates named validation failures."""

    def __init__(self):
        self.errors: Dict[str, str] = {}

    def valid(self) -> bool:
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        if key not in self.errors:
            self.errors[key] = message

    def check(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_error(key, message)


def matches(value: str, rx: Pattern[str]) -> bool:
    return rx.fullmatch(value) is not None


def unique(values: Iterable[Any]) -> bool:
    seen = set()
    for value in values:
        if value in seen:
            return False
        seen.add(value)
    return True


def valid_email(value: str) -> bool:
    """Bare address with a real domain (no display name)."""
    if not value or "<" in value:
        return False
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def valid_website(value: str) -> bool:
    """Absolute http(s) URL with a host and no whitespace."""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def byte_length(value: str) -> int:
    """UTF-8 byte length (limits are expressed in bytes, not characters)."""
    return len(value.encode("utf-8"))
