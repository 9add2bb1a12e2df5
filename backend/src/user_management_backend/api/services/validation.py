"""Field rules for user records.

The rules mirror what the store accepts: ``name`` is trimmed and must keep
between 2 and 255 characters, ``age`` is an integer that fits the 32-bit
column and is not negative, ``email`` is trimmed, lowercased, at most 320
characters and must look like ``local@domain.tld``, ``address`` is free text.
Validation returns a :class:`ValidationResult` instead of raising so callers
decide how to report failures.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from user_management_backend.database.schemas.user import (
    AGE_MAX,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
)

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
AGE_PATTERN = re.compile(r"^[+-]?\d+$", re.ASCII)
NAME_MIN_LENGTH = 2
AGE_MIN = 0

USER_FIELDS = ("name", "age", "email", "address")
REQUIRED_FIELDS = frozenset({"name", "age", "email"})


@dataclass(slots=True)
class ValidationResult:
    """Normalized values plus per-field error messages."""

    values: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        """Human-readable summary of every failed field."""
        return "; ".join(f"{name}: {error}" for name, error in self.errors.items())


class FieldError(ValueError):
    """Raised by a single field rule."""


def _clean_name(value: Any) -> str:
    if not isinstance(value, str):
        msg = "Name must be a string"
        raise FieldError(msg)
    value = value.strip()
    if len(value) < NAME_MIN_LENGTH:
        msg = f"Name must be at least {NAME_MIN_LENGTH} characters"
        raise FieldError(msg)
    if len(value) > NAME_MAX_LENGTH:
        msg = f"Name must be at most {NAME_MAX_LENGTH} characters"
        raise FieldError(msg)
    return value


def _coerce_age(value: Any) -> int:
    if isinstance(value, bool):
        msg = "Age must be an integer"
        raise FieldError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and AGE_PATTERN.match(value.strip()):
        return int(value.strip())
    msg = "Age must be an integer"
    raise FieldError(msg)


def _clean_age(value: Any) -> int:
    age = _coerce_age(value)
    if age < AGE_MIN:
        msg = f"Age must be >= {AGE_MIN}"
        raise FieldError(msg)
    if age > AGE_MAX:
        msg = f"Age must be <= {AGE_MAX}"
        raise FieldError(msg)
    return age


def _clean_email(value: Any) -> str:
    if not isinstance(value, str):
        msg = "Email must be a string"
        raise FieldError(msg)
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        msg = "Email is invalid"
        raise FieldError(msg)
    if len(value) > EMAIL_MAX_LENGTH:
        msg = f"Email must be at most {EMAIL_MAX_LENGTH} characters"
        raise FieldError(msg)
    return value


def _clean_address(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    msg = "Address must be a string"
    raise FieldError(msg)


_RULES: dict[str, Callable[[Any], Any]] = {
    "name": _clean_name,
    "age": _clean_age,
    "email": _clean_email,
    "address": _clean_address,
}


def validate_user(data: Mapping[str, Any], *, partial: bool = False) -> ValidationResult:
    """Validate and normalize user fields found in *data*.

    With ``partial=False`` every required field must be present. With
    ``partial=True`` only the supplied fields are checked, which is how
    updates re-validate changed fields. Keys that are not user fields are
    dropped.
    """
    result = ValidationResult()
    for name in USER_FIELDS:
        if name not in data:
            if not partial and name in REQUIRED_FIELDS:
                result.errors[name] = f"{name.capitalize()} is required"
            continue
        value = data[name]
        if value is None and name in REQUIRED_FIELDS:
            result.errors[name] = f"{name.capitalize()} is required"
            continue
        try:
            result.values[name] = _RULES[name](value)
        except FieldError as exc:
            result.errors[name] = str(exc)
    return result


__all__ = [
    "EMAIL_PATTERN",
    "NAME_MIN_LENGTH",
    "USER_FIELDS",
    "ValidationResult",
    "validate_user",
]
