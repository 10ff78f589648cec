"""Contact form validation and normalization.

Checks every recognized field and collects all problems in one pass so a
single response can list each violated field. On success only the trimmed,
recognized fields are returned; anything else in the raw payload is dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from app.schemas.contact import FieldError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_MAX_CHARS = 100
EMAIL_MAX_CHARS = 254
MESSAGE_MAX_CHARS = 5000

# Optional fields forwarded when present: field name -> max length
OPTIONAL_FIELDS: dict[str, int] = {
    "phone": 20,
    "company": 100,
}

RECOGNIZED_FIELDS = ("name", "email", "message", *OPTIONAL_FIELDS)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one raw payload.

    Attributes:
        is_valid: True when no field errors were found.
        data: Normalized recognized fields; None when invalid.
        errors: Field errors in field order; empty when valid.
    """

    is_valid: bool
    data: dict[str, str] | None = None
    errors: list[FieldError] = field(default_factory=list)


def _label(field_name: str) -> str:
    return field_name.capitalize()


def _required_text(
    raw: dict[str, Any],
    field_name: str,
    max_chars: int,
    errors: list[FieldError],
) -> str | None:
    """Return the trimmed value of a required text field, recording any error."""
    value = raw.get(field_name)
    label = _label(field_name)

    if value is None:
        errors.append(FieldError(field=field_name, message=f"{label} is required"))
        return None
    if not isinstance(value, str):
        errors.append(FieldError(field=field_name, message=f"{label} must be a string"))
        return None

    value = value.strip()
    if not value:
        errors.append(FieldError(field=field_name, message=f"{label} is required"))
        return None
    if len(value) > max_chars:
        errors.append(
            FieldError(
                field=field_name,
                message=f"{label} must be {max_chars} characters or less",
            )
        )
        return None
    return value


def _optional_text(
    raw: dict[str, Any],
    field_name: str,
    max_chars: int,
    errors: list[FieldError],
) -> str | None:
    value = raw.get(field_name)
    if value is None:
        return None

    label = _label(field_name)
    if not isinstance(value, str):
        errors.append(FieldError(field=field_name, message=f"{label} must be a string"))
        return None

    value = value.strip()
    if len(value) > max_chars:
        errors.append(
            FieldError(
                field=field_name,
                message=f"{label} must be {max_chars} characters or less",
            )
        )
        return None
    return value or None


def validate_contact_form(raw: Any) -> ValidationResult:
    """Validate and normalize a raw contact form payload.

    Rules:
    - name: required, trimmed, 1-100 characters
    - email: required, trimmed, email-shaped, at most 254 characters
    - message: required, trimmed, 1-5000 characters
    - phone, company: optional, trimmed, bounded length

    Args:
        raw: Decoded request body.

    Returns:
        ValidationResult with either normalized data or the full error list.

    Examples:
        >>> validate_contact_form({"name": " A ", "email": "a@b.com", "message": "hi"}).data
        {'name': 'A', 'email': 'a@b.com', 'message': 'hi'}
        >>> [e.field for e in validate_contact_form({}).errors]
        ['name', 'email', 'message']
    """
    if not isinstance(raw, dict):
        return ValidationResult(
            is_valid=False,
            errors=[FieldError(field="body", message="Request body must be a JSON object")],
        )

    errors: list[FieldError] = []

    name = _required_text(raw, "name", NAME_MAX_CHARS, errors)

    email = _required_text(raw, "email", EMAIL_MAX_CHARS, errors)
    if email is not None and not EMAIL_PATTERN.match(email):
        errors.append(FieldError(field="email", message="Please provide a valid email address"))
        email = None

    message = _required_text(raw, "message", MESSAGE_MAX_CHARS, errors)

    optional: dict[str, str] = {}
    for field_name, max_chars in OPTIONAL_FIELDS.items():
        value = _optional_text(raw, field_name, max_chars, errors)
        if value is not None:
            optional[field_name] = value

    if errors:
        return ValidationResult(is_valid=False, errors=errors)

    data = {"name": name, "email": email, "message": message, **optional}
    return ValidationResult(is_valid=True, data=data)  # type: ignore[arg-type]
