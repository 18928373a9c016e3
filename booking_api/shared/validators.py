"""Shared validation utilities"""

import os
import re
import time
from datetime import datetime, timezone
from typing import Any, Optional

from ..exceptions import ValidationError

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

# Basic email shape: something@something.something
EMAIL_PATTERN = re.compile(r".+@.+\..+")


def generate_object_id() -> str:
    """
    Generate a 24-hex-character identity reference.

    Layout: 4-byte big-endian creation timestamp followed by 8 random bytes,
    so ids sort roughly by creation time.
    """
    return int(time.time()).to_bytes(4, "big").hex() + os.urandom(8).hex()


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_PATTERN.match(value))


def validate_object_id(value: Any, field_name: str, required: bool = False) -> Optional[str]:
    """
    Validate an identity reference.

    Returns the normalized (lowercase) id, or None when the value is null and
    not required.

    Raises:
        ValidationError: If the value is missing but required, or malformed
    """
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    if not is_valid_object_id(value):
        raise ValidationError(f"{field_name} must be a valid ObjectId")
    return value.lower()


def parse_instant(value: Any, field_name: str, required: bool = False) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp into a naive UTC datetime.

    Offsets (including a trailing ``Z``) are converted to UTC; timestamps
    without an offset are taken as UTC already.

    Raises:
        ValidationError: If the value is missing but required, or not a valid date
    """
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as e:
            raise ValidationError(f"{field_name} must be a valid ISO date") from e
    else:
        raise ValidationError(f"{field_name} must be a valid ISO date")

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError as e:
            raise ValidationError(f"{field_name} is out of range") from e
    return parsed


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase, stripped email address

    Raises:
        ValueError: If email format is invalid
    """
    if email is None:
        return email

    email = email.strip().lower()

    if not EMAIL_PATTERN.fullmatch(email):
        raise ValueError("Invalid email format")

    return email


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def validate_path_id(value: str) -> str:
    """Reject malformed ids from the URL before any store access"""
    if not is_valid_object_id(value):
        raise ValidationError("Invalid ID")
    return value.lower()
