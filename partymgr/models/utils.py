"""Utility helpers for the models package."""

from __future__ import annotations

import secrets
import string
from datetime import datetime, timezone
from typing import Any, Callable, Container, Mapping, Optional

BASE36_ALPHABET = string.digits + string.ascii_lowercase

Clock = Callable[[], int]


def generate_id(
    existing: Optional[Container[str]] = None,
    length: int = 7,
    max_attempts: int = 32,
) -> str:
    """Return a random base36 identifier.

    When ``existing`` is provided, the helper retries while the generated value
    is already taken.
    """

    attempts = 0
    while attempts < max_attempts:
        candidate = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))
        if existing is not None and candidate in existing:
            attempts += 1
            continue
        return candidate

    raise RuntimeError("Unable to generate a unique identifier after multiple attempts")


def now_ms() -> int:
    """Current time as integer milliseconds since the Unix epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def clean_text(value: object) -> Optional[str]:
    """Strip ``value`` and return ``None`` for missing or blank text."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def read_str(
    data: Mapping[str, Any],
    key: str,
    record: str,
    *,
    default: Optional[str] = None,
    required: bool = False,
) -> Optional[str]:
    """Read an optional text field from a stored document.

    A missing key yields ``default``. ``required`` fields must be present and
    non-empty.

    Raises
    ------
    ValueError
        If the value is not a string, or a required value is missing or empty.
    """
    if key not in data:
        if required:
            raise ValueError(f"{record} document is missing {key!r}")
        return default
    value = data[key]
    if value is None and not required:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{record} field {key!r} must be a string")
    if required and not value:
        raise ValueError(f"{record} field {key!r} must not be empty")
    return value


def read_int(data: Mapping[str, Any], key: str, record: str) -> int:
    """Read a required integer field; ``bool`` values are rejected."""
    if key not in data:
        raise ValueError(f"{record} document is missing {key!r}")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{record} field {key!r} must be an integer")
    return value


def read_bool(
    data: Mapping[str, Any], key: str, record: str, *, default: bool = False
) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{record} field {key!r} must be true or false")
    return value
