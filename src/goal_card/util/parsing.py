"""Shared parsing helpers for tolerant numeric/string coercion."""

from __future__ import annotations

from typing import Any


def safe_float(value: Any) -> float | None:
    """Parse number-like input into float, returning None when invalid."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return float(raw)
        except ValueError:
            return None
    return None


def safe_int(value: Any) -> int | None:
    """Parse an identifier such as a league id; fractional numbers are rejected."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    number = safe_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def safe_text(value: Any) -> str:
    """Stringify optional request fields, mapping None to an empty string."""
    if value is None:
        return ""
    return str(value).strip()
