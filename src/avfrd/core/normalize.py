"""Normalization utilities for identifiers and names.

This module provides a single source of truth for normalizing:
- Record identifiers (training, employee and position ids)
- Email addresses (for admin allowlist comparison)
- Names (for display)

Ids arrive as both numbers (HR system) and strings (internal storage), so
every id entering the qualification code passes through to_canonical_id
before it is compared with anything.
"""

import re


def to_canonical_id(value: str | int | float | None) -> str:
    """Convert an identifier to its canonical string form.

    Args:
        value: Raw id as a string, integer, integral float, or None

    Returns:
        Stripped string id ("5" for 5, 5.0 and " 5 "), or "" for None
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def normalize_email(email: str | None) -> str | None:
    """Normalize email for comparison (lowercase, stripped).

    Args:
        email: Email address

    Returns:
        Lowercase stripped email or None
    """
    if not email:
        return None
    return email.lower().strip()


def clean_name_for_display(name: str | None) -> str:
    """Clean a name for display purposes.

    Strips whitespace and normalizes internal spacing.

    Args:
        name: Name string

    Returns:
        Cleaned name or empty string
    """
    if not name:
        return ""
    return re.sub(r"\s+", " ", name.strip())
