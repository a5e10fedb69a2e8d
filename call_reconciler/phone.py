"""Phone number canonicalisation and display helpers.

Every phone comparison in the package goes through :func:`normalize_phone`:
the canonical key is the last ten digits after stripping everything that is
not a digit, so ``+1 (206) 778-0089``, ``12067780089`` and ``206-778-0089``
all collapse to ``2067780089``.  Numbers with fewer than ten digits are
passed through unchanged and will rarely match anything.
"""
from __future__ import annotations

from typing import Optional

CANONICAL_LENGTH = 10


def phone_digits(raw: Optional[str]) -> str:
    """Return only the digit characters of *raw*."""

    if not raw:
        return ""
    return "".join(c for c in str(raw) if c.isdigit())


def normalize_phone(raw: Optional[str]) -> str:
    """Return the canonical comparison key for *raw*. Never raises."""

    return phone_digits(raw)[-CANONICAL_LENGTH:]


def is_valid_phone_number(raw: Optional[str]) -> bool:
    return len(phone_digits(raw)) in (10, 11)


def extract_area_code(raw: Optional[str]) -> Optional[str]:
    digits = phone_digits(raw)
    if len(digits) == 10:
        return digits[:3]
    if len(digits) == 11 and digits.startswith("1"):
        return digits[1:4]
    return None


def format_phone_display(raw: Optional[str]) -> str:
    """Format as ``(XXX) XXX-XXXX`` or ``+1 (XXX) XXX-XXXX``; other inputs are returned as given."""

    digits = phone_digits(raw)
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    return raw or ""


def to_e164(raw: Optional[str]) -> str:
    digits = phone_digits(raw)
    if not digits:
        return ""
    if len(digits) == 10:
        return f"+1{digits}"
    return f"+{digits}"


__all__ = [
    "CANONICAL_LENGTH",
    "extract_area_code",
    "format_phone_display",
    "is_valid_phone_number",
    "normalize_phone",
    "phone_digits",
    "to_e164",
]
