"""
Phone number normalization and display formatting.

Normalized numbers are the join key for duplicate detection and are what
gets written on export, so normalization has to be stable: running it twice
must give the same result as running it once.

File: normalization/phone.py
Author: VCF Manager maintainers
Created: 2026-09-14
Last Modified: 2026-10-12
"""

import re
from typing import Optional

import phonenumbers

DEFAULT_COUNTRY_CODE = "+34"
MIN_PHONE_LENGTH = 9  # Shorter values are never given a country code

_NON_PHONE_CHARS = re.compile(r"[^0-9+]")

# UK landlines with a 2-digit area code (London, Southampton, ...)
UK_SHORT_AREA_CODES = ("20", "23", "24", "28", "29")
# Berlin, Munich, Hamburg, Frankfurt
DE_SHORT_AREA_CODES = ("30", "89", "40", "69")
DE_MOBILE_PREFIXES = ("15", "16", "17")


def normalize(
        raw: Optional[str],
        default_country_code: str = DEFAULT_COUNTRY_CODE,
        min_length: int = MIN_PHONE_LENGTH,
    ) -> str:
    """
    Normalize a phone number to international format.

    Non-restrictive: anything too short to safely attribute a country code
    (extensions, internal short codes) comes back cleaned but otherwise as-is.

    Args:
        raw: Raw phone number (may contain spaces, dashes, parentheses, ...)
        default_country_code: Calling code prepended to national numbers
        min_length: Minimum cleaned length before a country code is added

    Returns:
        Normalized number, e.g. "+34612345678", or "" for empty input

    Examples:
        >>> normalize("612 345 678")
        '+34612345678'
        >>> normalize("0034612345678")
        '+34612345678'
        >>> normalize("+1 (415) 555-1234")
        '+14155551234'
        >>> normalize("112")
        '112'
    """
    if not raw:
        return ""

    clean = _NON_PHONE_CHARS.sub("", raw)

    # 00 is the international access prefix in most of Europe
    if clean.startswith("00"):
        clean = "+" + clean[2:]

    if not clean.startswith("+") and len(clean) >= min_length:
        clean = default_country_code + clean

    return clean


def format(raw: Optional[str], default_country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """
    Format a phone number for display.

    Only spaces are inserted, so `normalize(format(x)) == normalize(x)`.
    Numbers outside the known country/length combinations are returned in
    their normalized form.

    Examples:
        >>> format("612345678")
        '+34 612 345 678'
        >>> format("+14155551234")
        '+1 415 555 1234'
        >>> format("+447911123456")
        '+44 7911 123456'
        >>> format("+33612345678")
        '+33 6 12 34 56 78'
    """
    number = normalize(raw, default_country_code)
    length = len(number)

    if number.startswith("+34") and length == 12:
        return _group(number, 3, 3, 3, 3)

    if number.startswith("+1") and length == 12:
        return _group(number, 2, 3, 3, 4)

    if number.startswith("+44") and length == 13:
        if number[3] == "7":
            return _group(number, 3, 4, 6)
        if number[3:5] in UK_SHORT_AREA_CODES:
            return _group(number, 3, 2, 4, 4)
        return _group(number, 3, 3, 7)

    if number.startswith("+33") and length == 12:
        return _group(number, 3, 1, 2, 2, 2, 2)

    if number.startswith("+49"):
        if length == 13 and number[3:5] in DE_MOBILE_PREFIXES:
            return _group(number, 3, 3, length - 6)
        if 13 <= length <= 14 and number[3:5] in DE_SHORT_AREA_CODES:
            return _group(number, 3, 2, length - 5)
        if 12 <= length <= 15:
            return _group(number, 3, 3, length - 6)

    return number


def _group(number: str, *sizes: int) -> str:
    """Split `number` into space-separated chunks of the given sizes."""
    if not number[1:].isdigit() or sum(sizes) != len(number):
        # Embedded '+' or a stray character; leave the digits alone
        return number

    parts = []
    pos = 0
    for size in sizes:
        parts.append(number[pos:pos + size])
        pos += size
    return " ".join(parts)


def country_code_for_region(region: str) -> str:
    """
    Resolve an ISO region ("ES", "US", "GB") to a "+<calling code>" prefix.

    Raises:
        ValueError: If the region is unknown to libphonenumber
    """
    code = phonenumbers.country_code_for_region(region.strip().upper())
    if not code:
        raise ValueError(f"Unknown phone region: {region!r}")
    return f"+{code}"
