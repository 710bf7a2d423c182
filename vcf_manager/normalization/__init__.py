"""
Identifier normalization used for duplicate matching and export.

File: normalization/__init__.py
Author: VCF Manager maintainers
Created: 2026-09-14
Last Modified: 2026-09-14
"""

from .phone import (
    DEFAULT_COUNTRY_CODE,
    MIN_PHONE_LENGTH,
    country_code_for_region,
    format as format_phone,
    normalize as normalize_phone,
)

__all__ = [
    "DEFAULT_COUNTRY_CODE",
    "MIN_PHONE_LENGTH",
    "country_code_for_region",
    "format_phone",
    "normalize_phone",
]
