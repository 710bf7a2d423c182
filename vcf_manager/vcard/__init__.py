"""
vCard parsing and serialization.

File: vcard/__init__.py
Author: VCF Manager maintainers
Created: 2026-09-15
Last Modified: 2026-10-19
"""

from .export import export_contacts, export_filename, read_vcf_file
from .parser import (
    DEFAULT_IMPORT_VERSION,
    LATEST_VERSION,
    has_legacy_version_contacts,
    parse,
    parse_block,
    split_blocks,
)
from .tokenizer import Property, decode_value, encode_value, tokenize
from .writer import SUPPORTED_VERSIONS, serialize, serialize_contact

__all__ = [
    "DEFAULT_IMPORT_VERSION",
    "LATEST_VERSION",
    "SUPPORTED_VERSIONS",
    "Property",
    "decode_value",
    "encode_value",
    "export_contacts",
    "export_filename",
    "has_legacy_version_contacts",
    "parse",
    "parse_block",
    "read_vcf_file",
    "serialize",
    "serialize_contact",
    "split_blocks",
    "tokenize",
]
