"""
vCard parser.

Reads vCard 2.1, 3.0 and 4.0 text into Contact records. Parsing is tolerant:
every version goes through the same extraction rules, unknown
properties are ignored, and a block that cannot be read still produces a
contact (with the no-name sentinel) instead of failing the whole file.

File: vcard/parser.py
Author: VCF Manager maintainers
Created: 2026-09-15
Last Modified: 2026-10-19
"""

import logging
import re
from typing import Dict, List, Optional

from ..models import Contact, LATEST_VERSION, NO_NAME, SUPPORTED_VERSIONS
from .tokenizer import decode_value, group_properties, tokenize

log = logging.getLogger(__name__)

# Version assumed when a card has no VERSION line: the oldest one we read
DEFAULT_IMPORT_VERSION = SUPPORTED_VERSIONS[0]

BLOCK_START = re.compile(r"BEGIN:VCARD", re.IGNORECASE)
MIN_BLOCK_LENGTH = 5  # Fragments this short (after trimming) carry no data

# Optional scalar properties: vCard property -> Contact attribute
SCALAR_PROPERTIES = {
    "TITLE": "title",
    "NOTE": "note",
    "URL": "url",
    "BDAY": "birthday",
    "GENDER": "gender",
    "ANNIVERSARY": "anniversary",
    "KIND": "kind",
    "LANG": "language",
    "NICKNAME": "nickname",
    "CATEGORIES": "categories",
    "ROLE": "role",
    "GEO": "geo",
    "TZ": "timezone",
    "PHOTO": "photo",
}


def split_blocks(text: str) -> List[str]:
    """
    Split raw VCF content into per-card fragments.

    Args:
        text: Raw file content (any line endings, any number of cards)

    Returns:
        List of fragments that contain something worth parsing
    """
    normalized = text.replace("\r\n", "\n")
    return [
        block for block in BLOCK_START.split(normalized)
        if len(block.strip()) > MIN_BLOCK_LENGTH
    ]


def parse(text: str, no_name: str = NO_NAME) -> List[Contact]:
    """
    Parse VCF content into contacts.

    Example:
        >>> contacts = parse("BEGIN:VCARD\\nVERSION:3.0\\nFN:John Doe\\nTEL:612345678\\nEND:VCARD")
        >>> contacts[0].full_name, contacts[0].phones
        ('John Doe', ['612345678'])

    Args:
        text: Raw VCF file content (may contain multiple contacts)
        no_name: Name given to cards without FN or N

    Returns:
        List of contacts, one per card, in file order
    """
    if not text:
        return []

    contacts = []
    for block in split_blocks(text):
        try:
            contacts.append(parse_block(block, no_name))
        except Exception as e:
            # One bad card never costs the rest of the file
            log.warning(f"Could not parse vCard block, keeping an empty contact: {e}")
            contacts.append(Contact(full_name=no_name, original_version=DEFAULT_IMPORT_VERSION))

    log.info(f"Parsed {len(contacts)} contacts")
    return contacts


def parse_block(block: str, no_name: str = NO_NAME) -> Contact:
    """
    Parse a single vCard block into a Contact.

    Name resolution order is FN, then N (components joined with spaces),
    then `no_name`. Optional fields stay None when missing so the merge
    logic can tell "no data" from "explicitly blank".
    """
    props = group_properties(tokenize(block))

    def first(name: str) -> str:
        found = props.get(name)
        return found[0].value if found else ""

    def every(name: str) -> List[str]:
        return [decode_value(p.value) for p in props.get(name, [])]

    version = first("VERSION").strip() or DEFAULT_IMPORT_VERSION

    full_name = (
        decode_value(first("FN"))
        or decode_value(first("N").replace(";", " "))
        or no_name
    )

    fields: Dict[str, Optional[str]] = {
        attr: decode_value(first(name)) or None
        for name, attr in SCALAR_PROPERTIES.items()
    }
    fields["address"] = decode_value(first("ADR").replace(";", " ")) or None

    return Contact(
        full_name=full_name,
        phones=every("TEL"),
        emails=every("EMAIL"),
        organization=decode_value(first("ORG")),
        impp=every("IMPP"),
        original_version=version,
        **fields,
    )


def has_legacy_version_contacts(contacts: List[Contact]) -> bool:
    """
    Check whether any contact was imported from an older vCard version.

    A contact with no detected version is treated as the oldest supported
    one, so it counts as legacy too.
    """
    return any(c.original_version != LATEST_VERSION for c in contacts)
