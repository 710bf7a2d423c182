"""
vCard writer.

Serializes contacts as vCard text in a chosen version. Each property has its
own emitter returning the lines it contributes, so the version rules can be
checked one field at a time.

File: vcard/writer.py
Author: VCF Manager maintainers
Created: 2026-09-15
Last Modified: 2026-10-19
"""

import logging
from typing import Callable, List, Optional

from ..models import Contact, LATEST_VERSION, SUPPORTED_VERSIONS
from ..normalization import DEFAULT_COUNTRY_CODE, normalize_phone
from .tokenizer import encode_value

log = logging.getLogger(__name__)

# Only vCard 4.0 knows GENDER, KIND, ANNIVERSARY, LANG, ...
EXTENDED_FIELDS_VERSION = LATEST_VERSION

Emitter = Callable[[Contact, str], List[str]]


def supports_extended_fields(version: str) -> bool:
    """True if `version` can carry the vCard 4.0 only properties."""
    return version == EXTENDED_FIELDS_VERSION


def phone_type(version: str) -> str:
    """vCard 4.0 writes TYPE=cell, older versions TYPE=CELL."""
    return "cell" if version == EXTENDED_FIELDS_VERSION else "CELL"


def _line(name: str, value: Optional[str]) -> List[str]:
    return [f"{name}:{encode_value(value)}"] if value else []


# Always written

def emit_name(contact: Contact, version: str) -> List[str]:
    name = encode_value(contact.full_name)
    return [f"FN:{name}", f"N:;{name};;;"]


def emit_phones(
        contact: Contact,
        version: str,
        default_country_code: str = DEFAULT_COUNTRY_CODE,
    ) -> List[str]:
    """One TEL per number, re-normalized whatever form it was stored in."""
    tel_type = phone_type(version)
    return [
        f"TEL;TYPE={tel_type}:{normalize_phone(phone, default_country_code)}"
        for phone in contact.phones
    ]


def emit_emails(contact: Contact, version: str) -> List[str]:
    return [f"EMAIL:{encode_value(email)}" for email in contact.emails]


def emit_organization(contact: Contact, version: str) -> List[str]:
    return _line("ORG", contact.organization)


def emit_title(contact: Contact, version: str) -> List[str]:
    return _line("TITLE", contact.title)


def emit_address(contact: Contact, version: str) -> List[str]:
    # Whole address goes in the street component
    return [f"ADR:;;{encode_value(contact.address)};;;;"] if contact.address else []


def emit_note(contact: Contact, version: str) -> List[str]:
    return _line("NOTE", contact.note)


def emit_url(contact: Contact, version: str) -> List[str]:
    return _line("URL", contact.url)


def emit_birthday(contact: Contact, version: str) -> List[str]:
    return _line("BDAY", contact.birthday)


# vCard 4.0 only

def emit_gender(contact: Contact, version: str) -> List[str]:
    return _line("GENDER", contact.gender) if supports_extended_fields(version) else []


def emit_anniversary(contact: Contact, version: str) -> List[str]:
    return _line("ANNIVERSARY", contact.anniversary) if supports_extended_fields(version) else []


def emit_kind(contact: Contact, version: str) -> List[str]:
    return _line("KIND", contact.kind) if supports_extended_fields(version) else []


def emit_language(contact: Contact, version: str) -> List[str]:
    return _line("LANG", contact.language) if supports_extended_fields(version) else []


def emit_nickname(contact: Contact, version: str) -> List[str]:
    return _line("NICKNAME", contact.nickname) if supports_extended_fields(version) else []


def emit_categories(contact: Contact, version: str) -> List[str]:
    return _line("CATEGORIES", contact.categories) if supports_extended_fields(version) else []


def emit_role(contact: Contact, version: str) -> List[str]:
    return _line("ROLE", contact.role) if supports_extended_fields(version) else []


def emit_geo(contact: Contact, version: str) -> List[str]:
    return _line("GEO", contact.geo) if supports_extended_fields(version) else []


def emit_timezone(contact: Contact, version: str) -> List[str]:
    return _line("TZ", contact.timezone) if supports_extended_fields(version) else []


def emit_photo(contact: Contact, version: str) -> List[str]:
    return _line("PHOTO", contact.photo) if supports_extended_fields(version) else []


def emit_impp(contact: Contact, version: str) -> List[str]:
    if not supports_extended_fields(version):
        return []
    return [f"IMPP:{encode_value(handle)}" for handle in contact.impp if handle]


# Output order after the name and phones
FIELD_EMITTERS: List[Emitter] = [
    emit_emails,
    emit_organization,
    emit_title,
    emit_address,
    emit_note,
    emit_url,
    emit_birthday,
    emit_gender,
    emit_anniversary,
    emit_kind,
    emit_language,
    emit_nickname,
    emit_categories,
    emit_role,
    emit_geo,
    emit_timezone,
    emit_photo,
    emit_impp,
]


def serialize_contact(
        contact: Contact,
        version: str,
        default_country_code: str = DEFAULT_COUNTRY_CODE,
    ) -> str:
    """Serialize one contact as a BEGIN/END:VCARD block (trailing newline included)."""
    lines = ["BEGIN:VCARD", f"VERSION:{version}"]
    lines.extend(emit_name(contact, version))
    lines.extend(emit_phones(contact, version, default_country_code))
    for emitter in FIELD_EMITTERS:
        lines.extend(emitter(contact, version))
    lines.append("END:VCARD")
    return "\n".join(lines) + "\n"


def serialize(
        contacts: List[Contact],
        version: str = EXTENDED_FIELDS_VERSION,
        default_country_code: str = DEFAULT_COUNTRY_CODE,
    ) -> str:
    """
    Serialize contacts to VCF text.

    Fields the target version cannot represent are dropped silently.

    Args:
        contacts: Contacts to write, in order
        version: Target vCard version ("2.1", "3.0" or "4.0")
        default_country_code: Used when re-normalizing national phone numbers

    Returns:
        VCF content, "" for an empty list

    Raises:
        ValueError: If `version` is not a supported vCard version
    """
    if version not in SUPPORTED_VERSIONS:
        raise ValueError(f"Unsupported vCard version {version!r}. Must be one of: {SUPPORTED_VERSIONS}")

    output = "".join(serialize_contact(c, version, default_country_code) for c in contacts)
    log.debug(f"Serialized {len(contacts)} contacts as vCard {version}")
    return output
