"""
Contact record model.

File: models/contact.py
Author: VCF Manager maintainers
Created: 2026-09-14
Last Modified: 2026-10-12
"""

import uuid
from typing import Dict, List, Optional, Any

from pydantic import BaseModel, Field, ConfigDict

NO_NAME = "No Name"

# Optional scalar fields, in export order. Absent means None, never "".
OPTIONAL_FIELDS = (
    "title",
    "address",
    "note",
    "url",
    "birthday",
    "gender",
    "anniversary",
    "kind",
    "language",
    "nickname",
    "categories",
    "role",
    "geo",
    "timezone",
    "photo",
)

# Multi-value fields
LIST_FIELDS = ("phones", "emails", "impp")

SUPPORTED_VERSIONS = ("2.1", "3.0", "4.0")
LATEST_VERSION = "4.0"


def generate_contact_id() -> str:
    """Opaque id assigned once at parse/creation time."""
    return uuid.uuid4().hex


class Contact(BaseModel):
    """A single person/entity record read from (or written to) a vCard."""
    model_config = ConfigDict(
        validate_assignment=True,
        extra='ignore'
    )

    id: str = Field(default_factory=generate_contact_id, description="Unique, immutable record id", min_length=1)
    full_name: str = Field(NO_NAME, description="FN, falling back to N, falling back to the no-name sentinel")
    phones: List[str] = Field(default_factory=list, description="Phone numbers in encounter order")
    emails: List[str] = Field(default_factory=list, description="Email addresses in encounter order")
    organization: str = Field("", description="ORG, empty when unknown")

    title: Optional[str] = Field(None, description="Job title")
    address: Optional[str] = Field(None, description="ADR with component separators flattened to spaces")
    note: Optional[str] = Field(None, description="Free-text note")
    url: Optional[str] = Field(None, description="Website")
    birthday: Optional[str] = Field(None, description="BDAY as written in the source")

    # vCard 4.0 only
    gender: Optional[str] = Field(None, description="M/F/O/N/U or free text")
    anniversary: Optional[str] = Field(None, description="Anniversary date")
    kind: Optional[str] = Field(None, description="individual, group, org or location")
    language: Optional[str] = Field(None, description="LANG preference, e.g. 'es'")
    nickname: Optional[str] = Field(None, description="NICKNAME (comma separated in the source)")
    categories: Optional[str] = Field(None, description="CATEGORIES (comma separated in the source)")
    role: Optional[str] = Field(None, description="ROLE")
    geo: Optional[str] = Field(None, description="GEO, usually a geo: URI")
    timezone: Optional[str] = Field(None, description="TZ")
    photo: Optional[str] = Field(None, description="PHOTO reference (URI)")
    impp: List[str] = Field(default_factory=list, description="Instant messaging handles (IMPP)")

    original_version: Optional[str] = Field(None, description="vCard version detected on import")

    def copy_fields(self) -> Dict[str, Any]:
        """Field values with list fields copied, safe to hand to another record."""
        data = self.model_dump()
        for name in LIST_FIELDS:
            data[name] = list(data[name])
        return data
