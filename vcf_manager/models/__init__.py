"""
Shared data models for VCF Manager.
"""

from .contact import (
    Contact,
    LATEST_VERSION,
    LIST_FIELDS,
    NO_NAME,
    OPTIONAL_FIELDS,
    SUPPORTED_VERSIONS,
    generate_contact_id,
)
from .pending_merge import DuplicateGroup, PendingMerge

__all__ = [
    "Contact",
    "DuplicateGroup",
    "LATEST_VERSION",
    "LIST_FIELDS",
    "NO_NAME",
    "OPTIONAL_FIELDS",
    "PendingMerge",
    "SUPPORTED_VERSIONS",
    "generate_contact_id",
]
