"""
Merge session state.

File: models/pending_merge.py
Author: VCF Manager maintainers
Created: 2026-09-16
Last Modified: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import List

from .contact import Contact

# An ordered list of >= 2 contact ids believed to be the same entity
DuplicateGroup = List[str]


@dataclass
class PendingMerge:
    """
    An open merge (or single-contact edit) session.

    `draft` is the in-progress combined record and is edited in place by
    whoever holds this object until the engine commits or aborts it.
    """

    master_id: str
    member_ids: List[str]  # Master first
    draft: Contact
    sources: List[Contact] = field(default_factory=list)
    # Member order as opened by begin(); master switches reorder from this
    begin_order: List[str] = field(default_factory=list)

    @property
    def is_edit(self) -> bool:
        """True when only one contact is involved (plain edit, no merge)."""
        return len(self.member_ids) == 1

    @property
    def slave_ids(self) -> List[str]:
        return self.member_ids[1:]
