"""
Master/slave merge engine.

Combines an ordered list of contacts into one editable draft. The first id
is the master: it always supplies the name and wins every scalar field it
has a value for. Slaves fill the gaps in member order, and list fields are
the de-duplicated union of everyone's entries.

File: dedupe/merge_engine.py
Author: VCF Manager maintainers
Created: 2026-09-17
Last Modified: 2026-10-19
"""

import logging
from typing import Iterable, List, Optional, Sequence

from ..contacts import ContactCollection
from ..models import Contact, LIST_FIELDS, OPTIONAL_FIELDS, PendingMerge
from ..normalization import DEFAULT_COUNTRY_CODE, normalize_phone

log = logging.getLogger(__name__)


def longest_name_first(contacts: Sequence[Contact]) -> List[Contact]:
    """
    Default master heuristic: the longer name is assumed to be the more
    complete record. Ties keep their original order.
    """
    return sorted(contacts, key=lambda c: len(c.full_name), reverse=True)


def _union(values: Iterable[str]) -> List[str]:
    """First-seen order, duplicates and empty strings dropped."""
    seen = set()
    combined = []
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        combined.append(value)
    return combined


def combine(
        master: Contact,
        slaves: Sequence[Contact],
        default_country_code: str = DEFAULT_COUNTRY_CODE,
    ) -> Contact:
    """
    Build the combined draft for `master` and its `slaves`.

    Args:
        master: Contact whose identity survives
        slaves: Other members, in priority order
        default_country_code: Used to normalize phones before de-duplicating

    Returns:
        A new Contact carrying the master's id
    """
    members = [master, *slaves]

    fields = {}
    for name in OPTIONAL_FIELDS:
        fields[name] = next(
            (getattr(c, name) for c in members if getattr(c, name) is not None),
            None,
        )

    return Contact(
        id=master.id,
        full_name=master.full_name,
        phones=_union(
            normalize_phone(phone, default_country_code)
            for c in members for phone in c.phones
        ),
        emails=_union(email for c in members for email in c.emails),
        impp=_union(handle for c in members for handle in c.impp),
        organization=next((c.organization for c in members if c.organization), ""),
        original_version=master.original_version,
        **fields,
    )


class MergeEngine:
    """
    Runs one merge (or single-contact edit) session at a time against a
    contact collection.

    Usage:
        >>> pending = engine.begin([master_id, slave_id])
        >>> pending.draft.note = "merged"
        >>> merged = engine.commit()
    """

    def __init__(
            self,
            collection: ContactCollection,
            default_country_code: str = DEFAULT_COUNTRY_CODE,
        ):
        self.collection = collection
        self.default_country_code = default_country_code
        self.pending: Optional[PendingMerge] = None

    @property
    def is_open(self) -> bool:
        return self.pending is not None

    def begin(self, ordered_ids: Sequence[str]) -> PendingMerge:
        """
        Open a merge session. The first id is the master.

        A single id opens a plain edit of that contact. Slave ids that no
        longer resolve to a contact are left out.

        Raises:
            RuntimeError: If a session is already open
            ValueError: If no ids are given or the master id is unknown
        """
        if self.pending is not None:
            raise RuntimeError("A merge is already in progress; commit or abort it first")
        if not ordered_ids:
            raise ValueError("Cannot begin a merge without contact ids")

        self.pending = self._build(list(dict.fromkeys(ordered_ids)))
        log.info(
            f"Merge opened for {len(self.pending.member_ids)} contacts, "
            f"master '{self.pending.draft.full_name}'"
        )
        return self.pending

    def set_master(self, new_master_id: str) -> PendingMerge:
        """
        Make another member the master and rebuild the draft from scratch.

        Every field is recomputed, so edits made to the draft so far are lost.
        The other members keep the order they had when the merge was opened,
        so switching away and back gives the original draft.

        Raises:
            RuntimeError: If no session is open
            ValueError: If `new_master_id` is not a member of the session
        """
        pending = self._require_pending()
        if new_master_id == pending.master_id:
            return pending
        if new_master_id not in pending.member_ids:
            raise ValueError(f"Contact {new_master_id} is not part of this merge")

        new_order = [new_master_id] + [i for i in pending.begin_order if i != new_master_id]
        self.pending = self._build(new_order, begin_order=pending.begin_order)
        log.debug(f"Master changed to '{self.pending.draft.full_name}'")
        return self.pending

    def add_list_entry(self, field: str, value: str = "") -> None:
        """Append `value` to a list field of the draft (phones, emails, impp)."""
        self._draft_list(field).append(value)

    def set_list_entry(self, field: str, index: int, value: str) -> None:
        """
        Replace one entry of a list field.

        Raises:
            IndexError: If `index` is out of range
        """
        entries = self._draft_list(field)
        self._check_index(field, entries, index)
        entries[index] = value

    def remove_list_entry(self, field: str, index: int) -> str:
        """
        Remove one entry of a list field and return it.

        Raises:
            ValueError: If `field` is not a list field
            IndexError: If `index` is out of range
        """
        entries = self._draft_list(field)
        self._check_index(field, entries, index)
        return entries.pop(index)

    def add_custom_field(self, field: str) -> None:
        """
        Make an absent optional field editable by setting it to "".

        Raises:
            ValueError: If `field` is not an optional contact field
        """
        pending = self._require_pending()
        if field not in OPTIONAL_FIELDS:
            raise ValueError(f"Invalid field. Must be one of: {OPTIONAL_FIELDS}")
        if getattr(pending.draft, field) is None:
            setattr(pending.draft, field, "")

    def commit(self) -> Contact:
        """
        Apply the draft to the collection.

        Every member contact is replaced by a single record that keeps the
        master's id, inserted at the front of the collection. Empty entries
        in list fields are dropped.

        Returns:
            The merged contact

        Raises:
            RuntimeError: If no session is open
        """
        pending = self._require_pending()

        data = pending.draft.copy_fields()
        for name in LIST_FIELDS:
            data[name] = [v for v in data[name] if v]
        data["id"] = pending.master_id
        merged = Contact(**data)

        self.collection.replace(pending.member_ids, merged)
        self.pending = None

        log.info(f"Committed '{merged.full_name}' ({len(pending.member_ids)} contacts combined)")
        return merged

    def abort(self) -> None:
        """Discard the open session, if any, without touching the collection."""
        if self.pending is not None:
            log.info(f"Merge for '{self.pending.draft.full_name}' discarded")
        self.pending = None

    def _build(self, ordered_ids: List[str], begin_order: Optional[List[str]] = None) -> PendingMerge:
        master = self.collection.find_by_id(ordered_ids[0])
        if master is None:
            raise ValueError(f"Master contact {ordered_ids[0]} not found")

        slaves = self.collection.resolve(ordered_ids[1:])
        if len(slaves) < len(ordered_ids) - 1:
            log.debug(f"Skipping {len(ordered_ids) - 1 - len(slaves)} contacts that no longer exist")

        member_ids = [master.id] + [s.id for s in slaves]
        return PendingMerge(
            master_id=master.id,
            member_ids=member_ids,
            begin_order=list(begin_order or member_ids),
            draft=combine(master, slaves, self.default_country_code),
            sources=[master, *slaves],
        )

    def _require_pending(self) -> PendingMerge:
        if self.pending is None:
            raise RuntimeError("No merge in progress")
        return self.pending

    def _draft_list(self, field: str) -> List[str]:
        pending = self._require_pending()
        if field not in LIST_FIELDS:
            raise ValueError(f"Invalid list field. Must be one of: {LIST_FIELDS}")
        return getattr(pending.draft, field)

    @staticmethod
    def _check_index(field: str, entries: List[str], index: int) -> None:
        if not 0 <= index < len(entries):
            raise IndexError(f"{field} has no entry at index {index} (size {len(entries)})")
