"""
Duplicate detection.

Two independent passes: identical names (case-insensitive) and shared phone
numbers (after normalization). Each returns a list of id groups with at
least two members.

File: dedupe/detector.py
Author: VCF Manager maintainers
Created: 2026-09-17
Last Modified: 2026-10-04
"""

import logging
from typing import Dict, List, Sequence, Set, Tuple

from ..models import Contact, DuplicateGroup
from ..normalization import DEFAULT_COUNTRY_CODE, normalize_phone

log = logging.getLogger(__name__)

DETECTION_MODES = ("name", "phone")


def name_key(name: str) -> str:
    """Matching key for a name: trimmed and case-folded."""
    return name.strip().casefold()


def find_groups_by_name(contacts: Sequence[Contact]) -> List[DuplicateGroup]:
    """
    Group contacts with the same name.

    Contacts whose name is empty after trimming are never grouped. Group
    order and member order follow the order the contacts were given in.

    Returns:
        List of id groups, each with at least two members
    """
    groups: Dict[str, DuplicateGroup] = {}
    for contact in contacts:
        key = name_key(contact.full_name)
        if not key:
            continue
        groups.setdefault(key, []).append(contact.id)

    found = [ids for ids in groups.values() if len(ids) > 1]
    log.debug(f"Name pass: {len(found)} duplicate groups in {len(contacts)} contacts")
    return found


def find_groups_by_phone(
        contacts: Sequence[Contact],
        default_country_code: str = DEFAULT_COUNTRY_CODE,
    ) -> List[DuplicateGroup]:
    """
    Group contacts sharing a normalized phone number.

    Two contacts sharing several numbers are reported once: candidate groups
    are deduplicated on their sorted id set. Groups are not merged
    transitively, so if A and B share one number and B and C share another,
    the result holds [A, B] and [B, C] rather than [A, B, C].

    Args:
        contacts: Contacts to scan
        default_country_code: Calling code used to normalize national numbers

    Returns:
        List of id groups (ids sorted within each group), each with at least
        two members
    """
    phone_map: Dict[str, List[str]] = {}
    for contact in contacts:
        for phone in contact.phones:
            normalized = normalize_phone(phone, default_country_code)
            if not normalized:
                continue
            ids = phone_map.setdefault(normalized, [])
            if contact.id not in ids:
                ids.append(contact.id)

    seen: Set[Tuple[str, ...]] = set()
    found: List[DuplicateGroup] = []
    for ids in phone_map.values():
        if len(ids) < 2:
            continue
        key = tuple(sorted(ids))
        if key in seen:
            continue
        seen.add(key)
        found.append(list(key))

    log.debug(f"Phone pass: {len(found)} duplicate groups in {len(contacts)} contacts")
    return found


def find_groups(
        contacts: Sequence[Contact],
        mode: str,
        default_country_code: str = DEFAULT_COUNTRY_CODE,
    ) -> List[DuplicateGroup]:
    """
    Run the detection pass named by `mode`.

    Raises:
        ValueError: If mode is not "name" or "phone"
    """
    if mode == "name":
        return find_groups_by_name(contacts)
    if mode == "phone":
        return find_groups_by_phone(contacts, default_country_code)
    raise ValueError(f"Invalid detection mode. Must be one of: {DETECTION_MODES}")
