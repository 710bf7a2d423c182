"""
In-memory contact collection.

Owns the contact list, the user's selection (in click order) and the
change listeners that let a front end refresh after every mutation.

File: contacts/collection.py
Author: VCF Manager maintainers
Created: 2026-09-16
Last Modified: 2026-10-09
"""

import logging
from typing import Callable, Iterable, List, Optional

from ..models import Contact, NO_NAME
from ..vcard import parse

log = logging.getLogger(__name__)

ChangeListener = Callable[["ContactCollection"], None]


class ContactCollection:
    """
    The single owner of the contact list.

    Only this class and `MergeEngine.commit` mutate the list. Every mutation
    ends with `notify()`, which calls the registered listeners in order.
    """

    def __init__(self, contacts: Optional[Iterable[Contact]] = None):
        self._contacts: List[Contact] = list(contacts or [])
        self._listeners: List[ChangeListener] = []
        self.selected: List[str] = []  # Ids in selection order

    @property
    def contacts(self) -> List[Contact]:
        """Current contacts (a copy; mutate through the collection)."""
        return list(self._contacts)

    def __len__(self) -> int:
        return len(self._contacts)

    def __iter__(self):
        return iter(list(self._contacts))

    def __contains__(self, contact_id) -> bool:
        return self.find_by_id(contact_id) is not None

    def on_change(self, listener: ChangeListener) -> None:
        """Register a callback invoked after every mutation."""
        self._listeners.append(listener)

    def notify(self) -> None:
        for listener in self._listeners:
            listener(self)

    # Lookup

    def find_by_id(self, contact_id: str) -> Optional[Contact]:
        for contact in self._contacts:
            if contact.id == contact_id:
                return contact
        return None

    def resolve(self, ids: Iterable[str]) -> List[Contact]:
        """Contacts for the ids that are still live, in the order given."""
        found = []
        for contact_id in ids:
            contact = self.find_by_id(contact_id)
            if contact is not None:
                found.append(contact)
        return found

    def filtered(self, query: str = "", sort_alpha: bool = False) -> List[Contact]:
        """
        Contacts whose name contains `query` (case-insensitive) or whose
        phone numbers contain it.

        Args:
            query: Substring to look for, "" matches everything
            sort_alpha: Sort by name instead of keeping collection order

        Returns:
            Matching contacts
        """
        needle = query.lower()
        visible = [
            c for c in self._contacts
            if needle in c.full_name.lower() or any(needle in t for t in c.phones)
        ]
        if sort_alpha:
            visible.sort(key=lambda c: c.full_name.casefold())
        return visible

    # Mutation

    def load(self, contacts: Iterable[Contact]) -> None:
        """Replace the whole collection, dropping the selection."""
        self._contacts = list(contacts)
        self.selected = []
        log.info(f"Loaded {len(self._contacts)} contacts")
        self.notify()

    def load_text(self, text: str, no_name: str = NO_NAME) -> List[Contact]:
        """Replace the whole collection with the contacts parsed from `text`."""
        self.load(parse(text, no_name=no_name))
        return self.contacts

    def add(self, contact: Contact, front: bool = False) -> None:
        """
        Add a contact.

        Raises:
            ValueError: If a contact with the same id is already present
        """
        if self.find_by_id(contact.id) is not None:
            raise ValueError(f"Contact {contact.id} is already in the collection")
        if front:
            self._contacts.insert(0, contact)
        else:
            self._contacts.append(contact)
        self.notify()

    def remove(self, contact_id: str) -> Optional[Contact]:
        """Remove a contact by id. Returns the removed contact, None if unknown."""
        contact = self.find_by_id(contact_id)
        if contact is None:
            return None
        self._contacts.remove(contact)
        self._drop_from_selection([contact_id])
        self.notify()
        return contact

    def replace(self, ids: Iterable[str], contact: Contact) -> None:
        """
        Remove every contact in `ids` and insert `contact` at the front.

        Used to commit a merge, so the freshly edited record shows up first.
        """
        doomed = set(ids)
        self._contacts = [c for c in self._contacts if c.id not in doomed]
        self._contacts.insert(0, contact)
        self._drop_from_selection(doomed)
        self.notify()

    def clear(self) -> None:
        self._contacts = []
        self.selected = []
        self.notify()

    # Selection

    def toggle_select(self, contact_id: str) -> None:
        if contact_id in self.selected:
            self.selected.remove(contact_id)
        elif self.find_by_id(contact_id) is not None:
            self.selected.append(contact_id)
        else:
            log.debug(f"Ignoring selection of unknown contact {contact_id}")

    def select_all(self) -> None:
        for contact in self._contacts:
            if contact.id not in self.selected:
                self.selected.append(contact.id)

    def deselect_all(self) -> None:
        self.selected = []

    def delete_selected(self) -> int:
        """Delete every selected contact. Returns how many were removed."""
        doomed = set(self.selected)
        before = len(self._contacts)
        self._contacts = [c for c in self._contacts if c.id not in doomed]
        self.selected = []
        removed = before - len(self._contacts)
        log.info(f"Deleted {removed} contacts")
        self.notify()
        return removed

    def _drop_from_selection(self, ids: Iterable[str]) -> None:
        gone = set(ids)
        self.selected = [i for i in self.selected if i not in gone]
