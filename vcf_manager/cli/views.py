"""
Rich renderables for contacts, duplicate groups and merge drafts.

File: cli/views.py
Author: VCF Manager maintainers
Created: 2026-09-21
Last Modified: 2026-10-19
"""

from typing import List, Sequence

from rich import box
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..config import AppConfig
from ..contacts import ContactCollection
from ..models import Contact, DuplicateGroup, LIST_FIELDS, OPTIONAL_FIELDS, PendingMerge
from ..normalization import format_phone


def contacts_table(contacts: Sequence[Contact], config: AppConfig, selected: Sequence[str] = ()) -> Table:
    """Numbered contact list; the number is what the menu prompts refer to."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("#", style="dim", width=4)
    table.add_column("Sel", style="magenta", width=3)
    table.add_column("Name", style="cyan")
    table.add_column("Organization", style="dim")
    table.add_column("Phones", style="white")
    table.add_column("Emails", style="green")

    limit = config.max_phones_display
    for i, contact in enumerate(contacts, 1):
        phones = [format_phone(p, config.default_country_code) for p in contact.phones[:limit]]
        if len(contact.phones) > limit:
            phones.append(f"+{len(contact.phones) - limit} more")

        mark = str(selected.index(contact.id) + 1) if contact.id in selected else ""
        table.add_row(
            str(i),
            mark,
            escape(contact.full_name),
            escape(contact.organization or ""),
            escape("\n".join(phones)),
            escape("\n".join(contact.emails)),
        )

    return table


def duplicate_groups_table(groups: List[DuplicateGroup], collection: ContactCollection, mode: str) -> Table:
    """Preview of the groups an auto-merge is about to walk through."""
    total = sum(len(group) for group in groups)
    table = Table(
        title=f"{len(groups)} {'group' if len(groups) == 1 else 'groups'}, "
              f"{total} contacts (detection by {mode})",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Group", style="dim", width=6)
    table.add_column("Contacts", style="cyan")
    table.add_column("First phone", style="white")

    for index, group in enumerate(groups, 1):
        members = collection.resolve(group)
        table.add_row(
            str(index),
            escape("\n".join(c.full_name or "No name" for c in members)),
            escape("\n".join(c.phones[0] if c.phones else "" for c in members)),
        )

    return table


def sources_table(pending: PendingMerge, config: AppConfig) -> Table:
    """Members of a merge, master first."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("#", style="dim", width=4)
    table.add_column("Role", width=8)
    table.add_column("Name", style="cyan")
    table.add_column("Phones", style="white")

    for i, contact in enumerate(pending.sources, 1):
        role = Text("MASTER", style="bold green") if i == 1 else Text("slave", style="dim")
        phones = "\n".join(format_phone(p, config.default_country_code) for p in contact.phones)
        table.add_row(str(i), role, escape(contact.full_name), escape(phones))

    return table


def draft_table(pending: PendingMerge, config: AppConfig) -> Table:
    """
    The combined record being edited. Optional fields only show up once
    some member (or the user) has given them a value.
    """
    draft = pending.draft
    title = "Edit" if pending.is_edit else f"Merge ({len(pending.member_ids)})"
    table = Table(title=title, box=box.SIMPLE, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("full_name", escape(draft.full_name))
    for field in LIST_FIELDS:
        entries = getattr(draft, field)
        if field == "phones":
            entries = [format_phone(p, config.default_country_code) for p in entries]
        lines = [f"[{i}] {value}" for i, value in enumerate(entries)]
        table.add_row(f"{field} ({len(entries)})", escape("\n".join(lines)))
    table.add_row("organization", escape(draft.organization))
    for field in OPTIONAL_FIELDS:
        value = getattr(draft, field)
        if value is not None:
            table.add_row(field, escape(value))

    return table
