"""
Terminal presenter for duplicate previews and merge drafts.

File: cli/presenter.py
Author: VCF Manager maintainers
Created: 2026-09-21
Last Modified: 2026-10-19
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from ..config import AppConfig
from ..contacts import ContactCollection
from ..dedupe import MergeDecision, MergeEngine
from ..models import DuplicateGroup, LIST_FIELDS, OPTIONAL_FIELDS, PendingMerge
from ..normalization import normalize_phone
from .views import draft_table, duplicate_groups_table, sources_table

log = logging.getLogger(__name__)

EDITABLE_FIELDS = ("full_name", "organization") + OPTIONAL_FIELDS

MERGE_HELP = (
    "[dim]Commands:[/]\n"
    "  [cyan]m N[/]            Make source N the master\n"
    "  [cyan]e FIELD[/]        Edit a field (full_name, organization, title, note, ...)\n"
    "  [cyan]a LIST[/]         Add an entry to phones, emails or impp\n"
    "  [cyan]r LIST N[/]       Remove entry N from a list\n"
    "  [cyan]c[/]              Commit\n"
    "  [cyan]x[/]              Abort"
)


class RichMergePresenter:
    """
    Implements the MergePresenter protocol with rich prompts.

    Edits go through the merge engine so the draft stays the single source
    of truth for what gets committed.
    """

    def __init__(
            self,
            collection: ContactCollection,
            engine: MergeEngine,
            config: AppConfig,
            console: Optional[Console] = None,
        ):
        self.collection = collection
        self.engine = engine
        self.config = config
        self.console = console or Console()

    async def present_duplicate_preview(self, groups: List[DuplicateGroup], mode: str) -> bool:
        self.console.print()
        self.console.print(duplicate_groups_table(groups, self.collection, mode))
        self.console.print()
        return Confirm.ask("Continue with merge?", default=True, console=self.console)

    async def present_pending_merge(self, pending: PendingMerge) -> MergeDecision:
        while True:
            pending = self.engine.pending or pending
            self._show(pending)

            command = Prompt.ask("Action", default="c", console=self.console).strip()
            if not command:
                continue

            verb, _, rest = command.partition(" ")
            verb = verb.lower()
            rest = rest.strip()

            if verb == "c":
                return MergeDecision.COMMIT
            if verb == "x":
                return MergeDecision.ABORT

            try:
                self._apply(verb, rest, pending)
            except (ValueError, IndexError) as e:
                self.console.print(f"[red]{escape(str(e))}[/]")

    def _show(self, pending: PendingMerge) -> None:
        self.console.print()
        if not pending.is_edit:
            self.console.print(sources_table(pending, self.config))
        self.console.print(draft_table(pending, self.config))
        self.console.print(MERGE_HELP)

    def _apply(self, verb: str, rest: str, pending: PendingMerge) -> None:
        log.debug(f"Merge command: {verb} {rest}")
        if verb == "m":
            index = int(rest) - 1
            if not 0 <= index < len(pending.member_ids):
                raise IndexError(f"No source number {rest}")
            self.engine.set_master(pending.member_ids[index])

        elif verb == "e":
            if rest not in EDITABLE_FIELDS:
                raise ValueError(f"Unknown field '{rest}'. Editable: {', '.join(EDITABLE_FIELDS)}")
            if rest in OPTIONAL_FIELDS:
                self.engine.add_custom_field(rest)
            current = getattr(pending.draft, rest) or ""
            value = Prompt.ask(rest, default=current, console=self.console)
            setattr(pending.draft, rest, value)

        elif verb == "a":
            if rest not in LIST_FIELDS:
                raise ValueError(f"Unknown list '{rest}'. Lists: {', '.join(LIST_FIELDS)}")
            value = Prompt.ask(f"New {rest} entry", console=self.console).strip()
            if rest == "phones":
                value = normalize_phone(value, self.config.default_country_code)
            self.engine.add_list_entry(rest, value)

        elif verb == "r":
            field, _, index = rest.partition(" ")
            self.engine.remove_list_entry(field, int(index))

        else:
            raise ValueError(f"Unknown command '{verb}'")
