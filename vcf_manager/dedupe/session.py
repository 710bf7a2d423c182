"""
Interactive merge sessions.

Connects detection, the merge queue and the merge engine to a presenter that
shows things to the user and waits for an answer. The presenter calls are
the only points where the flow is suspended; everything else is synchronous.

File: dedupe/session.py
Author: VCF Manager maintainers
Created: 2026-09-20
Last Modified: 2026-10-12
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol

from ..config import AppConfig
from ..contacts import ContactCollection
from ..models import Contact, DuplicateGroup, PendingMerge
from .detector import find_groups
from .merge_engine import MergeEngine
from .merge_queue import MergeQueueProcessor, QueueEvent

log = logging.getLogger(__name__)


class MergeDecision(str, Enum):
    COMMIT = "commit"
    ABORT = "abort"


class MergePresenter(Protocol):
    """What a front end has to provide to run merges."""

    async def present_duplicate_preview(self, groups: List[DuplicateGroup], mode: str) -> bool:
        """Show the groups about to be merged. True to proceed, False to cancel."""
        ...

    async def present_pending_merge(self, pending: PendingMerge) -> MergeDecision:
        """Let the user edit the draft (via the engine), then commit or abort."""
        ...


class AutoMergeStatus(str, Enum):
    EMPTY = "empty"  # No contacts at all
    NO_DUPLICATES = "no_duplicates"
    DECLINED = "declined"  # Preview rejected, nothing merged
    COMPLETED = "completed"
    CANCELLED = "cancelled"  # Stopped part-way, earlier merges kept


@dataclass
class AutoMergeResult:
    status: AutoMergeStatus
    groups_found: int = 0
    merged: int = 0


class MergeSession:
    """
    Owns the merge engine and queue for one contact collection and runs
    auto-merge and manual merges through a presenter.
    """

    def __init__(
            self,
            collection: ContactCollection,
            presenter: MergePresenter,
            config: AppConfig,
            engine: Optional[MergeEngine] = None,
            queue: Optional[MergeQueueProcessor] = None,
        ):
        self.collection = collection
        self.presenter = presenter
        self.config = config
        self.engine = engine or MergeEngine(collection, config.default_country_code)
        self.queue = queue or MergeQueueProcessor(collection, self.engine)
        self.queue.subscribe(self._on_queue_event)

    def _on_queue_event(self, event: QueueEvent) -> None:
        messages = self.config.messages
        if event is QueueEvent.COMPLETED:
            log.info(messages.auto_merge_complete)
        elif event is QueueEvent.CANCELLED:
            log.warning(messages.auto_merge_cancelled)
        elif event is QueueEvent.NOTHING_TO_DO:
            log.info(messages.no_duplicates)

    def find_duplicates(self, mode: str) -> List[DuplicateGroup]:
        """Run a detection pass ("name" or "phone") over the current contacts."""
        return find_groups(self.collection.contacts, mode, self.config.default_country_code)

    async def auto_merge(self, mode: str) -> AutoMergeResult:
        """
        Detect duplicates and walk the user through merging each group.

        Aborting any group cancels the rest of the queue; groups committed
        before that stay merged.

        Args:
            mode: "name" or "phone"

        Returns:
            AutoMergeResult describing how far the run got
        """
        if len(self.collection) == 0:
            log.warning(self.config.messages.empty_agenda)
            return AutoMergeResult(AutoMergeStatus.EMPTY)

        groups = self.find_duplicates(mode)
        if not groups:
            log.info(self.config.messages.no_duplicates)
            return AutoMergeResult(AutoMergeStatus.NO_DUPLICATES)

        if not await self.presenter.present_duplicate_preview(groups, mode):
            log.info(f"Auto-merge by {mode} declined at preview ({len(groups)} groups)")
            return AutoMergeResult(AutoMergeStatus.DECLINED, groups_found=len(groups))

        result = AutoMergeResult(AutoMergeStatus.COMPLETED, groups_found=len(groups))
        pending = self.queue.start(groups)
        while pending is not None:
            decision = await self.presenter.present_pending_merge(pending)
            if decision is not MergeDecision.COMMIT:
                self.engine.abort()
                self.queue.cancel()
                result.status = AutoMergeStatus.CANCELLED
                return result

            self.engine.commit()
            result.merged += 1
            pending = self.queue.advance()

        return result

    async def merge_ids(self, ordered_ids: List[str]) -> Optional[Contact]:
        """
        Merge (or, with one id, edit) the given contacts, first id as master.

        Returns:
            The committed contact, or None if the user aborted or no ids
            were given
        """
        if not ordered_ids:
            return None

        pending = self.engine.begin(ordered_ids)
        decision = await self.presenter.present_pending_merge(pending)
        if decision is not MergeDecision.COMMIT:
            self.engine.abort()
            return None
        return self.engine.commit()

    async def merge_selected(self) -> Optional[Contact]:
        """Merge the collection's selection, in selection order."""
        merged = await self.merge_ids(list(self.collection.selected))
        if merged is not None:
            self.collection.deselect_all()
        return merged
