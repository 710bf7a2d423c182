"""
Sequential processing of duplicate groups.

The queue hands one group at a time to the merge engine. Groups are checked
again right before they are opened, because committing an earlier group can
delete contacts that also appear in a later one.

File: dedupe/merge_queue.py
Author: VCF Manager maintainers
Created: 2026-09-18
Last Modified: 2026-10-12
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from ..contacts import ContactCollection
from ..models import Contact, DuplicateGroup, PendingMerge
from .merge_engine import MergeEngine, longest_name_first

log = logging.getLogger(__name__)

MemberOrder = Callable[[Sequence[Contact]], List[Contact]]


class QueueEvent(str, Enum):
    """Signals emitted by the queue."""

    NOTHING_TO_DO = "nothing_to_do"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


QueueListener = Callable[[QueueEvent], None]


class MergeQueueProcessor:
    """
    Drains a list of duplicate groups through a MergeEngine, one group per
    `advance()` call.

    Attributes:
        queue: Groups not yet presented, in FIFO order
        active: True between `start()` and completion or cancellation
    """

    def __init__(
            self,
            collection: ContactCollection,
            engine: MergeEngine,
            member_order: MemberOrder = longest_name_first,
        ):
        """
        Args:
            collection: Contacts the group ids refer to
            engine: Engine that opens a merge for each group
            member_order: Presentation heuristic putting the default master
                first; the queue itself never picks a master
        """
        self.collection = collection
        self.engine = engine
        self.member_order = member_order
        self.queue: List[DuplicateGroup] = []
        self.active = False
        self._listeners: List[QueueListener] = []

    @property
    def remaining(self) -> int:
        """Groups still waiting after the one currently open."""
        return len(self.queue)

    def subscribe(self, listener: QueueListener) -> None:
        self._listeners.append(listener)

    def _emit(self, event: QueueEvent) -> None:
        log.debug(f"Merge queue event: {event.value}")
        for listener in self._listeners:
            listener(event)

    def start(self, groups: Sequence[DuplicateGroup]) -> Optional[PendingMerge]:
        """
        Queue `groups` and open the first one that still resolves.

        An empty list is a no-op that emits NOTHING_TO_DO.

        Returns:
            The first pending merge, or None if there was nothing to merge

        Raises:
            RuntimeError: If the queue is already running
        """
        if self.active:
            raise RuntimeError("Merge queue is already running")

        if not groups:
            log.info("No duplicate groups to merge")
            self._emit(QueueEvent.NOTHING_TO_DO)
            return None

        self.queue = [list(group) for group in groups]
        self.active = True
        log.info(f"Merge queue started with {len(self.queue)} groups")
        return self.advance()

    def advance(self) -> Optional[PendingMerge]:
        """
        Open the next group that still has at least two live contacts.

        Groups that no longer resolve to two contacts are dropped silently.
        Returns after opening one group; when the queue runs dry the
        processor deactivates and emits COMPLETED.

        Returns:
            The pending merge for the next group, or None when done (or not
            running)
        """
        if not self.active:
            return None

        while self.queue:
            group = self.queue.pop(0)
            live = self.collection.resolve(dict.fromkeys(group))
            if len(live) < 2:
                log.debug(f"Dropping group {group}: only {len(live)} contacts left")
                continue

            ordered = self.member_order(live)
            return self.engine.begin([c.id for c in ordered])

        self.active = False
        log.info("Merge queue complete")
        self._emit(QueueEvent.COMPLETED)
        return None

    def cancel(self) -> None:
        """
        Stop processing and drop the remaining groups.

        Merges already committed stay committed, and a merge open right now
        is left for the caller to commit or abort.
        """
        dropped = len(self.queue)
        self.active = False
        self.queue = []
        log.info(f"Merge queue cancelled, {dropped} groups skipped")
        self._emit(QueueEvent.CANCELLED)
