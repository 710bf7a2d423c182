"""
Duplicate detection and merging.

Provides:
- Detection: group contacts by identical name or shared phone number
- Merge engine: master/slave combination with an editable draft
- Merge queue: one group at a time, skipping groups emptied by earlier merges
- Sessions: the above driven through an interactive presenter

File: dedupe/__init__.py
Author: VCF Manager maintainers
Created: 2026-09-17
Last Modified: 2026-10-12
"""

from .detector import (
    DETECTION_MODES,
    find_groups,
    find_groups_by_name,
    find_groups_by_phone,
    name_key,
)
from .merge_engine import MergeEngine, combine, longest_name_first
from .merge_queue import MergeQueueProcessor, QueueEvent
from .session import (
    AutoMergeResult,
    AutoMergeStatus,
    MergeDecision,
    MergePresenter,
    MergeSession,
)

__all__ = [
    # Detection
    "DETECTION_MODES",
    "find_groups",
    "find_groups_by_name",
    "find_groups_by_phone",
    "name_key",
    # Merging
    "MergeEngine",
    "combine",
    "longest_name_first",
    # Queue
    "MergeQueueProcessor",
    "QueueEvent",
    # Sessions
    "AutoMergeResult",
    "AutoMergeStatus",
    "MergeDecision",
    "MergePresenter",
    "MergeSession",
]
