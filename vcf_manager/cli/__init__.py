"""
Terminal front end.

File: cli/__init__.py
Author: VCF Manager maintainers
Created: 2026-09-21
Last Modified: 2026-09-21
"""

from .presenter import RichMergePresenter
from .views import contacts_table, draft_table, duplicate_groups_table, sources_table

__all__ = [
    "RichMergePresenter",
    "contacts_table",
    "draft_table",
    "duplicate_groups_table",
    "sources_table",
]
