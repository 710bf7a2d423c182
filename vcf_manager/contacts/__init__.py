"""
Contact collection ownership.

File: contacts/__init__.py
Author: VCF Manager maintainers
Created: 2026-09-16
Last Modified: 2026-09-16
"""

from .collection import ChangeListener, ContactCollection

__all__ = [
    "ChangeListener",
    "ContactCollection",
]
