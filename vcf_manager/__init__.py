"""
VCF Manager: import vCard files, find and merge duplicate contacts, export
the cleaned list.
"""

__version__ = "0.1.0"
