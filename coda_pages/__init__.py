"""Coda pages pack.

Exposes a Coda document's pages as formulas: list, add, rename and copy
pages, plus autocomplete helpers for page and icon names.
"""

__version__ = "0.1.0"
