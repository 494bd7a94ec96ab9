"""Command-line interface for the pages pack.

This package provides the `coda-pages` CLI tool, which invokes the page
formulas and autocomplete helpers against a Coda doc.
"""

from .models import ExitCode
from .output import OutputHandler

__all__ = [
    'ExitCode',
    'OutputHandler',
]
