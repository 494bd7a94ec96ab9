"""Page operations for Coda documents.

Key classes:
    PageOperations: List, read, create and rename pages
    ExportJobRunner: Submit, poll and download page exports
    PageCopier: Duplicate a page through the export API
    PageSearch / IconSearch: Autocomplete providers
    PagePatch: Sparse page payload built from UNSET-able fields
"""

from .models import (
    UNSET,
    is_set,
    Page,
    PagePatch,
    ExportJob,
    ExportStatus,
    OutputFormat,
    AutocompleteOption,
)
from .page_operations import PageOperations
from .export_jobs import ExportJobRunner
from .copy_page import PageCopier
from .search import PageSearch, IconSearch, search_objects

__all__ = [
    "PageOperations",
    "ExportJobRunner",
    "PageCopier",
    "PageSearch",
    "IconSearch",
    "search_objects",
    "UNSET",
    "is_set",
    "Page",
    "PagePatch",
    "ExportJob",
    "ExportStatus",
    "OutputFormat",
    "AutocompleteOption",
]
