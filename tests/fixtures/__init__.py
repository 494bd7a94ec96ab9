"""Test fixtures for the pages pack.

This module provides sample Coda API payloads (pages, export requests,
identity, docs, icons) shared by the unit tests.
"""

from .sample_coda_responses import (
    API_BASE,
    DOC_ID,
    DOC_ENDPOINT,
    DOWNLOAD_LINK,
    PAGE_SOURCE,
    PAGE_PLAIN,
    EXPORT_SUBMITTED,
    EXPORT_COMPLETE,
    EXPORT_FAILED,
    WHOAMI_U1,
    WHOAMI_U2,
    DOC_OWNED_BY_U1,
)

__all__ = [
    "API_BASE",
    "DOC_ID",
    "DOC_ENDPOINT",
    "DOWNLOAD_LINK",
    "PAGE_SOURCE",
    "PAGE_PLAIN",
    "EXPORT_SUBMITTED",
    "EXPORT_COMPLETE",
    "EXPORT_FAILED",
    "WHOAMI_U1",
    "WHOAMI_U2",
    "DOC_OWNED_BY_U1",
]
