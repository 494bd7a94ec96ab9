"""Autocomplete search over pages and icons.

Both searches hit the network on every call so suggestions reflect the
current document and icon catalog.
"""

import logging
from typing import Any, Dict, Iterable, List

from ..coda_client.pagination import collect_all
from .models import AutocompleteOption

logger = logging.getLogger(__name__)

DEFAULT_ICONS_URL = "https://coda.io/api/icons"


def search_objects(
    query: str,
    candidates: Iterable[Dict[str, Any]],
    display_field: str,
    value_field: str,
) -> List[AutocompleteOption]:
    """Filter and rank candidates by a case-insensitive match on one field.

    Prefix matches come first, then other substring matches; candidates keep
    their original order within each group. An empty query matches all.
    """
    needle = (query or "").strip().casefold()
    prefix: List[AutocompleteOption] = []
    contains: List[AutocompleteOption] = []

    for item in candidates:
        display = str(item.get(display_field) or "")
        option = AutocompleteOption(display=display, value=item.get(value_field))
        haystack = display.casefold()
        # "" is a prefix of everything, so an empty query keeps all
        if haystack.startswith(needle):
            prefix.append(option)
        elif needle in haystack:
            contains.append(option)

    return prefix + contains


class PageSearch:
    """Suggests pages of a document by name; values are page IDs."""

    def __init__(self, api, endpoint: str, page_size: int = 100):
        self.api = api
        self.endpoint = endpoint.rstrip('/')
        self.page_size = page_size

    def search(self, query: str = "") -> List[AutocompleteOption]:
        # The pages API has no name filter, so fetch all and match locally
        pages = collect_all(
            self.api,
            f"{self.endpoint}/pages",
            params={"limit": self.page_size},
        )
        return search_objects(query, pages, "name", "id")


class IconSearch:
    """Suggests icons from the icon catalog; matching is done by the server."""

    def __init__(self, api, icons_url: str = DEFAULT_ICONS_URL, limit: int = 50):
        self.api = api
        self.icons_url = icons_url
        self.limit = limit

    def search(self, query: str = "") -> List[AutocompleteOption]:
        response = self.api.fetch(
            "GET",
            self.icons_url,
            params={"term": query or "", "limit": self.limit},
        )
        # Server order is relevance order
        icons = (response.body or {}).get("icons", [])
        logger.debug(f"Icon search {query!r} returned {len(icons)} icon(s)")
        return [
            AutocompleteOption(display=icon.get("label"), value=icon.get("name"))
            for icon in icons
        ]
