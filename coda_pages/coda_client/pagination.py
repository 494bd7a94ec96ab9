"""Continuation-link pagination over Coda list endpoints.

Coda list responses carry an ``items`` array and, when more results exist,
a ``nextPageLink`` URL that already encodes the query of the first request.
"""

import logging
from typing import Any, Dict, List, Optional

from .errors import PaginationError
from .models import PaginatedResult

logger = logging.getLogger(__name__)


def fetch_page(api, url: str, params: Optional[Dict[str, Any]] = None) -> PaginatedResult:
    """Fetch a single page of a listing.

    Args:
        api: APIWrapper (or anything with a compatible ``fetch``)
        url: URL of the page to fetch
        params: Query parameters (only meaningful for the first page)

    Returns:
        PaginatedResult with this page's items and continuation link
    """
    response = api.fetch("GET", url, params=params)
    body = response.body or {}
    return PaginatedResult(
        items=list(body.get('items', [])),
        next_page_link=body.get('nextPageLink') or None,
    )


def collect_all(api, initial_url: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
    """Follow continuation links until the last page and return every item.

    The first request uses ``initial_url`` with ``params``; each following
    request uses the previous response's ``nextPageLink`` verbatim. Items are
    returned in server order.

    Args:
        api: APIWrapper used for the requests
        initial_url: URL of the first page
        params: Query parameters for the first page (e.g. a ``limit`` hint)

    Returns:
        List of all items across pages

    Raises:
        PaginationError: If a continuation link repeats one already fetched
    """
    items: List[Any] = []
    seen = set()
    url = initial_url
    page_params = params
    pages = 0

    while True:
        page = fetch_page(api, url, params=page_params)
        pages += 1
        items.extend(page.items)

        if page.is_last:
            break

        # A link we already fetched would loop forever
        seen.add(url)
        if page.next_page_link in seen:
            raise PaginationError(page.next_page_link)
        url = page.next_page_link
        # nextPageLink already carries the query
        page_params = None

    logger.debug(f"Collected {len(items)} item(s) from {pages} page(s) of {initial_url}")
    return items
