"""Page operations for a Coda document.

This module provides the PageOperations class: single-request list, get,
create and update calls against a document-scoped endpoint.
"""

import logging
from typing import Any, List
from urllib.parse import quote

from .models import UNSET, Page, PagePatch, is_set

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 100


def page_path(endpoint: str, page_id_or_name: str) -> str:
    """URL of a page addressed by ID or name (percent-encoded)."""
    # safe='' so a "/" in a page name stays inside one path segment
    return f"{endpoint}/pages/{quote(str(page_id_or_name), safe='')}"


class PageOperations:
    """List, read, create and rename pages of one document.

    Usage:
        ops = PageOperations(api, "https://coda.io/apis/v1/docs/AbCDeFGH")

        pages = ops.list_pages(limit=20)          # [[id, name], ...]
        page_id = ops.add_page(name="Notes", content="# Hello")
        ops.rename_page(page_id, name="Meeting notes")
    """

    def __init__(self, api, endpoint: str, default_limit: int = DEFAULT_LIST_LIMIT):
        """Initialize PageOperations.

        Args:
            api: APIWrapper used for requests
            endpoint: Document-scoped base URL (.../docs/{docId})
            default_limit: Page size used when list_pages gets no limit
        """
        self.api = api
        self.endpoint = endpoint.rstrip('/')
        self.default_limit = default_limit

    def list_pages(self, limit: Any = UNSET) -> List[List[str]]:
        """Return one page of results as [id, name] pairs in server order.

        Args:
            limit: Maximum number of pages (default: ``default_limit``)
        """
        # 0 means "no limit given", as does None
        page_size = int(limit) if is_set(limit) and limit else self.default_limit
        response = self.api.fetch(
            "GET",
            f"{self.endpoint}/pages",
            params={"limit": page_size},
        )
        items = (response.body or {}).get("items", [])
        return [[item.get("id"), item.get("name")] for item in items]

    def get_page(self, page_id_or_name: str) -> Page:
        """Fetch a page's metadata.

        Raises:
            ResourceNotFoundError: If no page matches
        """
        response = self.api.fetch("GET", page_path(self.endpoint, page_id_or_name))
        return Page.from_api(response.body or {})

    def create_page(self, patch: PagePatch) -> str:
        """POST a new page built from ``patch`` and return its identifier.

        Raises:
            MalformedInputError: If the server rejects the payload
        """
        payload = patch.to_payload()
        logger.debug(f"Creating page with fields: {sorted(payload)}")
        response = self.api.fetch("POST", f"{self.endpoint}/pages", body=payload)
        page_id = (response.body or {}).get("id")
        logger.info(f"Created page {page_id}")
        return page_id

    def add_page(
        self,
        name: Any = UNSET,
        parent_page_id: Any = UNSET,
        subtitle: Any = UNSET,
        icon_name: Any = UNSET,
        image_url: Any = UNSET,
        content: Any = UNSET,
    ) -> str:
        """Create a page from the supplied fields; unset fields are omitted.

        Args:
            name: Name of the page
            parent_page_id: Parent page ID
            subtitle: Subtitle
            icon_name: Icon name
            image_url: Cover image URL
            content: Markdown body

        Returns:
            Identifier of the new page
        """
        return self.create_page(PagePatch(
            name=name,
            parent_page_id=parent_page_id,
            subtitle=subtitle,
            icon_name=icon_name,
            image_url=image_url,
            content=content,
        ))

    def rename_page(
        self,
        page_id_or_name: str,
        name: Any = UNSET,
        subtitle: Any = UNSET,
        icon_name: Any = UNSET,
        image_url: Any = UNSET,
    ) -> str:
        """Update a page's name, subtitle, icon or cover image.

        When several pages share a name, which one is updated is decided by
        the API. Prefer IDs.

        Returns:
            The page identifier reported by the API
        """
        payload = PagePatch(
            name=name,
            subtitle=subtitle,
            icon_name=icon_name,
            image_url=image_url,
        ).to_payload()
        response = self.api.fetch(
            "PUT",
            page_path(self.endpoint, page_id_or_name),
            body=payload,
        )
        page_id = (response.body or {}).get("id") or page_id_or_name
        logger.info(f"Updated page {page_id} ({', '.join(sorted(payload)) or 'no fields'})")
        return page_id
