"""Data models for the Coda client."""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


@dataclass
class FetchResponse:
    """Response from a single outbound request.

    Attributes:
        status_code: HTTP status code
        body: Parsed JSON body, or the raw text for non-JSON responses
        headers: Response headers
    """
    status_code: int
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class PaginatedResult(Generic[T]):
    """One page of a paginated listing.

    Attributes:
        items: Items of this page, in server order
        next_page_link: Continuation URL (None on the final page)
    """
    items: List[T]
    next_page_link: Optional[str] = None

    @property
    def is_last(self) -> bool:
        return not self.next_page_link
