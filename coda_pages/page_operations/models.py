"""Data models for page operations.

This module defines the page, export job and autocomplete structures, and
the ``UNSET`` sentinel used to build sparse request payloads.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional


class _Unset:
    """Marker for an optional field the caller did not supply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    """True if a patch field carries a value (neither UNSET nor None)."""
    return value is not UNSET and value is not None


class OutputFormat(Enum):
    """Formats the export API can produce."""

    MARKDOWN = "markdown"
    HTML = "html"


class ExportStatus(Enum):
    """Export job states reported by the API."""

    IN_PROGRESS = "inProgress"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class Page:
    """A page as returned by the pages API.

    Attributes:
        page_id: Stable page identifier (e.g. "canvas-abc")
        name: Page name
        subtitle: Optional subtitle
        parent_id: Identifier of the parent page, None at the top level
        icon_name: Internal name of the page icon
        image_url: Cover image URL
        content_type: "canvas" for pages with a canvas body
    """

    page_id: str
    name: str
    subtitle: Optional[str] = None
    parent_id: Optional[str] = None
    icon_name: Optional[str] = None
    image_url: Optional[str] = None
    content_type: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Page":
        icon = data.get("icon") or {}
        image = data.get("image") or {}
        parent = data.get("parent") or {}
        return cls(
            page_id=data.get("id", ""),
            name=data.get("name", ""),
            subtitle=data.get("subtitle") or None,
            parent_id=parent.get("id"),
            icon_name=icon.get("name"),
            image_url=image.get("browserLink"),
            content_type=data.get("contentType"),
        )


@dataclass
class PagePatch:
    """Sparse set of page attributes for create and update requests.

    Every field defaults to ``UNSET``; ``to_payload`` emits a key only for
    fields that carry a value, so the server never sees null placeholders.
    """

    name: Any = UNSET
    parent_page_id: Any = UNSET
    subtitle: Any = UNSET
    icon_name: Any = UNSET
    image_url: Any = UNSET
    content: Any = UNSET

    _API_KEYS = {
        "name": "name",
        "parent_page_id": "parentPageId",
        "subtitle": "subtitle",
        "icon_name": "iconName",
        "image_url": "imageUrl",
    }

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if not is_set(value):
                continue
            if f.name == "content":
                # Empty content creates a blank page, same as no content
                if value:
                    payload["pageContent"] = canvas_content(value)
            else:
                payload[self._API_KEYS[f.name]] = value
        return payload


def canvas_content(content: str) -> Dict[str, Any]:
    """Wrap markdown as the canvas body accepted by the create API."""
    return {
        "type": "canvas",
        "canvasContent": {
            "format": OutputFormat.MARKDOWN.value,
            "content": content,
        },
    }


@dataclass
class ExportJob:
    """An export request and its last known state.

    Attributes:
        job_id: Request identifier returned by the export API
        page_ref: Page the export was requested for
        output_format: Requested format
        status: Raw status string from the API
        download_link: Where the exported content can be fetched (complete only)
        error: Error message reported for failed exports
    """

    job_id: str
    page_ref: str
    output_format: OutputFormat
    status: str = ExportStatus.IN_PROGRESS.value
    download_link: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.status == ExportStatus.COMPLETE.value

    @property
    def is_failed(self) -> bool:
        return self.status == ExportStatus.FAILED.value


@dataclass
class AutocompleteOption:
    """One suggestion offered while a parameter value is typed."""

    display: str
    value: Any
