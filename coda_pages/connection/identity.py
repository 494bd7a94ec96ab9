"""Connection identity and document selection.

Resolves who the token belongs to, labels the active connection, and lists
the documents a connection may be bound to. Binding is restricted to
documents owned by the authenticated user.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..coda_client.errors import AuthorizationError
from ..coda_client.pagination import collect_all
from ..page_operations.models import AutocompleteOption

logger = logging.getLogger(__name__)


@dataclass
class Identity:
    """The authenticated user."""

    login_id: str
    name: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Identity":
        return cls(login_id=data.get("loginId", ""), name=data.get("name", ""))


@dataclass
class DocumentInfo:
    """A document and its owner.

    Attributes:
        doc_id: Document identifier
        name: Document name
        owner: Login id of the owner
        owner_name: Display name of the owner
        href: API endpoint of the document
    """

    doc_id: str
    name: str
    owner: str
    owner_name: Optional[str] = None
    href: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "DocumentInfo":
        return cls(
            doc_id=data.get("id", ""),
            name=data.get("name", ""),
            owner=data.get("owner", ""),
            owner_name=data.get("ownerName"),
            href=data.get("href"),
        )


class ConnectionResolver:
    """Describes the active connection and offers documents to bind to."""

    def __init__(self, api, base_url: str):
        self.api = api
        self.base_url = base_url.rstrip('/')

    def whoami(self) -> Identity:
        response = self.api.fetch("GET", f"{self.base_url}/whoami")
        return Identity.from_api(response.body or {})

    def get_document(self, doc_ref: str) -> DocumentInfo:
        """Fetch a document by ID or by its full endpoint URL."""
        # Stored endpoints are full URLs; doc IDs are not
        url = doc_ref if "://" in doc_ref else f"{self.base_url}/docs/{doc_ref}"
        response = self.api.fetch("GET", url)
        return DocumentInfo.from_api(response.body or {})

    def _endpoint_for(self, doc: DocumentInfo) -> str:
        return doc.href or f"{self.base_url}/docs/{doc.doc_id}"

    def describe_connection(self, endpoint: Optional[str] = None) -> str:
        """Label for the connection: the user, plus the bound document if any."""
        identity = self.whoami()
        if not endpoint:
            return identity.name
        doc = self.get_document(endpoint)
        return f"{doc.name} ({identity.name})"

    def list_selectable_documents(self, doc_id: Optional[str] = None) -> List[AutocompleteOption]:
        """Documents the current user may bind the connection to.

        Args:
            doc_id: A document already known from context. When given, it is
                the only option, and only if the user owns it.

        Raises:
            AuthorizationError: If ``doc_id`` belongs to another user
        """
        if doc_id:
            doc = self.get_document(doc_id)
            identity = self.whoami()
            if doc.owner != identity.login_id:
                logger.warning(
                    f"Refusing to bind to doc {doc.doc_id}: owned by {doc.owner}, "
                    f"not {identity.login_id}"
                )
                raise AuthorizationError(
                    f"You can only connect to docs you own. "
                    f"'{doc.name}' is owned by {doc.owner_name or doc.owner}."
                )
            return [AutocompleteOption(display=doc.name, value=self._endpoint_for(doc))]

        identity = self.whoami()
        docs = collect_all(self.api, f"{self.base_url}/docs", params={"isOwner": "true"})
        options = []
        for data in docs:
            doc = DocumentInfo.from_api(data)
            # isOwner is a server-side filter; check ownership here as well
            if doc.owner != identity.login_id:
                continue
            options.append(AutocompleteOption(display=doc.name, value=self._endpoint_for(doc)))
        logger.debug(f"{len(options)} selectable doc(s) for {identity.login_id}")
        return options
