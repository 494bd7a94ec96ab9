"""Endpoint resolution for document-scoped calls.

The pack runs in one of two modes, chosen at configuration time:

- "system": one shared token; the document comes from the invocation
  (``doc_id``) and the endpoint is built from the API base URL.
- "connection": a per-user token bound to one document; the endpoint was
  stored when the document was selected.
"""

from abc import ABC, abstractmethod

from ..coda_client.errors import EndpointNotBoundError


class EndpointResolver(ABC):
    """Turns an invocation context into a document-scoped base URL."""

    @abstractmethod
    def resolve(self, context) -> str:
        """Return the endpoint for ``context``.

        Raises:
            EndpointNotBoundError: If no document is known for the context
        """


class SystemEndpointResolver(EndpointResolver):
    """Builds ``{base_url}/docs/{doc_id}`` from the invocation's document."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')

    def resolve(self, context) -> str:
        if not context.doc_id:
            raise EndpointNotBoundError(
                "No document given; pass --doc or set doc_id in the config"
            )
        return f"{self.base_url}/docs/{context.doc_id}"


class ConnectionEndpointResolver(EndpointResolver):
    """Returns the endpoint stored with the connection."""

    def resolve(self, context) -> str:
        if not context.endpoint:
            raise EndpointNotBoundError(
                "No document selected for this connection; run select-doc first"
            )
        # Stored by select-doc; context.doc_id plays no part in connection mode
        return context.endpoint.rstrip('/')


def make_endpoint_resolver(auth_mode: str, base_url: str) -> EndpointResolver:
    """Pick the resolver for an auth mode ("system" or "connection")."""
    if auth_mode == "system":
        return SystemEndpointResolver(base_url)
    if auth_mode == "connection":
        return ConnectionEndpointResolver()
    raise ValueError(f"Unknown auth mode: {auth_mode}")
