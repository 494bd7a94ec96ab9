"""Invocation context passed to every formula.

The context carries the implicit inputs of a formula call (the HTTP client,
the configuration and which document is current) and builds the services a
formula needs. It holds no state between invocations.
"""

from dataclasses import dataclass
from typing import Optional

from coda_pages.coda_client.api_wrapper import APIWrapper
from coda_pages.config.models import PackConfig
from coda_pages.connection.endpoints import EndpointResolver
from coda_pages.connection.identity import ConnectionResolver
from coda_pages.page_operations.copy_page import PageCopier
from coda_pages.page_operations.export_jobs import ExportJobRunner
from coda_pages.page_operations.page_operations import PageOperations
from coda_pages.page_operations.search import IconSearch, PageSearch


@dataclass
class InvocationContext:
    """Implicit inputs of one formula invocation.

    Attributes:
        api: HTTP adapter
        config: Pack configuration
        endpoint_resolver: Resolves the document endpoint for this call
        doc_id: Current document (system mode)
        endpoint: Stored connection endpoint (connection mode)
    """
    api: APIWrapper
    config: PackConfig
    endpoint_resolver: EndpointResolver
    doc_id: Optional[str] = None
    endpoint: Optional[str] = None

    @property
    def doc_endpoint(self) -> str:
        """Document-scoped base URL.

        Raises:
            EndpointNotBoundError: If no document is known
        """
        return self.endpoint_resolver.resolve(self)

    def page_operations(self) -> PageOperations:
        return PageOperations(self.api, self.doc_endpoint, default_limit=self.config.list_limit)

    def page_copier(self) -> PageCopier:
        # Resolve once so export and create hit the same doc
        endpoint = self.doc_endpoint
        exporter = ExportJobRunner(self.api, endpoint, self.config.export.poll_policy())
        return PageCopier(
            PageOperations(self.api, endpoint, default_limit=self.config.list_limit),
            exporter,
            export_format=self.config.export.output_format,
        )

    def page_search(self) -> PageSearch:
        return PageSearch(self.api, self.doc_endpoint, page_size=self.config.page_search_limit)

    def icon_search(self) -> IconSearch:
        return IconSearch(self.api, self.config.icons_url, limit=self.config.icon_search_limit)

    def connection_resolver(self) -> ConnectionResolver:
        return ConnectionResolver(self.api, self.config.api_base_url)
