"""Page duplication through the export API.

Copying a page has no single API call. The source page is read, exported,
and its content recreated as a new page with the source's subtitle, icon
and cover image. Nothing is created until every earlier step has
succeeded, so a failed copy can simply be retried.
"""

import logging
from typing import Any

from .export_jobs import ExportJobRunner
from .models import UNSET, OutputFormat, PagePatch
from .page_operations import PageOperations

logger = logging.getLogger(__name__)


class PageCopier:
    """Duplicates pages within one document.

    Example:
        >>> copier = PageCopier(ops, ExportJobRunner(api, endpoint, PollPolicy()))
        >>> new_id = copier.copy_page("Weekly sync", "Weekly sync (copy)")
    """

    def __init__(
        self,
        page_ops: PageOperations,
        exporter: ExportJobRunner,
        export_format: OutputFormat = OutputFormat.HTML,
    ):
        self.page_ops = page_ops
        self.exporter = exporter
        self.export_format = export_format

    def copy_page(
        self,
        source_id_or_name: str,
        new_name: str,
        parent_page_id: Any = UNSET,
    ) -> str:
        """Copy a page and return the new page's identifier.

        Args:
            source_id_or_name: Page to copy
            new_name: Name of the copy
            parent_page_id: Parent of the copy (top level when unset)

        Raises:
            ResourceNotFoundError: If the source page does not exist
            JobFailedError: If the export fails
            JobTimeoutError: If the export does not finish in time
        """
        source = self.page_ops.get_page(source_id_or_name)
        logger.info(f"Copying page {source.page_id} ({source.name!r}) as {new_name!r}")

        # Export by ID: a name could resolve differently on a later request
        content = self.exporter.export(source.page_id, self.export_format)

        # Metadata the source lacks stays None and is left out of the payload
        patch = PagePatch(
            name=new_name,
            parent_page_id=parent_page_id,
            subtitle=source.subtitle,
            icon_name=source.icon_name,
            image_url=source.image_url,
            content=content,
        )
        return self.page_ops.create_page(patch)
