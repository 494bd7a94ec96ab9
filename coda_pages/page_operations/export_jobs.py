"""Page export jobs.

Exporting a page is asynchronous: a POST creates an export request, its
status is polled until complete, and the content is then downloaded from a
side-channel link outside the API.
"""

import logging
from typing import Any, Dict

from ..coda_client.polling import PollPolicy, poll_until
from .models import ExportJob, OutputFormat
from .page_operations import page_path

logger = logging.getLogger(__name__)


class ExportJobRunner:
    """Submits, polls and downloads page exports for one document."""

    def __init__(self, api, endpoint: str, policy: PollPolicy):
        self.api = api
        self.endpoint = endpoint.rstrip('/')
        self.policy = policy

    def _job_from_api(self, page_ref: str, output_format: OutputFormat, data: Dict[str, Any]) -> ExportJob:
        return ExportJob(
            job_id=data.get("id", ""),
            page_ref=page_ref,
            output_format=output_format,
            status=data.get("status") or "inProgress",
            download_link=data.get("downloadLink"),
            error=data.get("error"),
        )

    def submit(self, page_ref: str, output_format: OutputFormat = OutputFormat.HTML) -> ExportJob:
        """Request an export of ``page_ref``."""
        response = self.api.fetch(
            "POST",
            f"{page_path(self.endpoint, page_ref)}/export",
            body={"outputFormat": output_format.value},
        )
        job = self._job_from_api(page_ref, output_format, response.body or {})
        logger.debug(f"Submitted {output_format.value} export {job.job_id} for page {page_ref}")
        return job

    def status(self, job: ExportJob) -> ExportJob:
        """Fetch the current state of ``job``."""
        response = self.api.fetch(
            "GET",
            f"{page_path(self.endpoint, job.page_ref)}/export/{job.job_id}",
        )
        data = dict(response.body or {})
        data.setdefault("id", job.job_id)
        return self._job_from_api(job.page_ref, job.output_format, data)

    def wait(self, job: ExportJob) -> ExportJob:
        """Poll ``job`` until complete.

        Raises:
            JobFailedError: If the export reports a failed status
            JobTimeoutError: If the poll policy's bound is reached
        """
        return poll_until(
            fetch_status=lambda: self.status(job),
            is_complete=lambda state: state.is_complete,
            is_failed=lambda state: state.is_failed,
            failure_detail=lambda state: state.error,
            policy=self.policy,
            job_id=job.job_id,
        )

    def download(self, job: ExportJob) -> str:
        """Fetch the exported content from the job's download link."""
        if not job.download_link:
            raise ValueError(f"Export {job.job_id} has no download link")
        # The exported file is page content, even when served as JSON
        response = self.api.fetch("GET", job.download_link, raw=True)
        return response.body or ""

    def export(self, page_ref: str, output_format: OutputFormat = OutputFormat.HTML) -> str:
        """Run a complete export and return the page content."""
        job = self.wait(self.submit(page_ref, output_format))
        content = self.download(job)
        logger.info(f"Exported page {page_ref} ({len(content)} chars)")
        return content
