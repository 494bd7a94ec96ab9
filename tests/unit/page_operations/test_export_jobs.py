"""Unit tests for page_operations.export_jobs module."""

import pytest
from unittest.mock import patch

from coda_pages.coda_client.errors import JobFailedError, JobTimeoutError, ResourceNotFoundError
from coda_pages.coda_client.polling import PollPolicy
from coda_pages.page_operations.export_jobs import ExportJobRunner
from coda_pages.page_operations.models import ExportJob, OutputFormat
from tests.fixtures.sample_coda_responses import (
    DOC_ENDPOINT,
    DOWNLOAD_LINK,
    EXPORT_COMPLETE,
    EXPORT_FAILED,
    EXPORT_IN_PROGRESS,
    EXPORT_SUBMITTED,
)
from tests.helpers.fake_api import FakeAPI

EXPORT_URL = f"{DOC_ENDPOINT}/pages/p1/export"
STATUS_URL = f"{EXPORT_URL}/job-1"


def make_runner(api, max_attempts=5):
    return ExportJobRunner(api, DOC_ENDPOINT, PollPolicy(interval=0.0, max_attempts=max_attempts))


class TestSubmit:
    """Test cases for ExportJobRunner.submit."""

    def test_submit_posts_output_format(self):
        """submit() POSTs the requested format and returns a pending job."""
        api = FakeAPI({("POST", EXPORT_URL): EXPORT_SUBMITTED})

        job = make_runner(api).submit("p1", OutputFormat.MARKDOWN)

        assert api.calls[0]["body"] == {"outputFormat": "markdown"}
        assert job.job_id == "job-1"
        assert job.page_ref == "p1"
        assert job.output_format is OutputFormat.MARKDOWN
        assert not job.is_complete

    def test_submit_defaults_to_html(self):
        """HTML is the default export format."""
        api = FakeAPI({("POST", EXPORT_URL): EXPORT_SUBMITTED})

        make_runner(api).submit("p1")

        assert api.calls[0]["body"] == {"outputFormat": "html"}

    def test_submit_encodes_page_name(self):
        """Pages addressed by name are encoded in the export URL."""
        url = f"{DOC_ENDPOINT}/pages/Weekly%20sync/export"
        api = FakeAPI({("POST", url): EXPORT_SUBMITTED})

        make_runner(api).submit("Weekly sync")

        assert api.calls[0]["url"] == url


class TestStatus:
    """Test cases for ExportJobRunner.status."""

    def test_status_reads_download_link(self):
        """A complete status carries the download link."""
        api = FakeAPI({("GET", STATUS_URL): EXPORT_COMPLETE})
        job = ExportJob("job-1", "p1", OutputFormat.HTML)

        state = make_runner(api).status(job)

        assert state.is_complete
        assert state.download_link == DOWNLOAD_LINK

    def test_status_keeps_job_id_when_missing(self):
        """The job id survives a status body without one."""
        api = FakeAPI({("GET", STATUS_URL): {"status": "inProgress"}})
        job = ExportJob("job-1", "p1", OutputFormat.HTML)

        assert make_runner(api).status(job).job_id == "job-1"


class TestExport:
    """Test cases for the full export flow."""

    @patch('time.sleep')
    def test_export_polls_then_downloads(self, mock_sleep):
        """export() submits, polls until complete, then downloads."""
        api = FakeAPI({
            ("POST", EXPORT_URL): EXPORT_SUBMITTED,
            ("GET", STATUS_URL): [EXPORT_IN_PROGRESS, EXPORT_IN_PROGRESS, EXPORT_COMPLETE],
            ("GET", DOWNLOAD_LINK): "<h1>hello</h1>",
        })

        content = make_runner(api).export("p1")

        assert content == "<h1>hello</h1>"
        assert [c["url"] for c in api.calls] == [
            EXPORT_URL, STATUS_URL, STATUS_URL, STATUS_URL, DOWNLOAD_LINK,
        ]

    @patch('time.sleep')
    def test_failed_export_raises_without_download(self, mock_sleep):
        """A failed export raises JobFailedError and nothing is downloaded."""
        api = FakeAPI({
            ("POST", EXPORT_URL): EXPORT_SUBMITTED,
            ("GET", STATUS_URL): EXPORT_FAILED,
        })

        with pytest.raises(JobFailedError) as exc_info:
            make_runner(api).export("p1")

        assert exc_info.value.detail == "Page too large to export"
        assert not api.calls_to("GET", DOWNLOAD_LINK)

    @patch('time.sleep')
    def test_stuck_export_times_out(self, mock_sleep):
        """An export still in progress after max_attempts polls raises JobTimeoutError."""
        api = FakeAPI({
            ("POST", EXPORT_URL): EXPORT_SUBMITTED,
            ("GET", STATUS_URL): EXPORT_IN_PROGRESS,
        })

        with pytest.raises(JobTimeoutError):
            make_runner(api, max_attempts=3).export("p1")

        assert len(api.calls_to("GET", STATUS_URL)) == 3

    def test_submit_error_propagates(self):
        """Errors from the export request surface unchanged."""
        api = FakeAPI({("POST", EXPORT_URL): ResourceNotFoundError("/pages/p1")})

        with pytest.raises(ResourceNotFoundError):
            make_runner(api).export("p1")

    def test_download_is_raw_text(self):
        """The download link is fetched unparsed, so JSON exports stay verbatim."""
        api = FakeAPI({("GET", DOWNLOAD_LINK): '{"title": "Roadmap"}'})
        job = ExportJob("job-1", "p1", OutputFormat.HTML, status="complete", download_link=DOWNLOAD_LINK)

        assert make_runner(api).download(job) == '{"title": "Roadmap"}'
        assert api.calls[0]["raw"] is True

    def test_download_without_link(self):
        """A completed job without a link cannot be downloaded."""
        job = ExportJob("job-1", "p1", OutputFormat.HTML, status="complete")

        with pytest.raises(ValueError, match="no download link"):
            make_runner(FakeAPI()).download(job)
