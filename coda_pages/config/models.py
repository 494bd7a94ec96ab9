"""Configuration data models.

All models use dataclasses; defaults here are the values used when the
config file or a field is missing.
"""

from dataclasses import dataclass, field
from typing import Optional

from coda_pages.coda_client.polling import PollPolicy
from coda_pages.page_operations.models import OutputFormat


@dataclass
class ExportSettings:
    """How page exports are requested and polled.

    Attributes:
        format: Export format requested by CopyPage ("html" or "markdown")
        poll_interval: Seconds between status polls (first delay for exponential)
        backoff: "fixed" or "exponential"
        max_interval: Upper bound on exponential delays
        max_attempts: Maximum status polls before giving up (None for no cap)
        timeout: Maximum total wait in seconds (None for no deadline)
    """
    format: str = "html"
    poll_interval: float = 1.0
    backoff: str = "fixed"
    max_interval: float = 30.0
    max_attempts: Optional[int] = 120
    timeout: Optional[float] = None

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat(self.format)

    def poll_policy(self) -> PollPolicy:
        return PollPolicy(
            interval=self.poll_interval,
            backoff=self.backoff,
            max_interval=self.max_interval,
            max_attempts=self.max_attempts,
            timeout=self.timeout,
        )


@dataclass
class PackConfig:
    """Pack configuration stored in .coda-pages/config.yaml.

    Attributes:
        api_base_url: Coda API base URL
        icons_url: Icon catalog search URL
        auth_mode: "system" (shared token, doc per invocation) or
            "connection" (user token bound to a selected doc)
        doc_id: Document used in system mode
        endpoint: Document endpoint stored by select-doc in connection mode
        request_timeout: Per-request timeout in seconds
        list_limit: Default ListPages limit
        page_search_limit: Page size hint for page autocomplete
        icon_search_limit: Result count for icon autocomplete
        export: Export and polling settings
    """
    api_base_url: str = "https://coda.io/apis/v1"
    icons_url: str = "https://coda.io/api/icons"
    auth_mode: str = "system"
    doc_id: Optional[str] = None
    endpoint: Optional[str] = None
    request_timeout: float = 30.0
    list_limit: int = 100
    page_search_limit: int = 100
    icon_search_limit: int = 50
    export: ExportSettings = field(default_factory=ExportSettings)
