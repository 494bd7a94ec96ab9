"""HTTP adapter for the Coda REST API.

This module wraps a requests session and provides error translation from
HTTP exceptions to our typed exception hierarchy. It is the only place in
the pack that performs network I/O.
"""

import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from requests import Session
from requests.exceptions import (
    ConnectionError,
    ConnectTimeout,
    HTTPError,
    ReadTimeout,
    Timeout,
)

from .auth import Authenticator
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    MalformedInputError,
    ResourceNotFoundError,
)
from .models import FetchResponse

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://coda.io/apis/v1"


class APIWrapper:
    """Thin wrapper around a requests session with error translation.

    This class:
    1. Attaches the bearer token to requests for the API's own host only
    2. Disables response caching on every request
    3. Parses JSON bodies and returns text for everything else
    4. Translates HTTP errors to typed exceptions

    Example:
        >>> api = APIWrapper(Authenticator())
        >>> response = api.fetch("GET", "https://coda.io/apis/v1/whoami")
        >>> response.body["loginId"]
    """

    def __init__(
        self,
        authenticator: Authenticator,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30,
    ):
        """Initialize the API wrapper.

        Args:
            authenticator: Authenticator used to load the bearer token
            base_url: API base URL; its host is the only authenticated domain
            timeout: Per-request timeout in seconds
        """
        self._authenticator = authenticator
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._auth_host = urlparse(self.base_url).netloc
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get or create the HTTP session lazily."""
        if self._session is None:
            self._session = Session()
        return self._session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def _is_api_url(self, url: str) -> bool:
        return urlparse(url).netloc == self._auth_host

    def _sanitize_credentials(self, text: str) -> str:
        """Mask bearer tokens and token-like values in error text.

        Example:
            >>> api._sanitize_credentials("Authorization: Bearer abc123")
            'Authorization: ***REDACTED***'
        """
        if not text:
            return text

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(api_?token|token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    def _error_detail(self, response, max_len: int = 300) -> str:
        """Extract the remote error message from a failed response."""
        if response is None:
            return ""
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get('message'):
            detail = str(payload['message'])
        else:
            detail = (response.text or "")[:max_len]
        return self._sanitize_credentials(detail)

    def _translate_error(self, exception: Exception, method: str, url: str) -> Exception:
        """Translate requests exceptions to typed Coda exceptions.

        Args:
            exception: The original exception from requests
            method: HTTP method of the failed request
            url: URL of the failed request

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, (Timeout, ConnectTimeout, ReadTimeout, ConnectionError)):
            return APIUnreachableError(endpoint=url)

        response = getattr(exception, 'response', None)
        status_code = getattr(response, 'status_code', None)

        if isinstance(exception, HTTPError) and status_code is not None:
            detail = self._error_detail(response)
            # Client errors carry the server's message; others are logged
            if status_code == 401:
                return InvalidCredentialsError(endpoint=self.base_url, reason=detail or None)
            if status_code == 404:
                resource = urlparse(url).path or url
                return ResourceNotFoundError(resource=resource, detail=detail or None)
            if status_code in (400, 422):
                return MalformedInputError(detail=detail or "invalid request", status_code=status_code)

            logger.error(f"API request failed: {method} {url} ({status_code}) - {detail}")
            message = f"Coda API failure during {method} {urlparse(url).path}"
            if detail:
                message += f": {detail}"
            return APIAccessError(message, status_code=status_code)

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.error(f"API request failed: {method} {url} - {safe_error_msg}")
        return APIAccessError(f"Coda API failure during {method} {urlparse(url).path}")

    @staticmethod
    def _parse_body(response) -> Any:
        content_type = response.headers.get('Content-Type', '')
        if 'json' in content_type:
            try:
                return response.json()
            except ValueError:
                # Labelled JSON but not parseable; hand back the text
                return response.text
        return response.text

    def fetch(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        raw: bool = False,
    ) -> FetchResponse:
        """Issue one request and return its parsed response.

        Args:
            method: HTTP method
            url: Absolute URL
            body: JSON body to send
            params: Query parameters
            headers: Extra request headers
            raw: Return the response text unparsed, whatever its content type

        Returns:
            FetchResponse with the parsed body

        Raises:
            InvalidCredentialsError: On 401 or missing token
            ResourceNotFoundError: On 404
            MalformedInputError: On 400/422
            APIUnreachableError: On connection failures and timeouts
            APIAccessError: On any other failure
        """
        request_headers = {
            'Accept': 'application/json',
            'Cache-Control': 'no-cache',
        }
        if body is not None:
            request_headers['Content-Type'] = 'application/json'
        # Download links live on another host and must not see the token
        if self._is_api_url(url):
            creds = self._authenticator.get_credentials()
            request_headers['Authorization'] = f"Bearer {creds.api_token}"
        if headers:
            request_headers.update(headers)

        logger.debug(f"{method} {url}" + (f" params={params}" if params else ""))

        try:
            response = self._get_session().request(
                method,
                url,
                params=params,
                json=body,
                headers=request_headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except Exception as e:
            raise self._translate_error(e, method, url) from e

        return FetchResponse(
            status_code=response.status_code,
            body=response.text if raw else self._parse_body(response),
            headers=dict(response.headers),
        )
