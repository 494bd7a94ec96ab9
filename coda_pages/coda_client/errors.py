"""Typed exception hierarchy for Coda-related errors.

This module defines all custom exceptions used by the Coda client library.
All exceptions inherit from CodaError so callers can catch every remote
failure in one place, and carry the context needed to report it.
"""

from typing import Optional


class PackError(Exception):
    """Base exception for all coda-pages errors.

    Use this to catch any application-level error raised by the pack.
    """
    pass


class CodaError(PackError):
    """Base exception for all Coda-related errors."""
    pass


class InvalidCredentialsError(CodaError):
    """Raised when the API token is missing or rejected."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"API token is invalid (endpoint: {endpoint})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class ResourceNotFoundError(CodaError):
    """Raised when a page, document or export job does not exist."""

    def __init__(self, resource: str, detail: Optional[str] = None):
        message = f"{resource} not found"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.resource = resource
        self.detail = detail


class MalformedInputError(CodaError):
    """Raised when the API rejects a request payload (400/422)."""

    def __init__(self, detail: str, status_code: int = 400):
        super().__init__(f"Request rejected by Coda ({status_code}): {detail}")
        self.detail = detail
        self.status_code = status_code


class APIUnreachableError(CodaError):
    """Raised when the Coda API cannot be reached or times out."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(CodaError):
    """Raised when an API call fails for any other reason."""

    def __init__(self, message: str = "Coda API failure", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthorizationError(CodaError):
    """Raised when the current user may not bind to a document."""

    def __init__(self, message: str):
        super().__init__(message)


class EndpointNotBoundError(CodaError):
    """Raised when a document-scoped call is made before a document is selected."""

    def __init__(self, message: str = "No document selected for this connection"):
        super().__init__(message)


class PaginationError(CodaError):
    """Raised when a continuation link does not advance."""

    def __init__(self, url: str):
        super().__init__(f"Pagination did not advance: {url} was already fetched")
        self.url = url


class JobFailedError(CodaError):
    """Raised when an asynchronous job reports a failed status."""

    def __init__(self, job_id: str, detail: Optional[str] = None):
        message = f"Job {job_id} failed"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.job_id = job_id
        self.detail = detail


class JobTimeoutError(CodaError):
    """Raised when an asynchronous job does not finish within its poll bound."""

    def __init__(self, job_id: str, attempts: int, elapsed: float):
        super().__init__(
            f"Job {job_id} did not complete after {attempts} poll(s) "
            f"({elapsed:.1f}s)"
        )
        self.job_id = job_id
        self.attempts = attempts
        self.elapsed = elapsed
