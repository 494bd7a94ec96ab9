"""Coda client library for the pages pack.

This package provides Python abstractions over the Coda REST API v1:
an HTTP adapter, continuation-link pagination and bounded job polling.
"""

from .errors import (
    PackError,
    CodaError,
    InvalidCredentialsError,
    ResourceNotFoundError,
    MalformedInputError,
    APIUnreachableError,
    APIAccessError,
    AuthorizationError,
    EndpointNotBoundError,
    PaginationError,
    JobFailedError,
    JobTimeoutError,
)

__all__ = [
    "PackError",
    "CodaError",
    "InvalidCredentialsError",
    "ResourceNotFoundError",
    "MalformedInputError",
    "APIUnreachableError",
    "APIAccessError",
    "AuthorizationError",
    "EndpointNotBoundError",
    "PaginationError",
    "JobFailedError",
    "JobTimeoutError",
]
