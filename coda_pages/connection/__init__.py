"""Connection identity, document selection and endpoint resolution."""

from .endpoints import (
    EndpointResolver,
    SystemEndpointResolver,
    ConnectionEndpointResolver,
    make_endpoint_resolver,
)
from .identity import ConnectionResolver, Identity, DocumentInfo

__all__ = [
    "EndpointResolver",
    "SystemEndpointResolver",
    "ConnectionEndpointResolver",
    "make_endpoint_resolver",
    "ConnectionResolver",
    "Identity",
    "DocumentInfo",
]
