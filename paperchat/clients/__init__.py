"""HTTP clients used by the assistant's service layer."""

from .base import (
    BaseHttpClient,
    ClientError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    RequestRejectedError,
    UnauthorizedError,
    UpstreamError,
    build_http_session,
)
from .completion import CompletionClient
from .content import ContentClient

__all__ = [
    "BaseHttpClient",
    "ClientError",
    "CompletionClient",
    "ContentClient",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitedError",
    "RequestRejectedError",
    "UnauthorizedError",
    "UpstreamError",
    "build_http_session",
]
