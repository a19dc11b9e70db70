from .client import (
    AuthRequiredError,
    MutationError,
    NotFoundError,
    QueryError,
    SanityClientError,
    SanityHTTPError,
    SanityParseError,
)

__all__ = [
    "SanityClientError",
    "SanityHTTPError",
    "QueryError",
    "MutationError",
    "SanityParseError",
    "AuthRequiredError",
    "NotFoundError",
]
