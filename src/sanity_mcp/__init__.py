"""sanity_mcp package exports."""

from .core import (
    AuthRequiredError,
    MutationError,
    NotFoundError,
    QueryError,
    SanityClient,
    SanityClientError,
    SanityConfig,
    SanityHTTPError,
    SanityParseError,
    create_client_from_env,
    discover_tool_modules,
    register_discovered_tools,
)
from .server import main as run_server

__all__ = [
    # Client
    "SanityClient",
    "SanityConfig",
    "create_client_from_env",
    # Exceptions
    "SanityClientError",
    "SanityHTTPError",
    "QueryError",
    "MutationError",
    "SanityParseError",
    "AuthRequiredError",
    "NotFoundError",
    # Server utilities
    "run_server",
    "discover_tool_modules",
    "register_discovered_tools",
]
