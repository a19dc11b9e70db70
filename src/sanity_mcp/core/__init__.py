"""Core domain surface for sanity-mcp (transport-agnostic)."""

from .client import SanityClient, SanityConfig
from .config import create_client_from_env, load_env_config, load_log_level
from .errors import (
    AuthRequiredError,
    MutationError,
    NotFoundError,
    QueryError,
    SanityClientError,
    SanityHTTPError,
    SanityParseError,
)
from .documents import (
    DRAFT_PREFIX,
    application_fields,
    diff_fields,
    draft_id,
    is_draft_id,
    published_id,
    strip_identity,
)
from .models import (
    AssetDocument,
    Document,
    DocumentDiff,
    DocumentReference,
    DraftStatus,
    HistoryEntry,
    HistoryResult,
    InsertInstruction,
    MutationResult,
    MutationResultEntry,
    PatchOperations,
    QueryResult,
    TypeSchema,
)
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)

__all__ = [
    # Client
    "SanityClient",
    "SanityConfig",
    # Exceptions
    "SanityClientError",
    "SanityHTTPError",
    "QueryError",
    "MutationError",
    "SanityParseError",
    "AuthRequiredError",
    "NotFoundError",
    # Document helpers
    "DRAFT_PREFIX",
    "is_draft_id",
    "published_id",
    "draft_id",
    "application_fields",
    "strip_identity",
    "diff_fields",
    # Models
    "Document",
    "QueryResult",
    "MutationResult",
    "MutationResultEntry",
    "AssetDocument",
    "TypeSchema",
    "DocumentReference",
    "HistoryEntry",
    "HistoryResult",
    "DraftStatus",
    "DocumentDiff",
    "InsertInstruction",
    "PatchOperations",
    # Config helpers
    "create_client_from_env",
    "load_env_config",
    "load_log_level",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
