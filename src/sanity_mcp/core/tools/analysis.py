from __future__ import annotations

from typing import Any, Dict

from sanity_mcp.core.client import SanityClient
from sanity_mcp.core.tools._results import as_payload, clamp_limit

DEFAULT_REFERENCES_LIMIT = 100
DEFAULT_HISTORY_LIMIT = 25


async def sanity_compare_documents(
    client: SanityClient, id_a: str, id_b: str
) -> Dict[str, Any]:
    """
    Compare the fields of two documents (e.g. a draft and its published
    version). Reserved underscore fields are ignored.
    """
    diff = await client.compare_documents(id_a, id_b)
    return {"idA": id_a, "idB": id_b, **as_payload(diff)}


async def sanity_find_references(
    client: SanityClient, id: str, *, limit: int = DEFAULT_REFERENCES_LIMIT
) -> Dict[str, Any]:
    """
    List documents that reference the given document (id and type only).
    Useful before deleting or unpublishing.
    """
    refs = await client.find_references(id, limit=clamp_limit(limit))
    return {
        "id": id,
        "count": len(refs),
        "references": [as_payload(r) for r in refs],
    }


async def sanity_get_history(
    client: SanityClient, id: str, *, limit: int = DEFAULT_HISTORY_LIMIT
) -> Dict[str, Any]:
    """
    Revision history of a document. When the history API is unavailable the
    result has source="fallback" and describes only the current revision.
    """
    history = await client.get_history(id, limit=clamp_limit(limit))
    return {"id": id, **as_payload(history)}
