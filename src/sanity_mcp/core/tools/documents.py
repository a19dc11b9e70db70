from __future__ import annotations

from typing import Any, Dict, List, Optional

from sanity_mcp.core.client import SanityClient
from sanity_mcp.core.models import InsertInstruction, PatchOperations
from sanity_mcp.core.tools._results import DEFAULT_LIMIT, as_payload, clamp_limit


async def sanity_get_document(client: SanityClient, id: str) -> Dict[str, Any]:
    """
    Get a single document by its ID (e.g. "post-123" or "drafts.post-123").
    A missing document is reported with found=false, not as an error.
    """
    doc = await client.get_document(id)
    return {"id": id, "found": doc is not None, "document": doc}


async def sanity_list_documents(
    client: SanityClient,
    type: str,
    *,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    order: Optional[str] = None,
) -> Dict[str, Any]:
    """
    List documents of a specific type with pagination.
    limit defaults to 20 (max 100); order is a GROQ order clause such as
    "_createdAt desc" or "title asc" and is inserted into the query verbatim.
    """
    if offset < 0:
        raise ValueError("offset must be >= 0")

    docs = await client.get_documents_by_type(
        type,
        limit=clamp_limit(limit),
        offset=offset,
        order=order or "_createdAt desc",
    )
    return {"type": type, "count": len(docs), "documents": docs}


async def sanity_search(
    client: SanityClient,
    search_term: str,
    *,
    types: Optional[List[str]] = None,
    limit: int = DEFAULT_LIMIT,
) -> Dict[str, Any]:
    """
    Full-text search across titles, names, descriptions and body content.
    Results are ranked by relevance and include a _score field.
    """
    results = await client.search(search_term, types=types, limit=clamp_limit(limit))
    return {"searchTerm": search_term, "count": len(results), "results": results}


async def sanity_create_document(
    client: SanityClient, document: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Create a document. It must include _type; with an explicit _id the
    document is created or replaced, otherwise Sanity assigns an id.
    """
    return as_payload(await client.create_document(document))


async def sanity_update_document(
    client: SanityClient, id: str, document: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Replace a document entirely. Fields not present in `document` are removed;
    use sanity_patch_document for partial updates.
    """
    return as_payload(await client.update_document(id, document))


async def sanity_patch_document(
    client: SanityClient,
    id: str,
    *,
    set: Optional[Dict[str, Any]] = None,
    unset: Optional[List[str]] = None,
    inc: Optional[Dict[str, float]] = None,
    dec: Optional[Dict[str, float]] = None,
    insert: Optional[InsertInstruction] = None,
) -> Dict[str, Any]:
    """
    Partially update a document: set fields, unset field paths, increment or
    decrement numbers, or insert array items before/after/replacing a path.
    """
    supplied = {
        "set": set,
        "unset": unset,
        "inc": inc,
        "dec": dec,
        "insert": insert,
    }
    patch = PatchOperations(**{k: v for k, v in supplied.items() if v is not None})
    if not patch.to_wire():
        raise ValueError("Provide at least one of set, unset, inc, dec or insert.")
    return as_payload(await client.patch_document(id, patch))


async def sanity_delete_document(client: SanityClient, id: str) -> Dict[str, Any]:
    """Delete a document by ID. Consider sanity_find_references first."""
    return as_payload(await client.delete_document(id))
