from __future__ import annotations

from typing import Any, Dict

from sanity_mcp.core.client import SanityClient


async def sanity_get_types(client: SanityClient) -> Dict[str, Any]:
    """Get all document types in the dataset, minus internal sanity./system. types."""
    return {"documentTypes": await client.get_document_types()}


async def sanity_get_type_info(client: SanityClient, type: str) -> Dict[str, Any]:
    """
    Get field names (from one sample document) and the document count for a type.
    """
    info = await client.get_type_schema(type)
    return {"type": type, "fields": info.fields, "count": info.count}
