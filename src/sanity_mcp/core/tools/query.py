from __future__ import annotations

from typing import Any, Dict, Optional

from sanity_mcp.core.client import SanityClient


async def sanity_query(
    client: SanityClient,
    query: str,
    params: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Execute a GROQ query against Sanity CMS.
    Examples: `*[_type == "post"]` gets all posts,
    `*[_type == "post" && slug.current == $slug][0]` gets one post.
    Parameters are referenced as $name inside the query.
    """
    result = await client.query(query, params, tool="sanity_query")
    return {"query": query, "ms": result.elapsed_ms, "result": result.result}


async def sanity_count(
    client: SanityClient,
    filter: str,
    params: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Count documents matching a GROQ filter, e.g. `*[_type == 'post']`."""
    total = await client.count(filter, params)
    return {"filter": filter, "count": total}
