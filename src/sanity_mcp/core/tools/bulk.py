from __future__ import annotations

from typing import Any, Dict, List

from sanity_mcp.core.client import SanityClient
from sanity_mcp.core.tools._results import as_payload


async def sanity_bulk_mutate(
    client: SanityClient,
    operations: List[Dict[str, Any]],
    *,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """
    Run several mutations as one atomic transaction: all apply or none do.
    Each operation is an object with exactly one key out of create,
    createOrReplace, createIfNotExists, patch or delete, e.g.
    {"patch": {"id": "post-1", "set": {"featured": true}}}.
    With dry_run=true nothing is sent and the planned operations are listed.
    """
    if not operations:
        raise ValueError("operations must contain at least one mutation.")
    result = await client.bulk_mutate(operations, dry_run=dry_run)
    return {"dryRun": dry_run, **as_payload(result)}
