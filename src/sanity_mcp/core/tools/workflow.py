from __future__ import annotations

from typing import Any, Dict

from sanity_mcp.core.client import SanityClient
from sanity_mcp.core.tools._results import as_payload


async def sanity_publish_document(client: SanityClient, id: str) -> Dict[str, Any]:
    """
    Publish a draft: copy drafts.<id> to <id> and delete the draft in one
    transaction. Accepts either the draft id or the base id.
    """
    return as_payload(await client.publish_document(id))


async def sanity_unpublish_document(client: SanityClient, id: str) -> Dict[str, Any]:
    """
    Unpublish a document: move <id> back to drafts.<id> in one transaction.
    """
    return as_payload(await client.unpublish_document(id))


async def sanity_get_draft_status(client: SanityClient, id: str) -> Dict[str, Any]:
    """
    Report whether a document is published, draft-only, both (unpublished
    changes) or missing. Works with either the draft or the published id.
    """
    return as_payload(await client.get_draft_status(id))
