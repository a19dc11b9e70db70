from __future__ import annotations

import asyncio
import os
import sys
from typing import Optional

from sanity_mcp.core.client import SanityClientError
from sanity_mcp.core.config import create_client_from_env
from sanity_mcp.core.tools.bulk import sanity_bulk_mutate
from sanity_mcp.core.tools.documents import sanity_list_documents
from sanity_mcp.core.tools.schema import sanity_get_type_info, sanity_get_types
from sanity_mcp.core.tools.workflow import sanity_get_draft_status


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if val else default


def _print_step(title: str) -> None:
    print(f"\n== {title}")


def _fail(msg: str) -> int:
    print(f"FAILED: {msg}")
    return 1


async def run_smoke_test() -> int:
    """
    Read-mostly check against a real dataset. Writes are only exercised as a
    dry run, so this is safe to point at production.
    """
    try:
        client = create_client_from_env()
    except ValueError as exc:
        return _fail(str(exc))

    cfg_type = _env("TEST_DOCUMENT_TYPE")

    print("Config:")
    print(f"  project_id: {client.config.project_id}")
    print(f"  dataset: {client.config.dataset}")
    print(f"  use_cdn: {client.use_cdn}")
    print(f"  token: {'set' if client.config.token else 'not set'}")

    async with client:
        _print_step("List document types")
        types = (await sanity_get_types(client))["documentTypes"]
        print(f"  {len(types)} types: {', '.join(types[:10])}")
        if not types:
            return _fail("Dataset has no document types.")

        doc_type = cfg_type or types[0]

        _print_step(f"Type info for '{doc_type}'")
        info = await sanity_get_type_info(client, doc_type)
        print(f"  count={info['count']} fields={info['fields']}")

        _print_step(f"List '{doc_type}' documents")
        listing = await sanity_list_documents(client, doc_type, limit=3)
        docs = listing["documents"]
        for doc in docs:
            print(f"  {doc.get('_id')}")
        if not docs:
            print("  (none)")
            return 0

        _print_step("Draft status of first document")
        status = await sanity_get_draft_status(client, docs[0]["_id"])
        print(f"  status={status['status']}")

        if client.config.token:
            _print_step("Bulk mutate (dry run)")
            try:
                planned = await sanity_bulk_mutate(
                    client,
                    [{"patch": {"id": docs[0]["_id"], "set": {"smokeTest": True}}}],
                    dry_run=True,
                )
            except SanityClientError as exc:
                return _fail(f"dry run failed: {exc}")
            print(f"  transaction={planned['transactionId']} {planned['results']}")

    print("\nOK")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(run_smoke_test()))
