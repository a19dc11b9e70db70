import json
from typing import Any, Dict, Optional

import pytest
from httpx import Request, Response
from sanity_mcp.core.client import SanityClient, SanityConfig

PROJECT = "test-project"
API_VERSION = "2024-01-20"
CDN_BASE = f"https://{PROJECT}.apicdn.sanity.io/v{API_VERSION}"
API_BASE = f"https://{PROJECT}.api.sanity.io/v{API_VERSION}"

CDN_QUERY_URL = f"{CDN_BASE}/data/query/production"
API_QUERY_URL = f"{API_BASE}/data/query/production"
MUTATE_URL = f"{API_BASE}/data/mutate/production"
ASSETS_URL = f"{API_BASE}/assets/images/production"


def history_url(document_id: str) -> str:
    return f"{API_BASE}/data/history/production/documents/{document_id}"


def query_payload(result: Any, query: str = "") -> Dict[str, Any]:
    return {"ms": 3, "query": query, "result": result}


def documents_by_id(docs: Dict[str, Optional[Dict[str, Any]]]):
    """respx side effect answering `*[_id == $id][0]` lookups from a dict."""

    def responder(request: Request) -> Response:
        doc_id = json.loads(request.url.params["$id"])
        return Response(200, json=query_payload(docs.get(doc_id)))

    return responder


def sent_mutations(request: Request):
    return json.loads(request.content)["mutations"]


@pytest.fixture
def anon_client():
    return SanityClient(SanityConfig(project_id=PROJECT))


@pytest.fixture
def client():
    return SanityClient(SanityConfig(project_id=PROJECT, token="secret-token"))
