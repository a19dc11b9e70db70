import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import quote

import httpx
from dotenv import load_dotenv

from . import documents
from .models import (
    AssetDocument,
    Document,
    DocumentDiff,
    DocumentReference,
    DraftStatus,
    HistoryEntry,
    HistoryResult,
    MutationResult,
    MutationResultEntry,
    PatchOperations,
    QueryResult,
    TypeSchema,
)
from .mutations import (
    delete_mutation,
    mutation_kind,
    patch_mutation,
    replace_mutation,
)
from .observability import log_event

DEFAULT_DATASET = "production"
DEFAULT_API_VERSION = "2024-01-20"
DEFAULT_API_HOST = "sanity.io"

# Encoded query length at which GET switches to POST.
MAX_GET_QUERY_LENGTH = 10_000

RESERVED_TYPE_PREFIXES = ("sanity.", "system.")
ASSET_TYPES = ("sanity.imageAsset", "sanity.fileAsset")

# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class SanityClientError(Exception):
    """Base error for client failures."""


class SanityHTTPError(SanityClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        body: str = "",
        message: str = "request failed",
    ):
        super().__init__(f"{message}: {status_code} - {body}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body


class QueryError(SanityHTTPError):
    """Non-2xx response to a read query."""


class MutationError(SanityHTTPError):
    """Non-2xx response to a write (mutation or asset upload)."""


class SanityParseError(SanityClientError):
    pass


class AuthRequiredError(SanityClientError):
    def __init__(self, operation: str):
        super().__init__(f"{operation} requires a Sanity API token")
        self.operation = operation


class NotFoundError(SanityClientError):
    def __init__(self, document_id: str, *, label: str = "Document"):
        super().__init__(f"{label} not found: {document_id}")
        self.document_id = document_id


@dataclass(frozen=True)
class SanityConfig:
    project_id: str
    dataset: str = DEFAULT_DATASET
    api_version: str = DEFAULT_API_VERSION
    token: Optional[str] = None
    use_cdn: Optional[bool] = None  # None: CDN only for anonymous access
    api_host: str = DEFAULT_API_HOST


def encoded_query_length(groq: str) -> int:
    """Length of the query once percent-encoded as a URI component."""
    return len(quote(groq, safe=_URI_COMPONENT_SAFE))


def _param_value(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _utc_now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class SanityClient:
    """
    Async HTTP client for the Sanity Content Lake.
    - Reads go to the CDN host unless a token is configured (or use_cdn says otherwise)
    - Writes, uploads and history always go to the API host
    - No retries and no client-side timeout; failures propagate as typed errors
    """

    def __init__(
        self,
        config: SanityConfig,
        *,
        timeout_seconds: Optional[float] = None,
        request_id: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        if not (config.project_id or "").strip():
            raise ValueError("project_id must be provided.")

        self.config = config
        self.use_cdn = (
            config.use_cdn if config.use_cdn is not None else not config.token
        )
        self.request_id = request_id or uuid.uuid4().hex

        # Attached per request, including on an injected http client.
        self._headers = {"Accept": "application/json"}
        if config.token:
            self._headers["Authorization"] = f"Bearer {config.token}"

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    @classmethod
    def from_env(cls, **kwargs) -> "SanityClient":
        from .config import load_env_config

        load_dotenv()
        return cls(load_env_config(use_dotenv=False), **kwargs)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "SanityClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Endpoints -------------------------------------------------------- #

    def _host_url(self, subdomain: str) -> str:
        cfg = self.config
        return f"https://{cfg.project_id}.{subdomain}.{cfg.api_host}/v{cfg.api_version}"

    @property
    def base_url(self) -> str:
        """Read endpoint prefix; CDN or API depending on use_cdn."""
        return self._host_url("apicdn" if self.use_cdn else "api")

    @property
    def api_url(self) -> str:
        """Write endpoint prefix; never the CDN."""
        return self._host_url("api")

    @property
    def query_url(self) -> str:
        return f"{self.base_url}/data/query/{self.config.dataset}"

    @property
    def mutate_url(self) -> str:
        return f"{self.api_url}/data/mutate/{self.config.dataset}"

    @property
    def assets_url(self) -> str:
        return f"{self.api_url}/assets/images/{self.config.dataset}"

    def history_url(self, document_id: str) -> str:
        return (
            f"{self.api_url}/data/history/{self.config.dataset}"
            f"/documents/{quote(document_id, safe='')}"
        )

    def _require_token(self, operation: str) -> None:
        if not self.config.token:
            raise AuthRequiredError(operation)

    # --- Transport -------------------------------------------------------- #

    async def _send(
        self,
        method: str,
        url: str,
        *,
        tool: Optional[str] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Issue one HTTP request and log it as an op_call event.
        Network/transport failures are wrapped in SanityClientError;
        status handling is left to the caller.
        """
        start = time.perf_counter()
        endpoint = httpx.URL(url).path
        headers = {**self._headers, **kwargs.pop("headers", {})}
        try:
            resp = await self.http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            log_event(
                "op_call",
                request_id=self.request_id,
                tool=tool,
                method=method,
                endpoint=endpoint,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            raise SanityClientError(
                f"Network error calling {method} {endpoint}: {exc}"
            ) from exc

        log_event(
            "op_call",
            request_id=self.request_id,
            tool=tool,
            method=method,
            endpoint=endpoint,
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )
        return resp

    @staticmethod
    def _is_success(resp: httpx.Response) -> bool:
        return 200 <= resp.status_code < 300

    @staticmethod
    def _safe_json(resp: httpx.Response) -> Dict[str, Any]:
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise SanityParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url.path}, got non-JSON body snippet: {snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise SanityParseError(
                f"Expected top-level JSON object from {resp.request.method} "
                f"{resp.request.url.path}, got {type(data).__name__}"
            )
        return data

    # --- Queries ---------------------------------------------------------- #

    async def query(
        self,
        groq: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        tool: Optional[str] = None,
    ) -> QueryResult:
        """
        Execute a GROQ query. The query string is forwarded verbatim.

        Short queries (encoded length below MAX_GET_QUERY_LENGTH) are sent as
        GET with each parameter as a `$name` entry holding its JSON encoding;
        longer ones are POSTed as {query, params} to stay clear of URL limits.
        """
        if encoded_query_length(groq) < MAX_GET_QUERY_LENGTH:
            qs: Dict[str, str] = {"query": groq}
            for key, value in (params or {}).items():
                qs[f"${key}"] = _param_value(value)
            resp = await self._send("GET", self.query_url, params=qs, tool=tool)
            method = "GET"
        else:
            body: Dict[str, Any] = {"query": groq}
            if params:
                body["params"] = dict(params)
            resp = await self._send("POST", self.query_url, json=body, tool=tool)
            method = "POST"

        if not self._is_success(resp):
            raise QueryError(
                status_code=resp.status_code,
                method=method,
                url=self.query_url,
                body=resp.text,
                message="Sanity query failed",
            )
        return QueryResult.model_validate(self._safe_json(resp))

    async def get_document(self, document_id: str) -> Optional[Document]:
        result = await self.query(
            "*[_id == $id][0]", {"id": document_id}, tool="get_document"
        )
        return result.result

    async def get_documents_by_type(
        self,
        doc_type: str,
        *,
        limit: Optional[int] = 100,
        offset: int = 0,
        order: str = "_createdAt desc",
    ) -> List[Document]:
        """
        List documents of one type.
        A falsy `limit` (0 or None) means the default page of 100.

        `order` is interpolated into the query as-is; it must come from a
        trusted caller.
        """
        limit = limit or 100
        groq = (
            f"*[_type == $type] | order({order}) [{offset}...{offset + limit}]"
        )
        result = await self.query(groq, {"type": doc_type}, tool="list_documents")
        return result.result or []

    async def search(
        self,
        search_term: str,
        *,
        types: Optional[Sequence[str]] = None,
        limit: int = 20,
    ) -> List[Document]:
        """
        Weighted full-text search across title, name, description and body.
        `types` is interpolated as a JSON array literal, not parameterized.
        """
        excluded = " && ".join(f'_type != "{t}"' for t in ASSET_TYPES)
        type_filter = f" && _type in {json.dumps(list(types))}" if types else ""
        groq = (
            f"*[{excluded}{type_filter}] | score(\n"
            "  boost(title match $searchTerm, 3),\n"
            "  boost(name match $searchTerm, 3),\n"
            "  boost(description match $searchTerm, 2),\n"
            "  boost(body match $searchTerm, 1),\n"
            "  boost(pt::text(body) match $searchTerm, 1)\n"
            f") | order(_score desc) [0...{limit}] {{\n"
            "  _id, _type, _score, title, name, slug, description\n"
            "}"
        )
        result = await self.query(
            groq, {"searchTerm": f"*{search_term}*"}, tool="search"
        )
        return result.result or []

    async def count(
        self, groq_filter: str, params: Optional[Mapping[str, Any]] = None
    ) -> int:
        result = await self.query(f"count({groq_filter})", params, tool="count")
        return int(result.result or 0)

    async def get_document_types(self) -> List[str]:
        result = await self.query("array::unique(*[]._type)", tool="document_types")
        return [
            t
            for t in (result.result or [])
            if isinstance(t, str) and not t.startswith(RESERVED_TYPE_PREFIXES)
        ]

    async def get_type_schema(self, doc_type: str) -> TypeSchema:
        sample, total = await asyncio.gather(
            self.query("*[_type == $type][0]", {"type": doc_type}, tool="type_schema"),
            self.query(
                "count(*[_type == $type])", {"type": doc_type}, tool="type_schema"
            ),
        )
        fields = (
            documents.application_fields(sample.result)
            if isinstance(sample.result, dict)
            else []
        )
        return TypeSchema(fields=fields, count=int(total.result or 0))

    # --- Writes ----------------------------------------------------------- #

    async def mutate(
        self,
        mutations: Sequence[Mapping[str, Any]],
        *,
        return_documents: bool = False,
        tool: Optional[str] = None,
    ) -> MutationResult:
        """
        Submit mutations as one transaction. The store applies the whole list
        or none of it, so anything meant to be atomic must go in one call.
        """
        self._require_token("Write operations")

        resp = await self._send(
            "POST",
            self.mutate_url,
            json={
                "mutations": [dict(m) for m in mutations],
                "returnDocuments": return_documents,
            },
            tool=tool,
        )
        if not self._is_success(resp):
            raise MutationError(
                status_code=resp.status_code,
                method="POST",
                url=self.mutate_url,
                body=resp.text,
                message="Sanity mutation failed",
            )
        return MutationResult.model_validate(self._safe_json(resp))

    async def create_document(self, document: Mapping[str, Any]) -> MutationResult:
        """Create a document; an explicit `_id` makes this an idempotent upsert."""
        self._require_token("Write operations")
        if not document.get("_type"):
            raise ValueError("document must include a non-empty '_type'.")

        kind = "createOrReplace" if document.get("_id") else "create"
        return await self.mutate([{kind: dict(document)}], tool="create_document")

    async def update_document(
        self, document_id: str, document: Mapping[str, Any]
    ) -> MutationResult:
        """Replace the whole document; fields missing from `document` are dropped."""
        return await self.mutate(
            [replace_mutation(document_id, document)], tool="update_document"
        )

    async def patch_document(
        self,
        document_id: str,
        patch: Union[PatchOperations, Mapping[str, Any]],
    ) -> MutationResult:
        self._require_token("Write operations")
        if not isinstance(patch, PatchOperations):
            patch = PatchOperations.model_validate(dict(patch))
        return await self.mutate(
            [patch_mutation(document_id, patch)], tool="patch_document"
        )

    async def delete_document(self, document_id: str) -> MutationResult:
        return await self.mutate([delete_mutation(document_id)], tool="delete_document")

    async def bulk_mutate(
        self,
        operations: Sequence[Mapping[str, Any]],
        *,
        dry_run: bool = False,
    ) -> MutationResult:
        """
        Submit caller-ordered mutations as one atomic batch.
        With dry_run, nothing is sent; the result lists what would run.
        """
        self._require_token("Bulk operations")
        kinds = [mutation_kind(op) for op in operations]

        if dry_run:
            return MutationResult(
                transaction_id="dry-run",
                results=[
                    MutationResultEntry(id=f"operation-{i}", operation=kind)
                    for i, kind in enumerate(kinds)
                ],
            )

        return await self.mutate(operations, tool="bulk_mutate")

    # --- Assets ----------------------------------------------------------- #

    async def upload_image(
        self,
        data: bytes,
        filename: str,
        content_type: str = "image/jpeg",
    ) -> AssetDocument:
        self._require_token("Image upload")

        resp = await self._send(
            "POST",
            self.assets_url,
            params={"filename": filename},
            content=data,
            headers={"Content-Type": content_type},
            tool="upload_image",
        )
        if not self._is_success(resp):
            raise MutationError(
                status_code=resp.status_code,
                method="POST",
                url=self.assets_url,
                body=resp.text,
                message="Image upload failed",
            )
        payload = self._safe_json(resp)
        return AssetDocument.model_validate(payload.get("document") or {})

    @staticmethod
    def image_reference(asset_id: str) -> Dict[str, Any]:
        return {"_type": "image", "asset": {"_type": "reference", "_ref": asset_id}}

    # --- Draft / publish -------------------------------------------------- #

    async def publish_document(self, document_id: str) -> MutationResult:
        """Move a draft to its published id in one transaction."""
        self._require_token("Write operations")
        draft_id = documents.draft_id(document_id)
        published_id = documents.published_id(document_id)

        draft = await self.get_document(draft_id)
        if not draft:
            raise NotFoundError(draft_id, label="Draft document")

        return await self.mutate(
            [
                replace_mutation(published_id, documents.strip_identity(draft)),
                delete_mutation(draft_id),
            ],
            tool="publish_document",
        )

    async def unpublish_document(self, document_id: str) -> MutationResult:
        """Move a published document back to drafts in one transaction."""
        self._require_token("Write operations")
        published_id = documents.published_id(document_id)
        draft_id = documents.draft_id(document_id)

        published = await self.get_document(published_id)
        if not published:
            raise NotFoundError(published_id, label="Published document")

        return await self.mutate(
            [
                replace_mutation(draft_id, documents.strip_identity(published)),
                delete_mutation(published_id),
            ],
            tool="unpublish_document",
        )

    async def get_draft_status(self, document_id: str) -> DraftStatus:
        published_id = documents.published_id(document_id)
        published, draft = await asyncio.gather(
            self.get_document(published_id),
            self.get_document(documents.draft_id(published_id)),
        )

        if published and draft:
            status = "both"
        elif published:
            status = "published"
        elif draft:
            status = "draft"
        else:
            status = "none"

        return DraftStatus(
            published=published or None,
            draft=draft or None,
            has_unpublished_changes=bool(draft),
            status=status,
        )

    # --- Derived reads ---------------------------------------------------- #

    async def compare_documents(self, id_a: str, id_b: str) -> DocumentDiff:
        doc_a, doc_b = await asyncio.gather(
            self.get_document(id_a), self.get_document(id_b)
        )
        if not doc_a:
            raise NotFoundError(id_a)
        if not doc_b:
            raise NotFoundError(id_b)
        return documents.diff_fields(doc_a, doc_b)

    async def find_references(
        self, document_id: str, *, limit: int = 100
    ) -> List[DocumentReference]:
        groq = f"*[references($id)][0...{limit}] {{ _id, _type }}"
        result = await self.query(groq, {"id": document_id}, tool="find_references")
        return [DocumentReference.model_validate(r) for r in result.result or []]

    async def get_history(self, document_id: str, *, limit: int = 25) -> HistoryResult:
        """
        Revision history from the history endpoint.

        When that endpoint answers with a non-2xx status the result falls back
        to a single entry synthesized from the current document (or no entries
        if the document is gone); `source` tells the two apart.
        """
        self._require_token("History access")

        resp = await self._send(
            "GET",
            self.history_url(document_id),
            params={"limit": limit},
            tool="get_history",
        )
        if self._is_success(resp):
            payload = self._safe_json(resp)
            entries = [
                HistoryEntry.model_validate(e)
                for e in payload.get("documents") or []
                if isinstance(e, dict)
            ]
            return HistoryResult(source="history", entries=entries)

        log_event(
            "history_fallback",
            level=logging.WARNING,
            request_id=self.request_id,
            tool="get_history",
            status=resp.status_code,
        )
        doc = await self.get_document(document_id)
        if not doc:
            return HistoryResult(source="fallback", entries=[])

        return HistoryResult(
            source="fallback",
            entries=[
                HistoryEntry(
                    id=doc.get("_id", document_id),
                    rev=doc.get("_rev") or "unknown",
                    updated_at=doc.get("_updatedAt") or _utc_now_iso(),
                )
            ],
        )
