from __future__ import annotations

from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")

# Documents stay loosely typed: reserved _id/_type/_rev plus arbitrary fields.
Document = Dict[str, Any]


class SanityModel(BaseModel):
    """
    Base for Sanity payloads. Reserved underscore fields (_id, _rev, ...) are
    exposed under plain names and serialized back by alias.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# --- Response Envelopes ---


class QueryResult(SanityModel, Generic[T]):
    elapsed_ms: Optional[float] = Field(default=None, alias="ms")
    query: Optional[str] = None
    result: Optional[T] = None


class MutationResultEntry(SanityModel):
    id: str
    operation: Optional[str] = None


class MutationResult(SanityModel):
    transaction_id: str = Field(alias="transactionId")
    results: List[MutationResultEntry] = Field(default_factory=list)
    documents: Optional[List[Document]] = None


class AssetDocument(SanityModel):
    id: str = Field(alias="_id")
    type: str = Field(alias="_type")
    url: str
    original_filename: Optional[str] = Field(default=None, alias="originalFilename")
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    size: Optional[int] = None


# --- Derived Results ---


class TypeSchema(SanityModel):
    fields: List[str] = Field(default_factory=list)
    count: int = 0


class DocumentReference(SanityModel):
    id: str = Field(alias="_id")
    type: str = Field(alias="_type")


class HistoryEntry(SanityModel):
    id: str = Field(alias="_id")
    rev: Optional[str] = Field(default=None, alias="_rev")
    updated_at: Optional[str] = Field(default=None, alias="_updatedAt")
    author: Optional[str] = None


class HistoryResult(SanityModel):
    """History entries plus where they came from.

    source="history": returned by the history endpoint.
    source="fallback": endpoint unavailable; at most one entry built from the
    current document.
    """

    source: Literal["history", "fallback"]
    entries: List[HistoryEntry] = Field(default_factory=list)


class DraftStatus(SanityModel):
    published: Optional[Document] = None
    draft: Optional[Document] = None
    has_unpublished_changes: bool = Field(alias="hasUnpublishedChanges")
    status: Literal["published", "draft", "both", "none"]


class DocumentDiff(SanityModel):
    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    changed: List[str] = Field(default_factory=list)
    unchanged: List[str] = Field(default_factory=list)


# --- Input Models (Patch Payloads) ---


class InsertInstruction(BaseModel):
    before: Optional[str] = None
    after: Optional[str] = None
    replace: Optional[str] = None
    items: List[Any]

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _one_position(self) -> "InsertInstruction":
        given = [p for p in (self.before, self.after, self.replace) if p is not None]
        if len(given) != 1:
            raise ValueError(
                "insert needs exactly one of 'before', 'after' or 'replace'."
            )
        return self


class PatchOperations(BaseModel):
    set: Optional[Dict[str, Any]] = None
    unset: Optional[List[str]] = None
    inc: Optional[Dict[str, int | float]] = None
    dec: Optional[Dict[str, int | float]] = None
    insert: Optional[InsertInstruction] = None

    model_config = ConfigDict(extra="forbid")

    def to_wire(self) -> Dict[str, Any]:
        """Only the instructions the caller supplied; nothing sent as null."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


__all__ = [
    "Document",
    "QueryResult",
    "MutationResultEntry",
    "MutationResult",
    "AssetDocument",
    "TypeSchema",
    "DocumentReference",
    "HistoryEntry",
    "HistoryResult",
    "DraftStatus",
    "DocumentDiff",
    "InsertInstruction",
    "PatchOperations",
]
