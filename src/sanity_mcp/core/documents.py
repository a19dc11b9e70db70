import json
from typing import Any, Dict, List, Mapping

from .models import DocumentDiff

DRAFT_PREFIX = "drafts."
IDENTITY_FIELDS = ("_id", "_rev")


def is_draft_id(document_id: str) -> bool:
    """
    True when the id carries the draft prefix.
    Example: is_draft_id('drafts.post-1') -> True
    """
    return document_id.startswith(DRAFT_PREFIX)


def published_id(document_id: str) -> str:
    """
    Base (published) id for any document id.
    Example: published_id('drafts.post-1') -> 'post-1'
    """
    if is_draft_id(document_id):
        return document_id[len(DRAFT_PREFIX) :]
    return document_id


def draft_id(document_id: str) -> str:
    """
    Draft id for any document id.
    Example: draft_id('post-1') -> 'drafts.post-1'
    """
    return DRAFT_PREFIX + published_id(document_id)


def is_reserved_field(name: str) -> bool:
    return name.startswith("_")


def application_fields(document: Mapping[str, Any]) -> List[str]:
    """
    Field names without the reserved underscore prefix, in document order.
    Example: application_fields({'_id': 'a', 'title': 'T'}) -> ['title']
    """
    return [k for k in document if not is_reserved_field(k)]


def strip_identity(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of the document without `_id` and `_rev`, ready to store elsewhere."""
    return {k: v for k, v in document.items() if k not in IDENTITY_FIELDS}


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def diff_fields(doc_a: Mapping[str, Any], doc_b: Mapping[str, Any]) -> DocumentDiff:
    """
    Compare application fields of two documents.

    Values are compared by their canonical JSON encoding, so key order inside
    nested objects does not matter but 1 and true stay distinct. Every
    category comes back sorted.
    """
    keys_a = set(application_fields(doc_a))
    keys_b = set(application_fields(doc_b))
    shared = keys_a & keys_b

    changed = {k for k in shared if _canonical(doc_a[k]) != _canonical(doc_b[k])}

    return DocumentDiff(
        added=sorted(keys_b - keys_a),
        removed=sorted(keys_a - keys_b),
        changed=sorted(changed),
        unchanged=sorted(shared - changed),
    )


__all__ = [
    "DRAFT_PREFIX",
    "is_draft_id",
    "published_id",
    "draft_id",
    "is_reserved_field",
    "application_fields",
    "strip_identity",
    "diff_fields",
]
