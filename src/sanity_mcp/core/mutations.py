"""
Builders for the single-key mutation objects accepted by /data/mutate.
"""

from typing import Any, Dict, Mapping

from .models import PatchOperations

MUTATION_KINDS = frozenset(
    {"create", "createOrReplace", "createIfNotExists", "patch", "delete"}
)


def replace_mutation(document_id: str, document: Mapping[str, Any]) -> Dict[str, Any]:
    """createOrReplace keyed on document_id; an `_id` inside `document` is ignored."""
    return {"createOrReplace": {**document, "_id": document_id}}


def patch_mutation(document_id: str, patch: PatchOperations) -> Dict[str, Any]:
    return {"patch": {"id": document_id, **patch.to_wire()}}


def delete_mutation(document_id: str) -> Dict[str, Any]:
    return {"delete": {"id": document_id}}


def mutation_kind(operation: Mapping[str, Any]) -> str:
    """
    Name of the single mutation kind in an operation.
    Raises ValueError for anything that is not exactly one known kind.
    """
    if not isinstance(operation, Mapping) or len(operation) != 1:
        raise ValueError(
            "Each operation must be an object with exactly one mutation kind."
        )
    (kind,) = operation.keys()
    if kind not in MUTATION_KINDS:
        raise ValueError(
            f"Unknown mutation kind '{kind}'; expected one of "
            f"{', '.join(sorted(MUTATION_KINDS))}."
        )
    return kind


__all__ = [
    "MUTATION_KINDS",
    "replace_mutation",
    "patch_mutation",
    "delete_mutation",
    "mutation_kind",
]
