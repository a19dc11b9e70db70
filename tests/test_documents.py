import pytest
from sanity_mcp.core.documents import (
    application_fields,
    diff_fields,
    draft_id,
    is_draft_id,
    published_id,
    strip_identity,
)
from sanity_mcp.core.models import PatchOperations
from sanity_mcp.core.mutations import (
    delete_mutation,
    mutation_kind,
    patch_mutation,
    replace_mutation,
)


@pytest.mark.parametrize(
    "given, draft, published",
    [
        ("post-1", "drafts.post-1", "post-1"),
        ("drafts.post-1", "drafts.post-1", "post-1"),
    ],
)
def test_draft_and_published_ids(given, draft, published):
    assert draft_id(given) == draft
    assert published_id(given) == published
    assert is_draft_id(draft)
    assert not is_draft_id(published)


def test_application_fields_keep_order_and_drop_reserved():
    doc = {"_id": "a", "title": "T", "_type": "post", "body": [], "_rev": "r"}
    assert application_fields(doc) == ["title", "body"]


def test_strip_identity_keeps_type_and_timestamps():
    doc = {"_id": "a", "_rev": "r", "_type": "post", "_updatedAt": "x", "title": "T"}
    assert strip_identity(doc) == {"_type": "post", "_updatedAt": "x", "title": "T"}


def test_diff_fields_ignores_reserved_and_sorts():
    a = {"_id": "a", "_rev": "1", "z": 1, "m": 2, "b": {"k": [1, 2]}}
    b = {"_id": "b", "_rev": "2", "m": 3, "b": {"k": [1, 2]}, "c": None, "a": 0}

    diff = diff_fields(a, b)

    assert diff.added == ["a", "c"]
    assert diff.removed == ["z"]
    assert diff.changed == ["m"]
    assert diff.unchanged == ["b"]


def test_diff_fields_array_order_matters():
    diff = diff_fields({"tags": [1, 2]}, {"tags": [2, 1]})
    assert diff.changed == ["tags"]


def test_replace_mutation_forces_id():
    assert replace_mutation("x", {"_id": "y", "title": "T"}) == {
        "createOrReplace": {"_id": "x", "title": "T"}
    }


def test_patch_and_delete_mutations():
    patch = PatchOperations(set={"a": 1}, unset=["b"])
    assert patch_mutation("x", patch) == {
        "patch": {"id": "x", "set": {"a": 1}, "unset": ["b"]}
    }
    assert delete_mutation("x") == {"delete": {"id": "x"}}


@pytest.mark.parametrize(
    "operation, kind",
    [
        ({"create": {}}, "create"),
        ({"createOrReplace": {}}, "createOrReplace"),
        ({"createIfNotExists": {}}, "createIfNotExists"),
        ({"patch": {"id": "a"}}, "patch"),
        ({"delete": {"id": "a"}}, "delete"),
    ],
)
def test_mutation_kind_accepts_known_kinds(operation, kind):
    assert mutation_kind(operation) == kind


def test_mutation_kind_rejects_unknown_kind():
    with pytest.raises(ValueError) as exc:
        mutation_kind({"upsert": {}})
    assert "Unknown mutation kind 'upsert'" in str(exc.value)
