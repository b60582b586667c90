from __future__ import annotations

import asyncio

from groundtruth.domain.associations import AssociationReconciler, RelationshipTypeResolver
from groundtruth.domain.model import AssociationCategory, RelationshipTypeDescriptor
from tests.support.directory import FakeDirectory


def _reconciler(directory: FakeDirectory) -> AssociationReconciler:
    return AssociationReconciler(
        directory=directory,
        subject_category="contacts",
        resolver=RelationshipTypeResolver(directory),
    )


def test_reconcile_replaces_existing_association() -> None:
    directory = FakeDirectory()
    directory.link("contact-1", "zip", "zip-9")

    result = asyncio.run(_reconciler(directory).reconcile("contact-1", "zip", "zip-10"))

    assert result.succeeded
    assert result.retired == ["zip-9"]
    assert directory.linked("contact-1", "zip") == ["zip-10"]
    assert [call[0] for call in directory.calls] == [
        "get_relationship_types",
        "list_relationships",
        "delete_relationship",
        "put_relationship",
    ]
    assert directory.calls_named("delete_relationship") == [
        ("delete_relationship", "contact-1", "contacts", "zip", "zip-9")
    ]
    assert directory.calls_named("put_relationship") == [
        (
            "put_relationship",
            "contact-1",
            "contacts",
            "zip",
            "zip-10",
            7,
            AssociationCategory.USER_DEFINED,
        )
    ]


def test_reconcile_leaves_exactly_one_association() -> None:
    directory = FakeDirectory()
    directory.link("contact-1", "zip", "zip-1", "zip-2", "zip-3")

    result = asyncio.run(_reconciler(directory).reconcile("contact-1", "zip", "zip-4"))

    assert result.succeeded
    assert sorted(result.retired) == ["zip-1", "zip-2", "zip-3"]
    assert directory.linked("contact-1", "zip") == ["zip-4"]


def test_reconcile_with_empty_target_is_a_noop() -> None:
    directory = FakeDirectory()
    directory.link("contact-1", "zip", "zip-9")

    result = asyncio.run(_reconciler(directory).reconcile("contact-1", "zip", ""))
    missing = asyncio.run(_reconciler(directory).reconcile("contact-1", "zip", None))

    assert result.succeeded
    assert result.skipped
    assert missing.succeeded
    assert directory.calls == []
    assert directory.linked("contact-1", "zip") == ["zip-9"]


def test_reconcile_still_creates_when_listing_fails() -> None:
    directory = FakeDirectory(fail_list=True)

    result = asyncio.run(_reconciler(directory).reconcile("contact-1", "zip", "zip-10"))

    assert result.succeeded
    assert result.retired == []
    assert directory.calls_named("delete_relationship") == []
    assert len(directory.calls_named("put_relationship")) == 1


def test_reconcile_continues_past_failed_retirements() -> None:
    directory = FakeDirectory(fail_delete_for={"zip-1"})
    directory.link("contact-1", "zip", "zip-1", "zip-2")

    result = asyncio.run(_reconciler(directory).reconcile("contact-1", "zip", "zip-3"))

    assert result.succeeded
    assert result.retired == ["zip-2"]
    assert set(result.failed_retirements) == {"zip-1"}
    assert len(directory.calls_named("delete_relationship")) == 2
    assert directory.linked("contact-1", "zip") == ["zip-1", "zip-3"]


def test_reconcile_reports_create_failure() -> None:
    directory = FakeDirectory(fail_put=True)
    directory.link("contact-1", "zip", "zip-9")

    result = asyncio.run(_reconciler(directory).reconcile("contact-1", "zip", "zip-10"))

    assert not result.succeeded
    assert result.error is not None
    assert "create failed" in str(result.error)
    assert result.retired == ["zip-9"]
    assert len(directory.calls_named("put_relationship")) == 1


def test_reconcile_uses_default_type_when_schema_lookup_fails() -> None:
    directory = FakeDirectory(fail_types=True)

    result = asyncio.run(_reconciler(directory).reconcile("contact-1", "zip", "zip-10"))

    assert result.succeeded
    assert result.type_id == 1
    assert directory.calls_named("put_relationship")[0][5] == 1


def test_reconcile_uses_first_registered_type() -> None:
    directory = FakeDirectory(
        relationship_types=[
            RelationshipTypeDescriptor(type_id=7),
            RelationshipTypeDescriptor(type_id=9),
        ]
    )

    asyncio.run(_reconciler(directory).reconcile("contact-1", "zip", "zip-10"))

    assert directory.calls_named("put_relationship")[0][5] == 7


def test_disassociate_issues_a_single_delete() -> None:
    directory = FakeDirectory()
    directory.link("contact-1", "zip", "zip-9")

    result = asyncio.run(_reconciler(directory).disassociate("contact-1", "zip", "zip-9"))

    assert result.succeeded
    assert directory.calls == [("delete_relationship", "contact-1", "contacts", "zip", "zip-9")]
    assert directory.linked("contact-1", "zip") == []


def test_disassociate_without_target_is_a_noop() -> None:
    directory = FakeDirectory()

    result = asyncio.run(_reconciler(directory).disassociate("contact-1", "zip", ""))

    assert result.succeeded
    assert result.skipped
    assert directory.calls == []


def test_disassociate_reports_failure_without_retry() -> None:
    directory = FakeDirectory(fail_delete_for={"zip-9"})

    result = asyncio.run(_reconciler(directory).disassociate("contact-1", "zip", "zip-9"))

    assert not result.succeeded
    assert result.error is not None
    assert len(directory.calls_named("delete_relationship")) == 1
