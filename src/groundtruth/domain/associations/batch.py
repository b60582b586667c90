"""Link a freshly created record to many subjects in one call."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from groundtruth.domain.model import (
    AssociationCategory,
    BatchAssociationResult,
    RelationshipInput,
)
from groundtruth.domain.ports.directory import DirectoryError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from groundtruth.domain.ports.directory import DirectoryClient

    from .resolver import RelationshipTypeResolver

log = getLogger(__name__)


@dataclass(slots=True)
class BatchAssociator:
    """Create one relationship per subject pointing at a new record.

    Nothing is retired first: the record was just created, so no subject can
    already be related to it. A failed batch leaves the record in place.
    """

    directory: DirectoryClient
    subject_category: str
    resolver: RelationshipTypeResolver

    async def associate_many(
        self,
        new_record_id: str,
        object_category: str,
        subject_ids: Iterable[str],
    ) -> BatchAssociationResult:
        unique_subjects = list(dict.fromkeys(subject for subject in subject_ids if subject))
        if not unique_subjects:
            return BatchAssociationResult(succeeded=True)

        type_id = await self.resolver.resolve_type_id(self.subject_category, object_category)
        entries = [
            RelationshipInput(
                subject_id=subject_id,
                object_id=new_record_id,
                type_id=type_id,
                category=AssociationCategory.USER_DEFINED,
            )
            for subject_id in unique_subjects
        ]

        try:
            await self.directory.batch_create_relationships(
                self.subject_category, object_category, entries
            )
        except DirectoryError as exc:
            log.error(
                "Failed to associate %d %s with %s %s: %s",
                len(entries),
                self.subject_category,
                object_category,
                new_record_id,
                exc,
            )
            return BatchAssociationResult(
                succeeded=False, requested=len(entries), type_id=type_id, error=exc
            )

        log.info(
            "Associated %d %s with %s %s",
            len(entries),
            self.subject_category,
            object_category,
            new_record_id,
        )
        return BatchAssociationResult(succeeded=True, requested=len(entries), type_id=type_id)
