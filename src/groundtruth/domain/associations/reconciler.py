"""Retire-then-create reconciliation of a subject's single relationship."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from groundtruth.domain.model import AssociationCategory, AssociationResult, ReconcileResult
from groundtruth.domain.ports.directory import DirectoryError

if TYPE_CHECKING:
    from groundtruth.domain.model import Relationship
    from groundtruth.domain.ports.directory import DirectoryClient

    from .resolver import RelationshipTypeResolver

log = getLogger(__name__)


@dataclass(slots=True)
class AssociationReconciler:
    """Point a subject at exactly one object of a category.

    The remote store has no atomic replace, so reconciliation is a sequence of
    independent steps: resolve the type, list what exists, delete it, create the
    new relationship. Only the final create decides success. Two reconciliations
    racing on the same subject may leave zero or several relationships behind.
    """

    directory: DirectoryClient
    subject_category: str
    resolver: RelationshipTypeResolver

    async def reconcile(
        self,
        subject_id: str,
        object_category: str,
        new_object_id: str | None,
    ) -> ReconcileResult:
        if not new_object_id:
            log.info(
                "No target given for %s %s, nothing to reconcile",
                self.subject_category,
                subject_id,
            )
            return ReconcileResult(succeeded=True, skipped=True)

        type_id = await self.resolver.resolve_type_id(self.subject_category, object_category)
        existing = await self._list_existing(subject_id, object_category)
        retired, failures = await self._retire(subject_id, object_category, existing)

        try:
            await self.directory.put_relationship(
                subject_id,
                self.subject_category,
                object_category,
                new_object_id,
                type_id=type_id,
                category=AssociationCategory.USER_DEFINED,
            )
        except DirectoryError as exc:
            log.error(
                "Failed to associate %s %s with %s %s: %s",
                self.subject_category,
                subject_id,
                object_category,
                new_object_id,
                exc,
            )
            return ReconcileResult(
                succeeded=False,
                type_id=type_id,
                retired=retired,
                failed_retirements=failures,
                error=exc,
            )

        log.info(
            "Associated %s %s with %s %s (type %s, retired %d)",
            self.subject_category,
            subject_id,
            object_category,
            new_object_id,
            type_id,
            len(retired),
        )
        return ReconcileResult(
            succeeded=True,
            type_id=type_id,
            retired=retired,
            failed_retirements=failures,
        )

    async def disassociate(
        self,
        subject_id: str,
        object_category: str,
        target_object_id: str | None,
    ) -> AssociationResult:
        if not target_object_id:
            return AssociationResult(succeeded=True, skipped=True)
        try:
            await self.directory.delete_relationship(
                subject_id, self.subject_category, object_category, target_object_id
            )
        except DirectoryError as exc:
            log.error(
                "Failed to remove association %s %s -> %s %s: %s",
                self.subject_category,
                subject_id,
                object_category,
                target_object_id,
                exc,
            )
            return AssociationResult(succeeded=False, error=exc)
        log.info(
            "Removed association %s %s -> %s %s",
            self.subject_category,
            subject_id,
            object_category,
            target_object_id,
        )
        return AssociationResult(succeeded=True)

    async def _list_existing(self, subject_id: str, object_category: str) -> list[Relationship]:
        try:
            return await self.directory.list_relationships(
                subject_id, self.subject_category, object_category
            )
        except DirectoryError as exc:
            log.warning(
                "Could not list existing %s associations for %s %s, continuing: %s",
                object_category,
                self.subject_category,
                subject_id,
                exc,
            )
            return []

    async def _retire(
        self,
        subject_id: str,
        object_category: str,
        existing: list[Relationship],
    ) -> tuple[list[str], dict[str, Exception]]:
        if not existing:
            return [], {}

        targets = [relationship.object_id for relationship in existing]
        outcomes = await asyncio.gather(
            *(
                self.directory.delete_relationship(
                    subject_id, self.subject_category, object_category, target_id
                )
                for target_id in targets
            ),
            return_exceptions=True,
        )

        retired: list[str] = []
        failures: dict[str, Exception] = {}
        for target_id, outcome in zip(targets, outcomes, strict=True):
            if isinstance(outcome, DirectoryError):
                log.warning(
                    "Could not retire association %s %s -> %s %s: %s",
                    self.subject_category,
                    subject_id,
                    object_category,
                    target_id,
                    outcome,
                )
                failures[target_id] = outcome
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            retired.append(target_id)
        return retired, failures
