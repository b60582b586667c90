"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import TYPE_CHECKING

from groundtruth.adapters.hubspot import HubSpotClient
from groundtruth.config import get_hubspot_config
from groundtruth.domain.associations import (
    AssociationReconciler,
    BatchAssociator,
    RelationshipTypeResolver,
)
from groundtruth.domain.records import list_contacts, list_zip_codes

if TYPE_CHECKING:
    from groundtruth.config import HubSpotConfig
    from groundtruth.domain.model import AssociationResult, Record, ReconcileResult
    from groundtruth.domain.ports.directory import DirectoryClient
    from groundtruth.domain.records import ZipCodeListing

DirectoryFactory = Callable[["HubSpotConfig"], "DirectoryClient"]

log = getLogger(__name__)


def build_directory(config: HubSpotConfig) -> DirectoryClient:
    return HubSpotClient(config=config)


def build_reconciler(
    directory: DirectoryClient,
    config: HubSpotConfig,
    *,
    resolver: RelationshipTypeResolver | None = None,
) -> AssociationReconciler:
    return AssociationReconciler(
        directory=directory,
        subject_category=config.contact_object_type,
        resolver=resolver or RelationshipTypeResolver(directory),
    )


def build_batch_associator(
    directory: DirectoryClient,
    config: HubSpotConfig,
    *,
    resolver: RelationshipTypeResolver | None = None,
) -> BatchAssociator:
    return BatchAssociator(
        directory=directory,
        subject_category=config.contact_object_type,
        resolver=resolver or RelationshipTypeResolver(directory),
    )


def _run_with_directory[T](
    func: Callable[[DirectoryClient, HubSpotConfig], Awaitable[T]],
    *,
    config: HubSpotConfig | None,
    directory_factory: DirectoryFactory | None,
) -> T:
    effective_config = config or get_hubspot_config()
    factory = directory_factory or build_directory

    async def run() -> T:
        directory = factory(effective_config)
        try:
            return await func(directory, effective_config)
        finally:
            await directory.aclose()

    return asyncio.run(run())


def associate_contact(
    contact_id: str,
    zip_code_id: str,
    *,
    config: HubSpotConfig | None = None,
    directory_factory: DirectoryFactory | None = None,
) -> ReconcileResult:
    """Point a contact at a single zip-code record, retiring any previous one."""

    async def run(directory: DirectoryClient, cfg: HubSpotConfig) -> ReconcileResult:
        reconciler = build_reconciler(directory, cfg)
        return await reconciler.reconcile(contact_id, cfg.custom_object_type, zip_code_id)

    log.info("Associating contact %s with zip code %s", contact_id, zip_code_id)
    return _run_with_directory(run, config=config, directory_factory=directory_factory)


def disassociate_contact(
    contact_id: str,
    zip_code_id: str,
    *,
    config: HubSpotConfig | None = None,
    directory_factory: DirectoryFactory | None = None,
) -> AssociationResult:
    """Remove the relationship between a contact and a zip-code record."""

    async def run(directory: DirectoryClient, cfg: HubSpotConfig) -> AssociationResult:
        reconciler = build_reconciler(directory, cfg)
        return await reconciler.disassociate(contact_id, cfg.custom_object_type, zip_code_id)

    log.info("Removing association of contact %s with zip code %s", contact_id, zip_code_id)
    return _run_with_directory(run, config=config, directory_factory=directory_factory)


def fetch_zip_codes(
    *,
    config: HubSpotConfig | None = None,
    directory_factory: DirectoryFactory | None = None,
) -> list[ZipCodeListing]:
    async def run(directory: DirectoryClient, cfg: HubSpotConfig) -> list[ZipCodeListing]:
        return await list_zip_codes(
            directory,
            object_type=cfg.custom_object_type,
            contact_type=cfg.contact_object_type,
            limit=cfg.page_size,
        )

    return _run_with_directory(run, config=config, directory_factory=directory_factory)


def fetch_contacts(
    *,
    config: HubSpotConfig | None = None,
    directory_factory: DirectoryFactory | None = None,
) -> list[Record]:
    async def run(directory: DirectoryClient, cfg: HubSpotConfig) -> list[Record]:
        return await list_contacts(
            directory, contact_type=cfg.contact_object_type, limit=cfg.page_size
        )

    return _run_with_directory(run, config=config, directory_factory=directory_factory)
