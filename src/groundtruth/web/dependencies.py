"""FastAPI dependencies for the HTTP interface."""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request

from groundtruth.app import build_batch_associator, build_reconciler
from groundtruth.config import HubSpotConfig
from groundtruth.domain.associations import (
    AssociationReconciler,
    BatchAssociator,
    RelationshipTypeResolver,
)
from groundtruth.domain.ports.directory import DirectoryClient

logger = logging.getLogger(__name__)


def get_config(request: Request) -> HubSpotConfig:
    return request.app.state.hubspot_config


def get_directory(request: Request) -> DirectoryClient:
    """Get the process-wide directory client opened by the app lifespan."""
    directory: DirectoryClient | None = getattr(request.app.state, "directory", None)
    if directory is None:
        raise HTTPException(status_code=503, detail="Directory client not initialized")
    return directory


def get_resolver(directory: DirectoryClient = Depends(get_directory)) -> RelationshipTypeResolver:
    """A fresh resolver per request, so relationship types are never cached across requests."""
    return RelationshipTypeResolver(directory)


def get_reconciler(
    directory: DirectoryClient = Depends(get_directory),
    config: HubSpotConfig = Depends(get_config),
    resolver: RelationshipTypeResolver = Depends(get_resolver),
) -> AssociationReconciler:
    return build_reconciler(directory, config, resolver=resolver)


def get_batch_associator(
    directory: DirectoryClient = Depends(get_directory),
    config: HubSpotConfig = Depends(get_config),
    resolver: RelationshipTypeResolver = Depends(get_resolver),
) -> BatchAssociator:
    return build_batch_associator(directory, config, resolver=resolver)
