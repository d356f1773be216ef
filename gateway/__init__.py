"""Gateways to the REST backend."""

from .http_client import ApiClient
from .auth_gateway import AuthGateway
from .worker_gateway import WorkerGateway
from .project_gateway import (
    ProjectGateway,
    WORKER_ID_STRATEGIES,
    extract_worker_ids,
    enrich_project,
)

__all__ = [
    "ApiClient",
    "AuthGateway",
    "WorkerGateway",
    "ProjectGateway",
    "WORKER_ID_STRATEGIES",
    "extract_worker_ids",
    "enrich_project",
]
