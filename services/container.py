"""Composition root.

Builds one store, one soft-delete cache per entity kind, one HTTP client and
the gateways and services that share them. Everything is passed by reference;
nothing below reaches for a module-level singleton except ``config.settings``
as the default.
"""

from dataclasses import dataclass
from typing import Optional

import requests

from assignment import AssignmentReconciler
from cache import JsonFileStore, KeyValueStore, SoftDeleteCache
from config import STORAGE_KEYS, Settings, settings as default_settings
from contracts import Project, Worker
from gateway import ApiClient, AuthGateway, ProjectGateway, WorkerGateway
from services.portfolio import ProjectService
from services.roster import WorkerService
from services.sequencing import RequestSequencer


@dataclass
class Container:
    """Wired application objects."""
    settings: Settings
    store: KeyValueStore
    client: ApiClient
    auth: AuthGateway
    worker_cache: SoftDeleteCache[Worker]
    project_cache: SoftDeleteCache[Project]
    reconciler: AssignmentReconciler
    workers: WorkerService
    projects: ProjectService


def build_container(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
    session: Optional[requests.Session] = None,
) -> Container:
    """Wire the application.

    Args:
        settings: Configuration (defaults to the module singleton)
        store: Key-value store (defaults to the JSON state file)
        session: requests session for the HTTP client
    """
    settings = settings or default_settings
    store = store or JsonFileStore(settings.get_state_path())

    client = ApiClient(
        base_url=settings.api_url,
        timeout=settings.api_timeout_seconds,
        session=session,
    )
    auth = AuthGateway(client, store)
    client.token_provider = auth.token
    client.on_unauthorized = auth.logout

    worker_cache = SoftDeleteCache(store, STORAGE_KEYS["workers_cache"], Worker)
    project_cache = SoftDeleteCache(store, STORAGE_KEYS["projects_cache"], Project)
    reconciler = AssignmentReconciler(
        max_projects_per_worker=settings.max_projects_per_worker,
        max_workers_per_project=settings.max_workers_per_project,
        enforce_worker_capacity_on_toggle=settings.enforce_worker_capacity_on_toggle,
    )
    sequencer = RequestSequencer()

    worker_gateway = WorkerGateway(client)
    project_gateway = ProjectGateway(client, worker_gateway)

    return Container(
        settings=settings,
        store=store,
        client=client,
        auth=auth,
        worker_cache=worker_cache,
        project_cache=project_cache,
        reconciler=reconciler,
        workers=WorkerService(worker_gateway, project_gateway, worker_cache, reconciler, sequencer),
        projects=ProjectService(project_gateway, worker_gateway, project_cache, reconciler, sequencer),
    )
