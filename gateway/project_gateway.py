"""Request/response mapping for ``/proyectos``.

The project list is joined with the worker list because the backend does not
embed members uniformly. Member ids are read through ``WORKER_ID_STRATEGIES``,
an ordered list of extractors for every payload shape the backend has used;
supporting a new shape is one more entry.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from contracts import Project, ProjectDraft, ProjectStatus, RegistrationStatus, StatusToggleResponse, Worker
from gateway.http_client import ApiClient
from gateway.worker_gateway import WorkerGateway, toggle_endpoint


logger = logging.getLogger(__name__)

IdExtractor = Callable[[Dict[str, Any]], Optional[List[int]]]


def _id_list(field: str) -> IdExtractor:
    def extract(raw: Dict[str, Any]) -> Optional[List[int]]:
        value = raw.get(field)
        return list(value) if isinstance(value, list) else None
    return extract


def _scalar_id(field: str) -> IdExtractor:
    def extract(raw: Dict[str, Any]) -> Optional[List[int]]:
        value = raw.get(field)
        return [value] if value else None
    return extract


# Tried in order; the first extractor returning a value wins.
WORKER_ID_STRATEGIES: List[Tuple[str, IdExtractor]] = [
    ("trabajadorIds", _id_list("trabajadorIds")),
    ("trabajadoresIds", _id_list("trabajadoresIds")),
    ("trabajador_id", _scalar_id("trabajador_id")),
    ("trabajadorId", _scalar_id("trabajadorId")),
]


def extract_worker_ids(raw: Dict[str, Any]) -> List[int]:
    """Member ids of a raw project record, or [] if no known field is present."""
    for _, extract in WORKER_ID_STRATEGIES:
        ids = extract(raw)
        if ids is not None:
            return ids
    return []


def enrich_project(raw: Dict[str, Any], workers: Iterable[Worker]) -> Project:
    """Materialise a project's members from the worker list.

    A record that already carries a ``trabajadores`` list passes through
    unchanged. Otherwise members are the workers whose id appears in the
    extracted id list, in worker-list order; ``trabajador`` is the first of
    them or None.
    """
    if isinstance(raw.get("trabajadores"), list):
        return Project.model_validate(raw)
    ids = set(extract_worker_ids(raw))
    members = [w for w in workers if w.id in ids]
    data = dict(raw)
    data["trabajadores"] = [m.model_dump(by_alias=True) for m in members]
    data["trabajador"] = data["trabajadores"][0] if members else None
    return Project.model_validate(data)


class ProjectGateway:
    """CRUD, status changes and per-worker queries for projects."""

    resource = "proyectos"

    def __init__(self, client: ApiClient, workers: Optional[WorkerGateway] = None):
        self.client = client
        self.workers = workers or WorkerGateway(client)

    def list_all(self) -> List[Project]:
        """All projects with their members populated."""
        raw_projects = self.client.get(f"/{self.resource}") or []
        workers = self.workers.list_all()
        logger.debug("Joining %d projects with %d workers", len(raw_projects), len(workers))
        return [enrich_project(raw, workers) for raw in raw_projects]

    def get(self, project_id: int) -> Project:
        return Project.model_validate(self.client.get(f"/{self.resource}/{project_id}"))

    def create(self, draft: ProjectDraft) -> Project:
        return Project.model_validate(self.client.post(f"/{self.resource}", json=draft.to_payload()))

    def update(self, project_id: int, draft: ProjectDraft) -> Project:
        data = self.client.put(f"/{self.resource}/{project_id}", json=draft.to_payload())
        return Project.model_validate(data)

    def by_worker(self, worker_id: int) -> List[Project]:
        data = self.client.get(f"/{self.resource}/trabajador/{worker_id}") or []
        return [Project.model_validate(item) for item in data]

    def by_status(self, status: ProjectStatus) -> List[Project]:
        data = self.client.get(f"/{self.resource}/estado/{ProjectStatus(status).value}") or []
        return [Project.model_validate(item) for item in data]

    def update_status(self, project_id: int, status: ProjectStatus) -> Project:
        data = self.client.patch(
            f"/{self.resource}/{project_id}/estado-proyecto",
            json={"estado": ProjectStatus(status).value},
        )
        if not data:
            return self.get(project_id)
        return Project.model_validate(data)

    def toggle_status(self, project_id: int, current_status: RegistrationStatus) -> Project:
        """Deactivate an ACTIVE project or reactivate an INACTIVE one.

        The backend answers ``{message, id, estadoRegistro, proyecto}``; when
        the embedded project is missing it is fetched by id.
        """
        data = self.client.patch(toggle_endpoint(self.resource, project_id, current_status), json={})
        response = StatusToggleResponse.model_validate(data or {})
        logger.info("Project %s toggled: %s", project_id, response.message or response.registration_status)
        if response.project:
            return Project.model_validate(response.project)
        return self.get(project_id)
