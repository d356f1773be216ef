"""Request/response mapping for ``/trabajadores``."""

import logging
from typing import List

from contracts import RegistrationStatus, StatusToggleResponse, Worker, WorkerDraft
from gateway.http_client import ApiClient


logger = logging.getLogger(__name__)


def toggle_endpoint(resource: str, entity_id: int, current_status: RegistrationStatus) -> str:
    """``/desactivar`` for an ACTIVE record, ``/reactivar`` otherwise."""
    action = "desactivar" if current_status == RegistrationStatus.ACTIVO else "reactivar"
    return f"/{resource}/{entity_id}/{action}"


class WorkerGateway:
    """CRUD and status toggling for workers."""

    resource = "trabajadores"

    def __init__(self, client: ApiClient):
        self.client = client

    def list_all(self) -> List[Worker]:
        data = self.client.get(f"/{self.resource}") or []
        return [Worker.model_validate(item) for item in data]

    def get(self, worker_id: int) -> Worker:
        return Worker.model_validate(self.client.get(f"/{self.resource}/{worker_id}"))

    def create(self, draft: WorkerDraft) -> Worker:
        return Worker.model_validate(self.client.post(f"/{self.resource}", json=draft.to_payload()))

    def update(self, worker_id: int, draft: WorkerDraft) -> Worker:
        data = self.client.put(f"/{self.resource}/{worker_id}", json=draft.to_payload())
        return Worker.model_validate(data)

    def toggle_status(self, worker_id: int, current_status: RegistrationStatus) -> Worker:
        """Deactivate an ACTIVE worker or reactivate an INACTIVE one.

        The backend answers ``{message, id, estado, trabajador}``; when the
        embedded worker is missing it is fetched by id.
        """
        data = self.client.patch(toggle_endpoint(self.resource, worker_id, current_status), json={})
        response = StatusToggleResponse.model_validate(data or {})
        logger.info("Worker %s toggled: %s", worker_id, response.message or response.state)
        if response.worker:
            return Worker.model_validate(response.worker)
        return self.get(worker_id)
