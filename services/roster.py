"""Worker list and form workflows."""

import logging
from typing import List, Optional

from assignment import AssignmentReconciler
from cache import SoftDeleteCache
from contracts import Project, Worker, WorkerDraft
from errors import AssignmentError
from gateway import ProjectGateway, WorkerGateway
from services.sequencing import RequestSequencer
from validation import validate_worker


logger = logging.getLogger(__name__)


class WorkerService:
    """Loads, saves, toggles and assigns workers.

    Holds the last applied worker list in ``roster``; a load that was
    superseded by a newer one leaves it untouched.
    """

    def __init__(
        self,
        workers: WorkerGateway,
        projects: ProjectGateway,
        cache: SoftDeleteCache[Worker],
        reconciler: Optional[AssignmentReconciler] = None,
        sequencer: Optional[RequestSequencer] = None,
    ):
        self.workers = workers
        self.projects = projects
        self.cache = cache
        self.reconciler = reconciler or AssignmentReconciler()
        self.sequencer = sequencer or RequestSequencer()
        self.roster: List[Worker] = []

    def _apply_roster(self, server_list: List[Worker]) -> None:
        self.roster = self.cache.merge(server_list)

    def load(self) -> List[Worker]:
        """Fetch workers and merge in the cached INACTIVE ones."""
        self.sequencer.run("workers:list", self.workers.list_all, self._apply_roster)
        logger.info("%d workers loaded", len(self.roster))
        return self.roster

    def get(self, worker_id: int) -> Worker:
        return self.workers.get(worker_id)

    def save(self, draft: WorkerDraft, worker_id: Optional[int] = None) -> Worker:
        """Validate against every known worker, then create or update.

        Raises:
            DraftRejected: If a form rule fails; nothing is sent.
            ApiError: If the backend call fails.
        """
        existing = self.cache.overlay(self.workers.list_all())
        normalized = validate_worker(draft, existing, worker_id=worker_id)
        if worker_id:
            return self.workers.update(worker_id, normalized)
        return self.workers.create(normalized)

    def toggle(self, worker: Worker) -> Worker:
        """Flip ACTIVE/INACTIVE and keep the roster and cache in step."""
        updated = self.workers.toggle_status(worker.id, worker.registration_status)
        self.roster = [updated if w.id == updated.id else w for w in self.roster]
        self.cache.sync(updated)
        return updated

    def projects_of(self, worker_id: int) -> List[Project]:
        return self.projects.by_worker(worker_id)

    def assign_project(self, worker: Worker, project_id: int) -> Project:
        """Add the worker to a project from the worker screen.

        Raises:
            WorkerAtCapacity: The worker already has the maximum ACTIVE projects
            ProjectAtCapacity: The project is full
            AssignmentError: Unknown or inactive project
        """
        current = self.projects.by_worker(worker.id)
        self.reconciler.check_worker_capacity(current)

        all_projects = self.projects.list_all()
        available, _ = self.reconciler.available_projects(all_projects, current)
        if not available:
            raise AssignmentError("No hay proyectos disponibles para asignar.")
        target = next((p for p in available if p.id == project_id), None)
        if target is None:
            raise AssignmentError("Proyecto inválido.")

        payload = self.reconciler.assign(worker, target, current, all_projects)
        return self.projects.update(target.id, payload)
