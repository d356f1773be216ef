"""Project list and form workflows."""

import logging
from typing import List, Optional, Sequence

from assignment import AssignmentReconciler
from cache import SoftDeleteCache
from contracts import Project, ProjectDraft, ProjectStatus, RegistrationStatus, Worker
from gateway import ProjectGateway, WorkerGateway
from services.sequencing import RequestSequencer
from validation import validate_project


logger = logging.getLogger(__name__)


class ProjectService:
    """Loads, saves, toggles projects and edits their members."""

    def __init__(
        self,
        projects: ProjectGateway,
        workers: WorkerGateway,
        cache: SoftDeleteCache[Project],
        reconciler: Optional[AssignmentReconciler] = None,
        sequencer: Optional[RequestSequencer] = None,
    ):
        self.projects = projects
        self.workers = workers
        self.cache = cache
        self.reconciler = reconciler or AssignmentReconciler()
        self.sequencer = sequencer or RequestSequencer()
        self.portfolio: List[Project] = []

    def _apply_portfolio(self, server_list: List[Project]) -> None:
        self.portfolio = self.cache.merge(server_list)

    def load(self) -> List[Project]:
        """Fetch projects (members joined) and merge in the cached INACTIVE ones."""
        self.sequencer.run("projects:list", self.projects.list_all, self._apply_portfolio)
        logger.info("%d projects loaded", len(self.portfolio))
        return self.portfolio

    def get(self, project_id: int) -> Project:
        return self.projects.get(project_id)

    def by_status(self, status: ProjectStatus) -> List[Project]:
        return self.projects.by_status(status)

    def active_workers(self) -> List[Worker]:
        """Workers offered in the member picker."""
        return [w for w in self.workers.list_all() if w.is_active()]

    def save(self, draft: ProjectDraft, project_id: Optional[int] = None) -> Project:
        """Validate against every known project, then create or update.

        Raises:
            DraftRejected: If a form rule fails; nothing is sent.
            ApiError: If the backend call fails.
        """
        existing = self.cache.overlay(self.projects.list_all())
        normalized = validate_project(
            draft,
            existing,
            project_id=project_id,
            max_workers=self.reconciler.max_workers_per_project,
        )
        if project_id:
            return self.projects.update(project_id, normalized)
        return self.projects.create(normalized)

    def toggle(self, project: Project) -> Project:
        """Flip ACTIVE/INACTIVE and keep the portfolio and cache in step."""
        current = project.registration_status or RegistrationStatus.ACTIVO
        updated = self.projects.toggle_status(project.id, current)
        self.portfolio = [updated if p.id == updated.id else p for p in self.portfolio]
        self.cache.sync(updated)
        return updated

    def update_status(self, project: Project, status: ProjectStatus) -> Project:
        updated = self.projects.update_status(project.id, status)
        logger.info("Project %s moved to %s", project.id, ProjectStatus(status).value)
        return updated

    def assign_members(self, project: Project, worker_ids: Sequence[int]) -> Project:
        """Replace the member list of a project (1 to the cap)."""
        payload = self.reconciler.confirm_members(project, worker_ids)
        return self.projects.update(project.id, payload)

    def toggle_member(self, project: Project, worker_id: int) -> Project:
        """Add or remove a single member and save the project.

        The worker's own project count is only consulted when the reconciler
        enforces the worker cap from this screen.
        """
        projects_of_worker = None
        if self.reconciler.enforce_worker_capacity_on_toggle and worker_id not in project.worker_ids():
            projects_of_worker = self.projects.by_worker(worker_id)
        payload = self.reconciler.toggle_project_member(project, worker_id, projects_of_worker)
        return self.assign_members(project, payload.worker_ids)
