"""Worker/project assignment with the three-per-side caps.

Two entry points mirror the two screens that edit memberships:

1. Worker screen: ``assign`` adds one worker to one project. It checks the
   worker's ACTIVE project count and the project's member count.
2. Project screen: ``toggle_member`` edits a pending member selection and
   ``confirm_members`` turns it into an update payload. Only the project cap
   is checked unless ``enforce_worker_capacity_on_toggle`` is set.

Every method returns or validates a ``ProjectDraft``; nothing here performs I/O.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from contracts import Project, ProjectDraft, RegistrationStatus, Worker
from errors import AssignmentError, ProjectAtCapacity, WorkerAtCapacity


logger = logging.getLogger(__name__)


def _dedupe(ids: Iterable[int]) -> List[int]:
    seen = set()
    result = []
    for worker_id in ids:
        if worker_id not in seen:
            seen.add(worker_id)
            result.append(worker_id)
    return result


class AssignmentReconciler:
    """Computes membership changes and the resulting project payloads."""

    def __init__(
        self,
        max_projects_per_worker: int = 3,
        max_workers_per_project: int = 3,
        enforce_worker_capacity_on_toggle: bool = False,
    ):
        """Initialize the reconciler.

        Args:
            max_projects_per_worker: ACTIVE projects a worker may hold
            max_workers_per_project: Members a project may hold
            enforce_worker_capacity_on_toggle: Also apply the worker cap when
                members are added from the project screen
        """
        self.max_projects_per_worker = max_projects_per_worker
        self.max_workers_per_project = max_workers_per_project
        self.enforce_worker_capacity_on_toggle = enforce_worker_capacity_on_toggle

    # --- worker -> project -------------------------------------------------

    def active_project_count(self, projects_of_worker: Iterable[Project]) -> int:
        return sum(1 for p in projects_of_worker if p.registration_status == RegistrationStatus.ACTIVO)

    def check_worker_capacity(self, projects_of_worker: Iterable[Project]) -> None:
        """Raise WorkerAtCapacity when the worker holds the maximum ACTIVE projects."""
        if self.active_project_count(projects_of_worker) >= self.max_projects_per_worker:
            raise WorkerAtCapacity(
                f"El trabajador ya tiene {self.max_projects_per_worker} proyectos activos (máximo permitido)."
            )

    def available_projects(
        self,
        all_projects: Iterable[Project],
        current_projects: Iterable[Project] = (),
    ) -> Tuple[List[Project], Optional[Project]]:
        """Projects offered in the assign dialog and the one to pre-select.

        Returns:
            (ACTIVE or status-less projects sorted by title, first of them the
            worker already belongs to or None)
        """
        available = sorted(
            (p for p in all_projects if p.registration_status in (None, RegistrationStatus.ACTIVO)),
            key=lambda p: p.title.lower(),
        )
        current_ids = {p.id for p in current_projects}
        preselected = next((p for p in available if p.id in current_ids), None)
        return available, preselected

    def assign(
        self,
        worker: Worker,
        target_project: Project,
        current_projects_of_worker: Sequence[Project],
        all_projects: Optional[Iterable[Project]] = None,
    ) -> ProjectDraft:
        """Add a worker to a project.

        Args:
            worker: The worker being assigned
            target_project: The chosen project
            current_projects_of_worker: Projects the worker already belongs to
            all_projects: When given, the target must be one of its assignable
                projects

        Returns:
            The full update payload with the new member list.

        Raises:
            WorkerAtCapacity: The worker already has the maximum ACTIVE projects
            ProjectAtCapacity: The project is full and the worker is not in it
            AssignmentError: The target is not an assignable project
        """
        self.check_worker_capacity(current_projects_of_worker)

        if all_projects is not None:
            available, _ = self.available_projects(all_projects)
            if target_project.id not in {p.id for p in available}:
                raise AssignmentError("Proyecto inválido.")

        current_ids = target_project.worker_ids()
        if worker.id not in current_ids and len(current_ids) >= self.max_workers_per_project:
            raise ProjectAtCapacity(
                f"Este proyecto ya tiene {self.max_workers_per_project} trabajadores asignados (máximo permitido)."
            )

        worker_ids = _dedupe([*current_ids, worker.id])
        logger.info("Assigning worker %s to project %s -> members %s", worker.id, target_project.id, worker_ids)
        return ProjectDraft.from_project(target_project, worker_ids)

    # --- project -> worker -------------------------------------------------

    def toggle_member(
        self,
        selection: Sequence[int],
        worker_id: int,
        projects_of_worker: Optional[Iterable[Project]] = None,
    ) -> List[int]:
        """Add or remove a worker id in a pending member selection.

        Removing always succeeds. Adding fails once the selection is full.

        Args:
            selection: Current member ids
            worker_id: Id to toggle
            projects_of_worker: The worker's projects; only consulted when the
                worker cap is enforced from this screen

        Returns:
            The new selection.
        """
        if worker_id in selection:
            return [i for i in selection if i != worker_id]
        if len(selection) >= self.max_workers_per_project:
            raise ProjectAtCapacity(f"Máximo {self.max_workers_per_project} trabajadores por proyecto.")
        if self.enforce_worker_capacity_on_toggle and projects_of_worker is not None:
            self.check_worker_capacity(projects_of_worker)
        return [*selection, worker_id]

    def toggle_project_member(
        self,
        project: Project,
        worker_id: int,
        projects_of_worker: Optional[Iterable[Project]] = None,
    ) -> ProjectDraft:
        """Toggle one member directly on a project and build its payload."""
        selection = self.toggle_member(project.worker_ids(), worker_id, projects_of_worker)
        return ProjectDraft.from_project(project, selection)

    def confirm_members(self, project: Project, worker_ids: Sequence[int]) -> ProjectDraft:
        """Turn a confirmed selection into the project's update payload."""
        worker_ids = _dedupe(worker_ids)
        if not worker_ids:
            raise AssignmentError("Selecciona al menos un trabajador.")
        if len(worker_ids) > self.max_workers_per_project:
            raise ProjectAtCapacity(f"Máximo {self.max_workers_per_project} trabajadores por proyecto.")
        return ProjectDraft.from_project(project, worker_ids)
