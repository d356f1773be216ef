"""Project form rules: dates, member count and duplicate detection."""

from datetime import date
from typing import Iterable, List, Optional

from contracts import Project, ProjectDraft
from errors import DraftRejected
from validation.dates import parse_dmy
from validation.text import normalize_title


MAX_WORKERS_PER_PROJECT = 3


def normalize_project(draft: ProjectDraft) -> ProjectDraft:
    return draft.model_copy(update={
        "title": normalize_title(draft.title),
        "description": (draft.description or "").strip(),
    })


def is_duplicate_project(
    title: str,
    worker_ids: List[int],
    existing_projects: Iterable[Project],
    project_id: Optional[int] = None,
) -> bool:
    """Same case-insensitive title and the same set of member ids.

    Order of ids does not matter; an identical title with different members
    is not a duplicate.
    """
    wanted_title = title.lower()
    wanted_ids = sorted(worker_ids)
    for other in existing_projects:
        if project_id and other.id == project_id:
            continue
        if other.title.lower() == wanted_title and sorted(other.worker_ids()) == wanted_ids:
            return True
    return False


def validate_project(
    draft: ProjectDraft,
    existing_projects: Iterable[Project] = (),
    project_id: Optional[int] = None,
    today: Optional[date] = None,
    max_workers: int = MAX_WORKERS_PER_PROJECT,
) -> ProjectDraft:
    """Normalise and validate a project draft.

    Args:
        draft: Raw form values
        existing_projects: Known projects used for duplicate detection
        project_id: Set when editing; skips self and the assignment-date rule
        today: Reference date (defaults to the current date)
        max_workers: Member cap

    Returns:
        The normalised draft.

    Raises:
        DraftRejected: With the failing field and a user-facing message.
    """
    project = normalize_project(draft)

    if not project.title:
        raise DraftRejected("title", "El título es obligatorio")
    if not project.description:
        raise DraftRejected("description", "La descripción es obligatoria")
    if not project.assignment_date:
        raise DraftRejected("assignment_date", "La fecha de asignación es obligatoria")
    if not project.deadline:
        raise DraftRejected("deadline", "La fecha límite es obligatoria")

    assigned_on = parse_dmy(project.assignment_date, "assignment_date")
    if not project_id and assigned_on < (today or date.today()):
        raise DraftRejected(
            "assignment_date", "La fecha de asignación no puede ser anterior a la fecha actual"
        )

    deadline = parse_dmy(project.deadline, "deadline")
    if deadline < assigned_on:
        raise DraftRejected(
            "deadline", "La fecha límite no puede ser anterior a la fecha de asignación"
        )

    if not project.worker_ids:
        raise DraftRejected("worker_ids", "Debe seleccionar al menos un trabajador")
    if len(project.worker_ids) > max_workers:
        raise DraftRejected("worker_ids", f"Solo puedes seleccionar hasta {max_workers} trabajadores")

    if is_duplicate_project(project.title, project.worker_ids, existing_projects, project_id):
        raise DraftRejected("title", "Ya existe un proyecto con el mismo título y trabajadores")

    return project
