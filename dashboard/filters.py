"""List filters and counters for the worker and project screens."""

from typing import Iterable, List, Optional, Union

from contracts import Project, ProjectStatus, RegistrationStatus, Worker


ALL = "TODOS"

RegistrationFilter = Union[RegistrationStatus, str]


def _matches_registration(entity, registration: Optional[RegistrationFilter]) -> bool:
    if not registration or registration == ALL:
        return True
    return entity.registration_status == RegistrationStatus(registration)


def worker_label(worker: Worker) -> str:
    """Display label used by the project screen's worker search."""
    return f"{worker.first_name} {worker.last_name} - {worker.role}"


def filter_workers(
    workers: Iterable[Worker],
    status: Optional[RegistrationFilter] = RegistrationStatus.ACTIVO,
    name: str = "",
    hire_date: str = "",
) -> List[Worker]:
    """Filter the worker list.

    Args:
        workers: Merged worker list
        status: ACTIVO, INACTIVO or TODOS
        name: Case-insensitive substring of "first last"
        hire_date: Substring of the D/M/YYYY hire date
    """
    result = [w for w in workers if _matches_registration(w, status)]
    if name:
        needle = name.lower()
        result = [w for w in result if needle in w.full_name.lower()]
    if hire_date:
        result = [w for w in result if hire_date in w.hire_date]
    return result


def filter_projects(
    projects: Iterable[Project],
    registration: Optional[RegistrationFilter] = RegistrationStatus.ACTIVO,
    status: Optional[ProjectStatus] = None,
    title: str = "",
    worker: str = "",
    assignment_date: str = "",
) -> List[Project]:
    """Filter the project list.

    ``worker`` must equal one of the labels from ``unique_worker_labels``.
    """
    result = [p for p in projects if _matches_registration(p, registration)]
    if status:
        result = [p for p in result if p.status == ProjectStatus(status)]
    if title:
        needle = title.lower()
        result = [p for p in result if needle in p.title.lower()]
    if worker:
        result = [p for p in result if worker in [worker_label(m) for m in p.members()]]
    if assignment_date:
        result = [p for p in result if assignment_date in p.assignment_date]
    return result


def unique_worker_labels(projects: Iterable[Project]) -> List[str]:
    labels = {worker_label(m) for p in projects for m in p.members()}
    return sorted(labels)


def count_by_registration(
    items: Iterable[Union[Worker, Project]],
    registration: Optional[RegistrationFilter] = None,
    status: Optional[ProjectStatus] = None,
) -> int:
    """Counter badges: total, ACTIVO or INACTIVO, optionally within a project status."""
    count = 0
    for item in items:
        if status and getattr(item, "status", None) != ProjectStatus(status):
            continue
        if _matches_registration(item, registration):
            count += 1
    return count
