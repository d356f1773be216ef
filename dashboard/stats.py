"""Summary statistics for the home screen."""

import math
from pydantic import BaseModel, Field
from typing import Dict, Iterable, List

from contracts import Project, ProjectStatus, Role, Worker


class RoleCount(BaseModel):
    """Number of workers holding a role."""
    name: str
    count: int = Field(..., ge=0)


class DashboardStats(BaseModel):
    """Aggregates shown on the home screen."""
    total_workers: int = Field(..., ge=0)
    active_workers: int = Field(..., ge=0)
    total_projects: int = Field(..., ge=0)
    projects_by_status: Dict[str, int] = Field(default_factory=dict)
    completion_rate: int = Field(..., ge=0, le=100, description="Completed projects, rounded percent")
    projects_per_worker: str = Field(..., description="Projects per ACTIVE worker, one decimal")
    roles: List[RoleCount] = Field(default_factory=list, description="Sorted by count, highest first")

    @property
    def pending(self) -> int:
        return self.projects_by_status.get(ProjectStatus.PENDIENTE.value, 0)

    @property
    def in_progress(self) -> int:
        return self.projects_by_status.get(ProjectStatus.EN_PROGRESO.value, 0)

    @property
    def completed(self) -> int:
        return self.projects_by_status.get(ProjectStatus.COMPLETADO.value, 0)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def role_distribution(workers: Iterable[Worker]) -> List[RoleCount]:
    """Count workers per known role; unknown roles are ignored."""
    counts = {role.value: 0 for role in Role}
    for worker in workers:
        if worker.role in counts:
            counts[worker.role] += 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [RoleCount(name=name, count=count) for name, count in ranked]


def compute_stats(workers: List[Worker], projects: List[Project]) -> DashboardStats:
    active = sum(1 for w in workers if w.is_active())
    by_status = {status.value: 0 for status in ProjectStatus}
    for project in projects:
        by_status[project.status.value] += 1

    total = len(projects)
    completed = by_status[ProjectStatus.COMPLETADO.value]
    completion_rate = _round_half_up(completed / total * 100) if total else 0
    per_worker = f"{total / active:.1f}" if active else "0"

    return DashboardStats(
        total_workers=len(workers),
        active_workers=active,
        total_projects=total,
        projects_by_status=by_status,
        completion_rate=completion_rate,
        projects_per_worker=per_worker,
        roles=role_distribution(workers),
    )
