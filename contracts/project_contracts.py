"""Project (proyecto) contracts."""

from pydantic import BaseModel, Field
from typing import List, Optional

from .enums import ProjectStatus, RegistrationStatus
from .worker_contracts import Worker


class Project(BaseModel):
    """A unit of work with up to three assigned workers.

    The backend has shipped members both as a ``trabajadores`` list and as a
    single ``trabajador``; both are kept and ``worker_ids`` reads whichever
    is present.
    """

    id: int
    title: str = Field(default="", alias="titulo")
    description: str = Field(default="", alias="descripcion")
    assignment_date: str = Field(default="", alias="fechaAsignacion", description="D/M/YYYY")
    deadline: str = Field(default="", alias="fechaLimite", description="D/M/YYYY")
    status: ProjectStatus = Field(default=ProjectStatus.PENDIENTE, alias="estado")
    registration_status: Optional[RegistrationStatus] = Field(
        default=RegistrationStatus.ACTIVO, alias="estadoRegistro"
    )
    worker: Optional[Worker] = Field(default=None, alias="trabajador")
    workers: Optional[List[Worker]] = Field(default=None, alias="trabajadores")

    model_config = {"populate_by_name": True}

    def members(self) -> List[Worker]:
        """Assigned workers, falling back to the legacy single assignee."""
        if self.workers is not None:
            return list(self.workers)
        if self.worker is not None:
            return [self.worker]
        return []

    def worker_ids(self) -> List[int]:
        """Ids of the assigned workers in the order the backend sent them."""
        return [w.id for w in self.members()]

    def is_active(self) -> bool:
        """Check if the project is ACTIVE."""
        return self.registration_status == RegistrationStatus.ACTIVO


class ProjectDraft(BaseModel):
    """Create/update payload for a project."""

    title: str = Field(default="", alias="titulo")
    description: str = Field(default="", alias="descripcion")
    assignment_date: str = Field(default="", alias="fechaAsignacion")
    deadline: str = Field(default="", alias="fechaLimite")
    worker_ids: List[int] = Field(default_factory=list, alias="trabajadorIds")
    status: Optional[ProjectStatus] = Field(default=None, alias="estado")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_project(cls, project: Project, worker_ids: Optional[List[int]] = None) -> "ProjectDraft":
        """Full update payload for an existing project.

        Args:
            project: The project whose fields are carried over
            worker_ids: Replacement member ids (defaults to the current ones)
        """
        return cls(
            title=project.title,
            description=project.description,
            assignment_date=project.assignment_date,
            deadline=project.deadline,
            worker_ids=list(project.worker_ids() if worker_ids is None else worker_ids),
            status=project.status,
        )

    def to_payload(self) -> dict:
        """Serialise with the backend's field names, omitting an unset status."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
