"""Pydantic contracts for rrhh-admin.

Every payload exchanged with the backend is typed through these contracts.
"""

from .enums import (
    RegistrationStatus,
    ProjectStatus,
    DocumentType,
    Role,
)

from .worker_contracts import (
    Worker,
    WorkerDraft,
)

from .project_contracts import (
    Project,
    ProjectDraft,
)

from .auth_contracts import (
    ADMIN_ROLE,
    LoginRequest,
    LoginResponse,
    Session,
    StatusToggleResponse,
)

__all__ = [
    # Enums
    "RegistrationStatus",
    "ProjectStatus",
    "DocumentType",
    "Role",
    # Workers
    "Worker",
    "WorkerDraft",
    # Projects
    "Project",
    "ProjectDraft",
    # Auth
    "ADMIN_ROLE",
    "LoginRequest",
    "LoginResponse",
    "Session",
    "StatusToggleResponse",
]
