"""Authentication and status-toggle contracts."""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


ADMIN_ROLE = "ROLE_ADMIN"


class LoginRequest(BaseModel):
    """Credentials posted to ``/auth/login``."""
    username: str
    password: str


class LoginResponse(BaseModel):
    """Token issued by the backend."""
    token: str
    username: str = ""
    role: str = ""


class Session(BaseModel):
    """The stored login, if any."""
    token: Optional[str] = None
    username: Optional[str] = None
    role: Optional[str] = None

    def is_authenticated(self) -> bool:
        return bool(self.token)

    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


class StatusToggleResponse(BaseModel):
    """Body returned by the ``/desactivar`` and ``/reactivar`` endpoints.

    Workers report ``estado`` and embed ``trabajador``; projects report
    ``estadoRegistro`` and embed ``proyecto``. Every field is optional.
    """
    message: Optional[str] = None
    id: Optional[int] = None
    registration_status: Optional[str] = Field(default=None, alias="estadoRegistro")
    state: Optional[str] = Field(default=None, alias="estado")
    worker: Optional[Dict[str, Any]] = Field(default=None, alias="trabajador")
    project: Optional[Dict[str, Any]] = Field(default=None, alias="proyecto")

    model_config = {"populate_by_name": True}
