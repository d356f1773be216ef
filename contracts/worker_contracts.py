"""Worker (trabajador) contracts.

Attribute names are English; aliases carry the backend's field names so
payloads round-trip with ``model_dump(by_alias=True)``.
"""

from datetime import date
from pydantic import BaseModel, Field
from typing import Optional

from .enums import DocumentType, RegistrationStatus


def format_dmy(value: date) -> str:
    """Render a date without zero padding, e.g. ``date(2025, 3, 5)`` -> "5/3/2025"."""
    return f"{value.day}/{value.month}/{value.year}"


def _today_dmy() -> str:
    return format_dmy(date.today())


class Worker(BaseModel):
    """An employee record as returned by the backend."""

    id: int = Field(..., description="Server-assigned id, immutable after creation")
    first_name: str = Field(default="", alias="nombre")
    last_name: str = Field(default="", alias="apellido")
    email: str = Field(default="")
    phone: str = Field(default="", alias="telefono")
    hire_date: str = Field(default="", alias="fechaIngreso", description="D/M/YYYY")
    role: str = Field(default="", alias="cargo")
    registration_status: RegistrationStatus = Field(
        default=RegistrationStatus.ACTIVO, alias="estadoRegistro"
    )
    document_type: Optional[DocumentType] = Field(default=None, alias="tipoDocumento")
    document_number: str = Field(default="", alias="numeroDocumento")

    model_config = {"populate_by_name": True}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_active(self) -> bool:
        """Check if the worker is ACTIVE."""
        return self.registration_status == RegistrationStatus.ACTIVO

    def to_draft(self) -> "WorkerDraft":
        """Copy the editable fields into a draft for the edit form."""
        return WorkerDraft(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
            hire_date=self.hire_date,
            role=self.role,
            document_type=self.document_type,
            document_number=self.document_number,
        )


class WorkerDraft(BaseModel):
    """Create/update payload for a worker.

    Every field accepts blank input; business rules live in
    ``validation.validate_worker``.
    """

    first_name: str = Field(default="", alias="nombre")
    last_name: str = Field(default="", alias="apellido")
    email: str = Field(default="")
    phone: str = Field(default="", alias="telefono")
    hire_date: str = Field(default_factory=_today_dmy, alias="fechaIngreso")
    role: Optional[str] = Field(default="PROGRAMADOR", alias="cargo")
    document_type: Optional[DocumentType] = Field(default=DocumentType.DNI, alias="tipoDocumento")
    document_number: str = Field(default="", alias="numeroDocumento")

    model_config = {"populate_by_name": True}

    def to_payload(self) -> dict:
        """Serialise with the backend's field names."""
        return self.model_dump(by_alias=True, mode="json")
