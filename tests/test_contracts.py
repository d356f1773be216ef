"""Tests for worker, project and auth contracts."""

import pytest
from datetime import date
from pydantic import ValidationError

from contracts import (
    DocumentType,
    LoginResponse,
    Project,
    ProjectDraft,
    ProjectStatus,
    RegistrationStatus,
    Session,
    StatusToggleResponse,
    Worker,
    WorkerDraft,
)
from contracts.worker_contracts import format_dmy
from validation import format_dmy as validation_format_dmy


WORKER_PAYLOAD = {
    "id": 4,
    "nombre": "Ana",
    "apellido": "Lopez",
    "email": "ana@x.pe",
    "telefono": "912345678",
    "fechaIngreso": "10/1/2025",
    "cargo": "ANALISTA",
    "estadoRegistro": "INACTIVO",
    "tipoDocumento": "DNI",
    "numeroDocumento": "12345678",
}


class TestWorker:
    """Worker decoding from backend payloads."""

    def test_reads_spanish_field_names(self):
        """Backend aliases map onto English attributes."""
        worker = Worker.model_validate(WORKER_PAYLOAD)
        assert worker.first_name == "Ana"
        assert worker.last_name == "Lopez"
        assert worker.phone == "912345678"
        assert worker.hire_date == "10/1/2025"
        assert worker.role == "ANALISTA"
        assert worker.registration_status == RegistrationStatus.INACTIVO
        assert worker.document_type == DocumentType.DNI
        assert worker.full_name == "Ana Lopez"
        assert worker.is_active() is False

    def test_missing_registration_status_defaults_to_active(self):
        """Records without estadoRegistro are ACTIVE."""
        worker = Worker.model_validate({"id": 1, "nombre": "Luis"})
        assert worker.is_active()

    def test_id_is_required(self):
        """A worker without id is rejected."""
        with pytest.raises(ValidationError):
            Worker.model_validate({"nombre": "Luis"})

    def test_to_draft_copies_editable_fields(self):
        """to_draft carries every editable field and drops id and status."""
        draft = Worker.model_validate(WORKER_PAYLOAD).to_draft()
        assert draft.email == "ana@x.pe"
        assert draft.document_number == "12345678"
        assert "id" not in draft.to_payload()
        assert "estadoRegistro" not in draft.to_payload()


class TestWorkerDraft:
    """Worker draft defaults and serialisation."""

    def test_defaults(self):
        """New drafts default to PROGRAMADOR and DNI."""
        draft = WorkerDraft()
        assert draft.role == "PROGRAMADOR"
        assert draft.document_type == DocumentType.DNI
        assert draft.hire_date.count("/") == 2

    def test_date_format_is_shared_with_validation(self):
        assert format_dmy(date(2025, 3, 5)) == "5/3/2025"
        assert validation_format_dmy is format_dmy

    def test_payload_uses_backend_names(self):
        """to_payload emits the backend's field names."""
        draft = WorkerDraft(first_name="Ana", phone="912345678", hire_date="1/2/2026")
        payload = draft.to_payload()
        assert payload["nombre"] == "Ana"
        assert payload["telefono"] == "912345678"
        assert payload["fechaIngreso"] == "1/2/2026"
        assert payload["tipoDocumento"] == "DNI"
        assert payload["cargo"] == "PROGRAMADOR"


class TestProject:
    """Project membership and payloads."""

    def test_members_prefers_list(self):
        """The trabajadores list wins over the single trabajador."""
        project = Project.model_validate({
            "id": 1,
            "titulo": "Portal",
            "trabajador": {"id": 9},
            "trabajadores": [{"id": 2}, {"id": 3}],
        })
        assert project.worker_ids() == [2, 3]

    def test_members_falls_back_to_single_worker(self):
        """A legacy record with only trabajador has one member."""
        project = Project.model_validate({"id": 1, "trabajador": {"id": 9}})
        assert project.worker_ids() == [9]

    def test_no_members(self):
        project = Project.model_validate({"id": 1})
        assert project.members() == []
        assert project.status == ProjectStatus.PENDIENTE
        assert project.is_active()

    def test_draft_from_project_keeps_fields(self):
        """from_project copies every field and replaces the members when asked."""
        project = Project.model_validate({
            "id": 1,
            "titulo": "Portal",
            "descripcion": "Web",
            "fechaAsignacion": "1/3/2026",
            "fechaLimite": "1/4/2026",
            "estado": "EN_PROGRESO",
            "trabajadores": [{"id": 2}],
        })
        draft = ProjectDraft.from_project(project, [2, 5])
        payload = draft.to_payload()
        assert payload == {
            "titulo": "Portal",
            "descripcion": "Web",
            "fechaAsignacion": "1/3/2026",
            "fechaLimite": "1/4/2026",
            "trabajadorIds": [2, 5],
            "estado": "EN_PROGRESO",
        }

    def test_draft_payload_omits_unset_status(self):
        """A new project draft does not send estado."""
        payload = ProjectDraft(title="X", worker_ids=[1]).to_payload()
        assert "estado" not in payload


class TestAuthContracts:
    """Session and toggle response contracts."""

    def test_session_admin(self):
        session = Session(token="t", username="admin", role="ROLE_ADMIN")
        assert session.is_authenticated()
        assert session.is_admin()

    def test_empty_session(self):
        session = Session()
        assert not session.is_authenticated()
        assert not session.is_admin()

    def test_login_response_optional_fields(self):
        response = LoginResponse.model_validate({"token": "abc"})
        assert response.token == "abc"
        assert response.username == ""

    def test_toggle_response_aliases(self):
        """Worker and project toggle bodies decode into one model."""
        response = StatusToggleResponse.model_validate({
            "message": "ok",
            "id": 3,
            "estado": "INACTIVO",
            "trabajador": {"id": 3},
        })
        assert response.state == "INACTIVO"
        assert response.worker == {"id": 3}
        assert response.project is None
