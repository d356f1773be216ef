"""Tests for the worker and project workflows and request sequencing."""

import pytest
from unittest.mock import MagicMock

from assignment import AssignmentReconciler
from cache import InMemoryStore, SoftDeleteCache
from config import Settings
from contracts import (
    DocumentType,
    Project,
    ProjectDraft,
    ProjectStatus,
    RegistrationStatus,
    Worker,
    WorkerDraft,
)
from errors import AssignmentError, DraftRejected, ProjectAtCapacity, Unauthorized, WorkerAtCapacity
from gateway import WorkerGateway
from services import ProjectService, RequestSequencer, WorkerService, build_container
from validation import sanitize_worker_input, today_dmy


def worker(worker_id: int, status: str = "ACTIVO", **fields) -> Worker:
    return Worker(id=worker_id, registration_status=RegistrationStatus(status), **fields)


def project(project_id: int, members=(), active: bool = True, title: str = "P") -> Project:
    return Project(
        id=project_id,
        title=title,
        description="d",
        assignment_date="1/3/2025",
        deadline="1/4/2025",
        registration_status=RegistrationStatus.ACTIVO if active else RegistrationStatus.INACTIVO,
        workers=[Worker(id=i) for i in members],
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def worker_service(store):
    return WorkerService(
        MagicMock(),
        MagicMock(),
        SoftDeleteCache(store, "trabajadores_inactivos_cache", Worker),
    )


@pytest.fixture
def project_service(store):
    return ProjectService(
        MagicMock(),
        MagicMock(),
        SoftDeleteCache(store, "proyectos_inactivos_cache", Project),
    )


class TestRequestSequencer:
    """Last-request-wins."""

    def test_latest_result_applied(self):
        sequencer = RequestSequencer()
        applied = []
        assert sequencer.run("workers:list", lambda: [1], applied.append) is True
        assert applied == [[1]]

    def test_stale_result_discarded(self):
        """A fetch superseded while in flight is not applied."""
        sequencer = RequestSequencer()
        applied = []

        def slow_fetch():
            # A newer request for the same resource starts before this one returns
            sequencer.run("workers:list", lambda: "new", applied.append)
            return "old"

        assert sequencer.run("workers:list", slow_fetch, applied.append) is False
        assert applied == ["new"]

    def test_resources_are_independent(self):
        sequencer = RequestSequencer()
        first = sequencer.issue("workers:list")
        sequencer.issue("projects:list")
        assert sequencer.is_latest("workers:list", first)


class TestWorkerService:
    """Worker list and form workflows."""

    def test_load_merges_cached_inactive(self, worker_service):
        worker_service.cache.sync(worker(7, "INACTIVO"))
        worker_service.workers.list_all.return_value = [worker(1), worker(2)]

        roster = worker_service.load()

        assert [w.id for w in roster] == [1, 2, 7]
        assert worker_service.roster is roster

    def test_save_creates_after_validation(self, worker_service):
        worker_service.workers.list_all.return_value = []
        worker_service.workers.create.return_value = worker(5)
        draft = WorkerDraft(
            first_name=" ana ",
            last_name="Lopez",
            email="ANA@x.pe",
            phone="912345678",
            hire_date="1/1/2099",
            document_type=DocumentType.DNI,
            document_number="12345678",
        )

        worker_service.save(draft)

        sent = worker_service.workers.create.call_args.args[0]
        assert sent.first_name == "ana"
        assert sent.email == "ana@x.pe"
        worker_service.workers.update.assert_not_called()

    def test_create_posts_normalised_payload(self, store):
        """A typed draft ends up as one POST with the cleaned fields."""
        client = MagicMock()
        client.get.return_value = []
        client.post.return_value = {"id": 21, "nombre": "Ana", "apellido": "Lopez"}
        service = WorkerService(
            WorkerGateway(client),
            MagicMock(),
            SoftDeleteCache(store, "trabajadores_inactivos_cache", Worker),
        )
        draft = sanitize_worker_input(WorkerDraft(
            first_name="Ana",
            last_name="Lopez",
            email="ANA@X.com ",
            phone="987654321",
            document_type=DocumentType.DNI,
            document_number="12345678",
            hire_date=today_dmy(),
        ))

        created = service.save(draft)

        client.get.assert_called_once_with("/trabajadores")
        client.post.assert_called_once()
        path = client.post.call_args.args[0]
        payload = client.post.call_args.kwargs["json"]
        assert path == "/trabajadores"
        assert payload["email"] == "ana@x.com"
        assert payload["nombre"] == "Ana"
        assert payload["apellido"] == "Lopez"
        assert payload["numeroDocumento"] == "12345678"
        assert created.id == 21

    def test_duplicate_of_cached_inactive_rejected(self, worker_service):
        """A worker the server list leaves out still blocks its email."""
        worker_service.cache.sync(worker(7, "INACTIVO", email="ana@x.com", phone="911111111"))
        worker_service.workers.list_all.return_value = []
        draft = WorkerDraft(
            first_name="Ana",
            last_name="Lopez",
            email="ana@x.com",
            phone="987654321",
            hire_date="1/1/2099",
            document_type=DocumentType.DNI,
            document_number="12345678",
        )

        with pytest.raises(DraftRejected, match="Ya existe un trabajador"):
            worker_service.save(draft)

        worker_service.workers.create.assert_not_called()

    def test_save_updates_existing(self, worker_service):
        existing = worker(5, first_name="Ana", last_name="Lopez", email="ana@x.pe", phone="912345678",
                          hire_date="1/1/2020", role="TESTER", document_type=DocumentType.DNI,
                          document_number="12345678")
        worker_service.workers.list_all.return_value = [existing]
        worker_service.workers.update.return_value = existing

        worker_service.save(existing.to_draft(), worker_id=5)

        assert worker_service.workers.update.call_args.args[0] == 5

    def test_invalid_draft_sends_nothing(self, worker_service):
        worker_service.workers.list_all.return_value = []
        with pytest.raises(DraftRejected):
            worker_service.save(WorkerDraft(first_name="A"))
        worker_service.workers.create.assert_not_called()

    def test_toggle_updates_roster_and_cache(self, worker_service):
        worker_service.workers.list_all.return_value = [worker(1), worker(2)]
        worker_service.load()
        worker_service.workers.toggle_status.return_value = worker(2, "INACTIVO")

        worker_service.toggle(worker(2))

        worker_service.workers.toggle_status.assert_called_once_with(2, RegistrationStatus.ACTIVO)
        assert worker_service.roster[1].registration_status == RegistrationStatus.INACTIVO
        assert [w.id for w in worker_service.cache.cached()] == [2]

    def test_assign_project(self, worker_service):
        target = project(10, [1, 2], title="Portal")
        worker_service.projects.by_worker.return_value = [project(3, [4])]
        worker_service.projects.list_all.return_value = [target, project(11, active=False)]
        worker_service.projects.update.return_value = project(10, [1, 2, 4])

        worker_service.assign_project(worker(4), 10)

        project_id, payload = worker_service.projects.update.call_args.args
        assert project_id == 10
        assert payload.worker_ids == [1, 2, 4]

    def test_assign_worker_at_capacity(self, worker_service):
        worker_service.projects.by_worker.return_value = [project(i, [4]) for i in (1, 2, 3)]
        with pytest.raises(WorkerAtCapacity):
            worker_service.assign_project(worker(4), 10)
        worker_service.projects.list_all.assert_not_called()

    def test_assign_inactive_project_refused(self, worker_service):
        worker_service.projects.by_worker.return_value = []
        worker_service.projects.list_all.return_value = [project(10), project(11, active=False)]
        with pytest.raises(AssignmentError, match="Proyecto inválido"):
            worker_service.assign_project(worker(4), 11)

    def test_assign_with_no_projects(self, worker_service):
        worker_service.projects.by_worker.return_value = []
        worker_service.projects.list_all.return_value = []
        with pytest.raises(AssignmentError, match="No hay proyectos disponibles"):
            worker_service.assign_project(worker(4), 10)


class TestProjectService:
    """Project list, form and member workflows."""

    def test_load_merges_cached_inactive(self, project_service):
        project_service.cache.sync(project(9, active=False))
        project_service.projects.list_all.return_value = [project(1)]
        assert [p.id for p in project_service.load()] == [1, 9]

    def test_save_validates_against_existing(self, project_service):
        project_service.projects.list_all.return_value = [project(1, [1, 2], title="App")]
        draft = ProjectDraft(
            title="app",
            description="x",
            assignment_date="1/1/2099",
            deadline="2/1/2099",
            worker_ids=[2, 1],
        )
        with pytest.raises(DraftRejected, match="Ya existe un proyecto"):
            project_service.save(draft)
        project_service.projects.create.assert_not_called()

    def test_duplicate_of_cached_inactive_rejected(self, project_service):
        project_service.cache.sync(project(9, [1, 2], active=False, title="App"))
        project_service.projects.list_all.return_value = []
        draft = ProjectDraft(
            title="app",
            description="x",
            assignment_date="1/1/2099",
            deadline="2/1/2099",
            worker_ids=[2, 1],
        )
        with pytest.raises(DraftRejected, match="Ya existe un proyecto"):
            project_service.save(draft)
        project_service.projects.create.assert_not_called()

    def test_toggle_status_less_project_treated_as_active(self, project_service):
        legacy = Project(id=3, title="Old", registration_status=None)
        project_service.projects.toggle_status.return_value = project(3, active=False)

        project_service.toggle(legacy)

        project_service.projects.toggle_status.assert_called_once_with(3, RegistrationStatus.ACTIVO)
        assert [p.id for p in project_service.cache.cached()] == [3]

    def test_update_status(self, project_service):
        project_service.projects.update_status.return_value = project(3)
        project_service.update_status(project(3), ProjectStatus.COMPLETADO)
        project_service.projects.update_status.assert_called_once_with(3, ProjectStatus.COMPLETADO)

    def test_assign_members_rejects_empty(self, project_service):
        with pytest.raises(AssignmentError, match="Selecciona al menos un trabajador"):
            project_service.assign_members(project(3, [1]), [])
        project_service.projects.update.assert_not_called()

    def test_toggle_member_adds(self, project_service):
        project_service.projects.update.return_value = project(3, [1, 2])
        project_service.toggle_member(project(3, [1]), 2)
        assert project_service.projects.update.call_args.args[1].worker_ids == [1, 2]
        project_service.projects.by_worker.assert_not_called()

    def test_toggle_member_full_project(self, project_service):
        with pytest.raises(ProjectAtCapacity):
            project_service.toggle_member(project(3, [1, 2, 3]), 4)

    def test_toggle_member_removing_last_refused(self, project_service):
        with pytest.raises(AssignmentError):
            project_service.toggle_member(project(3, [1]), 1)

    def test_toggle_member_enforces_worker_cap_when_enabled(self, project_service):
        project_service.reconciler = AssignmentReconciler(enforce_worker_capacity_on_toggle=True)
        project_service.projects.by_worker.return_value = [project(i, [4]) for i in (5, 6, 7)]
        with pytest.raises(WorkerAtCapacity):
            project_service.toggle_member(project(3, [1]), 4)
        project_service.projects.by_worker.assert_called_once_with(4)


class TestContainer:
    """Wiring of the composition root."""

    def test_shared_store_and_caps(self, store):
        settings = Settings(max_workers_per_project=2, api_url="http://api.test/api")
        container = build_container(settings=settings, store=store, session=MagicMock())

        assert container.worker_cache.store is store
        assert container.projects.reconciler is container.workers.reconciler
        assert container.reconciler.max_workers_per_project == 2
        assert container.client.base_url == "http://api.test/api"

    def test_401_clears_session(self, store):
        store.set("token", "abc")
        session = MagicMock()
        resp = MagicMock(status_code=401, content=b"")
        resp.json.side_effect = ValueError()
        session.request.return_value = resp
        container = build_container(settings=Settings(), store=store, session=session)

        with pytest.raises(Unauthorized):
            container.workers.load()

        assert store.get("token") is None
        assert session.request.call_args.kwargs["headers"]["Authorization"] == "Bearer abc"
