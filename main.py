#!/usr/bin/env python3
"""rrhh-admin CLI - admin dashboard for workers and projects.

Usage:
    rrhh-admin login --username admin
    rrhh-admin workers list --status TODOS --name ana
    rrhh-admin workers assign 4 12
    rrhh-admin projects members 12 4 7
    rrhh-admin stats
"""

import functools
import logging
import sys
from typing import List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from config import settings
from contracts import DocumentType, Project, ProjectDraft, ProjectStatus, Role, Worker, WorkerDraft
from dashboard import compute_stats, count_by_registration, filter_projects, filter_workers, worker_label
from errors import RRHHError
from services import Container, build_container
from validation import sanitize_worker_input


console = Console()

REGISTRATION_CHOICES = ["ACTIVO", "INACTIVO", "TODOS"]
STATUS_CHOICES = [s.value for s in ProjectStatus]


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def handle_errors(func):
    """Print domain and backend errors in red and exit with status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RRHHError as e:
            console.print(f"[red]{e.message}[/red]")
            sys.exit(1)
    return wrapper


def require_session(container: Container) -> None:
    if not container.auth.is_authenticated():
        console.print("[red]No hay sesión activa. Ejecuta 'rrhh-admin login'.[/red]")
        sys.exit(1)


def find_by_id(items, entity_id: int):
    return next((item for item in items if item.id == entity_id), None)


def worker_table(workers: List[Worker]) -> Table:
    table = Table(show_lines=False)
    for column in ("ID", "Nombre", "Email", "Teléfono", "Documento", "Ingreso", "Cargo", "Estado"):
        table.add_column(column)
    for w in workers:
        document = f"{w.document_type.value if w.document_type else '-'} {w.document_number}".strip()
        status = "[green]ACTIVO[/green]" if w.is_active() else "[dim]INACTIVO[/dim]"
        table.add_row(str(w.id), w.full_name, w.email, w.phone, document, w.hire_date, w.role, status)
    return table


def project_table(projects: List[Project]) -> Table:
    table = Table(show_lines=False)
    for column in ("ID", "Título", "Asignación", "Límite", "Estado", "Registro", "Trabajadores"):
        table.add_column(column)
    for p in projects:
        members = ", ".join(worker_label(m) for m in p.members()) or "-"
        registration = p.registration_status.value if p.registration_status else "-"
        table.add_row(str(p.id), p.title, p.assignment_date, p.deadline, p.status.value, registration, members)
    return table


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """RRHH Admin: manage workers, projects and their assignments."""
    setup_logging(verbose)
    ctx.obj = build_container()


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

@main.command()
@click.option("--username", "-u", prompt=True, help="Backend username")
@click.option("--password", "-p", prompt=True, hide_input=True, help="Backend password")
@click.pass_obj
@handle_errors
def login(container: Container, username: str, password: str):
    """Log in and store the session token."""
    response = container.auth.login(username, password)
    console.print(f"[green]Sesión iniciada como[/green] {response.username} ({response.role})")
    if not container.auth.is_admin():
        console.print("[yellow]El usuario no tiene rol de administrador.[/yellow]")


@main.command()
@click.pass_obj
def logout(container: Container):
    """Forget the stored session."""
    container.auth.logout()
    console.print("Sesión cerrada.")


@main.command()
@click.pass_obj
def whoami(container: Container):
    """Show the stored session."""
    session = container.auth.session()
    if not session.is_authenticated():
        console.print("[dim]Sin sesión.[/dim]")
        return
    console.print(f"{session.username} ({session.role})")


# ---------------------------------------------------------------------------
# Workers
# ---------------------------------------------------------------------------

@main.group()
def workers():
    """Worker (trabajador) commands."""


@workers.command("list")
@click.option("--status", "-s", type=click.Choice(REGISTRATION_CHOICES), default="ACTIVO", help="Registration filter")
@click.option("--name", "-n", default="", help="Substring of the full name")
@click.option("--date", "-d", "hire_date", default="", help="Substring of the hire date (D/M/YYYY)")
@click.pass_obj
@handle_errors
def list_workers(container: Container, status: str, name: str, hire_date: str):
    """List workers, including cached INACTIVE ones."""
    require_session(container)
    roster = container.workers.load()
    shown = filter_workers(roster, status=status, name=name, hire_date=hire_date)
    console.print(worker_table(shown))
    console.print(
        f"[dim]Total:[/dim] {count_by_registration(roster)}  "
        f"[dim]Activos:[/dim] {count_by_registration(roster, 'ACTIVO')}  "
        f"[dim]Inactivos:[/dim] {count_by_registration(roster, 'INACTIVO')}"
    )


def worker_options(func):
    options = [
        click.option("--first-name", default=None, help="Nombre"),
        click.option("--last-name", default=None, help="Apellido"),
        click.option("--email", default=None),
        click.option("--phone", default=None, help="Teléfono (9 dígitos empezando con 9)"),
        click.option("--hire-date", default=None, help="Fecha de ingreso D/M/YYYY"),
        click.option("--role", type=click.Choice([r.value for r in Role]), default=None, help="Cargo"),
        click.option("--document-type", type=click.Choice([d.value for d in DocumentType]), default=None),
        click.option("--document-number", default=None),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def apply_fields(draft, fields: dict):
    """Copy the options that were given onto a draft."""
    updates = {k: v for k, v in fields.items() if v is not None}
    return draft.model_copy(update=updates)


def worker_draft(draft: WorkerDraft, fields: dict) -> WorkerDraft:
    draft = apply_fields(draft, fields)
    if draft.document_type is not None:
        draft = draft.model_copy(update={"document_type": DocumentType(draft.document_type)})
    return sanitize_worker_input(draft)


@workers.command("create")
@worker_options
@click.pass_obj
@handle_errors
def create_worker(container: Container, **fields):
    """Create a worker."""
    require_session(container)
    draft = worker_draft(WorkerDraft(), fields)
    worker = container.workers.save(draft)
    console.print(f"[green]Trabajador creado:[/green] {worker.id} {worker.full_name}")


@workers.command("update")
@click.argument("worker_id", type=int)
@worker_options
@click.pass_obj
@handle_errors
def update_worker(container: Container, worker_id: int, **fields):
    """Update a worker; omitted options keep their current value."""
    require_session(container)
    current = container.workers.get(worker_id)
    draft = worker_draft(current.to_draft(), fields)
    worker = container.workers.save(draft, worker_id=worker_id)
    console.print(f"[green]Trabajador actualizado:[/green] {worker.id} {worker.full_name}")


@workers.command("toggle")
@click.argument("worker_id", type=int)
@click.pass_obj
@handle_errors
def toggle_worker(container: Container, worker_id: int):
    """Deactivate an ACTIVE worker or reactivate an INACTIVE one."""
    require_session(container)
    worker = find_by_id(container.workers.load(), worker_id) or container.workers.get(worker_id)
    updated = container.workers.toggle(worker)
    console.print(f"{updated.full_name}: {updated.registration_status.value}")


@workers.command("projects")
@click.argument("worker_id", type=int)
@click.pass_obj
@handle_errors
def worker_projects(container: Container, worker_id: int):
    """Show the projects a worker is assigned to."""
    require_session(container)
    projects = container.workers.projects_of(worker_id)
    if not projects:
        console.print("[dim]Sin proyectos asignados.[/dim]")
        return
    console.print(project_table(projects))


@workers.command("assign")
@click.argument("worker_id", type=int)
@click.argument("project_id", type=int)
@click.pass_obj
@handle_errors
def assign_worker(container: Container, worker_id: int, project_id: int):
    """Add a worker to an ACTIVE project."""
    require_session(container)
    worker = container.workers.get(worker_id)
    project = container.workers.assign_project(worker, project_id)
    console.print(f"[green]{worker.full_name} asignado a[/green] {project.title}")


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@main.group()
def projects():
    """Project (proyecto) commands."""


@projects.command("list")
@click.option("--registration", "-r", type=click.Choice(REGISTRATION_CHOICES), default="ACTIVO")
@click.option("--status", "-s", type=click.Choice(STATUS_CHOICES), default=None, help="Workflow status")
@click.option("--title", "-t", default="", help="Substring of the title")
@click.option("--worker", "-w", default="", help="Exact label 'Nombre Apellido - CARGO'")
@click.option("--date", "-d", "assignment_date", default="", help="Substring of the assignment date")
@click.pass_obj
@handle_errors
def list_projects(
    container: Container,
    registration: str,
    status: Optional[str],
    title: str,
    worker: str,
    assignment_date: str,
):
    """List projects with their members, including cached INACTIVE ones."""
    require_session(container)
    portfolio = container.projects.load()
    shown = filter_projects(
        portfolio,
        registration=registration,
        status=status,
        title=title,
        worker=worker,
        assignment_date=assignment_date,
    )
    console.print(project_table(shown))
    console.print(
        f"[dim]Total:[/dim] {count_by_registration(portfolio, status=status)}  "
        f"[dim]Activos:[/dim] {count_by_registration(portfolio, 'ACTIVO', status)}  "
        f"[dim]Inactivos:[/dim] {count_by_registration(portfolio, 'INACTIVO', status)}"
    )


def project_options(func):
    options = [
        click.option("--title", default=None, help="Título"),
        click.option("--description", default=None, help="Descripción"),
        click.option("--assignment-date", default=None, help="Fecha de asignación D/M/YYYY"),
        click.option("--deadline", default=None, help="Fecha límite D/M/YYYY"),
        click.option("--worker", "worker_ids", type=int, multiple=True, help="Worker id (repeatable)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@projects.command("create")
@project_options
@click.pass_obj
@handle_errors
def create_project(container: Container, worker_ids, **fields):
    """Create a project."""
    require_session(container)
    draft = apply_fields(ProjectDraft(), fields)
    draft = draft.model_copy(update={"worker_ids": list(worker_ids)})
    project = container.projects.save(draft)
    console.print(f"[green]Proyecto creado:[/green] {project.id} {project.title}")


@projects.command("update")
@click.argument("project_id", type=int)
@project_options
@click.pass_obj
@handle_errors
def update_project(container: Container, project_id: int, worker_ids, **fields):
    """Update a project; omitted options keep their current value."""
    require_session(container)
    current = find_by_id(container.projects.load(), project_id) or container.projects.get(project_id)
    draft = apply_fields(ProjectDraft.from_project(current), fields)
    if worker_ids:
        draft = draft.model_copy(update={"worker_ids": list(worker_ids)})
    project = container.projects.save(draft, project_id=project_id)
    console.print(f"[green]Proyecto actualizado:[/green] {project.id} {project.title}")


@projects.command("toggle")
@click.argument("project_id", type=int)
@click.pass_obj
@handle_errors
def toggle_project(container: Container, project_id: int):
    """Deactivate an ACTIVE project or reactivate an INACTIVE one."""
    require_session(container)
    project = find_by_id(container.projects.load(), project_id) or container.projects.get(project_id)
    updated = container.projects.toggle(project)
    registration = updated.registration_status.value if updated.registration_status else "-"
    console.print(f"{updated.title}: {registration}")


@projects.command("status")
@click.argument("project_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES))
@click.pass_obj
@handle_errors
def project_status(container: Container, project_id: int, status: str):
    """Move a project to another workflow status."""
    require_session(container)
    project = container.projects.get(project_id)
    updated = container.projects.update_status(project, ProjectStatus(status))
    console.print(f"{updated.title}: {updated.status.value}")


@projects.command("members")
@click.argument("project_id", type=int)
@click.argument("worker_ids", type=int, nargs=-1)
@click.pass_obj
@handle_errors
def project_members(container: Container, project_id: int, worker_ids):
    """Replace the members of a project."""
    require_session(container)
    project = find_by_id(container.projects.load(), project_id) or container.projects.get(project_id)
    updated = container.projects.assign_members(project, list(worker_ids))
    console.print(f"[green]Trabajadores asignados a[/green] {updated.title}")


@projects.command("toggle-member")
@click.argument("project_id", type=int)
@click.argument("worker_id", type=int)
@click.pass_obj
@handle_errors
def toggle_project_member(container: Container, project_id: int, worker_id: int):
    """Add or remove a single member."""
    require_session(container)
    project = find_by_id(container.projects.load(), project_id) or container.projects.get(project_id)
    updated = container.projects.toggle_member(project, worker_id)
    members = ", ".join(worker_label(m) for m in updated.members()) or "-"
    console.print(f"{updated.title}: {members}")


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------

@main.command()
@click.pass_obj
@handle_errors
def stats(container: Container):
    """Summary of workers, projects and roles."""
    require_session(container)
    summary = compute_stats(container.workers.load(), container.projects.load())

    console.print(Panel.fit(
        f"[bold]Trabajadores:[/bold] {summary.total_workers} ({summary.active_workers} activos)\n"
        f"[bold]Proyectos:[/bold] {summary.total_projects}\n"
        f"[bold]Completados:[/bold] {summary.completion_rate}%\n"
        f"[bold]Proyectos por trabajador activo:[/bold] {summary.projects_per_worker}",
        border_style="blue",
    ))

    by_status = Table(title="Proyectos por estado")
    by_status.add_column("Estado")
    by_status.add_column("Cantidad", justify="right")
    for name, count in summary.projects_by_status.items():
        by_status.add_row(name, str(count))
    console.print(by_status)

    roles = Table(title="Cargos")
    roles.add_column("Cargo")
    roles.add_column("Trabajadores", justify="right")
    for role in summary.roles:
        roles.add_row(role.name, str(role.count))
    console.print(roles)


if __name__ == "__main__":
    main()
