"""Worker form rules: normalisation, format checks and duplicate detection."""

import re
from datetime import date
from typing import Iterable, Optional

from contracts import DocumentType, Role, Worker, WorkerDraft
from errors import DraftRejected
from validation.dates import parse_dmy
from validation.text import NAME_RE, normalize_name


EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^9\d{8}$")

DOCUMENT_PATTERNS = {
    DocumentType.DNI: re.compile(r"^\d{8}$"),
    DocumentType.CARNET_EXTRANJERIA: re.compile(r"^[A-Z0-9]{9,12}$"),
    DocumentType.RUC: re.compile(r"^\d{11}$"),
    DocumentType.RIF: re.compile(r"^(?:[VEJG]\d{9}|\d{11})$"),
}

_ROLES = {r.value for r in Role}


def is_valid_document(document_type: Optional[DocumentType], number: str) -> bool:
    """Check a document number against the format of its type.

    DNI: 8 digits. CARNET_EXTRANJERIA: 9-12 uppercase alphanumerics.
    RUC: 11 digits. RIF: V/E/J/G plus 9 digits, or 11 digits.
    Unknown or missing types are never valid.
    """
    if document_type is None:
        return False
    pattern = DOCUMENT_PATTERNS.get(document_type)
    if pattern is None:
        return False
    return bool(pattern.match(number or ""))


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email or ""))


def sanitize_worker_input(draft: WorkerDraft) -> WorkerDraft:
    """Clean values typed outside a form before they are validated.

    Only surrounding whitespace and letter case change. Nothing is cut or
    dropped from inside a value, so a wrong length or character still
    reaches ``validate_worker`` and is reported there.
    """
    return draft.model_copy(update={
        "first_name": (draft.first_name or "").strip(),
        "last_name": (draft.last_name or "").strip(),
        "email": (draft.email or "").strip().lower(),
        "phone": (draft.phone or "").strip(),
        "document_number": (draft.document_number or "").strip().upper(),
    })


def normalize_worker(draft: WorkerDraft) -> WorkerDraft:
    """Return a copy with trimmed/cased fields; no rule is checked here."""
    return draft.model_copy(update={
        "first_name": normalize_name(draft.first_name),
        "last_name": normalize_name(draft.last_name),
        "email": (draft.email or "").strip().lower(),
        "phone": (draft.phone or "").strip(),
        "document_number": (draft.document_number or "").strip().upper(),
    })


def find_duplicate(
    draft: WorkerDraft,
    existing_workers: Iterable[Worker],
    worker_id: Optional[int] = None,
) -> Optional[Worker]:
    """First other worker sharing email, phone or (document type, number).

    Args:
        draft: Normalised draft
        existing_workers: Every known worker, ACTIVE and INACTIVE
        worker_id: Id of the worker being edited, skipped in the comparison
    """
    email = draft.email.lower()
    number = draft.document_number.upper()
    for other in existing_workers:
        if worker_id and other.id == worker_id:
            continue
        if (
            other.email.lower() == email
            or other.phone == draft.phone
            or (other.document_type == draft.document_type and other.document_number.upper() == number)
        ):
            return other
    return None


def validate_worker(
    draft: WorkerDraft,
    existing_workers: Iterable[Worker] = (),
    worker_id: Optional[int] = None,
    today: Optional[date] = None,
) -> WorkerDraft:
    """Normalise and validate a worker draft.

    Checks run in form order and stop at the first failure.

    Args:
        draft: Raw form values
        existing_workers: Known workers used for duplicate detection
        worker_id: Set when editing; disables the hire-date-in-the-past rule
        today: Reference date (defaults to the current date)

    Returns:
        The normalised draft.

    Raises:
        DraftRejected: With the failing field and a user-facing message.
    """
    if re.search(r"\s", draft.email or ""):
        raise DraftRejected("email", "El email no puede contener espacios")
    if re.search(r"[^0-9]", draft.phone or ""):
        raise DraftRejected("phone", "El teléfono solo puede contener números")

    worker = normalize_worker(draft)

    _check_name(worker.first_name, "first_name", "El nombre")
    _check_name(worker.last_name, "last_name", "El apellido")

    if not worker.email:
        raise DraftRejected("email", "El email es obligatorio")
    if not is_valid_email(worker.email):
        raise DraftRejected("email", "Ingrese un email válido (ejemplo: usuario@empresa.com)")

    if not worker.phone:
        raise DraftRejected("phone", "El teléfono es obligatorio")
    if not PHONE_RE.match(worker.phone):
        raise DraftRejected(
            "phone", "El teléfono debe ser un número válido peruano (9 dígitos empezando con 9)"
        )

    if not worker.document_type:
        raise DraftRejected("document_type", "Debe seleccionar el tipo de documento")
    if not worker.document_number:
        raise DraftRejected("document_number", "El número de documento es obligatorio")
    if not is_valid_document(worker.document_type, worker.document_number):
        raise DraftRejected("document_number", "El número de documento no tiene el formato válido")

    if find_duplicate(worker, existing_workers, worker_id) is not None:
        raise DraftRejected(
            "email", "Ya existe un trabajador con el mismo email, teléfono o documento"
        )

    if not worker.hire_date:
        raise DraftRejected("hire_date", "La fecha de ingreso es obligatoria")
    hire_date = parse_dmy(worker.hire_date, "hire_date")
    if not worker_id and hire_date < (today or date.today()):
        raise DraftRejected("hire_date", "La fecha de ingreso no puede ser anterior a la fecha actual")

    if not worker.role:
        raise DraftRejected("role", "Debe seleccionar un cargo")
    if worker.role not in _ROLES:
        raise DraftRejected("role", f"El cargo '{worker.role}' no es válido")

    return worker


def _check_name(value: str, field: str, label: str) -> None:
    if not value or len(value) < 2:
        raise DraftRejected(field, f"{label} debe tener al menos 2 caracteres")
    if not NAME_RE.match(value):
        raise DraftRejected(field, f"{label} solo puede contener letras")
