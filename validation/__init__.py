"""Form validation for workers and projects."""

from .dates import parse_dmy, format_dmy, today_dmy
from .text import (
    normalize_name,
    normalize_name_for_input,
    normalize_title,
    normalize_title_for_input,
    sanitize_email_input,
    sanitize_phone_input,
    sanitize_document_input,
    document_placeholder,
)
from .worker_validator import (
    validate_worker,
    normalize_worker,
    sanitize_worker_input,
    is_valid_document,
    is_valid_email,
    find_duplicate,
)
from .project_validator import (
    MAX_WORKERS_PER_PROJECT,
    validate_project,
    normalize_project,
    is_duplicate_project,
)

__all__ = [
    # Dates
    "parse_dmy",
    "format_dmy",
    "today_dmy",
    # Text
    "normalize_name",
    "normalize_name_for_input",
    "normalize_title",
    "normalize_title_for_input",
    "sanitize_email_input",
    "sanitize_phone_input",
    "sanitize_document_input",
    "document_placeholder",
    # Workers
    "validate_worker",
    "normalize_worker",
    "sanitize_worker_input",
    "is_valid_document",
    "is_valid_email",
    "find_duplicate",
    # Projects
    "MAX_WORKERS_PER_PROJECT",
    "validate_project",
    "normalize_project",
    "is_duplicate_project",
]
