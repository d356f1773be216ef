"""Text normalisation for form fields.

Two flavours per field: ``*_for_input`` sanitises while the user types (it
keeps a trailing space so words can be separated), the plain variant is
applied once before validation.
"""

import re
from typing import Optional

from contracts import DocumentType


NAME_CHARS = "a-zA-ZáéíóúÁÉÍÓÚñÑ"
_NAME_STRIP_RE = re.compile(rf"[^{NAME_CHARS}\s]")
NAME_RE = re.compile(rf"^[{NAME_CHARS}\s]+$")
_SPACE_RUNS_RE = re.compile(r"\s{2,}")
_ANY_SPACE_RE = re.compile(r"\s+")
_LEADING_SPACE_RE = re.compile(r"^\s+")

# (allowed characters pattern, maximum length) while typing a document number
_DOCUMENT_INPUT_RULES = {
    DocumentType.DNI: (re.compile(r"[^0-9]"), 8),
    DocumentType.CARNET_EXTRANJERIA: (re.compile(r"[^A-Z0-9]"), 12),
    DocumentType.RUC: (re.compile(r"[^0-9]"), 11),
    DocumentType.RIF: (re.compile(r"[^A-Z0-9]"), 11),
}

_DOCUMENT_PLACEHOLDERS = {
    DocumentType.DNI: "8 dígitos",
    DocumentType.CARNET_EXTRANJERIA: "9-12 alfanuméricos",
    DocumentType.RUC: "11 dígitos",
    DocumentType.RIF: "V/E/J/G + 9 dígitos o 11 dígitos",
}


def normalize_name(value: Optional[str]) -> str:
    """Keep letters and spaces, collapse space runs and trim."""
    value = _NAME_STRIP_RE.sub("", value or "")
    return _SPACE_RUNS_RE.sub(" ", value).strip()


def normalize_name_for_input(value: Optional[str]) -> str:
    """Like ``normalize_name`` but keeps a trailing space while typing."""
    value = _NAME_STRIP_RE.sub("", value or "")
    value = _LEADING_SPACE_RE.sub("", value)
    return _SPACE_RUNS_RE.sub(" ", value)


def normalize_title(value: Optional[str]) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _ANY_SPACE_RE.sub(" ", value or "").strip()


def normalize_title_for_input(value: Optional[str]) -> str:
    """Drop leading whitespace and collapse runs, keeping a trailing space."""
    value = _LEADING_SPACE_RE.sub("", value or "")
    return _SPACE_RUNS_RE.sub(" ", value)


def sanitize_email_input(value: Optional[str]) -> str:
    """Remove every whitespace character and lowercase."""
    return _ANY_SPACE_RE.sub("", value or "").lower()


def sanitize_phone_input(value: Optional[str]) -> str:
    """Keep digits only, at most 9 of them."""
    return re.sub(r"[^0-9]", "", value or "")[:9]


def sanitize_document_input(document_type: Optional[DocumentType], value: Optional[str]) -> str:
    """Uppercase, drop whitespace and apply the per-type charset and length."""
    value = _ANY_SPACE_RE.sub("", (value or "").upper())
    rule = _DOCUMENT_INPUT_RULES.get(document_type) if document_type else None
    if rule is None:
        return value
    pattern, max_length = rule
    return pattern.sub("", value)[:max_length]


def document_placeholder(document_type: Optional[DocumentType]) -> str:
    if document_type is None:
        return "Ingrese el número"
    return _DOCUMENT_PLACEHOLDERS.get(document_type, "Ingrese el número")
