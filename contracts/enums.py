"""Enumerations shared by the worker and project contracts."""

from enum import Enum


class RegistrationStatus(str, Enum):
    """Soft-delete flag; distinct from the project workflow status."""
    ACTIVO = "ACTIVO"
    INACTIVO = "INACTIVO"


class ProjectStatus(str, Enum):
    """Workflow status of a project."""
    PENDIENTE = "PENDIENTE"
    EN_PROGRESO = "EN_PROGRESO"
    COMPLETADO = "COMPLETADO"
    CANCELADO = "CANCELADO"


class DocumentType(str, Enum):
    """Identity document accepted for a worker."""
    DNI = "DNI"  # National id, 8 digits
    CARNET_EXTRANJERIA = "CARNET_EXTRANJERIA"  # Foreign-resident card
    RUC = "RUC"  # Tax id, 11 digits
    RIF = "RIF"  # Fiscal id variant


class Role(str, Enum):
    """Job titles (cargos) a worker can hold."""
    PROGRAMADOR = "PROGRAMADOR"
    ANALISTA = "ANALISTA"
    DISENADOR = "DISENADOR"
    TESTER = "TESTER"
    ARQUITECTO = "ARQUITECTO"
    JEFE_PROYECTO = "JEFE_PROYECTO"
    SOPORTE = "SOPORTE"
