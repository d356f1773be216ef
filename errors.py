"""Exception hierarchy for rrhh-admin.

Three families:
1. DraftRejected - local form validation, shown inline and fixed by the user
2. AssignmentError - cardinality limits between workers and projects
3. ApiError - transport and HTTP failures from the backend, one subclass per
   status code the dashboard reacts to
"""

from typing import Optional


class RRHHError(Exception):
    """Base exception for rrhh-admin."""

    error_code: str = "RRHH_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DraftRejected(RRHHError, ValueError):
    """A worker or project draft failed a business rule."""

    error_code: str = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class AssignmentError(RRHHError):
    """An assignment between a worker and a project was refused."""

    error_code: str = "ASSIGNMENT_ERROR"


class WorkerAtCapacity(AssignmentError):
    """The worker already has the maximum number of ACTIVE projects."""

    error_code: str = "WORKER_AT_CAPACITY"


class ProjectAtCapacity(AssignmentError):
    """The project already has the maximum number of workers."""

    error_code: str = "PROJECT_AT_CAPACITY"


class ApiError(RRHHError):
    """Failure talking to the REST backend."""

    error_code: str = "API_ERROR"
    status: int = -1

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        server_message: Optional[str] = None,
    ):
        if status is not None:
            self.status = status
        self.server_message = server_message
        super().__init__(message)

    @classmethod
    def from_status(
        cls,
        status: int,
        server_message: Optional[str] = None,
        resource: str = "",
    ) -> "ApiError":
        """Build the exception matching an HTTP status code.

        Args:
            status: HTTP status code (0 when the server is unreachable)
            server_message: The backend's ``message`` field, if any
            resource: Path of the resource, used in the 404 message

        Returns:
            An instance of the most specific ApiError subclass.
        """
        error_cls = _STATUS_ERRORS.get(status)
        if error_cls is None:
            detail = server_message or "Error al procesar la solicitud"
            return cls(f"ERROR {status}: {detail}", status=status, server_message=server_message)
        return error_cls(
            error_cls.describe(server_message, resource),
            status=status,
            server_message=server_message,
        )

    @classmethod
    def describe(cls, server_message: Optional[str], resource: str) -> str:
        return server_message or "Error al procesar la solicitud"


class ConnectionFailed(ApiError):
    """The backend could not be reached at all."""

    error_code: str = "CONNECTION_ERROR"
    status: int = 0

    @classmethod
    def describe(cls, server_message: Optional[str], resource: str) -> str:
        return "ERROR DE CONEXIÓN: No se puede conectar al servidor. Verifica que el backend esté corriendo"


class Unauthorized(ApiError):
    """Session expired or token missing; the session must be dropped."""

    error_code: str = "UNAUTHORIZED"
    status: int = 401

    @classmethod
    def describe(cls, server_message: Optional[str], resource: str) -> str:
        return "ERROR 401 NO AUTORIZADO: Tu sesión expiró. Por favor vuelve a iniciar sesión"


class Forbidden(ApiError):
    """The backend rejected the token for this operation."""

    error_code: str = "FORBIDDEN"
    status: int = 403

    @classmethod
    def describe(cls, server_message: Optional[str], resource: str) -> str:
        return "ERROR 403 PROHIBIDO: No tienes permisos para esta operación. Verifica los roles en el backend"


class NotFound(ApiError):
    """Endpoint or record not found."""

    error_code: str = "NOT_FOUND"
    status: int = 404

    @classmethod
    def describe(cls, server_message: Optional[str], resource: str) -> str:
        message = "ERROR 404: Recurso no encontrado"
        if resource:
            message += f" ({resource})"
        if server_message:
            message += f" - {server_message}"
        return message


class ServerError(ApiError):
    """Internal error on the backend."""

    error_code: str = "SERVER_ERROR"
    status: int = 500

    @classmethod
    def describe(cls, server_message: Optional[str], resource: str) -> str:
        message = "ERROR 500: Error interno del servidor. Revisa los logs del backend"
        if server_message:
            message += f" - {server_message}"
        return message


_STATUS_ERRORS = {
    0: ConnectionFailed,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    500: ServerError,
}
