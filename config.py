"""Configuration settings for the RRHH admin client."""

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Dict
from pathlib import Path

# Load .env into os.environ so the backend URL can live next to the project
load_dotenv()


class Settings(BaseSettings):
    """Global settings for rrhh-admin.

    Settings can be overridden via environment variables with RRHH_ADMIN_ prefix.
    Example: RRHH_ADMIN_API_URL=https://rrhh.example.com/api
    """

    # Backend
    api_url: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the REST backend (trabajadores, proyectos, auth)"
    )
    api_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for every HTTP call in seconds"
    )

    # Local persistence
    state_file: str = Field(
        default="~/.rrhh_admin/state.json",
        description="JSON file holding the session token and the inactive-record caches"
    )

    # Assignment limits
    max_projects_per_worker: int = Field(
        default=3,
        ge=1,
        description="Maximum ACTIVE projects a worker may be assigned to"
    )
    max_workers_per_project: int = Field(
        default=3,
        ge=1,
        description="Maximum workers assigned to a single project"
    )
    enforce_worker_capacity_on_toggle: bool = Field(
        default=False,
        description="Also check the worker-side cap when adding members from the project screen"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI (DEBUG, INFO, WARNING, ERROR)"
    )

    model_config = {
        "env_prefix": "RRHH_ADMIN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get_state_path(self) -> Path:
        """Get the state file as an expanded Path object."""
        return Path(self.state_file).expanduser()

    def endpoint(self, path: str) -> str:
        """Join a resource path onto the configured base URL."""
        return f"{self.api_url.rstrip('/')}/{path.lstrip('/')}"


# Storage keys inside the state file
STORAGE_KEYS: Dict[str, str] = {
    "token": "token",
    "username": "username",
    "role": "role",
    "workers_cache": "trabajadores_inactivos_cache",
    "projects_cache": "proyectos_inactivos_cache",
}


# Create singleton instance
settings = Settings()
