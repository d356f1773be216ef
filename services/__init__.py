"""Application services: the workflows behind the dashboard screens."""

from .sequencing import RequestSequencer
from .roster import WorkerService
from .portfolio import ProjectService
from .container import Container, build_container

__all__ = [
    "RequestSequencer",
    "WorkerService",
    "ProjectService",
    "Container",
    "build_container",
]
