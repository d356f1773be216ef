"""Dashboard read models: list filters, counters and statistics."""

from .filters import (
    ALL,
    filter_workers,
    filter_projects,
    worker_label,
    unique_worker_labels,
    count_by_registration,
)
from .stats import DashboardStats, RoleCount, compute_stats, role_distribution

__all__ = [
    "ALL",
    "filter_workers",
    "filter_projects",
    "worker_label",
    "unique_worker_labels",
    "count_by_registration",
    "DashboardStats",
    "RoleCount",
    "compute_stats",
    "role_distribution",
]
