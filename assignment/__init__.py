"""Assignment of workers to projects."""

from .reconciler import AssignmentReconciler

__all__ = ["AssignmentReconciler"]
