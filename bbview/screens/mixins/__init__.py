"""Reusable screen mixins."""

from bbview.screens.mixins.worker_mixin import CoreEvent, WorkerMixin

__all__ = ["CoreEvent", "WorkerMixin"]
