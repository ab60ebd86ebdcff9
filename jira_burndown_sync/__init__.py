"""Jira Burndown Sync - synchronize Jira issues into burndown sprint data.

This package fetches the issues of a sprint's fix version from JIRA, splits
them into planned and unplanned work and accumulates burned effort per
sprint day against the sprint's planned goal.
"""

from .exceptions import SprintSyncError
from .model import EffortMode, Sprint, SprintEffort, TeamSync
from .sync import SprintSyncWorker, SyncReport, create_sync_worker

__all__ = [
    "EffortMode",
    "Sprint",
    "SprintEffort",
    "SprintSyncError",
    "SprintSyncWorker",
    "SyncReport",
    "TeamSync",
    "create_sync_worker",
]
