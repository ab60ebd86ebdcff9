"""Jira to sprint model synchronization.

The worker recomputes a sprint's planned goal and its per-day burned and
unplanned effort from the current state of the sprint's Jira issues. Every
sync is a full reset-then-recompute of the sprint buckets, so repeated syncs
against an unchanged tracker give identical results.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .days import check_effort_order, is_in_sprint, update_sprint_effort
from .exceptions import SprintSyncError
from .issues import effort_value, get_resolution_date, is_resolved, is_team_unplanned
from .jira_client import create_jira_client
from .tracker import JiraTracker, fetch_issues
from .worklog import summarize_worklog

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Outcome of a sprint sync, including the issues that were skipped."""

    sprint_id: str
    version: Optional[str] = None
    issue_keys: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)
    out_of_range: List[str] = field(default_factory=list)
    unbucketable: List[str] = field(default_factory=list)
    planned: float = 0.0

    @property
    def skipped(self):
        """Number of issues or efforts that were left out of the sprint."""
        return (
            len(self.missing)
            + len(self.unresolved)
            + len(self.out_of_range)
            + len(self.unbucketable)
        )


class SprintSyncWorker:
    """Synchronize Jira issues into a sprint's burndown efforts.

    `tracker` provides `find_sprint_issues(project_key, version)` and
    `get_issue(key)`. Diagnostics go to `logger`, which defaults to this
    module's logger.
    """

    def __init__(self, tracker, logger=None):
        self.tracker = tracker
        self.logger = logger or logging.getLogger(__name__)

    def sync_sprint(self, team_sync, sprint):
        """Refresh `sprint.planned` and all day buckets from Jira.

        Returns:
            A `SyncReport` describing what was counted and skipped

        Raises:
            SprintSyncError: If the sync could not be completed
        """
        report = SyncReport(sprint_id=sprint.id)
        try:
            report.version = team_sync.version_name(sprint.id)

            report.issue_keys = list(
                self.tracker.find_sprint_issues(team_sync.project_key, report.version)
            )
            if not report.issue_keys:
                self.logger.info("No issues found for sync %s", sprint.id)

            issues, report.missing = fetch_issues(
                self.tracker, report.issue_keys, log=self.logger
            )

            check_effort_order(sprint.effort)

            report.planned = self.calculate_sprint_goal(issues, team_sync, sprint)

            reset_sprint_efforts(sprint.effort, team_sync.unplanned)
            for issue in issues:
                if not is_resolved(issue):
                    continue
                self.calculate_effort(team_sync, sprint, issue, report)

        except Exception as e:
            raise SprintSyncError(f"Failed to sync sprint {sprint.id}: {e}", e) from e

        return report

    def calculate_sprint_goal(self, issues, team_sync, sprint):
        """Sum the effort of all planned issues not resolved outside the sprint.

        Sets and returns `sprint.planned`.
        """
        goal = 0.0

        for issue in issues:
            if is_team_unplanned(team_sync, issue):
                continue

            resolution_date = get_resolution_date(issue)
            if resolution_date is not None and not is_in_sprint(
                resolution_date, sprint.effort
            ):
                continue

            goal += effort_value(team_sync, issue)

        sprint.planned = goal
        return goal

    def calculate_effort(self, team_sync, sprint, issue, report):
        """Add the effort of a resolved issue to the sprint buckets."""
        if is_team_unplanned(team_sync, issue):
            for day, hours in summarize_worklog(issue).items():
                self._update(sprint, issue, report, day, unplanned=hours)
            return

        planned = effort_value(team_sync, issue)

        resolution_date = get_resolution_date(issue)
        if resolution_date is None:
            self.logger.info("Issue %s unresolved (Value: %s)", issue.key, planned)
            report.unresolved.append(issue.key)
            return

        if not is_in_sprint(resolution_date, sprint.effort):
            self.logger.info(
                "Issue %s resolved out of sprint (%s, Value: %s)",
                issue.key,
                resolution_date,
                planned,
            )
            report.out_of_range.append(issue.key)
            return

        self._update(sprint, issue, report, resolution_date, planned=planned)

    def _update(self, sprint, issue, report, day, planned=0.0, unplanned=0.0):
        if update_sprint_effort(sprint.effort, day, planned, unplanned) is None:
            self.logger.info(
                "Cannot add efforts for Issue %s, Sprint %s for Date %s "
                "because date is out of range.",
                issue.key,
                sprint.id,
                day,
            )
            report.unbucketable.append(issue.key)


def reset_sprint_efforts(effort, unplanned):
    """Zero burned effort, and unplanned effort if the team tracks it."""
    for sprint_effort in effort:
        sprint_effort.burned = 0.0
        if unplanned:
            sprint_effort.unplanned = 0.0


def create_sync_worker(connection, log=None):
    """Create a sync worker talking to the Jira instance in `connection`.

    Raises:
        SprintSyncError: If the JIRA client cannot be created
    """
    try:
        jira = create_jira_client(connection)
    except Exception as e:
        raise SprintSyncError(f"Unable to connect to JIRA: {e}", e) from e
    return SprintSyncWorker(JiraTracker(jira), logger=log)
