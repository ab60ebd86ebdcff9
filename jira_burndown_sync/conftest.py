"""Test configuration and fixtures for Jira burndown sync.

This module provides fixtures for sprints, team settings and fake JIRA
instances shared by the tests.
"""

import datetime

import pytest

from .model import EffortMode, Sprint, SprintEffort, TeamSync
from .test_classes import FauxJIRA
from .tracker import JiraTracker

SPRINT_DAYS = [
    datetime.date(2024, 1, 8),
    datetime.date(2024, 1, 9),
    datetime.date(2024, 1, 10),
    datetime.date(2024, 1, 11),
    datetime.date(2024, 1, 12),
]


@pytest.fixture(name="sprint")
def five_day_sprint():
    """A sprint running Monday 8 to Friday 12 January 2024."""
    return Sprint(id="42", effort=[SprintEffort(date=d) for d in SPRINT_DAYS])


@pytest.fixture(name="points_team")
def story_points_team():
    """A team measuring effort in story points, tracking unplanned work."""
    return TeamSync(
        project_key="BURN",
        sprint_version_name_scheme="Sprint {0}",
        effort_mode=EffortMode.STORY_POINTS,
        story_points_field_id="customfield_002",
        unplanned=True,
        unplanned_flag_field_id="customfield_003",
        unplanned_flag_name="Unplanned",
    )


@pytest.fixture(name="estimate_team")
def time_estimate_team():
    """A team measuring effort in original estimate hours, no unplanned work."""
    return TeamSync(
        project_key="BURN",
        sprint_version_name_scheme="Sprint {0}",
        effort_mode=EffortMode.TIME_ESTIMATE,
    )


@pytest.fixture(name="make_tracker")
def tracker_factory():
    """Build a `JiraTracker` over a fake JIRA holding the given issues."""

    def build(issues, missing=()):
        return JiraTracker(FauxJIRA(issues, missing=missing))

    return build
