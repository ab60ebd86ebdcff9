"""Tests for worklog summaries in Jira burndown sync."""

import datetime

from .test_classes import FauxFields, FauxIssue, make_issue
from .worklog import round_half_up, summarize_worklog


def test_same_day_entries_are_summed_before_rounding():
    """Two 20 minute entries on one day make one hour, not two zeros."""
    issue = make_issue(
        "A-1",
        worklogs=[
            ("2024-01-09T09:00:00.000+0000", 20 * 60),
            ("2024-01-09T15:30:00.000+0000", 20 * 60),
        ],
    )

    assert summarize_worklog(issue) == {datetime.date(2024, 1, 9): 1}


def test_entries_grouped_by_day():
    """Entries on different days are kept apart and ordered by day."""
    issue = make_issue(
        "A-1",
        worklogs=[
            ("2024-01-10T09:00:00.000+0000", 3 * 3600),
            ("2024-01-08T09:00:00.000+0000", 90 * 60),
            ("2024-01-10T14:00:00.000+0000", 60 * 60),
        ],
    )

    summary = summarize_worklog(issue)

    assert list(summary.items()) == [
        (datetime.date(2024, 1, 8), 2),
        (datetime.date(2024, 1, 10), 4),
    ]


def test_rounding_half_up():
    """Half hours round up, anything less rounds down."""
    assert round_half_up(0.5) == 1
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(29 / 60) == 0

    issue = make_issue("A-1", worklogs=[("2024-01-09T09:00:00.000+0000", 30 * 60)])
    assert summarize_worklog(issue) == {datetime.date(2024, 1, 9): 1}


def test_no_worklog():
    """Issues without worklog data summarize to nothing."""
    assert summarize_worklog(make_issue("A-1")) == {}
    assert summarize_worklog(FauxIssue("A-2", worklog=None)) == {}
    assert summarize_worklog(FauxIssue("A-3")) == {}


def test_minutes_spent_entries():
    """Entries carrying minutes directly are supported."""

    class Entry:
        """Worklog entry with minutes spent."""

        def __init__(self, started, minutes):
            self.started = started
            self.minutesSpent = minutes  # pylint: disable=invalid-name

    issue = FauxIssue("A-1")
    issue.fields = FauxFields(
        {
            "worklog": [
                Entry(datetime.datetime(2024, 1, 9, 10, 0), 45),
                Entry(datetime.datetime(2024, 1, 9, 16, 0), 45),
            ]
        }
    )

    assert summarize_worklog(issue) == {datetime.date(2024, 1, 9): 2}
