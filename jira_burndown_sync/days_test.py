"""Tests for calendar-day bucket helpers in Jira burndown sync."""

import datetime

import pytest

from .days import (
    check_effort_order,
    find_effort_bucket,
    is_in_sprint,
    to_day,
    update_sprint_effort,
)
from .model import SprintEffort


def test_to_day():
    """Test to_day with dates, datetimes and Jira timestamps."""
    assert to_day(datetime.date(2024, 1, 10)) == datetime.date(2024, 1, 10)
    assert to_day(datetime.datetime(2024, 1, 10, 23, 59)) == datetime.date(2024, 1, 10)
    assert to_day("2024-01-10T17:45:00.000+0100") == datetime.date(2024, 1, 10)
    assert to_day("2024-01-10") == datetime.date(2024, 1, 10)
    assert to_day(None) is None
    assert to_day("") is None


def test_find_effort_bucket_exact_day(sprint):
    """A date on a bucket's day selects that bucket."""
    bucket = find_effort_bucket(sprint.effort, datetime.date(2024, 1, 10))
    assert bucket is sprint.effort[2]


def test_find_effort_bucket_ignores_time_of_day(sprint):
    """Time of day on either side does not move the bucket."""
    sprint.effort[2].date = datetime.datetime(2024, 1, 10, 18, 0)

    assert find_effort_bucket(sprint.effort, datetime.datetime(2024, 1, 10, 8, 0)) is (
        sprint.effort[2]
    )
    assert find_effort_bucket(sprint.effort, "2024-01-10T23:30:00.000+0000") is (
        sprint.effort[2]
    )


def test_find_effort_bucket_before_sprint_uses_last_bucket(sprint):
    """A date before the first bucket falls back to the last bucket."""
    bucket = find_effort_bucket(sprint.effort, datetime.date(2024, 1, 7))
    assert bucket is sprint.effort[-1]


def test_find_effort_bucket_after_sprint_uses_last_bucket(sprint):
    """A date after the last bucket lands in the last bucket."""
    bucket = find_effort_bucket(sprint.effort, datetime.date(2024, 1, 20))
    assert bucket is sprint.effort[-1]


def test_find_effort_bucket_between_buckets():
    """A date in a gap between buckets goes to the next bucket."""
    effort = [
        SprintEffort(date=datetime.date(2024, 1, 12)),
        SprintEffort(date=datetime.date(2024, 1, 15)),
        SprintEffort(date=datetime.date(2024, 1, 16)),
    ]
    assert find_effort_bucket(effort, datetime.date(2024, 1, 13)) is effort[1]
    assert find_effort_bucket(effort, datetime.date(2024, 1, 14)) is effort[1]
    assert find_effort_bucket(effort, datetime.date(2024, 1, 12)) is effort[0]
    assert find_effort_bucket(effort, datetime.date(2024, 1, 15)) is effort[1]


def test_find_effort_bucket_empty():
    """No buckets, no bucket."""
    assert find_effort_bucket([], datetime.date(2024, 1, 10)) is None


def test_is_in_sprint(sprint):
    """Test membership at and around the sprint boundaries."""
    assert is_in_sprint(datetime.date(2024, 1, 8), sprint.effort)
    assert is_in_sprint(datetime.datetime(2024, 1, 12, 23, 59), sprint.effort)
    assert not is_in_sprint(datetime.date(2024, 1, 7), sprint.effort)
    assert not is_in_sprint(datetime.date(2024, 1, 13), sprint.effort)
    assert not is_in_sprint(datetime.date(2024, 1, 10), [])


def test_check_effort_order(sprint):
    """Ascending buckets pass, repeated or descending days do not."""
    check_effort_order(sprint.effort)
    check_effort_order([])

    with pytest.raises(ValueError, match="strictly increasing"):
        check_effort_order(list(reversed(sprint.effort)))

    with pytest.raises(ValueError, match="strictly increasing"):
        check_effort_order(
            [
                SprintEffort(date=datetime.datetime(2024, 1, 8, 9, 0)),
                SprintEffort(date=datetime.datetime(2024, 1, 8, 17, 0)),
            ]
        )


def test_update_sprint_effort(sprint):
    """Effort is added to the selected bucket only."""
    bucket = update_sprint_effort(sprint.effort, datetime.date(2024, 1, 9), 3, 0)
    update_sprint_effort(sprint.effort, datetime.date(2024, 1, 9), 2, 4)

    assert bucket is sprint.effort[1]
    assert [e.burned for e in sprint.effort] == [0, 5, 0, 0, 0]
    assert [e.unplanned for e in sprint.effort] == [0, 4, 0, 0, 0]

    assert update_sprint_effort([], datetime.date(2024, 1, 9), 3, 0) is None
