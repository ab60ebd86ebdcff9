"""Calendar-day helpers for mapping dates onto sprint effort buckets.

Buckets are compared by calendar day only; the time of day of either the
bucket or the date being placed never matters.
"""

import datetime
import logging

import dateutil.parser

logger = logging.getLogger(__name__)


def to_day(value):
    """Convert a date, datetime or Jira timestamp string to a `datetime.date`.

    Timestamp strings keep the calendar day they were recorded on; any
    timezone offset is ignored rather than converted.

    Returns:
        The calendar day, or None if `value` is None or an empty string
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return dateutil.parser.parse(str(value), ignoretz=True).date()


def check_effort_order(effort):
    """Make sure bucket days are strictly increasing.

    Raises:
        ValueError: If two buckets share a day or are out of order
    """
    previous = None
    for index, sprint_effort in enumerate(effort):
        day = to_day(sprint_effort.date)
        if previous is not None and day <= previous:
            raise ValueError(
                f"Sprint effort days must be strictly increasing: "
                f"bucket {index} ({day}) does not follow {previous}"
            )
        previous = day


def is_in_sprint(day, effort):
    """True if `day` falls between the first and last bucket, inclusive."""
    if not effort:
        return False

    day = to_day(day)
    return to_day(effort[0].date) <= day <= to_day(effort[-1].date)


def find_effort_bucket(effort, day):
    """Find the bucket that should receive effort for `day`.

    This is the first bucket on or after `day`, so a date that falls in a
    gap between buckets (a weekend, say) goes to the next bucket. If `day`
    precedes every bucket or follows the last one, the last bucket of the
    sprint is used instead.

    Returns:
        The `SprintEffort` bucket, or None if there are no buckets at all
    """
    if not effort:
        return None

    day = to_day(day)
    if day < to_day(effort[0].date):
        return effort[-1]

    for sprint_effort in effort:
        if to_day(sprint_effort.date) >= day:
            return sprint_effort

    return effort[-1]


def update_sprint_effort(effort, day, planned=0.0, unplanned=0.0):
    """Add planned (burned) and unplanned effort to the bucket for `day`.

    Returns:
        The bucket that was updated, or None if no bucket could receive
        the effort
    """
    sprint_effort = find_effort_bucket(effort, day)
    if sprint_effort is None:
        return None

    sprint_effort.burned += planned
    sprint_effort.unplanned += unplanned
    return sprint_effort
