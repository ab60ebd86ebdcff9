"""Per-day totals of logged work for an issue."""

import logging
import math

from .days import to_day

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60


def iter_worklog_entries(issue):
    """Yield the worklog entries attached to an issue, if any."""
    worklog = getattr(issue.fields, "worklog", None)
    if worklog is None:
        return

    entries = getattr(worklog, "worklogs", worklog)
    for entry in entries or []:
        yield entry


def minutes_spent(entry):
    """Minutes logged by a single worklog entry."""
    minutes = getattr(entry, "minutesSpent", None)
    if minutes is not None:
        return float(minutes)

    seconds = getattr(entry, "timeSpentSeconds", None) or 0
    return float(seconds) / 60


def round_half_up(value):
    """Round to the nearest integer, with halves rounded up."""
    return int(math.floor(value + 0.5))


def summarize_worklog(issue):
    """Sum logged time per calendar day.

    Minutes are summed per day first and only then converted to whole
    hours, so two 20 minute entries on the same day count as one hour.

    Returns:
        A dict mapping `datetime.date` to integral hours, ordered by day
    """
    minutes_by_day = {}
    for entry in iter_worklog_entries(issue):
        day = to_day(getattr(entry, "started", None))
        if day is None:
            logger.debug("Skipping worklog entry without start date on %s", issue.key)
            continue
        minutes_by_day[day] = minutes_by_day.get(day, 0.0) + minutes_spent(entry)

    return {
        day: round_half_up(minutes / MINUTES_PER_HOUR)
        for day, minutes in sorted(minutes_by_day.items())
    }
