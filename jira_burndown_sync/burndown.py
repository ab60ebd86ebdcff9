"""Burndown table for a synced sprint.

Creates the day buckets of a sprint and turns a synced sprint into a
DataFrame indexed by day, with columns `burned`, `unplanned`, `remaining`
(goal minus cumulative burned effort) and `ideal` (a straight line from the
goal down to zero). The table can be written as CSV or JSON data files.
"""

import logging
import os.path

import pandas as pd

from .days import to_day
from .model import Sprint, SprintEffort

logger = logging.getLogger(__name__)

BURNDOWN_COLUMNS = ["burned", "unplanned", "remaining", "ideal"]


def get_extension(filename):
    """Get file extension from filename."""
    return os.path.splitext(filename)[1].lower()


def sprint_days(start, end, include_weekends=False):
    """List the calendar days of a sprint, business days only by default."""
    start = to_day(start)
    end = to_day(end)
    if start > end:
        raise ValueError(f"Sprint start {start} is after sprint end {end}")

    if include_weekends:
        index = pd.date_range(start=start, end=end, freq="D")
    else:
        index = pd.bdate_range(start=start, end=end)

    return [d.date() for d in index]


def create_sprint(sprint_id, start, end, include_weekends=False):
    """Create a sprint with an empty effort bucket for each sprint day."""
    return Sprint(
        id=str(sprint_id),
        effort=[
            SprintEffort(date=day)
            for day in sprint_days(start, end, include_weekends=include_weekends)
        ],
    )


def calculate_burndown(sprint):
    """Build the burndown DataFrame for a synced sprint."""
    if not sprint.effort:
        return pd.DataFrame([], columns=BURNDOWN_COLUMNS, index=pd.DatetimeIndex([]))

    index = pd.DatetimeIndex([pd.Timestamp(to_day(e.date)) for e in sprint.effort])
    data = pd.DataFrame(
        {
            "burned": [float(e.burned) for e in sprint.effort],
            "unplanned": [float(e.unplanned) for e in sprint.effort],
        },
        index=index,
    )
    data.index.name = "date"

    data["remaining"] = sprint.planned - data["burned"].cumsum()

    steps = max(len(data.index) - 1, 1)
    data["ideal"] = [
        sprint.planned - sprint.planned * i / steps for i in range(len(data.index))
    ]

    return data[BURNDOWN_COLUMNS]


def write_burndown(data, output_files):
    """Write burndown data to output files in CSV or JSON format."""
    for output_file in output_files:
        output_extension = get_extension(output_file)

        logger.info("Writing burndown data to %s", output_file)
        if output_extension == ".json":
            data.to_json(output_file, date_format="iso", orient="index")
        else:
            data.to_csv(output_file, header=True, date_format="%Y-%m-%d")
