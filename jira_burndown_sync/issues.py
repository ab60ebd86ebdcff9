"""Field access and effort classification for Jira issues.

Issues are `jira` library resources (or objects shaped like them): a `key`
and a `fields` holder with standard and custom field attributes.
"""

import logging

from .days import to_day
from .model import EffortMode

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


def multi_getattr(obj, attr, **kw):
    """Get nested attribute from object using dot notation.

    Args:
        obj: The object to get attributes from
        attr: Dot-separated attribute path (e.g., 'field.subfield')
        **kw: Keyword arguments, including 'default' for fallback value

    Raises:
        AttributeError: If attribute doesn't exist and no default provided
    """
    for name in attr.split("."):
        try:
            obj = getattr(obj, name)
        except AttributeError:
            if "default" in kw:
                return kw["default"]
            raise
    return obj


def resolve_field_values(issue, field_id):
    """Return the values held by a (custom) field as a list of plain values.

    Option fields contribute their `value`, named resources (users,
    versions, components) their `name`. An absent or empty field gives an
    empty list.
    """
    if not field_id:
        return []

    field_value = multi_getattr(issue.fields, field_id, default=None)
    if field_value is None:
        return []

    if not isinstance(field_value, (list, tuple)):
        field_value = [field_value]

    values = []
    for item in field_value:
        if item is None:
            continue
        value = getattr(item, "value", None)
        if value is None:
            value = getattr(item, "name", item)
        values.append(value)
    return values


def resolve_field_value(issue, field_id):
    """Return the first value held by a field, or None."""
    values = resolve_field_values(issue, field_id)
    return values[0] if values else None


def is_unplanned(flag_field_id, flag_name, issue):
    """True if the issue's flag field carries the configured flag value."""
    if not flag_field_id or flag_name is None:
        return False

    return any(
        str(value) == str(flag_name)
        for value in resolve_field_values(issue, flag_field_id)
    )


def is_team_unplanned(team_sync, issue):
    """True if unplanned tracking is on for the team and the issue is flagged."""
    return team_sync.unplanned and is_unplanned(
        team_sync.unplanned_flag_field_id, team_sync.unplanned_flag_name, issue
    )


def _to_number(issue, name, value):
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Issue %s has non-numeric %s `%s`", issue.key, name, value)
        return 0.0


def get_story_points(story_points_field_id, issue):
    """Numeric story points of the issue, 0 if absent or not a number."""
    value = resolve_field_value(issue, story_points_field_id)
    return _to_number(issue, "story points", value)


def get_original_estimate(issue):
    """Original time estimate of the issue in hours, 0 if not estimated."""
    seconds = getattr(issue.fields, "timeoriginalestimate", None)
    return _to_number(issue, "original estimate", seconds) / SECONDS_PER_HOUR


def effort_value(team_sync, issue):
    """Effort of an issue according to the team's effort mode."""
    if team_sync.effort_mode == EffortMode.STORY_POINTS:
        return get_story_points(team_sync.story_points_field_id, issue)
    return get_original_estimate(issue)


def is_resolved(issue):
    """True if the issue has a resolution (resolved or closed)."""
    return getattr(issue.fields, "resolution", None) is not None


def get_resolution_date(issue):
    """Calendar day the issue was resolved, or None."""
    return to_day(getattr(issue.fields, "resolutiondate", None))
