"""Sprint model for Jira burndown synchronization.

This module contains the data classes shared by the sync worker, the
burndown table and the configuration loader.
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional


class EffortMode(enum.Enum):
    """Which issue metric represents effort."""

    TIME_ESTIMATE = "time_estimate"
    STORY_POINTS = "story_points"

    @classmethod
    def parse(cls, value):
        """Parse an effort mode from a config value such as `story points`.

        Raises:
            ValueError: If the value does not name a known mode
        """
        if isinstance(value, cls):
            return value

        normalized = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        for mode in cls:
            if normalized in (mode.value, mode.name.lower()):
                return mode

        raise ValueError(
            f"Unknown effort mode `{value}`. "
            f"Expected one of: {', '.join(m.value for m in cls)}"
        )


@dataclass
class SprintEffort:
    """Burned and unplanned effort of a single sprint day."""

    date: object
    burned: float = 0.0
    unplanned: float = 0.0


@dataclass
class Sprint:
    """A sprint with one effort bucket per day, in ascending date order."""

    id: str
    effort: List[SprintEffort] = field(default_factory=list)
    planned: float = 0.0

    def total_burned(self):
        """Sum of burned effort across all days."""
        return sum(e.burned for e in self.effort)

    def total_unplanned(self):
        """Sum of unplanned effort across all days."""
        return sum(e.unplanned for e in self.effort)


@dataclass
class TeamSync:
    """Per-team settings controlling how Jira issues map onto a sprint."""

    project_key: str
    sprint_version_name_scheme: str
    effort_mode: EffortMode = EffortMode.TIME_ESTIMATE
    story_points_field_id: Optional[str] = None
    unplanned: bool = False
    unplanned_flag_field_id: Optional[str] = None
    unplanned_flag_name: Optional[str] = None

    def version_name(self, sprint_id):
        """Build the Jira fix version name for the given sprint id.

        The scheme is a `str.format` template; `{0}` (or `{}`) receives the
        sprint id, e.g. `Sprint {0}` -> `Sprint 42`.
        """
        return self.sprint_version_name_scheme.format(sprint_id)
