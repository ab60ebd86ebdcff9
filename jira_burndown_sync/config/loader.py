"""Configuration loader for Jira burndown sync."""

import logging
import os.path

import yaml
from pydicti import odicti

from ..model import EffortMode, TeamSync
from .exceptions import ConfigError
from .type_utils import expand_key, force_bool, force_date, force_list, force_str

logger = logging.getLogger(__name__)

CONNECTION_KEYS = [
    ("domain", "domain"),
    ("username", "username"),
    ("password", "password"),
    ("http proxy", "http_proxy"),
    ("https proxy", "https_proxy"),
    ("jira client options", "jira_client_options"),
    ("jira server version check", "jira_server_version_check"),
]

TEAM_KEYS = [
    ("project key", "project_key"),
    ("version name scheme", "sprint_version_name_scheme"),
    ("effort mode", "effort_mode"),
    ("story points field", "story_points_field_id"),
    ("unplanned", "unplanned"),
    ("unplanned flag field", "unplanned_flag_field_id"),
    ("unplanned flag value", "unplanned_flag_name"),
]

SPRINT_KEYS = [
    ("id", "id"),
    ("start", "start"),
    ("end", "end"),
    ("include weekends", "include_weekends"),
]


def ordered_load(stream, loader=yaml.SafeLoader, object_pairs_hook=odicti):
    """
    Load YAML mappings as case-insensitive ordered dictionaries.
    """

    def construct_mapping(loader, node):
        loader.flatten_mapping(node)
        return object_pairs_hook(loader.construct_pairs(node))

    # Subclass so the caller's loader keeps its own constructors
    OrderedLoader = type(
        "OrderedLoader", (loader,), {"yaml_constructors": dict(loader.yaml_constructors)}
    )
    OrderedLoader.add_constructor(
        yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, construct_mapping
    )

    return yaml.load(stream, OrderedLoader)


def _create_default_options():
    """Create default options dictionary."""
    return {
        "connection": {
            "domain": None,
            "username": None,
            "password": None,
            "http_proxy": None,
            "https_proxy": None,
            "jira_server_version_check": True,
            "jira_client_options": {},
        },
        "team": {
            "project_key": None,
            "sprint_version_name_scheme": None,
            "effort_mode": EffortMode.TIME_ESTIMATE,
            "story_points_field_id": None,
            "unplanned": False,
            "unplanned_flag_field_id": None,
            "unplanned_flag_name": None,
        },
        "sprint": {
            "id": None,
            "start": None,
            "end": None,
            "include_weekends": False,
        },
        "settings": {
            "burndown_data": [],
        },
    }


def _section(config, name):
    section = config.get(name)
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ConfigError(f"`{name}` must be a section of key/value pairs")
    return section


def _parse_connection_config(config, options):
    """Parse connection configuration."""
    conn_config = _section(config, "connection")
    if conn_config is None:
        return

    conn_options = options["connection"]
    for config_key, option_key in CONNECTION_KEYS:
        if config_key not in conn_config:
            continue
        value = conn_config[config_key]
        if option_key == "jira_client_options":
            conn_options[option_key] = dict(value or {})
        elif option_key == "jira_server_version_check":
            conn_options[option_key] = force_bool(option_key, value)
        else:
            conn_options[option_key] = None if value is None else force_str(option_key, value)


def _parse_team_config(config, options):
    """Parse team sync configuration."""
    team_config = _section(config, "team")
    if team_config is None:
        return

    team_options = options["team"]
    for config_key, option_key in TEAM_KEYS:
        if config_key not in team_config:
            continue
        value = team_config[config_key]
        if option_key == "unplanned":
            team_options[option_key] = force_bool(config_key, value)
        elif option_key == "effort_mode":
            try:
                team_options[option_key] = EffortMode.parse(value)
            except ValueError as e:
                raise ConfigError(str(e)) from None
        else:
            team_options[option_key] = None if value is None else force_str(config_key, value)


def _parse_sprint_config(config, options):
    """Parse sprint configuration."""
    sprint_config = _section(config, "sprint")
    if sprint_config is None:
        return

    sprint_options = options["sprint"]
    for config_key, option_key in SPRINT_KEYS:
        if config_key not in sprint_config:
            continue
        value = sprint_config[config_key]
        if option_key in ("start", "end"):
            sprint_options[option_key] = force_date(f"sprint {config_key}", value)
        elif option_key == "include_weekends":
            sprint_options[option_key] = force_bool(config_key, value)
        else:
            sprint_options[option_key] = force_str("sprint id", value)


def _parse_output_config(config, options):
    """Parse output configuration."""
    output_config = _section(config, "output")
    if output_config is None:
        return

    if expand_key("output_directory") in output_config:
        options["output_directory"] = output_config[expand_key("output_directory")]

    if expand_key("burndown_data") in output_config:
        options["settings"]["burndown_data"] = [
            os.path.basename(f)
            for f in force_list(output_config[expand_key("burndown_data")])
            if f
        ]


def _validate_team(team):
    """Check the team settings needed to sync a sprint."""
    if not team["project_key"]:
        raise ConfigError("`Project key` is required in the `Team` section.")

    if not team["sprint_version_name_scheme"]:
        raise ConfigError("`Version name scheme` is required in the `Team` section.")

    if (
        team["effort_mode"] == EffortMode.STORY_POINTS
        and not team["story_points_field_id"]
    ):
        raise ConfigError(
            "`Story points field` is required when `Effort mode` is story points."
        )

    if team["unplanned"] and not (
        team["unplanned_flag_field_id"] and team["unplanned_flag_name"]
    ):
        raise ConfigError(
            "`Unplanned flag field` and `Unplanned flag value` are required "
            "when `Unplanned` is enabled."
        )


def _validate_sprint(sprint):
    """Check that a configured sprint is complete and ordered."""
    if all(sprint[k] is None for k in ("id", "start", "end")):
        return

    missing = [k for k in ("id", "start", "end") if sprint[k] is None]
    if missing:
        raise ConfigError(
            f"`Sprint` section is missing: {', '.join(m.capitalize() for m in missing)}"
        )

    if sprint["start"] > sprint["end"]:
        raise ConfigError(
            f"Sprint start {sprint['start']} is after sprint end {sprint['end']}"
        )


def config_to_options(data, cwd=None, extended=False, _visited_files=None):
    """
    Parse YAML config data and return options dict.
    """
    if _visited_files is None:
        _visited_files = set()

    try:
        config = ordered_load(data, yaml.SafeLoader)
    except Exception as e:
        raise ConfigError("Unable to parse YAML configuration file.") from e

    if config is None:
        raise ConfigError("Configuration file is empty") from None

    if not isinstance(config, dict):
        raise ConfigError("Configuration file must contain named sections") from None

    options = _create_default_options()

    if "extends" in config:
        if cwd is None:
            raise ConfigError("`extends` is not supported here.")

        extends_filename = os.path.abspath(
            os.path.normpath(
                os.path.join(cwd, config["extends"].replace("/", os.path.sep))
            )
        )

        if not os.path.exists(extends_filename):
            raise ConfigError(
                f"File `{extends_filename}` referenced in `extends` not found."
            ) from None

        if extends_filename in _visited_files:
            raise ConfigError(
                f"Circular extends reference detected: {extends_filename}"
            ) from None

        _visited_files.add(extends_filename)

        logger.debug("Extending file %s", extends_filename)
        with open(extends_filename, encoding="utf-8") as extends_file:
            options = config_to_options(
                extends_file.read(),
                cwd=os.path.dirname(extends_filename),
                extended=True,
                _visited_files=_visited_files,
            )

    _parse_connection_config(config, options)
    _parse_team_config(config, options)
    _parse_sprint_config(config, options)
    _parse_output_config(config, options)

    if not extended:
        _validate_team(options["team"])
        _validate_sprint(options["sprint"])

    return options


def options_to_team_sync(options):
    """Build a `TeamSync` from parsed options."""
    return TeamSync(**options["team"])
