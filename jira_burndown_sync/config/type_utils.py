"""Type utilities for configuration processing.

This module provides utilities for type conversion and validation in
configuration files.
"""

import datetime

from .exceptions import ConfigError

TRUE_VALUES = ("true", "yes", "on", "1")
FALSE_VALUES = ("false", "no", "off", "0")


def force_list(val) -> list:
    """
    Ensure the value is a list.
    """
    return list(val) if isinstance(val, (list, tuple)) else [val]


def force_str(key, value) -> str:
    """
    Convert a scalar value to a stripped string, raise ConfigError on
    mappings and lists.
    """
    if isinstance(value, (dict, list, tuple)):
        raise ConfigError(
            f"Value for key `{expand_key(key)}` must be a single value, not `{value}`"
        )
    return str(value).strip()


def force_bool(key, value) -> bool:
    """
    Convert value to bool, accepting YAML booleans and yes/no style strings.
    """
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ConfigError(
        f"Could not convert value `{value}` for key `{expand_key(key)}` to true/false"
    )


def force_date(key, value) -> datetime.date:
    """
    Ensure value is a datetime.date, raise ConfigError otherwise.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if not isinstance(value, datetime.date):
        raise ConfigError(f"Value `{value}` for key `{expand_key(key)}` is not a date")
    return value


def expand_key(key) -> str:
    """
    Expand config key for display.
    """
    return str(key).replace("_", " ").lower()
