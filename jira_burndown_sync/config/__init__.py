"""Configuration module for Jira burndown sync.

This module provides configuration loading and error handling utilities.
"""

from .exceptions import ConfigError
from .loader import config_to_options, options_to_team_sync

__all__ = ["config_to_options", "options_to_team_sync", "ConfigError"]
