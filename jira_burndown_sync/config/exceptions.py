"""Configuration exceptions for Jira burndown sync."""


class ConfigError(Exception):
    """
    Exception raised for errors in the configuration.
    """
