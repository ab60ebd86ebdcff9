"""JIRA client utilities for Jira burndown sync.

This module creates and configures the `jira.JIRA` client used by the
sprint sync worker. A client without credentials talks to Jira anonymously.
"""

import logging
import os

from jira import JIRA

logger = logging.getLogger(__name__)


def normalize_value(value):
    """Strip whitespace and surrounding quotes from a connection value.

    Docker's --env-file preserves quotes from .env files, which breaks
    authentication.
    """
    if not value:
        return None
    value = str(value).strip()
    while value and (
        value.startswith('"')
        or value.startswith("'")
        or value.endswith('"')
        or value.endswith("'")
    ):
        old_value = value
        value = value.strip('"').strip("'")
        if value == old_value:
            break
    value = value.strip()
    return value if value else None


def get_jira_connection_params(connection):
    """Extract JIRA connection parameters from connection configuration.

    The URL is required. Username and password are optional; both fall
    back to the `JIRA_USERNAME` / `JIRA_PASSWORD` environment variables.

    Returns:
        Tuple of (url, username, password); username and password may be None
    """
    url = normalize_value(connection.get("domain") or os.environ.get("JIRA_URL"))
    username = normalize_value(
        connection.get("username") or os.environ.get("JIRA_USERNAME")
    )
    password = normalize_value(
        connection.get("password") or os.environ.get("JIRA_PASSWORD")
    )

    if not url:
        raise ValueError(
            "Missing required JIRA connection parameter: url. "
            "Provide it via connection config or the JIRA_URL environment variable."
        )

    if not username:
        password = None

    return url, username, password


def get_proxies(connection):
    """Build a `requests` proxies mapping, or None if no proxy is configured."""
    http_proxy = connection.get("http_proxy")
    https_proxy = connection.get("https_proxy")

    if not (http_proxy or https_proxy):
        return None

    proxies = {}
    if http_proxy:
        proxies["http"] = http_proxy
    if https_proxy:
        proxies["https"] = https_proxy
    return proxies


def create_jira_client(connection):
    """Create a JIRA client with the given connection options."""
    url, username, password = get_jira_connection_params(connection)

    jira_options = {"server": url}
    jira_options.update(connection.get("jira_client_options") or {})

    basic_auth = (username, password or "") if username else None
    if basic_auth:
        logger.info("Connecting to %s as %s", url, username)
    else:
        logger.info("Connecting to %s anonymously", url)

    try:
        return JIRA(
            options=jira_options,
            basic_auth=basic_auth,
            proxies=get_proxies(connection),
            get_server_info=connection.get("jira_server_version_check", True),
        )
    except Exception as e:
        logger.error("Failed to create JIRA client: %s", e)
        raise
