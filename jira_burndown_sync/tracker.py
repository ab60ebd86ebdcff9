"""Issue tracker access for sprint synchronization.

`JiraTracker` adapts a `jira.JIRA` client to the two queries the sync needs:
the keys of the issues assigned to a sprint's fix version, and the details
of a single issue.
"""

import logging

from jira.exceptions import JIRAError

logger = logging.getLogger(__name__)


def quote_jql(value):
    """Quote a value for use in a JQL clause."""
    return '"' + str(value).replace("\\", "\\\\").replace('"', '\\"') + '"'


class JiraTracker:
    """Look up sprint issues in JIRA"""

    def __init__(self, jira):
        self.jira = jira

    def sprint_issues_jql(self, project_key, version):
        """JQL selecting all issues of a project with the given fix version."""
        return f"project = {quote_jql(project_key)} AND fixVersion = {quote_jql(version)}"

    def find_sprint_issues(self, project_key, version):
        """Return the keys of all issues in `project_key` fixed in `version`."""
        jql = self.sprint_issues_jql(project_key, version)
        logger.debug("Searching sprint issues with query `%s`", jql)

        try:
            issues = self.jira.search_issues(jql, fields="key", maxResults=False)
        except JIRAError as e:
            logger.error(
                "JIRA API error while searching issues with query `%s`: %s (Status: %s)",
                jql,
                getattr(e, "text", str(e)),
                getattr(e, "status_code", "Unknown"),
            )
            raise

        return [issue.key for issue in issues]

    def get_issue(self, issue_key):
        """Return the issue with all its fields, or None if it does not exist."""
        try:
            return self.jira.issue(issue_key)
        except JIRAError as e:
            if getattr(e, "status_code", None) == 404:
                logger.debug("Issue %s not found", issue_key)
                return None
            raise


def fetch_issues(tracker, issue_keys, log=logger):
    """Load the details of each issue, in order, skipping missing ones.

    Returns:
        Tuple of (issues, missing_keys)
    """
    issues = []
    missing = []
    for issue_key in issue_keys:
        log.info("Fetching issue %s", issue_key)
        issue = tracker.get_issue(issue_key)
        if issue is None:
            log.info("Issue %s could not be loaded, skipping", issue_key)
            missing.append(issue_key)
        else:
            issues.append(issue)
    return issues, missing
