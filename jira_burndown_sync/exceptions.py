"""Synchronization exceptions for Jira burndown sync."""


class SprintSyncError(Exception):
    """
    Exception raised when a sprint cannot be synchronized from Jira.

    Wraps the underlying failure (connectivity, authentication, template
    formatting, invalid sprint buckets). The original exception is chained
    as `__cause__` and kept on `cause`.
    """

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause
