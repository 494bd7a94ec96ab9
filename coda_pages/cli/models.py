"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Config issues, rejected input, missing pages
    - AUTH_ERROR (3): Missing or invalid token, or document not owned
    - NETWORK_ERROR (4): Network connectivity or API availability issues
    - JOB_TIMEOUT (5): An export job did not finish within its poll bound

    Example:
        >>> raise typer.Exit(ExitCode.AUTH_ERROR)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    JOB_TIMEOUT = 5
