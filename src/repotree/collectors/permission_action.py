"""Permission action enum for handling permission errors during directory traversal."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a subdirectory cannot be read during traversal.

    The directory itself stays in the listing in every case; only its contents
    are lost. An unreadable root always raises.

    Values:
        IGNORE: Skip the unreadable directory's contents silently
        WARN: Skip the contents and report a warning (default behavior)
        RAISE: Raise a PermissionError immediately when access is denied
    """

    IGNORE = "ignore"
    WARN = "warn"
    RAISE = "raise"
