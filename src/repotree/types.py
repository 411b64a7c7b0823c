from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryKind(str, Enum):
    """Enumeration of the kinds of objects a collector can report.

    The values double as the ``type`` field of serialized tree records.

    Attributes:
        FILE: Regular file (or any non-directory object, such as an unfollowed symlink)
        DIRECTORY: Directory
    """

    FILE = "file"
    DIRECTORY = "directory"
