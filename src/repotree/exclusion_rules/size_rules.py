"""File size limit as an exclusion rule."""

from typing import Optional, Sequence, Union

from humanfriendly import InvalidSize, parse_size

from .base_rules import BaseExclusionRules


def parse_file_size(size_str: str) -> int:
    """Convert a size such as ``"500KB"``, ``"2.5M"``, ``"1 KiB"`` or ``"1024"`` to bytes.

    Decimal units (KB, MB) are powers of 1000 and binary units (KiB, MiB) powers
    of 1024, as humanfriendly parses them.

    Raises:
        ValueError: If size_str cannot be parsed.

    Example:
        >>> parse_file_size("2.5MB")
        2500000
        >>> parse_file_size("1KiB")
        1024
    """
    try:
        return int(parse_size(size_str))
    except InvalidSize as e:
        raise ValueError(f"Invalid size format '{size_str}': {e}")


class SizeExclusionRules(BaseExclusionRules):
    """Excludes files larger than a limit.

    Directories are never excluded by size, and neither are entries whose size is
    unknown. The size comes from the collector (a stat for local files, the
    listing record for remote ones), so the same rule works for both sources.

    Attributes:
        max_size_bytes (int): Largest file size that is kept.

    Example:
        >>> rules = SizeExclusionRules("1MB")
        >>> rules.exclude("video.mp4", size=5_000_000)
        True
        >>> rules.exclude("notes.txt", size=120)
        False
        >>> rules.exclude("assets", size=5_000_000, is_dir=True)
        False
    """

    def __init__(self, max_size: Union[str, int]):
        """Set the limit from a size string or a number of bytes.

        Raises:
            ValueError: If the limit cannot be parsed, is negative or has an
                unsupported type.
        """
        if isinstance(max_size, str):
            limit = parse_file_size(max_size)
        elif isinstance(max_size, int) and not isinstance(max_size, bool):
            limit = max_size
        else:
            raise ValueError(f"Size limit must be a string or an integer, got {type(max_size).__name__}")
        if limit < 0:
            raise ValueError(f"Size limit cannot be negative: {limit}")
        self.max_size_bytes = limit

    def exclude(self, path: str, size: Optional[int] = None, is_dir: bool = False) -> bool:
        return not is_dir and size is not None and size > self.max_size_bytes

    def has_rules(self) -> bool:
        return self.max_size_bytes > 0

    def describe(self) -> Sequence[str]:
        return [f"files larger than {self.max_size_bytes} bytes"]
