"""Signal-aware output writing for the repotree CLI."""

import errno
import os
import types
from pathlib import Path
from typing import IO, Iterable, Optional, Tuple, Type, Union

from repotree.cli.signal_handler import signal_handler

OutputTarget = Union[int, str, os.PathLike]


def _open_target(target: OutputTarget) -> Tuple[int, Optional[IO[str]]]:
    """Resolve an output target to a descriptor and the file object that owns it, if any."""
    if isinstance(target, bool) or not isinstance(target, (int, str, os.PathLike)):
        raise TypeError(f"Output target must be a file descriptor or a path, not {type(target).__name__}")
    if isinstance(target, int):
        return target, None

    output_path = Path(target)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    handle = output_path.open("w", encoding="utf-8")
    return handle.fileno(), handle


class SafeWriter:
    """Writes CLI output to a file or a file descriptor.

    Each write first checks whether the process was interrupted, and a closed
    pipe surfaces as BrokenPipeError whichever way it is detected. When given a
    path, missing parent directories are created and the file is written as
    UTF-8. Descriptors passed in are never closed by the writer.

    Attributes:
        file: The output path or file descriptor.
        fd: The file descriptor being written to.
    """

    def __init__(self, file: OutputTarget):
        self.file = file
        self.fd, self._file_obj = _open_target(file)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: str) -> None:
        """Write a string to the output.

        Raises:
            BrokenPipeError: If the process was interrupted or the pipe is closed.
            ValueError: If the writer was already closed.
        """
        if self._closed:
            raise ValueError("I/O operation on closed writer")
        if signal_handler.interrupted:
            raise BrokenPipeError(errno.EPIPE, "Output interrupted")

        pending = memoryview(data.encode("utf-8"))
        while pending:
            try:
                written = os.write(self.fd, pending)
            except OSError as error:
                if error.errno == errno.EPIPE and not isinstance(error, BrokenPipeError):
                    raise BrokenPipeError(errno.EPIPE, str(error))
                raise
            pending = pending[written:]

    def write_lines(self, lines: Iterable[str]) -> None:
        """Write already newline-terminated lines one at a time."""
        for line in lines:
            self.write(line)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._file_obj is None:
            return
        try:
            self._file_obj.close()
        except BrokenPipeError:
            pass
        except OSError as error:
            if error.errno != errno.EPIPE:
                raise

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes precedence
            if exc_type is None:
                raise
