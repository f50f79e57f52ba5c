"""dirinfo — inspect entry type, permissions, size, times and ownership of paths."""

from __future__ import annotations

__version__ = "0.2"


class DirinfoError(Exception):
    """Base class for every error raised by dirinfo."""


class ParamError(DirinfoError):
    """A required argument was missing or empty.

    This is a precondition failure in the caller, not a runtime condition
    to recover from.
    """


class ArgumentError(DirinfoError):
    """Malformed command-line input."""


class FilesystemError(DirinfoError):
    """An OS call failed for a specific path.

    Attributes:
        path: Path the failing call was made for.
        errno: OS error number, or ``None`` when unknown.
    """

    operation = "access"

    def __init__(self, path: str, errno: int | None = None) -> None:
        self.path = path
        self.errno = errno
        super().__init__(f"(path: {path}) {self.operation} {errno}")


class StatError(FilesystemError):
    """``lstat``/``stat`` failed."""

    operation = "lstat"


class ReadLinkError(FilesystemError):
    """``readlink`` failed."""

    operation = "readlink"


class ReadDirError(FilesystemError):
    """A directory could not be listed."""

    operation = "scandir"

    def __str__(self) -> str:
        return f"couldn't scan dir {self.path}"
