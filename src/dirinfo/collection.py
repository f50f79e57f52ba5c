"""Root input paths, partitioned into files and directories."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from dirinfo import ParamError
from dirinfo.metadata import is_file as _is_file


def sort_paths(paths: Iterable[str]) -> list[str]:
    """Return *paths* in ascending ordinal order.

    The sort is stable and idempotent.
    """
    return sorted(paths)


class PathCollection:
    """Files and directories supplied by the user, each sorted ascending.

    Files always come before directories when the collection is indexed or
    iterated. Identical paths added twice are kept twice.

    The collection has two phases: ``add`` until ``sort`` is called once,
    then read-only access through ``at`` or iteration.
    """

    def __init__(self, is_file: Callable[[str], bool] | None = None) -> None:
        """Initialize an empty collection.

        Args:
            is_file: File/directory classifier. Defaults to
                :func:`dirinfo.metadata.is_file`.
        """
        self._is_file = is_file or _is_file
        self.files: list[str] = []
        self.directories: list[str] = []
        self._sorted = False

    def add(self, path: str) -> None:
        """Classify *path* and append it to the matching sequence.

        Raises:
            ParamError: If *path* is not text, or the collection is already sorted.
        """
        if not isinstance(path, str):
            raise ParamError("path must be a string")
        if self._sorted:
            raise ParamError("cannot add paths after the collection is sorted")

        # An empty path is not a file, so it is listed (and reported) as a directory.
        if path and self._is_file(path):
            self.files.append(str(path))
        else:
            self.directories.append(str(path))

    def sort(self) -> None:
        """Sort both sequences. Must run exactly once, after every ``add``.

        Raises:
            ParamError: If the collection was already sorted.
        """
        if self._sorted:
            raise ParamError("collection is already sorted")
        self.files = sort_paths(self.files)
        self.directories = sort_paths(self.directories)
        self._sorted = True

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    def size(self) -> int:
        return len(self.files) + len(self.directories)

    def __len__(self) -> int:
        return self.size()

    def at(self, index: int) -> str:
        """Return the path at *index*, files first then directories.

        Raises:
            ParamError: If the collection has not been sorted yet.
            IndexError: If *index* is outside ``[0, size())``.
        """
        if not self._sorted:
            raise ParamError("collection must be sorted before it is read")
        if index < 0 or index >= self.size():
            raise IndexError(f"path index {index} out of range (size {self.size()})")

        if index < len(self.files):
            return self.files[index]
        return self.directories[index - len(self.files)]

    def __iter__(self) -> Iterator[str]:
        for index in range(self.size()):
            yield self.at(index)
