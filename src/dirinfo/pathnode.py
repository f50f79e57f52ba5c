"""Hierarchical path model: one segment per node, full paths rebuilt on demand."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field

from dirinfo import ParamError


def strip_trailing_slashes(text: str) -> str:
    """Remove every trailing ``/`` from *text*.

    A lone ``/`` (however many slashes it was written with) stays ``/``.

    Args:
        text: Path text.

    Returns:
        str: Path without trailing separators.
    """
    stripped = text.rstrip("/")
    return stripped if stripped else text[:1]


def strip_leading_dot_slash(text: str) -> str:
    """Remove a single leading ``./`` from *text*.

    Args:
        text: Path text.

    Returns:
        str: Path without the ``./`` prefix.
    """
    if text.startswith("./"):
        return text[2:]
    return text


def _require_text(value: object, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise ParamError(f"{what} must be a non-empty string")
    return value


@dataclass(frozen=True, slots=True, weakref_slot=True)
class PathNode:
    """One path segment linked to an optional parent node.

    The parent link is a weak reference: a node never keeps its parent
    alive. Callers hold the parent for as long as its children are used,
    which the traversal engine does for the duration of a directory listing.

    Attributes:
        segment: Full user-supplied path for a root node, a single
            directory-entry name otherwise.
        depth: 0 for a root node, parent depth + 1 for a child.
    """

    segment: str
    depth: int = 0
    _parent_ref: weakref.ReferenceType[PathNode] | None = field(
        default=None, repr=False, compare=False
    )

    @classmethod
    def create(cls, path: str) -> PathNode:
        """Build a root node for a user-supplied path.

        Args:
            path: Path as given by the user.

        Returns:
            PathNode: Node at depth 0.

        Raises:
            ParamError: If *path* is empty or not text.
        """
        text = _require_text(path, "path")
        segment = strip_leading_dot_slash(strip_trailing_slashes(text))
        return cls(segment=segment or text)

    @classmethod
    def create_child(cls, parent: PathNode | None, leaf_name: str) -> PathNode:
        """Build a node for a directory entry beneath *parent*.

        Raises:
            ParamError: If *parent* is missing or *leaf_name* is empty.
        """
        if parent is None:
            raise ParamError("parent node is required")
        text = _require_text(leaf_name, "leaf name")
        segment = strip_leading_dot_slash(strip_trailing_slashes(text))
        return cls(
            segment=segment,
            depth=parent.depth + 1,
            _parent_ref=weakref.ref(parent),
        )

    def child(self, leaf_name: str) -> PathNode:
        return PathNode.create_child(self, leaf_name)

    @property
    def parent(self) -> PathNode | None:
        """Ancestor node, or ``None`` for a root.

        Raises:
            ParamError: If the ancestor has already been discarded.
        """
        if self._parent_ref is None:
            return None
        node = self._parent_ref()
        if node is None:
            raise ParamError(f"parent of '{self.segment}' no longer exists")
        return node

    @property
    def level(self) -> int:
        return self.depth

    def full_path(self) -> str:
        """Rebuild the path by joining every segment from the root down.

        Returns:
            str: ``/``-joined path without trailing slashes.
        """
        segments: list[str] = []
        node: PathNode | None = self
        while node is not None:
            segments.append(node.segment)
            node = node.parent

        path = ""
        for segment in reversed(segments):
            if not path or path.endswith("/"):
                path += segment
            else:
                path = f"{path}/{segment}"
        return strip_trailing_slashes(path)
