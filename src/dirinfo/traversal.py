"""Traversal engine: classify each root path, list directories, render entries."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TextIO

from dirinfo import DirinfoError
from dirinfo.collection import PathCollection
from dirinfo.formatter.brief import display_name, format_brief
from dirinfo.formatter.colors import RenderOptions
from dirinfo.formatter.detail import format_detail, should_render_detail
from dirinfo.gitignore import is_ignored, load_gitignore_spec
from dirinfo.metadata import is_file, read_directory, resolve
from dirinfo.pathnode import PathNode, strip_trailing_slashes

logger = logging.getLogger(__name__)

_SKIPPED_NAMES = frozenset({".", ".."})


@dataclass(frozen=True, slots=True)
class TraversalOptions:
    """Options controlling a traversal run.

    Attributes:
        recursive: Accepted for compatibility; subdirectories are never
            descended into.
        gitignore: Hide directory children matched by that directory's
            ``.gitignore``.
        render: Options passed to the formatters.
    """

    recursive: bool = False
    gitignore: bool = False
    render: RenderOptions = field(default_factory=RenderOptions)


class TraversalEngine:
    """Walk root paths in collection order and write one report per entry.

    Failures for a single entry or root are written to *out* as
    ``error: ...`` lines and the walk moves on to the next one.
    """

    def __init__(
        self,
        out: TextIO,
        options: TraversalOptions | None = None,
        classify: Callable[[str], bool] = is_file,
    ) -> None:
        self._out = out
        self._options = options or TraversalOptions()
        self._is_file = classify
        self._query_size = 0

    def run(self, paths: PathCollection) -> None:
        """Report every path in *paths*.

        Args:
            paths: Sorted root paths.
        """
        self._query_size = paths.size()
        for raw_path in paths:
            try:
                node = PathNode.create(raw_path)
                if self._is_file(raw_path):
                    self.render_entry(node, is_file=True)
                else:
                    self.list_directory(node, label=strip_trailing_slashes(raw_path))
            except DirinfoError as exc:
                logger.debug("Skipping root %s: %s", raw_path, exc)
                self._error(str(exc))
                self._error(f"path couldn't be worked on {raw_path}")

    def render_entry(self, node: PathNode, is_file: bool = False) -> None:
        """Resolve *node* and write its brief line or detail block.

        Raises:
            StatError: If the entry cannot be accessed.
        """
        record = resolve(node.full_path())
        name = display_name(node)
        if should_render_detail(self._query_size, node, is_file):
            text = format_detail(name, record, self._options.render)
        else:
            text = format_brief(name, record, self._options.render)
        self._write(text)

    def list_directory(self, node: PathNode, label: str | None = None) -> None:
        """Write a brief line for every entry directly inside *node*.

        Args:
            node: Directory node.
            label: Heading printed before the listing of a multi-root query;
                the root as the user typed it. Defaults to the node's path.

        Raises:
            ReadDirError: If the directory cannot be listed.
        """
        path = node.full_path()
        entries = read_directory(path)

        if self._query_size > 1:
            self._write(f"\n{path if label is None else label}:")

        ignore_rules = load_gitignore_spec(path) if self._options.gitignore else None

        for name, is_dir in entries:
            if name in _SKIPPED_NAMES or is_ignored(ignore_rules, name, is_dir):
                continue

            # Listings stay one level deep even when recursive is set.
            try:
                child = node.child(name)
                self.render_entry(child)
            except DirinfoError as exc:
                logger.debug("Skipping entry %s/%s: %s", path, name, exc)
                self._error(str(exc))
                self._error(f"path couldn't be worked on {path}/{name}")

    def _write(self, text: str) -> None:
        self._out.write(text + "\n")

    def _error(self, message: str) -> None:
        self._write(f"error: {message}")
