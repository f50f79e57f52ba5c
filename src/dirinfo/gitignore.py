"""Ignore rules for directory listings, read from a ``.gitignore`` via pathspec."""

from __future__ import annotations

import logging
import os

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)


def load_gitignore_spec(directory: str) -> GitIgnoreSpec | None:
    """Load ``.gitignore`` patterns from *directory*.

    Args:
        directory: Directory being listed.

    Returns:
        A compiled spec when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = os.path.join(directory, ".gitignore")
    try:
        with open(gitignore_path, encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except OSError:
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return None
    return GitIgnoreSpec.from_lines(lines)


def is_ignored(spec: GitIgnoreSpec | None, name: str, is_dir: bool) -> bool:
    """Return whether the directory entry *name* matches *spec*.

    Directory names are matched with a trailing ``/`` so that
    directory-only patterns such as ``dist/`` apply.
    """
    if spec is None:
        return False
    return spec.match_file(f"{name}/" if is_dir else name)
