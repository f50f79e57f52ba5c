"""Shared fixtures for dirinfo tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

# Fixed modification time used where exact brief lines are asserted.
FIXED_MTIME = 1_700_000_000


@pytest.fixture
def listing_tree(tmp_path: Path) -> Path:
    """Create a small directory to list.

    Structure::

        listing/
        ├── b.txt      (0o644, 3 bytes)
        ├── a.txt      (0o640, 5 bytes)
        └── sub/
            └── nested.txt
    """
    root = tmp_path / "listing"
    root.mkdir()
    (root / "b.txt").write_text("bbb")
    (root / "a.txt").write_text("aaaaa")
    (root / "sub").mkdir()
    (root / "sub" / "nested.txt").write_text("nested")
    os.chmod(root / "a.txt", 0o640)
    os.chmod(root / "b.txt", 0o644)
    for name in ("a.txt", "b.txt"):
        os.utime(root / name, (FIXED_MTIME, FIXED_MTIME))
    return root


@pytest.fixture
def link_tree(tmp_path: Path) -> Path:
    """Directory holding one resolvable and one dangling symlink.

    Structure::

        links/
        ├── broken_link -> missing
        ├── good_link -> target.txt
        └── target.txt   (0o600, 100 bytes)
    """
    root = tmp_path / "links"
    root.mkdir()
    target = root / "target.txt"
    target.write_text("x" * 100)
    os.chmod(target, 0o600)
    (root / "good_link").symlink_to("target.txt")
    (root / "broken_link").symlink_to("missing")
    return root


def brief_names(output: str) -> list[str]:
    """Return the name column of every brief line in *output*."""
    return [
        line.split(" -> ")[0].split()[-1]
        for line in output.splitlines()
        if line.startswith("| ")
    ]
