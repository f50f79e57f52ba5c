"""One-line brief rendering used for listings and multi-path queries."""

from __future__ import annotations

import posixpath

from dirinfo.formatter.colors import RenderOptions, color_for, colorize
from dirinfo.metadata import MetadataRecord, format_byte_size, format_local_time
from dirinfo.pathnode import PathNode, strip_leading_dot_slash


def display_name(node: PathNode) -> str:
    """Return the name printed for *node*.

    Entries discovered inside a directory show only their basename. Root
    paths typed by the user show the whole path minus a leading ``./``.
    """
    path = node.full_path()
    if node.level > 0:
        return posixpath.basename(path)
    return strip_leading_dot_slash(path)


def link_suffix(record: MetadataRecord) -> str:
    if record.link_target is None:
        return ""
    return f" -> {record.link_target}"


def format_brief(
    name: str,
    record: MetadataRecord,
    options: RenderOptions | None = None,
) -> str:
    """Render a single brief line.

    Layout: ``| <type>-<perm> <modified> <size> <name>[ -> <target>]``.

    Args:
        name: Display name of the entry.
        record: Entry metadata.
        options: Rendering options.

    Returns:
        str: Line without a trailing newline.
    """
    modified = format_local_time(record.modified)
    size = format_byte_size(record.size)
    colored = colorize(name, color_for(record.entry_type), options)
    return (
        f"| {record.entry_type.tag}-{record.permissions:03o} "
        f"{modified:<21} {size:>10} {colored}{link_suffix(record)}"
    )
