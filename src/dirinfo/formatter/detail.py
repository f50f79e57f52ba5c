"""Multi-field detail rendering for a query naming exactly one file."""

from __future__ import annotations

import os

from dirinfo.formatter.brief import link_suffix
from dirinfo.formatter.colors import RenderOptions, color_for, colorize
from dirinfo.metadata import (
    MetadataRecord,
    format_byte_size,
    format_local_time,
    lookup_group_name,
    lookup_owner_name,
)
from dirinfo.pathnode import PathNode

# Bit order within one rwx triplet, lowest first.
_PERMISSION_WORDS = ("Executable", "Writable", "Readable")


def describe_permissions(bits: int) -> str:
    """Describe one ``rwx`` triplet, e.g. ``0o5`` -> ``Executable, Readable``.

    Args:
        bits: Three permission bits (``0`` to ``0o7``).

    Returns:
        str: Present permissions joined with ``", "``, or ``""`` for none.
    """
    return ", ".join(
        word for shift, word in enumerate(_PERMISSION_WORDS) if bits & (1 << shift)
    )


def should_render_detail(query_size: int, node: PathNode, is_file: bool) -> bool:
    """Return whether *node* gets the detail block instead of a brief line.

    Only a query of exactly one root path that is a file qualifies; entries
    listed from a directory never do.
    """
    return query_size == 1 and is_file and node.level == 0


def format_detail(
    name: str,
    record: MetadataRecord,
    options: RenderOptions | None = None,
) -> str:
    """Render the detail block for one entry.

    Args:
        name: Display path of the entry.
        record: Entry metadata.
        options: Rendering options.

    Returns:
        str: Newline-joined block without a trailing newline.
    """
    full_path = os.path.realpath(name)
    lines = [
        f"Information for '{name}'",
        "-----------------------------",
        f"Owner: {lookup_owner_name(record.uid)}",
        f"Group: {lookup_group_name(record.gid)}",
        f"Type: {record.entry_type.description}",
        f"Full path: {colorize(full_path, color_for(record.entry_type), options)}",
    ]
    if record.link_target is not None:
        lines.append(f"Link: {link_suffix(record)}")
    lines.extend(
        [
            f"Size: {format_byte_size(record.size)}",
            f"Date Modified: {format_local_time(record.modified)}",
            f"Date Access: {format_local_time(record.accessed)}",
            f"Date Metadata Changed: {format_local_time(record.changed)}",
            "Permissions:",
            f"  Owner: {describe_permissions(record.permissions >> 6)}",
            f"  Group: {describe_permissions((record.permissions >> 3) & 0o7)}",
            f"  Other: {describe_permissions(record.permissions & 0o7)}",
        ]
    )
    return "\n".join(lines)
