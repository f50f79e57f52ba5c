"""Filesystem metadata: OS primitives and the normalized per-entry record."""

from __future__ import annotations

import grp
import logging
import os
import pwd
import stat
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from dirinfo import ReadDirError, ReadLinkError, StatError

logger = logging.getLogger(__name__)

PERMISSION_MASK = stat.S_IRWXU | stat.S_IRWXG | stat.S_IRWXO

UNREADABLE_LINK = "?"


class EntryType(Enum):
    """Kind of filesystem entry, keyed by its one-character tag."""

    BLOCK_DEVICE = "b"
    CHAR_DEVICE = "c"
    DIRECTORY = "d"
    FIFO = "p"
    SYMLINK = "l"
    REGULAR_FILE = "f"
    SOCKET = "s"
    UNKNOWN = "?"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def help_label(self) -> str:
        """Short lowercase name used in the usage text."""
        return _HELP_LABELS[self]

    @classmethod
    def from_mode(cls, mode: int) -> EntryType:
        """Map ``st_mode`` file-type bits to an entry type.

        Args:
            mode: Raw ``st_mode`` value.

        Returns:
            EntryType: Matching type, ``UNKNOWN`` for anything unrecognized.
        """
        if stat.S_ISBLK(mode):
            return cls.BLOCK_DEVICE
        if stat.S_ISCHR(mode):
            return cls.CHAR_DEVICE
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISFIFO(mode):
            return cls.FIFO
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        if stat.S_ISREG(mode):
            return cls.REGULAR_FILE
        if stat.S_ISSOCK(mode):
            return cls.SOCKET
        return cls.UNKNOWN


_DESCRIPTIONS: dict[EntryType, str] = {
    EntryType.BLOCK_DEVICE: "Block Device",
    EntryType.CHAR_DEVICE: "Character Device",
    EntryType.DIRECTORY: "Directory",
    EntryType.FIFO: "Fifo Pipe File",
    EntryType.SYMLINK: "Symlink File",
    EntryType.REGULAR_FILE: "Regular File",
    EntryType.SOCKET: "Socket",
    EntryType.UNKNOWN: "Unknown",
}

_HELP_LABELS: dict[EntryType, str] = {
    EntryType.BLOCK_DEVICE: "block device",
    EntryType.CHAR_DEVICE: "char device",
    EntryType.DIRECTORY: "directory",
    EntryType.FIFO: "fifo pipe",
    EntryType.SYMLINK: "symbolic link file",
    EntryType.REGULAR_FILE: "regular file",
    EntryType.SOCKET: "socket",
    EntryType.UNKNOWN: "unknown",
}


@dataclass(frozen=True, slots=True)
class MetadataRecord:
    """Normalized metadata for one filesystem entry.

    For a symlink, ``entry_type`` is always ``SYMLINK``. The permission
    bits, size and timestamps describe the link target when it could be
    followed, and the link itself otherwise.

    Attributes:
        entry_type: Kind of entry.
        permissions: Owner/group/other ``rwx`` bits (``0o777`` mask).
        size: Size in bytes as reported by the OS.
        modified: Modification time (epoch seconds).
        accessed: Access time (epoch seconds).
        changed: Metadata-change time (epoch seconds).
        uid: Owner id.
        gid: Group id.
        link_target: Symlink target text, ``"?"`` when unreadable, ``None``
            when the entry is not a symlink.
    """

    entry_type: EntryType
    permissions: int
    size: int
    modified: float
    accessed: float
    changed: float
    uid: int
    gid: int
    link_target: str | None = None

    @property
    def is_symlink(self) -> bool:
        return self.entry_type is EntryType.SYMLINK


# ---------------------------------------------------------------------------
# OS primitives
# ---------------------------------------------------------------------------


def is_file(path: str) -> bool:
    """Return whether *path* resolves to an existing non-directory object."""
    return os.path.exists(path) and not os.path.isdir(path)


def stat_link(path: str) -> os.stat_result:
    """Metadata of *path* itself, without following symlinks.

    Raises:
        StatError: If the path cannot be accessed.
    """
    try:
        return os.lstat(path)
    except OSError as exc:
        raise StatError(path, exc.errno) from exc


def stat_follow(path: str) -> os.stat_result:
    """Metadata of the object *path* points to.

    Raises:
        StatError: If the path or its target cannot be accessed.
    """
    try:
        return os.stat(path)
    except OSError as exc:
        raise StatError(path, exc.errno) from exc


def read_link(path: str) -> str:
    """Return the raw target text of the symlink at *path*.

    Raises:
        ReadLinkError: If the link cannot be read.
    """
    try:
        return os.readlink(path)
    except OSError as exc:
        raise ReadLinkError(path, exc.errno) from exc


def read_symlink_target(path: str) -> str:
    """Best-effort symlink target; ``"?"`` when it cannot be read."""
    try:
        return read_link(path)
    except ReadLinkError as exc:
        logger.debug("Cannot read link: %s (errno %s)", path, exc.errno)
        return UNREADABLE_LINK


def read_directory(path: str) -> list[tuple[str, bool]]:
    """List a directory as ``(name, is_dir)`` pairs sorted by name.

    The ``is_dir`` hint does not follow symlinks.

    Raises:
        ReadDirError: If the directory cannot be opened or read.
    """
    entries: list[tuple[str, bool]] = []
    try:
        with os.scandir(path) as it:
            for dir_entry in it:
                try:
                    is_dir = dir_entry.is_dir(follow_symlinks=False)
                except OSError:
                    logger.debug("Cannot stat: %s", dir_entry.path)
                    is_dir = False
                entries.append((dir_entry.name, is_dir))
    except OSError as exc:
        raise ReadDirError(path, exc.errno) from exc

    entries.sort(key=lambda item: item[0])
    return entries


def lookup_owner_name(uid: int) -> str:
    """User name for *uid*, or the numeric id when it has no entry."""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def lookup_group_name(gid: int) -> str:
    """Group name for *gid*, or the numeric id when it has no entry."""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB")


def format_byte_size(size: int) -> str:
    """Format a byte count with a binary (1024) unit suffix.

    Examples: ``0 B``, ``512 B``, ``1.50 KB``, ``3.00 MB``.
    """
    if size < 1024:
        return f"{size} B"
    value = float(size)
    for unit in _SIZE_UNITS[1:-1]:
        value /= 1024
        if value < 1024:
            return f"{value:.2f} {unit}"
    return f"{value / 1024:.2f} {_SIZE_UNITS[-1]}"


def format_local_time(timestamp: float) -> str:
    """Format epoch seconds as local ``MM/DD/YYYY - HH:MM:SS``."""
    return datetime.fromtimestamp(timestamp).strftime("%m/%d/%Y - %H:%M:%S")


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def resolve(full_path: str) -> MetadataRecord:
    """Build the metadata record for *full_path*.

    The entry is first examined without following symlinks. For a symlink
    the target text is read (``"?"`` on failure) and the link is then
    followed; when that succeeds, permissions, size and timestamps come
    from the target while the type stays ``SYMLINK``. A link that cannot be
    followed keeps its own values.

    Args:
        full_path: Path of the entry.

    Returns:
        MetadataRecord: Normalized metadata.

    Raises:
        StatError: If the entry itself cannot be accessed.
    """
    link_st = stat_link(full_path)
    entry_type = EntryType.from_mode(link_st.st_mode)

    st = link_st
    link_target: str | None = None
    if entry_type is EntryType.SYMLINK:
        link_target = read_symlink_target(full_path)
        try:
            st = stat_follow(full_path)
        except StatError as exc:
            logger.debug("Cannot follow link: %s (errno %s)", full_path, exc.errno)

    return MetadataRecord(
        entry_type=entry_type,
        permissions=st.st_mode & PERMISSION_MASK,
        size=st.st_size,
        modified=st.st_mtime,
        accessed=st.st_atime,
        changed=st.st_ctime,
        uid=link_st.st_uid,
        gid=link_st.st_gid,
        link_target=link_target,
    )
