"""CLI entry point for dirinfo — I/O boundary only."""

from __future__ import annotations

import io
import logging
import os
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Final, TextIO

from dirinfo import DirinfoError, __version__
from dirinfo.collection import PathCollection
from dirinfo.formatter.colors import RenderOptions
from dirinfo.metadata import EntryType, is_file
from dirinfo.traversal import TraversalEngine, TraversalOptions

logger = logging.getLogger(__name__)

PROG: Final[str] = "dirinfo"

FLAG_RECURSIVE: Final[str] = "r"
FLAG_HELP: Final[str] = "h"
FLAG_VERSION: Final[str] = "v"
BRIEF_DESCRIPTION_OPTION: Final[str] = "--brief-description"
GITIGNORE_OPTION: Final[str] = "--gitignore"

BRIEF_DESCRIPTION: Final[str] = "lists directory"

_LEVEL_MAP: Final[dict[str, int]] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True, slots=True)
class Arguments:
    """Parsed command line.

    Attributes:
        paths: Sorted root paths; ``.`` when none were given.
        show_help: ``h`` flag.
        show_version: ``v`` flag.
        recursive: ``r`` flag (stored, never used for descent).
        brief_description: ``--brief-description`` was given.
        gitignore: ``--gitignore`` was given.
    """

    paths: PathCollection = field(default_factory=PathCollection)
    show_help: bool = False
    show_version: bool = False
    recursive: bool = False
    brief_description: bool = False
    gitignore: bool = False


def parse_arguments(
    argv: Sequence[str],
    classify: Callable[[str], bool] = is_file,
) -> Arguments:
    """Parse *argv* (without the program name) into :class:`Arguments`.

    Single-character flags are read only from the first argument, and only
    when it starts with ``-``; several may be combined (``-rv``) and unknown
    characters are ignored. ``--brief-description`` and ``--gitignore`` are
    recognized anywhere. Every other argument is a path.

    Args:
        argv: Command-line arguments.
        classify: File/directory classifier used to partition paths.

    Returns:
        Arguments: Parsed arguments with a sorted path collection.

    Raises:
        ParamError: If a path argument is not text.
    """
    paths = PathCollection(is_file=classify)
    flags = ""
    brief_description = False
    gitignore = False

    for index, arg in enumerate(argv):
        if arg == BRIEF_DESCRIPTION_OPTION:
            brief_description = True
        elif arg == GITIGNORE_OPTION:
            gitignore = True
        elif index == 0 and arg.startswith("-"):
            flags = arg[1:]
        else:
            paths.add(arg)

    if paths.size() == 0:
        paths.add(".")
    paths.sort()

    return Arguments(
        paths=paths,
        show_help=FLAG_HELP in flags,
        show_version=FLAG_VERSION in flags,
        recursive=FLAG_RECURSIVE in flags,
        brief_description=brief_description,
        gitignore=gitignore,
    )


def help_text(prog: str = PROG) -> str:
    """Return the usage text shown for the ``h`` flag."""
    lines = [
        f"usage: {prog} [ -<flags> ] <path>",
        "",
        "flags:",
        f"  [ {FLAG_HELP} ] : see help text",
        f"  [ {FLAG_VERSION} ] : see version",
        f"  [ {FLAG_RECURSIVE} ] : recursive",
        "",
        "options:",
        f"  {BRIEF_DESCRIPTION_OPTION} : one-line tool description",
        "",
        "extensions:",
        f"  {GITIGNORE_OPTION} : hide entries matched by a directory's .gitignore",
        "",
        "entry types:",
    ]
    lines.extend(
        f"  {entry_type.tag} - {entry_type.help_label}"
        for entry_type in EntryType
    )
    lines.extend(["", "permissions:", "  <owner><group><other>"])
    return "\n".join(lines)


def _color_enabled(env: Mapping[str, str]) -> bool:
    return not env.get("NO_COLOR")


def run_dirinfo(
    argv: Sequence[str] | None = None,
    env: Mapping[str, str] | None = None,
    prog: str = PROG,
) -> str:
    """Run dirinfo with provided CLI args and return the report text.

    This function is the primary test target for CLI behavior; it writes
    nothing to the terminal.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses ``sys.argv[1:]``.
        env: Environment used for ``NO_COLOR``. Defaults to ``os.environ``.
        prog: Program name shown in the help text.

    Returns:
        str: Everything the run would print.

    Raises:
        DirinfoError: If the arguments cannot be ingested.
    """
    args = parse_arguments(sys.argv[1:] if argv is None else argv)
    environ = os.environ if env is None else env

    if args.show_help:
        return help_text(prog) + "\n"
    if args.show_version:
        return f"{__version__}\n"
    if args.brief_description:
        return f"{BRIEF_DESCRIPTION}\n"

    options = TraversalOptions(
        recursive=args.recursive,
        gitignore=args.gitignore,
        render=RenderOptions(color=_color_enabled(environ)),
    )
    buf = io.StringIO()
    TraversalEngine(buf, options).run(args.paths)
    return buf.getvalue()


def configure_logging(env: Mapping[str, str] | None = None) -> None:
    """Set the root logging level from ``DIRINFO_LOG_LEVEL`` (default WARNING)."""
    environ = os.environ if env is None else env
    level_name = environ.get("DIRINFO_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=_LEVEL_MAP.get(level_name, logging.WARNING),
        format="%(levelname)s | %(name)s | %(message)s",
    )


def _allow_undecodable_names(stream: TextIO) -> None:
    """Let *stream* print file names that are not valid in its encoding.

    ``os.scandir`` returns such names with surrogate escapes; writing them
    back with ``surrogateescape`` emits the original bytes.
    """
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors="surrogateescape")


def main() -> None:
    """Run the CLI entry point with process arguments.

    Per-entry failures are part of the printed report and do not change the
    exit status. Exits with code 1 only when the arguments cannot be set up.
    """
    configure_logging()
    _allow_undecodable_names(sys.stdout)
    prog = os.path.basename(sys.argv[0]) or PROG

    try:
        output = run_dirinfo(sys.argv[1:], prog=prog)
    except DirinfoError as exc:
        logger.debug("Setup failed: %s", exc)
        sys.stdout.write(f"error: {exc}\n")
        sys.exit(1)

    sys.stdout.write(output)
