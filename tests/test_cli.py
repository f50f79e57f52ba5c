"""Tests for dirinfo.cli — argument ingestion, mode selection, exit status."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pytest

from dirinfo import ArgumentError, __version__, cli
from dirinfo.cli import (
    BRIEF_DESCRIPTION,
    configure_logging,
    help_text,
    main,
    parse_arguments,
    run_dirinfo,
)
from tests.conftest import brief_names

NO_COLOR = {"NO_COLOR": "1"}


def _is_txt(path: str) -> bool:
    return path.endswith(".txt")


class TestParseArguments:
    def test_defaults_to_current_directory(self) -> None:
        args = parse_arguments([], classify=_is_txt)
        assert list(args.paths) == ["."]
        assert not (args.show_help or args.show_version or args.recursive)

    def test_combined_flags(self) -> None:
        args = parse_arguments(["-rvh", "d"], classify=_is_txt)
        assert args.recursive and args.show_version and args.show_help
        assert list(args.paths) == ["d"]

    def test_unknown_flag_characters_ignored(self) -> None:
        args = parse_arguments(["-xyz", "d"], classify=_is_txt)
        assert not (args.show_help or args.show_version or args.recursive)
        assert list(args.paths) == ["d"]

    def test_flags_only_read_from_first_argument(self) -> None:
        args = parse_arguments(["d", "-v"], classify=_is_txt)
        assert not args.show_version
        assert list(args.paths) == ["-v", "d"]

    def test_long_options_anywhere(self) -> None:
        args = parse_arguments(
            ["d", "--brief-description", "--gitignore"], classify=_is_txt
        )
        assert args.brief_description
        assert args.gitignore
        assert list(args.paths) == ["d"]

    def test_paths_sorted_files_first(self) -> None:
        args = parse_arguments(["z", "b.txt", "a", "a.txt"], classify=_is_txt)
        assert list(args.paths) == ["a.txt", "b.txt", "a", "z"]

    def test_duplicates_kept(self) -> None:
        args = parse_arguments(["a.txt", "a.txt"], classify=_is_txt)
        assert args.paths.size() == 2


class TestModes:
    def test_help(self) -> None:
        output = run_dirinfo(["-h"], env=NO_COLOR)
        assert output.startswith("usage: dirinfo [ -<flags> ] <path>")
        assert "  l - symbolic link file" in output
        assert "  c - char device" in output
        assert "  p - fifo pipe" in output

    def test_gitignore_listed_as_extension(self) -> None:
        lines = help_text().splitlines()
        extensions = lines.index("extensions:")
        assert lines[extensions + 1].startswith("  --gitignore : ")
        assert all("--gitignore" not in line for line in lines[:extensions])

    def test_help_wins_over_version(self) -> None:
        assert run_dirinfo(["-vh"], env=NO_COLOR) == help_text() + "\n"

    def test_help_uses_program_name(self) -> None:
        assert run_dirinfo(["-h"], prog="di").startswith("usage: di ")

    def test_version(self) -> None:
        assert run_dirinfo(["-v"], env=NO_COLOR) == f"{__version__}\n"

    def test_version_wins_over_brief_description(self) -> None:
        assert run_dirinfo(["-v", "--brief-description"]) == f"{__version__}\n"

    def test_brief_description(self, listing_tree: Path) -> None:
        output = run_dirinfo([str(listing_tree), "--brief-description"])
        assert output == f"{BRIEF_DESCRIPTION}\n"


class TestListing:
    def test_directory(self, listing_tree: Path) -> None:
        output = run_dirinfo([str(listing_tree)], env=NO_COLOR)
        assert brief_names(output) == ["a.txt", "b.txt", "sub"]

    def test_recursive_flag_is_accepted(self, listing_tree: Path) -> None:
        output = run_dirinfo(["-r", str(listing_tree)], env=NO_COLOR)
        assert brief_names(output) == ["a.txt", "b.txt", "sub"]

    def test_current_directory_default(
        self, listing_tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(listing_tree)
        output = run_dirinfo([], env=NO_COLOR)
        assert brief_names(output) == ["a.txt", "b.txt", "sub"]

    def test_single_file_detail(self, listing_tree: Path) -> None:
        output = run_dirinfo([str(listing_tree / "b.txt")], env=NO_COLOR)
        assert "Information for" in output
        assert "Size: 3 B" in output

    def test_colors_enabled_without_no_color(self, listing_tree: Path) -> None:
        output = run_dirinfo([str(listing_tree)], env={})
        assert "\x1b[35msub\x1b[0m" in output

    def test_no_color_strips_escapes(self, listing_tree: Path) -> None:
        output = run_dirinfo([str(listing_tree)], env=NO_COLOR)
        assert "\x1b[" not in output

    def test_gitignore_option(self, listing_tree: Path) -> None:
        (listing_tree / ".gitignore").write_text("*.txt\n")
        output = run_dirinfo([str(listing_tree), "--gitignore"], env=NO_COLOR)
        assert brief_names(output) == ["sub"]


class TestMain:
    def test_errors_do_not_change_exit_status(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["dirinfo", str(tmp_path / "nope")])
        main()
        captured = capsys.readouterr()
        assert "error: couldn't scan dir" in captured.out
        assert captured.err == ""

    def test_setup_failure_exits_one(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def _fail(argv: list[str]) -> None:
            raise ArgumentError("cannot read arguments")

        monkeypatch.setattr(cli, "parse_arguments", _fail)
        monkeypatch.setattr(sys, "argv", ["dirinfo", "somewhere"])
        with pytest.raises(SystemExit) as info:
            main()
        assert info.value.code == 1
        assert capsys.readouterr().out.startswith("error: ")


class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("debug", logging.DEBUG), ("ERROR", logging.ERROR), ("bogus", logging.WARNING)],
    )
    def test_level_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: int
    ) -> None:
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", logging.NOTSET)
        configure_logging({"DIRINFO_LOG_LEVEL": value})
        assert root.level == expected


class TestRootContainment:
    def test_empty_argument_does_not_stop_other_roots(
        self,
        listing_tree: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        monkeypatch.setattr(sys, "argv", ["dirinfo", str(listing_tree), ""])
        main()
        out = capsys.readouterr().out
        assert "error: path couldn't be worked on \n" in out
        assert brief_names(out) == ["a.txt", "b.txt", "sub"]

    def test_undecodable_name_is_printed_as_raw_bytes(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capfdbinary: pytest.CaptureFixture[bytes],
    ) -> None:
        (tmp_path / "ok.txt").write_text("ok")
        with open(os.path.join(os.fsencode(tmp_path), b"bad\xff.txt"), "wb") as fh:
            fh.write(b"bad")
        monkeypatch.setenv("NO_COLOR", "1")
        monkeypatch.setattr(sys, "argv", ["dirinfo", str(tmp_path)])
        main()
        out = capfdbinary.readouterr().out
        assert b" bad\xff.txt\n" in out
        assert b" ok.txt\n" in out
