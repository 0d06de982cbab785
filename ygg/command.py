# Copyright Red Hat
#
# ygg/command.py - Yggdrasil command interface
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""The ``ygg.command`` module provides both the ygg command line
interface infrastructure, and a simple procedural interface to the
``ygg`` library modules.

The procedural interface is used by the ``ygg`` command line tool,
and may be used by application programs, or interactively in the
Python shell by users who do not require all the features present
in the ygg object API.
"""
from argparse import ArgumentParser, ArgumentTypeError
from typing import List, Optional, Sequence, TextIO, Tuple
from os.path import basename
import logging
import sys

from ygg import (
    YggArgumentError,
    YGG_DEBUG_COMMAND,
    YGG_DEBUG_SCAN,
    YGG_DEBUG_SNAPSHOT,
    YGG_DEBUG_DIFF,
    YGG_DEBUG_ALL,
    YGG_SUBSYSTEM_COMMAND,
    SubsystemFilter,
    set_debug_mask,
    __version__,
)
from ygg.diff import DiffEngine, DiffOptions, DiffResults, get_diff_formatter
from ygg.diff.engine import load_source_files
from ygg.scanner import FileEntry
from ygg.snapshot import SnapshotOptions, run_snapshot
from ygg.snapshot.writer import open_output
from ygg.term import COLOR_MODES, TermControl

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_command(msg, *args, **kwargs):
    """A wrapper for command subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": YGG_SUBSYSTEM_COMMAND}, **kwargs)


_DEFAULT_LOG_LEVEL = logging.WARNING
_CONSOLE_HANDLER = None

#: Command names accepted as the first positional argument.
_COMMANDS = ("snapshot", "diff")

#: Global options that take a value.
_GLOBAL_VALUE_OPTS = ("-d", "--debug")

#: Global options that must not be preceded by a default command.
_PASSTHROUGH_OPTS = ("-h", "--help", "-V", "--version")

#: Separator between the two file sets of a diff command.
_DIFF_SEPARATOR = "--"


def snapshot_project(
    options: SnapshotOptions, stdout: Optional[TextIO] = None
) -> List[FileEntry]:
    """
    Write a snapshot of the project directory ``options.root``.

    :param options: Options controlling file selection and output.
    :type options: ``SnapshotOptions``
    :param stdout: Stream to write to if ``options.out`` is unset.
    :type stdout: ``Optional[TextIO]``
    :returns: The files included in the snapshot.
    :rtype: ``List[FileEntry]``
    """
    return run_snapshot(options, stdout=stdout)


def diff_file_sets(
    diff_from: Sequence[str],
    diff_to: Sequence[str],
    options: Optional[DiffOptions] = None,
) -> DiffResults:
    """
    Compare two sets of files.

    Each path may name a file or a directory; directories are expanded to
    the files below them and files are paired by their path relative to
    the directory argument.

    :param diff_from: The original files and directories.
    :type diff_from: ``Sequence[str]``
    :param diff_to: The updated files and directories.
    :type diff_to: ``Sequence[str]``
    :param options: Options controlling the comparison.
    :type options: ``Optional[DiffOptions]``
    :returns: The comparison results.
    :rtype: ``DiffResults``
    """
    if not diff_from or not diff_to:
        raise YggArgumentError("Both FROM and TO file sets are required")
    from_files = load_source_files(diff_from)
    to_files = load_source_files(diff_to)
    _log_debug_command(
        "Loaded %d FROM files and %d TO files", len(from_files), len(to_files)
    )
    return DiffEngine(options).compute_diff(from_files, to_files)


def write_diff_results(
    results: DiffResults, options: DiffOptions, stdout: Optional[TextIO] = None
):
    """
    Write ``results`` in the format selected by ``options``.

    :param results: The results to write.
    :type results: ``DiffResults``
    :param options: Options selecting the output format and destination.
    :type options: ``DiffOptions``
    :param stdout: Stream to write to if ``options.out`` is unset.
    :type stdout: ``Optional[TextIO]``
    """
    with open_output(options.out, stdout) as stream:
        if options.json:
            print(results.json(pretty=options.pretty), file=stream)
            return
        color = "never" if options.out or options.use_markdown else options.color
        term_control = TermControl(term_stream=stream, color=color)
        formatter = get_diff_formatter(
            options.use_markdown,
            term_control=term_control,
            align_tags=options.align_tags,
        )
        formatter.write_report(results, stream)


def _snapshot_cmd(cmd_args):
    """
    Snapshot command handler.

    Write an index, and optionally the contents, of a project directory.

    :param cmd_args: Command line arguments for the command
    :returns: integer status code returned from ``main()``
    """
    options = SnapshotOptions.from_cmd_args(cmd_args)
    if options.split_tokens and not options.out:
        _log_error("Option --split-tokens requires --out")
        return 1
    files = snapshot_project(options)
    _log_info("Snapshot of %s includes %d files", options.root, len(files))
    return 0


def _diff_cmd(cmd_args):
    """
    Diff command handler.

    Compare two sets of files and report file changes and block matches.

    :param cmd_args: Command line arguments for the command
    :returns: integer status code returned from ``main()``
    """
    if not cmd_args.diff_to:
        _log_error(
            "ygg diff: error: the following arguments are required: "
            "FROM... -- TO..."
        )
        return 1

    options = DiffOptions.from_cmd_args(cmd_args)

    if options.pretty and not options.json:
        _log_error("Option --pretty only supported with --json")
        return 1

    if options.json and (options.markdown or options.align_tags):
        _log_error("Option --json cannot be combined with --md or --align-tags")
        return 1

    results = diff_file_sets(cmd_args.diff_from, cmd_args.diff_to, options)
    write_diff_results(results, options)
    if cmd_args.summary:
        tc = TermControl(term_stream=sys.stderr, color=options.color)
        print(results.summary(tc), file=sys.stderr)
    return 0


def setup_logging(cmd_args):
    """
    Set up ygg logging.
    """
    # pylint: disable=global-statement
    global _CONSOLE_HANDLER
    level = _DEFAULT_LOG_LEVEL
    if cmd_args.verbose and cmd_args.verbose > 1:
        level = logging.DEBUG
    elif cmd_args.verbose and cmd_args.verbose > 0:
        level = logging.INFO

    ygg_log = logging.getLogger("ygg")
    formatter = logging.Formatter("%(levelname)s - %(message)s")
    ygg_log.setLevel(level)
    if ygg_log.hasHandlers():
        ygg_log.handlers.clear()

    _ygg_subsystem_filter = SubsystemFilter("ygg")

    _CONSOLE_HANDLER = logging.StreamHandler(sys.stderr)
    _CONSOLE_HANDLER.setLevel(level)
    _CONSOLE_HANDLER.setFormatter(formatter)
    _CONSOLE_HANDLER.addFilter(_ygg_subsystem_filter)

    ygg_log.addHandler(_CONSOLE_HANDLER)


def shutdown_logging():
    """
    Shut down ygg logging.
    """
    logging.shutdown()


def set_debug(debug_arg):
    """
    Set debugging mask from command line argument.
    """
    if not debug_arg:
        return

    mask_map = {
        "command": YGG_DEBUG_COMMAND,
        "scan": YGG_DEBUG_SCAN,
        "snapshot": YGG_DEBUG_SNAPSHOT,
        "diff": YGG_DEBUG_DIFF,
        "all": YGG_DEBUG_ALL,
    }

    mask = 0
    for name in debug_arg.split(","):
        if name not in mask_map:
            raise ValueError(f"Unknown debug option: {name}")
        mask |= mask_map[name]
    set_debug_mask(mask)


def _thresholds(value: str) -> Tuple[int, ...]:
    """
    Parse a comma separated list of positive block lengths.
    """
    try:
        thresholds = tuple(int(item) for item in value.split(","))
    except ValueError as err:
        raise ArgumentTypeError(f"invalid thresholds: {value}") from err
    if not thresholds or any(t < 1 for t in thresholds):
        raise ArgumentTypeError(f"thresholds must be positive: {value}")
    return thresholds


def _token_budget(value: str) -> int:
    try:
        budget = int(value)
    except ValueError as err:
        raise ArgumentTypeError(f"invalid token budget: {value}") from err
    if budget < 1:
        raise ArgumentTypeError(f"token budget must be positive: {value}")
    return budget


def _add_color_arg(parser):
    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        default="auto",
        help="Colorize output: auto (default), always or never",
    )


def _add_out_arg(parser):
    parser.add_argument(
        "--out",
        metavar="FILE",
        type=str,
        help="Write output to FILE instead of stdout (implies --md for *.md)",
    )


def _add_snapshot_args(parser):
    parser.add_argument(
        "root",
        metavar="DIR",
        nargs="?",
        default=".",
        help="Root directory to scan (default: current directory)",
    )
    parser.add_argument(
        "--show",
        metavar="EXT",
        nargs="+",
        action="extend",
        help="Show only files with these extensions (e.g. --show py rs md)",
    )
    parser.add_argument(
        "--contents",
        action="store_true",
        help="Print file contents after the index",
    )
    parser.add_argument(
        "--md",
        dest="markdown",
        action="store_true",
        help="Output in Markdown format",
    )
    parser.add_argument(
        "--only",
        metavar="PATTERN",
        nargs="+",
        action="extend",
        help="Restrict output to these files, directories or globs",
    )
    parser.add_argument(
        "--no-lines",
        action="store_true",
        help="Do not display line counts in the file index",
    )
    parser.add_argument(
        "--ignore",
        metavar="PATTERN",
        nargs="+",
        action="extend",
        help="Ignore these files, directories or globs",
    )
    parser.add_argument(
        "--blacklist",
        metavar="FILE",
        type=str,
        help="Load ignore patterns from FILE ('-' reads standard input)",
    )
    parser.add_argument(
        "--manifest",
        metavar="FILE",
        type=str,
        help="Load the list of files to show from FILE ('-' reads standard input)",
    )
    _add_out_arg(parser)
    parser.add_argument(
        "--text-only",
        action="store_true",
        help="Only include files detected as text",
    )
    parser.add_argument(
        "-f",
        "--file-types",
        dest="use_magic_file_type",
        action="store_true",
        help="Detect file types using libmagic (with --text-only)",
    )
    parser.add_argument(
        "--split-tokens",
        metavar="N",
        type=_token_budget,
        default=0,
        help="Split output into numbered files of at most N estimated tokens",
    )
    _add_color_arg(parser)


def _add_diff_args(parser):
    parser.add_argument(
        "diff_from",
        metavar="FROM",
        nargs="+",
        help="Original files and directories (followed by -- and TO paths)",
    )
    parser.add_argument(
        "--md",
        dest="markdown",
        action="store_true",
        help="Output in Markdown format",
    )
    parser.add_argument(
        "--align-tags",
        action="store_true",
        help="Align block tags in a single column",
    )
    parser.add_argument(
        "-I",
        "--no-inline",
        dest="inline_diffs",
        action="store_false",
        help="Do not generate unified diffs for modified files",
    )
    parser.add_argument(
        "-B",
        "--no-blocks",
        dest="block_matches",
        action="store_false",
        help="Do not search for blocks moved or copied between files",
    )
    parser.add_argument(
        "-t",
        "--thresholds",
        metavar="N[,N...]",
        type=_thresholds,
        default=None,
        help="Minimum block lengths for each matching pass (default: 5,3,1)",
    )
    parser.add_argument(
        "--independent-passes",
        dest="carry_visited",
        action="store_false",
        help="Search every pass from scratch, allowing overlapping matches",
    )
    parser.add_argument(
        "-U",
        "--context",
        dest="context_lines",
        metavar="N",
        type=int,
        default=None,
        help="Context lines for unified diffs (default: 3)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a summary of changes to stderr",
    )
    _add_out_arg(parser)
    _add_color_arg(parser)


def _split_diff_args(args: List[str]) -> Tuple[List[str], List[str]]:
    """
    Split the argument list at the diff separator.

    :returns: A ``(args, diff_to)`` tuple. ``diff_to`` is empty if the
              command is not ``diff`` or no separator is present.
    """
    if "diff" not in args or _DIFF_SEPARATOR not in args:
        return args, []
    diff_index = args.index("diff")
    if _DIFF_SEPARATOR not in args[diff_index:]:
        return args, []
    sep_index = args.index(_DIFF_SEPARATOR, diff_index)
    return args[:sep_index], args[sep_index + 1 :]


def _insert_default_command(args: List[str]) -> List[str]:
    """
    Insert the ``snapshot`` command if no command was given.
    """
    index = 0
    while index < len(args):
        arg = args[index]
        if arg in _GLOBAL_VALUE_OPTS:
            index += 2
            continue
        if arg.startswith("--debug=") or arg == "--verbose":
            index += 1
            continue
        if arg.startswith("-v") and set(arg[1:]) == {"v"}:
            index += 1
            continue
        break
    if index < len(args) and args[index] in (*_COMMANDS, *_PASSTHROUGH_OPTS):
        return args
    return args[:index] + ["snapshot"] + args[index:]


def main(args):
    """
    Main entry point for ygg.
    """
    parser = ArgumentParser(
        description="Yggdrasil: project snapshots and cross-file diffs",
        prog=basename(args[0]),
    )

    # Global arguments
    parser.add_argument(
        "-d",
        "--debug",
        metavar="DEBUGOPTS",
        type=str,
        help="A list of debug options to enable",
    )
    parser.add_argument("-v", "--verbose", help="Enable verbose output", action="count")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        help="Report the version number of ygg",
        version=__version__,
    )
    command_subparser = parser.add_subparsers(dest="command", help="Command")

    snapshot_parser = command_subparser.add_parser(
        "snapshot",
        help="Write a project snapshot (the default command)",
    )
    _add_snapshot_args(snapshot_parser)
    snapshot_parser.set_defaults(func=_snapshot_cmd)

    diff_parser = command_subparser.add_parser(
        "diff",
        help="Compare two sets of files: ygg diff FROM... -- TO...",
    )
    _add_diff_args(diff_parser)
    diff_parser.set_defaults(func=_diff_cmd)

    cmd_line, diff_to = _split_diff_args(list(args[1:]))
    cmd_args = parser.parse_args(_insert_default_command(cmd_line))
    cmd_args.diff_to = diff_to

    status = 1

    try:
        set_debug(cmd_args.debug)
    except ValueError as err:
        print(err)
        parser.print_help()
        return status

    setup_logging(cmd_args)

    _log_debug_command("Parsed %s", " ".join(args[1:]))

    if "func" not in cmd_args:
        parser.print_help()
        return status

    if cmd_args.debug:
        status = cmd_args.func(cmd_args)
    else:
        try:
            status = cmd_args.func(cmd_args)
        # pylint: disable=broad-except
        except KeyboardInterrupt:  # pragma: no cover
            _log_info("Exiting on user cancel")
        except Exception as err:
            _log_error("Command failed: %s", err)

    shutdown_logging()
    return status


def run():
    """
    Console script entry point for ``ygg``.
    """
    sys.exit(main(sys.argv))


# vim: set et ts=4 sw=4 :
