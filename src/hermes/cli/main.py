# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the Hermes command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from yachalk import chalk

from hermes.parser.lexer import Tokenizer
from hermes.parser.location import LineIndex
from hermes.parser.parser import ParseError, parse
from hermes.parser.tokens import TokenKind
from hermes.workspace.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_TEXT,
    WorkspaceConfig,
    WorkspaceConfigError,
    load_workspace_config,
)
from hermes.workspace.loader import describe_parse_error, discover_files, load_collections

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the Hermes CLI."""
    parser = argparse.ArgumentParser(
        prog="hermes",
        description="Hermes - terminal API request composer",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new Hermes workspace",
        description="Write a default workspace configuration file.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to initialize the workspace in (default: current directory)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Parse every collection file in a workspace",
        description="Parse all collection files and report syntax errors and unresolved environments.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the Hermes workspace (default: current directory)",
    )

    # tokens subcommand
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Print the token stream of a collection file",
        description="Scan a collection file and print one token per line.",
    )
    tokens_parser.add_argument("file", help="Collection file to scan")

    # show subcommand
    show_parser = subparsers.add_parser(
        "show",
        help="Print a parsed collection as JSON",
        description="Parse a collection file and print the resulting document as JSON.",
    )
    show_parser.add_argument("file", help="Collection file to parse")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "tokens":
        return _cmd_tokens(args)
    if args.command == "show":
        return _cmd_show(args)
    return 0


def _configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _error(message: str) -> None:
    print(chalk.red(f"Error: {message}"), file=sys.stderr)


def _warning(message: str) -> None:
    print(chalk.yellow(f"Warning: {message}"))


def _load_config(directory: Path) -> WorkspaceConfig:
    """Load the workspace configuration, falling back to defaults if absent."""
    config_file = directory / CONFIG_FILE_NAME
    if not config_file.exists():
        return WorkspaceConfig()
    return load_workspace_config(config_file)


def _display_path(path: Path, directory: Path) -> Path:
    """Return *path* relative to the workspace directory when it lies inside it."""
    return path.relative_to(directory) if path.is_relative_to(directory) else path


def _read_source(file_arg: str) -> str | None:
    path = Path(file_arg)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _error(f"cannot read '{path}': {exc}")
        return None


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        _error(f"directory '{directory}' does not exist.")
        return 1

    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        _error(f"workspace already exists at '{config_file}'.")
        return 1

    config_file.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
    print(f"Initialized Hermes workspace at '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        _error(f"directory '{directory}' does not exist.")
        return 1

    try:
        config = _load_config(directory)
    except WorkspaceConfigError as exc:
        _error(str(exc))
        return 1
    _configure_logging(config.log_level, args.verbose)

    files = discover_files(directory / config.collections_directory, config.file_suffix)
    if not files:
        print(f"No {config.file_suffix} files found in the workspace.")
        return 0

    print(f"Checking {len(files)} collection file(s)...")
    result = load_collections(files, name_length=config.anonymous_name_length)

    for path, error in result.errors.items():
        _error(f"{_display_path(path, directory)}: {error}")
    for path, collection in result.collections.items():
        for name in collection.unresolved_environments:
            _warning(f"{_display_path(path, directory)}: environment '{name}' is referenced but never declared")

    if not result.ok:
        return 1

    print("No issues found.")
    return 0


def _cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens subcommand."""
    _configure_logging("WARNING", args.verbose)
    source = _read_source(args.file)
    if source is None:
        return 1

    lines = LineIndex(source)
    for token in Tokenizer(source):
        line, column = lines.location(token.offset)
        if token.kind == TokenKind.ILLEGAL:
            _error(f"Line {line}, column {column}: illegal input {token.value!r}")
            return 1
        print(f"{line}:{column}\t{token.kind.name}\t{token.value!r}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    """Handle the show subcommand."""
    _configure_logging("WARNING", args.verbose)
    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        collection = parse(source)
    except ParseError as exc:
        _error(str(describe_parse_error(source, exc)))
        return 1

    logger.debug("Parsed collection %r with %d request(s)", collection.name, collection.request_count())
    print(collection.model_dump_json(indent=2))
    return 0
