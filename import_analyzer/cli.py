"""Command line entry point for the import analyzer.

Usage:
  imported ls-dependencies [pattern ...] [--follow]
  imported ls-dependants <file> [pattern ...]
  imported ls-cycles [pattern ...] [--graph graph.json]
  imported dump-graph [pattern ...] --output graph.json [--inverted]
  imported <file>                       # direct imports of one file
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from colorama import Fore, Style, just_fix_windows_console

from .config import DEFAULT_CONFIG_PATH, AnalyzerConfig
from .errors import ConfigError, ModuleParseError
from .graph import build_import_graph, detect_cycles, invert_graph, load_import_graph, save_import_graph
from .searcher import DependencySearcher

logger = logging.getLogger(__name__)

COMMANDS = ("ls-dependencies", "ls-dependants", "ls-cycles", "dump-graph")


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"YAML settings file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar on stderr")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="imported", description="Find imported dependencies of JS/TS modules")
    _add_global_options(parser)
    sub = parser.add_subparsers(dest="command", required=True)

    deps = sub.add_parser("ls-dependencies", help="find all imported dependencies")
    deps.add_argument("pattern", nargs="*", help="glob pattern of files to find imported dependencies")
    deps.add_argument("--follow", action="store_true", help="whether to follow dependencies")

    dependants = sub.add_parser("ls-dependants", help="find all files that depend on the given file")
    dependants.add_argument("file", help="file name to search for")
    dependants.add_argument("pattern", nargs="*", help="glob pattern of files to search")

    cycles = sub.add_parser("ls-cycles", help="find import cycles")
    cycles.add_argument("pattern", nargs="*", help="glob pattern of files to search")
    cycles.add_argument("--graph", type=Path, help="read a graph written by dump-graph instead of scanning")

    dump = sub.add_parser("dump-graph", help="write the direct import graph as JSON")
    dump.add_argument("pattern", nargs="*", help="glob pattern of files to include")
    dump.add_argument("--output", "-o", type=Path, required=True, help="output JSON path")
    dump.add_argument("--inverted", action="store_true", help="map each file to the files importing it")
    return parser


def _build_legacy_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="imported", description="Print the direct imports of one file")
    _add_global_options(parser)
    parser.add_argument("file", help="file to scan")
    return parser


def _is_legacy(argv: Sequence[str]) -> bool:
    """True for the bare ``imported <file>`` form."""
    positionals = []
    takes_value = False
    for arg in argv:
        if takes_value:
            takes_value = False
        elif arg == "--config":
            takes_value = True
        elif arg in ("-h", "--help"):
            return False
        elif not arg.startswith("-"):
            positionals.append(arg)
    return len(positionals) == 1 and positionals[0] not in COMMANDS


def _print_lines(lines) -> None:
    for line in lines:
        print(line)


def run(args: argparse.Namespace, config: AnalyzerConfig) -> int:
    searcher = DependencySearcher(config, show_progress=args.progress)
    logger.debug("Resolving rooted imports under %s", ", ".join(config.resolve_dirs))
    patterns = getattr(args, "pattern", None) or None

    if args.command is None:
        _print_lines(sorted(searcher.get_imports(args.file)))
    elif args.command == "ls-dependencies":
        _print_lines(sorted(searcher.list_dependencies(patterns, follow=args.follow)))
    elif args.command == "ls-dependants":
        _print_lines(searcher.list_dependants(args.file, patterns))
    elif args.command == "ls-cycles":
        if args.graph is not None:
            graph = load_import_graph(args.graph)
        else:
            graph = build_import_graph(searcher, searcher.find_modules(patterns))
        _print_lines(" -> ".join(cycle) for cycle in detect_cycles(graph))
    elif args.command == "dump-graph":
        graph = build_import_graph(searcher, searcher.find_modules(patterns))
        if args.inverted:
            graph = invert_graph(graph)
        save_import_graph(graph, args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    just_fix_windows_console()
    argv = list(sys.argv[1:] if argv is None else argv)

    if _is_legacy(argv):
        args = _build_legacy_parser().parse_args(argv)
        args.command = None
    else:
        args = _build_parser().parse_args(argv)

    try:
        config = AnalyzerConfig.from_yaml(args.config)
    except ConfigError as e:
        print(f"{Fore.RED}Invalid configuration: {e}{Style.RESET_ALL}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        return run(args, config)
    except ModuleParseError as e:
        print(f"{Fore.RED}Error while parsing: {e.filename}{Style.RESET_ALL}", file=sys.stderr)
        if e.reason:
            print(e.reason, file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
