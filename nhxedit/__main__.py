#!/usr/bin/env python3
"""
Command-line interface for editing Newick/NHX trees.

Reads a tree, applies the requested edits in a fixed order (remove,
multifurcate, reroot, ladderize, search) and writes the result as Newick.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from nhxedit.config import EditorConfig
from nhxedit.exceptions import EditError, SearchPatternError
from nhxedit.io import write_newick
from nhxedit.session import TreeSession

logger = logging.getLogger("nhxedit")


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Configure and return the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="nhxedit",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input",
        help="Newick/NHX file to read ('-' for standard input)",
        type=str,
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write the edited tree here instead of standard output",
        type=Path,
    )

    editing_group = parser.add_argument_group("editing options")
    editing_group.add_argument(
        "--remove",
        help="Remove the node with this name and its subtree (repeatable)",
        action="append",
        default=[],
        metavar="NAME",
    )
    editing_group.add_argument(
        "--multifurcate",
        help="Contract the edge above the node with this name (repeatable)",
        action="append",
        default=[],
        metavar="NAME",
    )
    editing_group.add_argument(
        "--reroot",
        help="Place the root on the edge above the node with this name",
        metavar="NAME",
    )
    editing_group.add_argument(
        "--distance",
        help="Distance of the new root from the --reroot node (default: midpoint)",
        type=float,
    )
    editing_group.add_argument(
        "--ladderize",
        help="Reorder children so that deeper clades come first",
        action="store_true",
    )
    editing_group.add_argument(
        "--search",
        help="Highlight leaves matching this case-insensitive regular expression",
        metavar="PATTERN",
    )

    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "--pretty",
        help="Put a line break after every separator",
        action="store_true",
    )
    output_group.add_argument(
        "--info",
        help="Print a summary table to standard error",
        action="store_true",
    )
    output_group.add_argument(
        "--strict",
        help="Exit with an error if the input is not well formed",
        action="store_true",
    )
    output_group.add_argument(
        "-v",
        "--verbose",
        help="Log every editing step",
        action="store_true",
    )
    return parser


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def summary_table(session: TreeSession) -> str:
    info = session.info()
    highlighted = [leaf.name for leaf in session.tree.leaves() if leaf.highlighted]
    rows = [
        ["# leaves", info["tips"]],
        ["# nodes", info["nodes"]],
        ["errors", ", ".join(info["errors"]) or "none"],
        ["highlighted", ", ".join(highlighted) or "-"],
    ]
    return tabulate(rows, tablefmt="simple")


def apply_edits(session: TreeSession, args: argparse.Namespace) -> None:
    tree = session.tree
    for name in args.remove:
        session.remove(tree.find(name))
    for name in args.multifurcate:
        session.multifurcate(tree.find(name))
    if args.reroot:
        session.reroot(tree.find(args.reroot), args.distance)
    if args.ladderize:
        session.ladderize()
    if args.search is not None:
        session.search(args.search)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = EditorConfig.from_env()
    config.pretty_output = args.pretty
    session = TreeSession(config)

    try:
        errors = session.load(read_input(args.input))
    except OSError as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return 1
    for message in errors:
        print(f"Parsing ERROR: {message}!", file=sys.stderr)
    if errors and args.strict:
        return 1

    try:
        apply_edits(session, args)
    except (EditError, SearchPatternError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    newick = write_newick(session.tree, pretty=args.pretty)
    if args.output:
        args.output.write_text(newick if args.pretty else newick + "\n", encoding="utf-8")
        logger.info("Wrote %d tips to %s", session.tree.tip_count, args.output)
    else:
        sys.stdout.write(newick if args.pretty else newick + "\n")

    if args.info:
        print(summary_table(session), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
