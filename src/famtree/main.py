"""
Command-line entry point.

1) Load person records from a JSON member export or a GEDCOM file.
2) Build the family graph and assign generation levels.
3) Validate the graph for dangling links, cycles and date problems.
4) Compute the tree layout (detailed or compact).
5) Plot it, and optionally export DOT and GraphML.
"""

import argparse
import logging
from pathlib import Path

import networkx as nx

from famtree.graph import to_networkx
from famtree.layout import config_for
from famtree.pipeline import build_tree_view
from famtree.plotting import plot_layout, write_dot
from famtree.repository import repository_for
from famtree.validation import validate_graph

MAX_WARNINGS_SHOWN = 10


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lay out a family tree and render it.")
    parser.add_argument("input", type=Path, help="Path to a .json member list or a .ged file.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("family_tree.png"),
        help="Path to the rendered image, png/svg/pdf (default: family_tree.png).",
    )
    parser.add_argument("--compact", action="store_true", help="Use the compact node layout.")
    parser.add_argument("--dot", type=Path, help="Also write a Graphviz DOT file with pinned positions.")
    parser.add_argument("--graphml", type=Path, help="Also write the graph as GraphML.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.input.exists():
        print(f"Input file not found: {args.input}")
        return 1

    print(f"Loading persons from: {args.input}")
    try:
        persons = repository_for(args.input).list_persons()
    except ValueError as e:
        print(f"Could not load persons: {e}")
        return 1
    print(f"  Found {len(persons)} persons")

    print("Building family graph...")
    view = build_tree_view(persons, config_for(args.compact))
    graph = view.graph
    print(f"  Graph has {len(graph)} persons and {len(graph.root_ids)} roots")

    print("Validating graph...")
    warnings = validate_graph(graph)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:MAX_WARNINGS_SHOWN]:
            print(f"    - {w}")
        if len(warnings) > MAX_WARNINGS_SHOWN:
            print(f"    ... and {len(warnings) - MAX_WARNINGS_SHOWN} more")
    else:
        print("  No validation issues found")

    print(f"Plotting tree to: {args.output}")
    plot_layout(view, args.output)

    if args.dot:
        print(f"Writing DOT file: {args.dot}")
        write_dot(view, args.dot)

    if args.graphml:
        print(f"Writing GraphML file: {args.graphml}")
        nx.write_graphml(to_networkx(graph), args.graphml)

    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
