"""
Command-line tool for offline layout and pathway computation.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from mechnet.config import DEFAULT_MAX_DEPTH, LayoutConfig, load_layout_config
from mechnet.errors import MechnetError
from mechnet.io import layout_to_dict, load_graph, parse_target, pathway_config_to_dict, stats_to_dict
from mechnet.layout.pipeline import layout_visible
from mechnet.log import get_logger, setup_logger
from mechnet.pathway.stats import calculate_all_drug_pathways, calculate_pathway_config, get_pathway_stats

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mechnet",
        description="Layout and pathway analysis for mechanistic causal networks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Lay out two modules, bridging the hidden ones
    mechnet layout network.json --modules M01,M02 --config layout.yaml

    # Pathway of a custom two-target intervention
    mechnet pathway network.json --target mtorc1:inhibits --target ampk:activates:strong

    # Pathways for every drug in the dataset's library
    mechnet drugs network.json --output pathways.json
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layout_parser = subparsers.add_parser("layout", help="Compute node positions and back edges")
    layout_parser.add_argument("dataset", help="Dataset JSON file")
    layout_parser.add_argument("--modules", help="Comma-separated module ids to show (default: all)")
    layout_parser.add_argument("--config", help="Layout configuration YAML file")
    layout_parser.add_argument("--output", help="Output JSON file (default: stdout)")

    pathway_parser = subparsers.add_parser("pathway", help="Compute the pathway of a set of targets")
    pathway_parser.add_argument("dataset", help="Dataset JSON file")
    pathway_parser.add_argument(
        "--target",
        action="append",
        required=True,
        help="Target as NODE[:EFFECT[:STRENGTH]]; repeatable",
    )
    pathway_parser.add_argument("--id", default="custom", help="Identifier stored in the result")
    pathway_parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, help="Traversal depth")
    pathway_parser.add_argument("--output", help="Output JSON file (default: stdout)")

    drugs_parser = subparsers.add_parser("drugs", help="Compute pathways for every drug in the dataset")
    drugs_parser.add_argument("dataset", help="Dataset JSON file")
    drugs_parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, help="Traversal depth")
    drugs_parser.add_argument("--output", help="Output JSON file (default: stdout)")

    return parser


def _write_json(payload: Any, output: str | None) -> None:
    text = json.dumps(payload, indent=2)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        logger.info("wrote %s", output)
    else:
        print(text)


def _run_layout(args: argparse.Namespace) -> None:
    graph = load_graph(args.dataset)
    config = load_layout_config(args.config) if args.config else LayoutConfig()
    module_ids = [m.strip() for m in args.modules.split(",") if m.strip()] if args.modules else None

    result = layout_visible(graph, module_ids, config)
    logger.info(
        "laid out %d nodes, %d back edges, %d crossings",
        len(result.positions),
        len(result.back_edges),
        result.crossings,
    )
    _write_json(layout_to_dict(result), args.output)


def _run_pathway(args: argparse.Namespace) -> None:
    graph = load_graph(args.dataset)
    targets = [parse_target(t) for t in args.target]

    config = calculate_pathway_config(args.id, targets, graph, args.max_depth)
    payload = pathway_config_to_dict(config)
    payload["stats"] = stats_to_dict(get_pathway_stats(config))
    _write_json(payload, args.output)


def _run_drugs(args: argparse.Namespace) -> None:
    graph = load_graph(args.dataset)
    pathways = calculate_all_drug_pathways(graph.drugs, graph, args.max_depth)
    logger.info("computed pathways for %d drugs", len(pathways))

    payload = {}
    for drug_id, config in pathways.items():
        entry = pathway_config_to_dict(config)
        entry["stats"] = stats_to_dict(get_pathway_stats(config))
        payload[drug_id] = entry
    _write_json(payload, args.output)


COMMANDS = {
    "layout": _run_layout,
    "pathway": _run_pathway,
    "drugs": _run_drugs,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    setup_logger(level="DEBUG" if args.verbose else "INFO")

    try:
        COMMANDS[args.command](args)
    except (MechnetError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
