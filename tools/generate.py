#!/usr/bin/env python3
"""
Droplet batch generator for saved flowcharts.

Usage:
    python tools/generate.py <subcommand> <flowchart_json> [options]

Subcommands:
    catalog <flowchart_json>                         List selectable parameters
    factorial <flowchart_json> --param NODE:NAME ... Response-surface design (>= 2 params)
    interpolate <flowchart_json> --param NODE:NAME   Linear sweep of one parameter

Options:
    --carrier <node_id>       Carrier pump to exclude (repeatable)
    --skip-end-thermostats    Hide end-stage thermostats (catalog only)

Generation options (factorial, interpolate):
    --policy <str>            "distribute" or "single" (default: distribute)
    --balancing <node_id>     Balancing pump for --policy single
    --output <path>           Write droplets.json here (default: print to stdout)
"""
import sys
import os
import json
import argparse

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dropletgen.config import DEFAULT_STEPS
from dropletgen.core.errors import DropletGenerationError
from dropletgen.design.generate import generate_factorial_droplets, generate_interpolated_droplets
from dropletgen.design.normalize import max_ratio_sum, policy_from_name
from dropletgen.export.exporter import droplets_to_json, export_droplets
from dropletgen.params.catalog import catalog_from_nodes, excluded_node_ids


def load_nodes(path):
    """Flowchart files hold either {"nodes": [...], "edges": [...]} or a bare node list."""
    with open(path, "r", encoding="utf-8") as f:
        doc = json.load(f)
    if isinstance(doc, dict):
        return doc.get("nodes", [])
    return doc


def parse_param(text):
    """NODE:NAME -> (node_id, name). The name may itself contain ':'."""
    node_id, sep, name = text.partition(":")
    if not sep or not node_id or not name:
        raise argparse.ArgumentTypeError(f"expected NODE:NAME, got {text!r}")
    return (node_id, name)


def _write(droplets, args):
    if args.output:
        export_droplets(droplets, args.output)
        print(f"Wrote {len(droplets)} droplets to {args.output}")
    else:
        print(droplets_to_json(droplets))


def cmd_catalog(args):
    nodes = load_nodes(args.flowchart_json)
    catalog = catalog_from_nodes(nodes, args.carrier, args.skip_end_thermostats)
    for spec in catalog:
        flag = " [ratio]" if spec.is_ratio else ""
        print(f"{spec.node_id}:{spec.name}  ({spec.node_name})  "
              f"{spec.min}..{spec.max} {spec.unit}  default={spec.default}{flag}")
    print(f"\nRatio max sum: {max_ratio_sum(catalog)}")
    return 0


def cmd_factorial(args):
    nodes = load_nodes(args.flowchart_json)
    catalog = catalog_from_nodes(nodes, args.carrier, True)
    droplets = generate_factorial_droplets(
        catalog,
        args.param,
        policy=policy_from_name(args.policy, args.balancing),
        excluded_node_ids=excluded_node_ids(nodes, args.carrier, True),
    )
    _write(droplets, args)
    return 0


def cmd_interpolate(args):
    nodes = load_nodes(args.flowchart_json)
    catalog = catalog_from_nodes(nodes, args.carrier, False)
    droplets = generate_interpolated_droplets(
        catalog,
        args.param,
        low=args.min,
        high=args.max,
        steps=args.steps,
        policy=policy_from_name(args.policy, args.balancing),
        excluded_node_ids=excluded_node_ids(nodes, args.carrier, False),
    )
    _write(droplets, args)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        description="Generate droplet batches from a saved flowchart"
    )

    subparsers = parser.add_subparsers(dest="command", help="Subcommand")

    # Arguments shared by every subcommand
    def add_source_args(p):
        p.add_argument("flowchart_json", help="Flowchart JSON file")
        p.add_argument("--carrier", action="append", default=[],
                       help="Carrier pump node id to exclude (repeatable)")

    # Arguments of the droplet-generating subcommands
    def add_generate_args(p):
        add_source_args(p)
        p.add_argument("--policy", choices=["distribute", "single"], default="distribute",
                       help="Pump ratio normalization policy")
        p.add_argument("--balancing", type=str, default=None,
                       help="Balancing pump node id for --policy single")
        p.add_argument("--output", type=str, help="Output droplets.json path (default: stdout)")

    # catalog subcommand
    p_cat = subparsers.add_parser("catalog", help="List selectable parameters")
    add_source_args(p_cat)
    p_cat.add_argument("--skip-end-thermostats", action="store_true",
                       help="Hide end-stage thermostats")

    # factorial subcommand
    p_fact = subparsers.add_parser("factorial", help="Response-surface design")
    add_generate_args(p_fact)
    p_fact.add_argument("--param", type=parse_param, action="append", required=True,
                        help="Design factor as NODE:NAME (repeat for each factor)")

    # interpolate subcommand
    p_interp = subparsers.add_parser("interpolate", help="Linear sweep of one parameter")
    add_generate_args(p_interp)
    p_interp.add_argument("--param", type=parse_param, required=True,
                          help="Swept parameter as NODE:NAME")
    p_interp.add_argument("--min", type=float, default=None, help="Sweep start (default: catalog min)")
    p_interp.add_argument("--max", type=float, default=None, help="Sweep end (default: catalog max)")
    p_interp.add_argument("--steps", type=int, default=DEFAULT_STEPS, help="Number of droplets")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "catalog":
            return cmd_catalog(args)
        elif args.command == "factorial":
            return cmd_factorial(args)
        elif args.command == "interpolate":
            return cmd_interpolate(args)
    except DropletGenerationError as e:
        print(f"Error: {e.detail}", file=sys.stderr)
        return 2

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
