#!/usr/bin/env python3
"""Command-line entry point for the discrete-lab demos.

Runs one algorithm on its sample data set and prints the result as JSON.
Settings come from an optional YAML configuration file plus
DISCRETE_LAB_* environment overrides.
"""

import argparse
import json
import sys
from typing import Any

import structlog

from discrete_lab.config import LabConfig, load_config
from discrete_lab.crypto import KeyExchange, random_parameters
from discrete_lab.log_config import command_context, configure_logging
from discrete_lab.network import Network, find_shortest_path, path_cost
from discrete_lab.ordering import (
    CycleDetectedError,
    EnumerationTooLargeError,
    HasseDiagram,
    InstructionSet,
    all_topological_orders,
    compute_levels,
    hasse_layout,
)
from discrete_lab.rbac import AccessPolicy
from discrete_lab.social import SocialGraph, friend_recommendations

logger = structlog.get_logger(__name__)


def run_levels(_args: argparse.Namespace, config: LabConfig) -> dict[str, Any]:
    program = InstructionSet.default()
    return {
        "levels": compute_levels(program),
        "positions": hasse_layout(
            program,
            vertical_spacing=config.ordering.vertical_spacing,
            horizontal_spacing=config.ordering.horizontal_spacing,
        ),
    }


def run_orders(_args: argparse.Namespace, config: LabConfig) -> dict[str, Any]:
    program = InstructionSet.default()
    orders = all_topological_orders(
        program,
        limit=config.ordering.max_orders,
        max_nodes=config.ordering.max_enumeration_nodes,
    )
    names = {inst.id: inst.name for inst in program}
    return {"orders": [[names[i] for i in order] for order in orders]}


def run_hasse(args: argparse.Namespace, _config: LabConfig) -> str:
    return HasseDiagram(InstructionSet.default()).render(args.format)


def run_key_exchange(args: argparse.Namespace, config: LabConfig) -> dict[str, Any]:
    if args.random:
        params = random_parameters(primes=config.crypto.primes)
    else:
        params = KeyExchange(p=args.p, g=args.g, private_a=args.a, private_b=args.b)
    result = params.derive()
    return {
        "p": params.p,
        "g": params.g,
        "public_a": result.public_a,
        "public_b": result.public_b,
        "shared_a": result.shared_a,
        "shared_b": result.shared_b,
        "keys_match": result.keys_match,
        "warnings": params.check(),
    }


def run_route(args: argparse.Namespace, _config: LabConfig) -> dict[str, Any]:
    network = Network.default()
    path = find_shortest_path(network, args.source, args.target)
    return {
        "path": [network.get(rid).name for rid in path],
        "cost": path_cost(network, path) if path else None,
    }


def run_recommend(args: argparse.Namespace, _config: LabConfig) -> dict[str, Any]:
    graph = SocialGraph.default()
    recommended = friend_recommendations(graph, args.person)
    return {"recommendations": [graph.get(pid).name for pid in recommended]}


def run_check(args: argparse.Namespace, _config: LabConfig) -> dict[str, Any]:
    policy = AccessPolicy.default()
    return {"allowed": policy.check_permission(args.user, args.permission)}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Discrete mathematics demos - run one algorithm on its sample data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py orders
  python main.py route 1 4
  python main.py key-exchange --p 23 --g 5 --a 6 --b 15
  python main.py hasse --format dot --debug
        """,
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Path to configuration YAML file (default: discrete_lab.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured logging level",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug output (DEBUG level)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    levels = sub.add_parser("levels", help="Hasse diagram levels and positions")
    levels.set_defaults(handler=run_levels)

    orders = sub.add_parser("orders", help="All valid execution orders")
    orders.set_defaults(handler=run_orders)

    hasse = sub.add_parser("hasse", help="Export the Hasse diagram")
    hasse.add_argument("--format", default="mermaid", help="mermaid or dot")
    hasse.set_defaults(handler=run_hasse)

    key_exchange = sub.add_parser("key-exchange", help="Toy Diffie-Hellman exchange")
    key_exchange.add_argument("--p", type=int, default=23)
    key_exchange.add_argument("--g", type=int, default=5)
    key_exchange.add_argument("--a", type=int, default=6)
    key_exchange.add_argument("--b", type=int, default=15)
    key_exchange.add_argument("--random", action="store_true", help="Pick random demo parameters")
    key_exchange.set_defaults(handler=run_key_exchange)

    route = sub.add_parser("route", help="Shortest path between two routers")
    route.add_argument("source")
    route.add_argument("target")
    route.set_defaults(handler=run_route)

    recommend = sub.add_parser("recommend", help="Friend recommendations for a person")
    recommend.add_argument("person")
    recommend.set_defaults(handler=run_recommend)

    check = sub.add_parser("check", help="Simulated permission check")
    check.add_argument("user")
    check.add_argument("permission")
    check.set_defaults(handler=run_check)

    args = parser.parse_args(argv)
    if args.debug:
        args.log_level = "DEBUG"
    return args


def main(argv: list[str] | None = None) -> int:
    """Run the selected demo.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        configure_logging(args.log_level or "INFO")
        logger.exception("configuration_error", config_path=args.config, error=str(e))
        return 1

    configure_logging(args.log_level or config.logging_level, json_logs=config.json_logs)

    with command_context(args.command):
        for warning in config.validate_config():
            logger.debug("configuration_warning", message=warning)

        try:
            output = args.handler(args, config)
        except (CycleDetectedError, EnumerationTooLargeError, ValueError) as e:
            logger.exception("demo_failed", error=str(e))
            return 1

    if isinstance(output, str):
        print(output)  # noqa: T201
    else:
        print(json.dumps(output, indent=2))  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
