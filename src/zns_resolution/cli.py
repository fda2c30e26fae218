"""
Command-line interface for the ZNS resolution system.

This module provides the ``zns`` entry point with commands for:
- resolve: Owner, ttl and crypto addresses of a domain
- address: A single crypto address by ticker
- owner / resolver: Registry data of a domain
- record / records: Resolver records, one or all
- namehash / childhash: Node identifiers, computed offline
- supported: Whether a domain and the configured network are supported
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from . import __version__
from .config import (
    ClientConfig,
    LoggingConfig,
    LOG_FORMATS,
    ResolutionConfig,
    load_config_from_env,
    load_config_from_file,
    normalize_source,
    parse_network,
)
from .exceptions import ResolutionError
from .resolution_logger import ResolutionLogger
from .zns import Zns


def build_config(args: argparse.Namespace) -> Optional[ResolutionConfig]:
    """
    Resolve configuration from file or environment, then apply CLI overrides.

    Returns:
        ResolutionConfig, or None if an explicit config file could not be loaded
    """
    if args.config:
        config = load_config_from_file(Path(args.config))
        if config is None:
            print(f"Error: Could not load config from {args.config}", file=sys.stderr)
            return None
    else:
        config = load_config_from_env()

    source = config.source
    if args.url or args.network or args.registry:
        source = normalize_source({
            "url": args.url,
            "network": parse_network(args.network),
            "registry": args.registry,
        })

    client = config.client
    if args.timeout is not None:
        client = ClientConfig(timeout_seconds=args.timeout)

    logging_config = config.logging
    if args.verbose or args.log_format:
        logging_config = LoggingConfig(
            level="debug" if args.verbose else logging_config.level,
            output_format=args.log_format or logging_config.output_format,
        )

    return ResolutionConfig(source=source, client=client, logging=logging_config)


def create_service(config: ResolutionConfig) -> Zns:
    """Build the naming service and its logger from configuration."""
    logger = ResolutionLogger.from_config(
        level=config.logging.level,
        output_format=config.logging.output_format,
    )
    return Zns(source=config.source, client_config=config.client, logger=logger)


async def run_with_service(
    config: ResolutionConfig,
    operation: Callable[[Zns], Awaitable[Any]],
) -> int:
    """
    Run one operation against a fresh service and print its result.

    Returns:
        Exit code (0 on success, 1 on a resolution error)
    """
    try:
        async with create_service(config) as zns:
            result = await operation(zns)
    except ResolutionError as e:
        print(f"error: {e.code.value}: {e.message}", file=sys.stderr)
        return 1

    print_result(result)
    return 0


def print_result(result: Any) -> None:
    """Print strings as-is and everything else as indented JSON."""
    if hasattr(result, "to_dict"):
        result = result.to_dict()
    if isinstance(result, str):
        print(result)
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))


def _command(operation: Callable[[Zns, argparse.Namespace], Awaitable[Any]]) -> Callable[[argparse.Namespace], int]:
    def handler(args: argparse.Namespace) -> int:
        config = build_config(args)
        if config is None:
            return 1
        return asyncio.run(run_with_service(config, lambda zns: operation(zns, args)))

    return handler


async def _resolve(zns: Zns, args: argparse.Namespace) -> Any:
    return await zns.resolve(args.domain)


async def _address(zns: Zns, args: argparse.Namespace) -> Any:
    return await zns.address(args.domain, args.ticker)


async def _owner(zns: Zns, args: argparse.Namespace) -> Any:
    return await zns.owner(args.domain)


async def _record(zns: Zns, args: argparse.Namespace) -> Any:
    return await zns.record(args.domain, args.field)


async def _records(zns: Zns, args: argparse.Namespace) -> Any:
    if args.tree:
        return await zns.resolution(args.domain)
    return await zns.records(args.domain)


async def _resolver(zns: Zns, args: argparse.Namespace) -> Any:
    return await zns.resolver(args.domain)


async def _namehash(zns: Zns, args: argparse.Namespace) -> Any:
    return zns.namehash(args.domain)


async def _childhash(zns: Zns, args: argparse.Namespace) -> Any:
    return zns.childhash(args.parent, args.label)


async def _supported(zns: Zns, args: argparse.Namespace) -> Any:
    return {
        "domain": args.domain,
        "supported_domain": zns.is_supported_domain(args.domain),
        "supported_network": zns.is_supported_network(),
        "network": zns.network,
        "registry": zns.registry_address,
    }


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    common.add_argument(
        "--url",
        help="JSON-RPC url of a Zilliqa API node",
    )
    common.add_argument(
        "--network", "-n",
        help="Network name or chain id (mainnet, testnet, localnet, 1, 333, 111)",
    )
    common.add_argument(
        "--registry",
        help="Registry contract address (zil1... or 0x...)",
    )
    common.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds",
    )
    common.add_argument(
        "--log-format",
        choices=list(LOG_FORMATS),
        help="Log output format on stderr",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every resolution step",
    )

    parser = argparse.ArgumentParser(
        prog="zns",
        description="Resolve Zilliqa Naming Service (.zil) domains",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    resolve_parser = subparsers.add_parser("resolve", parents=[common], help="Resolve owner, ttl and crypto addresses")
    resolve_parser.add_argument("domain", help="Domain to resolve (e.g., brad.zil)")
    resolve_parser.set_defaults(func=_command(_resolve))

    address_parser = subparsers.add_parser("address", parents=[common], help="Crypto address for a currency ticker")
    address_parser.add_argument("domain", help="Domain to resolve")
    address_parser.add_argument("ticker", help="Currency ticker (e.g., ZIL, ETH, BTC)")
    address_parser.set_defaults(func=_command(_address))

    owner_parser = subparsers.add_parser("owner", parents=[common], help="Owner address of a domain")
    owner_parser.add_argument("domain", help="Domain to look up")
    owner_parser.set_defaults(func=_command(_owner))

    record_parser = subparsers.add_parser("record", parents=[common], help="A single resolver record")
    record_parser.add_argument("domain", help="Domain to look up")
    record_parser.add_argument("field", help="Dotted record key (e.g., ipfs.html.value)")
    record_parser.set_defaults(func=_command(_record))

    records_parser = subparsers.add_parser("records", parents=[common], help="All resolver records")
    records_parser.add_argument("domain", help="Domain to look up")
    records_parser.add_argument(
        "--tree",
        action="store_true",
        help="Print records as a nested tree",
    )
    records_parser.set_defaults(func=_command(_records))

    resolver_parser = subparsers.add_parser("resolver", parents=[common], help="Resolver contract address")
    resolver_parser.add_argument("domain", help="Domain to look up")
    resolver_parser.set_defaults(func=_command(_resolver))

    namehash_parser = subparsers.add_parser("namehash", parents=[common], help="Namehash of a .zil domain")
    namehash_parser.add_argument("domain", help="Domain to hash")
    namehash_parser.set_defaults(func=_command(_namehash))

    childhash_parser = subparsers.add_parser("childhash", parents=[common], help="Namehash of a label under a parent node")
    childhash_parser.add_argument("parent", help="Parent node as 0x-prefixed hex")
    childhash_parser.add_argument("label", help="Child label")
    childhash_parser.set_defaults(func=_command(_childhash))

    supported_parser = subparsers.add_parser("supported", parents=[common], help="Check domain and network support")
    supported_parser.add_argument("domain", help="Domain to check")
    supported_parser.set_defaults(func=_command(_supported))

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
