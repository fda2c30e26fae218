"""
Configuration for the ZNS resolution system.

This module holds the read-only network tables, the source definition a
naming service is built from, client and logging settings, and the loaders
that read them from JSON files or the environment.
"""

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from dotenv import load_dotenv

DEFAULT_SOURCE = "https://api.zilliqa.com"
DEFAULT_NETWORK = "mainnet"

NETWORK_ID_MAP: Mapping[int, str] = MappingProxyType({
    1: "mainnet",
    333: "testnet",
    111: "localnet",
})

REGISTRY_MAP: Mapping[str, str] = MappingProxyType({
    "mainnet": "zil1jcgu2wlx6xejqk9jw3aaankw6lsjzeunx2j0jz",
})

URL_MAP: Mapping[str, str] = MappingProxyType({
    "mainnet": "https://api.zilliqa.com",
    "testnet": "https://dev-api.zilliqa.com",
    "localnet": "http://localhost:4201",
})

URL_NETWORK_MAP: Mapping[str, str] = MappingProxyType(
    {url: network for network, url in URL_MAP.items()}
)

LOG_FORMATS = ("json", "text", "both")


@dataclass(frozen=True)
class SourceDefinition:
    """Where a naming service reads from."""

    url: Optional[str] = None
    network: Optional[str] = None
    registry: Optional[str] = None


@dataclass(frozen=True)
class ClientConfig:
    """HTTP client settings for the RPC gateway."""

    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass(frozen=True)
class ResolutionConfig:
    """Main configuration combining all sub-configurations."""

    source: SourceDefinition = field(default_factory=SourceDefinition)
    client: ClientConfig = field(default_factory=ClientConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


SourceLike = Union[bool, str, SourceDefinition, Mapping]


def network_for_url(url: Optional[str]) -> Optional[str]:
    """Infer the network served by a known RPC url."""
    if not url:
        return None
    return URL_NETWORK_MAP.get(url) or URL_NETWORK_MAP.get(url.rstrip("/"))


def normalize_source(source: SourceLike = True) -> SourceDefinition:
    """
    Fill in a complete source definition.

    Args:
        source: ``True``/``False`` for the defaults, a url string, a
            SourceDefinition, or a mapping with url/network/registry keys
            where network may also be a numeric chain id

    Returns:
        SourceDefinition; network or url stay None when they cannot be
        inferred
    """
    if isinstance(source, bool):
        return SourceDefinition(url=DEFAULT_SOURCE, network=DEFAULT_NETWORK)

    if isinstance(source, str):
        return SourceDefinition(url=source, network=network_for_url(source))

    if isinstance(source, SourceDefinition):
        url, network, registry = source.url, source.network, source.registry
    else:
        url, network, registry = source.get("url"), source.get("network"), source.get("registry")

    if isinstance(network, int):
        network = NETWORK_ID_MAP.get(network)
    if registry:
        network = network or DEFAULT_NETWORK
        url = url or DEFAULT_SOURCE
    if network and not url:
        url = URL_MAP.get(network)
    if url and not network:
        network = network_for_url(url)

    return SourceDefinition(url=url, network=network, registry=registry)


def parse_network(value: Optional[str]) -> Union[str, int, None]:
    if value is None or value == "":
        return None
    return int(value) if value.isdigit() else value


def load_config_from_file(config_path: Path) -> Optional[ResolutionConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        ResolutionConfig if successful, None otherwise
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        source = normalize_source(data.get("source", True))

        client_data = data.get("client", {})
        client = ClientConfig(
            timeout_seconds=float(client_data.get("timeout_seconds", 10.0)),
        )

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=logging_data.get("level", "info"),
            output_format=logging_data.get("output_format", "text"),
        )

        return ResolutionConfig(source=source, client=client, logging=logging_config)

    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None
    except FileNotFoundError:
        return None


def load_config_from_env(dotenv_path: Optional[Path] = None) -> ResolutionConfig:
    """
    Build configuration from ZNS_* environment variables.

    A ``.env`` file is loaded first; variables already set in the
    environment take precedence over it.
    """
    load_dotenv(dotenv_path=dotenv_path)

    url = os.getenv("ZNS_URL") or None
    network = parse_network(os.getenv("ZNS_NETWORK"))
    registry = os.getenv("ZNS_REGISTRY") or None

    if url or network or registry:
        source = normalize_source({"url": url, "network": network, "registry": registry})
    else:
        source = normalize_source(True)

    try:
        timeout = float(os.getenv("ZNS_TIMEOUT", "10"))
    except ValueError:
        timeout = 10.0

    return ResolutionConfig(
        source=source,
        client=ClientConfig(timeout_seconds=timeout),
        logging=LoggingConfig(
            level=os.getenv("ZNS_LOG_LEVEL", "info"),
            output_format=os.getenv("ZNS_LOG_FORMAT", "text"),
        ),
    )
