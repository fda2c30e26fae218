"""
ZNS Resolution - Zilliqa Naming Service domain resolution.

This package resolves ``.zil`` domains to their owner, resolver and resolver
records by reading the ZNS registry and resolver contracts over JSON-RPC.
"""

__version__ = "0.1.0"
__author__ = "ZNS Resolution Team"

from zns_resolution.exceptions import (
    ResolutionError,
    UnregisteredDomainError,
    UnspecifiedResolverError,
    UnspecifiedCurrencyError,
    RecordNotFoundError,
    UnsupportedDomainError,
    MalformedAddressError,
    NamingServiceDownError,
    ConfigurationError,
)
from zns_resolution.enums import (
    NamingServiceName,
    ResolutionErrorCode,
    ResolutionState,
    LogLevel,
)
from zns_resolution.namehash import (
    ROOT_NODE,
    namehash,
    childhash,
    labelhash,
    node_to_hex,
)
from zns_resolution.records import (
    Tree,
    StructureConflict,
    structure_records,
    flatten_records,
    get_path,
)
from zns_resolution.address import (
    to_checksum_address,
    to_bech32_address,
    from_bech32_address,
    to_display_address,
    to_canonical_address,
    is_null_address,
)
from zns_resolution.config import (
    SourceDefinition,
    ClientConfig,
    LoggingConfig,
    ResolutionConfig,
    normalize_source,
    load_config_from_file,
    load_config_from_env,
)
from zns_resolution.models import (
    RegistryRecord,
    ResolutionMeta,
    ResolutionResponse,
    ResolutionContext,
    unclaimed_response,
)
from zns_resolution.resolution_logger import (
    ResolutionLogger,
    LogEntry,
)
from zns_resolution.rpc_client import ZilliqaRPCClient
from zns_resolution.resolution import ResolutionPipeline, SubStateGateway
from zns_resolution.zns import Zns

__all__ = [
    # Exceptions
    "ResolutionError",
    "UnregisteredDomainError",
    "UnspecifiedResolverError",
    "UnspecifiedCurrencyError",
    "RecordNotFoundError",
    "UnsupportedDomainError",
    "MalformedAddressError",
    "NamingServiceDownError",
    "ConfigurationError",
    # Enums
    "NamingServiceName",
    "ResolutionErrorCode",
    "ResolutionState",
    "LogLevel",
    # Namehash
    "ROOT_NODE",
    "namehash",
    "childhash",
    "labelhash",
    "node_to_hex",
    # Records
    "Tree",
    "StructureConflict",
    "structure_records",
    "flatten_records",
    "get_path",
    # Addresses
    "to_checksum_address",
    "to_bech32_address",
    "from_bech32_address",
    "to_display_address",
    "to_canonical_address",
    "is_null_address",
    # Configuration
    "SourceDefinition",
    "ClientConfig",
    "LoggingConfig",
    "ResolutionConfig",
    "normalize_source",
    "load_config_from_file",
    "load_config_from_env",
    # Models
    "RegistryRecord",
    "ResolutionMeta",
    "ResolutionResponse",
    "ResolutionContext",
    "unclaimed_response",
    # Logging
    "ResolutionLogger",
    "LogEntry",
    # Gateway and pipeline
    "ZilliqaRPCClient",
    "ResolutionPipeline",
    "SubStateGateway",
    # Naming service
    "Zns",
]
