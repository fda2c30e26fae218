"""
Enumeration types for the ZNS resolution system.

These enums provide type-safe constants for naming service names, error codes,
resolution states and logging levels throughout the system.
"""

from enum import Enum


class NamingServiceName(Enum):
    """Naming services this package can resolve against."""

    ZNS = "ZNS"


class ResolutionErrorCode(Enum):
    """Error codes surfaced by resolution operations."""

    UNREGISTERED_DOMAIN = "UnregisteredDomain"
    UNSPECIFIED_RESOLVER = "UnspecifiedResolver"
    UNSPECIFIED_CURRENCY = "UnspecifiedCurrency"
    RECORD_NOT_FOUND = "RecordNotFound"
    UNSUPPORTED_DOMAIN = "UnsupportedDomain"
    MALFORMED_ADDRESS = "MalformedAddress"
    NAMING_SERVICE_DOWN = "NamingServiceDown"
    CONFIGURATION_ERROR = "ConfigurationError"


class ResolutionState(Enum):
    """
    States a single resolution request moves through.

    Transitions only go forward; UNCLAIMED and DONE are terminal.
    """

    SUPPORT_CHECK = "support_check"
    REGISTRY_LOOKUP = "registry_lookup"
    OWNER_NORMALIZE = "owner_normalize"
    RESOLVER_LOOKUP = "resolver_lookup"
    STRUCTURE = "structure"
    EXTRACT = "extract"
    UNCLAIMED = "unclaimed"
    DONE = "done"

    @property
    def is_terminal(self) -> bool:
        return self in (ResolutionState.UNCLAIMED, ResolutionState.DONE)


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
}
