"""
Exception classes for the ZNS resolution system.

All exceptions inherit from ResolutionError and provide structured
error information with codes, messages, and optional details. The
offending domain (and ticker, record name or address where relevant)
travels in ``details`` for diagnostics.
"""

from typing import Optional

from .enums import ResolutionErrorCode


class ResolutionError(Exception):
    """Base exception for all resolution errors."""

    def __init__(
        self,
        code: ResolutionErrorCode,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value!r}, message={self.message!r})"

    @property
    def domain(self) -> Optional[str]:
        """Domain the failing operation was called with, if any."""
        return self.details.get("domain")

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class UnregisteredDomainError(ResolutionError):
    """Raised when a domain has no registry entry or no owner."""

    def __init__(self, domain: str) -> None:
        super().__init__(
            code=ResolutionErrorCode.UNREGISTERED_DOMAIN,
            message=f"Domain {domain} is not registered",
            details={"domain": domain},
        )


class UnspecifiedResolverError(ResolutionError):
    """Raised when a domain is owned but has no resolver configured."""

    def __init__(self, domain: str) -> None:
        super().__init__(
            code=ResolutionErrorCode.UNSPECIFIED_RESOLVER,
            message=f"Domain {domain} is not configured",
            details={"domain": domain},
        )


class UnspecifiedCurrencyError(ResolutionError):
    """Raised when a domain has no address for the requested ticker."""

    def __init__(self, domain: str, currency_ticker: str) -> None:
        super().__init__(
            code=ResolutionErrorCode.UNSPECIFIED_CURRENCY,
            message=f"Domain {domain} has no {currency_ticker} attached to it",
            details={"domain": domain, "currency_ticker": currency_ticker},
        )


class RecordNotFoundError(ResolutionError):
    """Raised when a dotted-path field is absent from the resolver records."""

    def __init__(self, domain: str, record_name: str) -> None:
        super().__init__(
            code=ResolutionErrorCode.RECORD_NOT_FOUND,
            message=f"No {record_name} record found for {domain}",
            details={"domain": domain, "record_name": record_name},
        )


class UnsupportedDomainError(ResolutionError):
    """Raised when the top-level label does not belong to the service."""

    def __init__(self, domain: str) -> None:
        super().__init__(
            code=ResolutionErrorCode.UNSUPPORTED_DOMAIN,
            message=f"Domain {domain} is not supported",
            details={"domain": domain},
        )


class MalformedAddressError(ResolutionError):
    """Raised when the address codec receives structurally invalid input."""

    def __init__(self, address: object, reason: str, domain: Optional[str] = None) -> None:
        details = {"address": address, "reason": reason}
        if domain is not None:
            details["domain"] = domain
        super().__init__(
            code=ResolutionErrorCode.MALFORMED_ADDRESS,
            message=f"Malformed address {address!r}: {reason}",
            details=details,
        )


class NamingServiceDownError(ResolutionError):
    """Raised when the RPC gateway transport fails."""

    def __init__(
        self,
        method: str,
        reason: str = "",
        url: Optional[str] = None,
    ) -> None:
        details = {"method": method}
        if reason:
            details["reason"] = reason
        if url is not None:
            details["url"] = url
        super().__init__(
            code=ResolutionErrorCode.NAMING_SERVICE_DOWN,
            message=f"{method} naming service is down" + (f": {reason}" if reason else ""),
            details=details,
        )


class ConfigurationError(ResolutionError):
    """Raised when the naming service source is configured incorrectly."""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(
            code=ResolutionErrorCode.CONFIGURATION_ERROR,
            message=message,
            details=details,
        )
