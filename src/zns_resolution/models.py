"""
Data models for the ZNS resolution system.

Every model is an immutable value object built fresh for each request.
"""

from dataclasses import dataclass, field
from typing import Optional

from .enums import NamingServiceName, ResolutionState
from .records import Tree


@dataclass(frozen=True)
class RegistryRecord:
    """Owner and resolver stored in the registry for a domain's node."""

    owner: Optional[str]
    resolver: Optional[str]


@dataclass(frozen=True)
class ResolutionMeta:
    """Metadata section of a resolution response."""

    owner: Optional[str]
    type: str = NamingServiceName.ZNS.value
    ttl: int = 0


@dataclass(frozen=True)
class ResolutionResponse:
    """Typed view of a domain's owner and crypto addresses."""

    addresses: dict[str, str]
    meta: ResolutionMeta

    @property
    def is_unclaimed(self) -> bool:
        return self.meta.owner is None

    def to_dict(self) -> dict:
        """Convert response to dictionary for serialization."""
        return {
            "addresses": dict(self.addresses),
            "meta": {
                "owner": self.meta.owner,
                "type": self.meta.type,
                "ttl": self.meta.ttl,
            },
        }


def unclaimed_response(service: NamingServiceName = NamingServiceName.ZNS) -> ResolutionResponse:
    """The sentinel returned for domains nobody owns."""
    return ResolutionResponse(
        addresses={},
        meta=ResolutionMeta(owner=None, type=service.value, ttl=0),
    )


@dataclass(frozen=True)
class ResolutionContext:
    """
    Everything known about one request at a given state.

    Each transition of the resolution pipeline returns a new context.
    """

    domain: str
    state: ResolutionState = ResolutionState.SUPPORT_CHECK
    node: Optional[bytes] = None
    registry_record: Optional[RegistryRecord] = None
    owner: Optional[str] = None
    records: dict[str, str] = field(default_factory=dict)
    tree: Tree = field(default_factory=dict)
    response: Optional[ResolutionResponse] = None
