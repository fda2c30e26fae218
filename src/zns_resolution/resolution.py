"""
Resolution state machine.

One request moves forward through the states of ResolutionState, one
transition method per state, each returning a fresh ResolutionContext:

    SUPPORT_CHECK -> REGISTRY_LOOKUP -> OWNER_NORMALIZE -> RESOLVER_LOOKUP
        -> STRUCTURE -> EXTRACT -> DONE

SUPPORT_CHECK and REGISTRY_LOOKUP may short-circuit to UNCLAIMED. Errors
raised by the gateway or the address codec propagate to the caller.
"""

import re
from dataclasses import replace
from typing import Any, Awaitable, Callable, Optional, Protocol, runtime_checkable

from .address import is_null_address, to_canonical_address, to_display_address
from .enums import LogLevel, NamingServiceName, ResolutionState
from .models import (
    RegistryRecord,
    ResolutionContext,
    ResolutionMeta,
    ResolutionResponse,
    unclaimed_response,
)
from .namehash import namehash, node_to_hex
from .records import StructureConflict, Tree, structure_records
from .resolution_logger import NullLogger, ResolutionLogger

RECORDS_FIELD = "records"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@runtime_checkable
class SubStateGateway(Protocol):
    """Anything that can read a contract field over RPC."""

    async def fetch_sub_state(
        self,
        contract_address: str,
        field: str,
        keys: Optional[list[str]] = None,
    ) -> Optional[dict[str, Any]]:
        ...


def parse_ttl(value: object) -> int:
    """
    Integer ttl taken from the leading digits of the value.

    ``"300s"`` gives 300 and ``"1.5"`` gives 1; a value without leading
    digits, or a missing one, gives 0.
    """
    if value is None:
        return 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def extract_addresses(tree: Tree) -> dict[str, str]:
    """Flatten the crypto.<TICKER>.address branch to ticker -> address."""
    crypto = tree.get("crypto")
    if not isinstance(crypto, dict):
        return {}
    addresses = {}
    for ticker, entry in crypto.items():
        if isinstance(entry, dict) and isinstance(entry.get("address"), str):
            addresses[ticker] = entry["address"]
    return addresses


class ResolutionPipeline:
    """
    Drives a domain through registry lookup, resolver lookup, structuring
    and extraction.

    The pipeline holds only read-only configuration, so one instance can
    serve any number of concurrent requests.
    """

    def __init__(
        self,
        gateway: SubStateGateway,
        registry_address: Optional[str],
        tld: str = "zil",
        service: NamingServiceName = NamingServiceName.ZNS,
        logger: Optional[ResolutionLogger] = None,
    ) -> None:
        self._gateway = gateway
        self._registry_address = registry_address
        self._tld = tld
        self._service = service
        self._logger = logger or NullLogger()
        self._transitions: dict[
            ResolutionState,
            Callable[[ResolutionContext], Awaitable[ResolutionContext]],
        ] = {
            ResolutionState.SUPPORT_CHECK: self.support_check,
            ResolutionState.REGISTRY_LOOKUP: self.registry_lookup,
            ResolutionState.OWNER_NORMALIZE: self.owner_normalize,
            ResolutionState.RESOLVER_LOOKUP: self.resolver_lookup,
            ResolutionState.STRUCTURE: self.structure,
            ResolutionState.EXTRACT: self.extract,
        }

    def is_supported_domain(self, domain: str) -> bool:
        labels = domain.split(".")
        return bool(domain) and labels[-1] == self._tld

    def is_supported_network(self) -> bool:
        return self._registry_address is not None

    async def run(
        self,
        domain: str,
        stop_at: ResolutionState = ResolutionState.DONE,
    ) -> ResolutionContext:
        """
        Advance a fresh context until it reaches ``stop_at`` or a terminal
        state.

        Args:
            domain: Domain to resolve
            stop_at: First state that is not executed

        Returns:
            The context in its final state
        """
        context = ResolutionContext(domain=domain)
        while not context.state.is_terminal and context.state is not stop_at:
            previous = context.state
            context = await self._transitions[previous](context)
            self._logger.log_transition(domain, previous, context.state)
        return context

    def _unclaimed(self, context: ResolutionContext) -> ResolutionContext:
        return replace(
            context,
            state=ResolutionState.UNCLAIMED,
            response=unclaimed_response(self._service),
        )

    async def support_check(self, context: ResolutionContext) -> ResolutionContext:
        if not self.is_supported_domain(context.domain) or not self.is_supported_network():
            return self._unclaimed(context)
        return replace(context, state=ResolutionState.REGISTRY_LOOKUP)

    async def registry_lookup(self, context: ResolutionContext) -> ResolutionContext:
        node = namehash(context.domain)
        value = await self.get_contract_map_value(
            self._registry_address,
            RECORDS_FIELD,
            node_to_hex(node),
        )
        if not value:
            return self._unclaimed(replace(context, node=node))

        arguments = value.get("arguments", []) if isinstance(value, dict) else list(value)
        arguments = list(arguments) + [None, None]
        record = RegistryRecord(owner=arguments[0], resolver=arguments[1])
        return replace(
            context,
            state=ResolutionState.OWNER_NORMALIZE,
            node=node,
            registry_record=record,
        )

    async def owner_normalize(self, context: ResolutionContext) -> ResolutionContext:
        owner = context.registry_record.owner
        if is_null_address(owner):
            owner = None
        else:
            owner = to_display_address(owner)
        return replace(context, state=ResolutionState.RESOLVER_LOOKUP, owner=owner)

    async def resolver_lookup(self, context: ResolutionContext) -> ResolutionContext:
        resolver = context.registry_record.resolver
        records: dict[str, str] = {}
        if not is_null_address(resolver):
            fetched = await self.get_contract_field(to_canonical_address(resolver), RECORDS_FIELD)
            if isinstance(fetched, dict):
                records = dict(fetched)
        return replace(context, state=ResolutionState.STRUCTURE, records=records)

    async def structure(self, context: ResolutionContext) -> ResolutionContext:
        def on_conflict(conflict: StructureConflict) -> None:
            self._logger.log(
                LogLevel.WARN,
                "records",
                "Record key collides with another key; last write wins",
                {
                    "domain": context.domain,
                    "key": conflict.key,
                    "segment": conflict.segment,
                },
            )

        tree = structure_records(context.records, on_conflict=on_conflict)
        return replace(context, state=ResolutionState.EXTRACT, tree=tree)

    async def extract(self, context: ResolutionContext) -> ResolutionContext:
        response = ResolutionResponse(
            addresses=extract_addresses(context.tree),
            meta=ResolutionMeta(
                owner=context.owner,
                type=self._service.value,
                ttl=parse_ttl(context.tree.get("ttl")),
            ),
        )
        return replace(context, state=ResolutionState.DONE, response=response)

    async def get_contract_field(
        self,
        contract_address: str,
        field: str,
        keys: Optional[list[str]] = None,
    ) -> Any:
        """Read one field of a contract given in Bech32 or hex form."""
        address = to_canonical_address(contract_address)
        result = await self._gateway.fetch_sub_state(address, field, keys or [])
        return (result or {}).get(field)

    async def get_contract_map_value(self, contract_address: str, field: str, key: str) -> Any:
        """Read a single entry of a contract map field; None when absent."""
        record = await self.get_contract_field(contract_address, field, [key])
        if not isinstance(record, dict):
            return None
        return record.get(key)
