"""
Zilliqa Naming Service.

The public face of the package: resolves ``.zil`` domains to owners,
resolvers, crypto addresses and arbitrary resolver records.
"""

from typing import Optional

from .address import is_null_address, to_bech32_address
from .config import REGISTRY_MAP, ClientConfig, SourceLike, normalize_source
from .enums import NamingServiceName, ResolutionState
from .exceptions import (
    ConfigurationError,
    RecordNotFoundError,
    UnregisteredDomainError,
    UnspecifiedCurrencyError,
    UnspecifiedResolverError,
    UnsupportedDomainError,
)
from .models import ResolutionResponse
from .namehash import NodeLike, childhash, namehash, node_to_hex
from .records import Tree
from .resolution import ResolutionPipeline, SubStateGateway
from .resolution_logger import NullLogger, ResolutionLogger
from .rpc_client import ZilliqaRPCClient

SUPPORTED_TLD = "zil"


class Zns:
    """
    Resolver for the Zilliqa Naming Service.

    Every read operation is an independent pipeline of at most two RPC
    round trips; nothing is cached between calls.
    """

    name = NamingServiceName.ZNS

    def __init__(
        self,
        source: SourceLike = True,
        client_config: Optional[ClientConfig] = None,
        gateway: Optional[SubStateGateway] = None,
        logger: Optional[ResolutionLogger] = None,
    ) -> None:
        """
        Initialize the naming service.

        Args:
            source: Url string, SourceDefinition or mapping describing the
                network; True selects mainnet defaults
            client_config: HTTP client settings for the default gateway
            gateway: Replaces the default ZilliqaRPCClient
            logger: Optional logger shared with the gateway and pipeline

        Raises:
            ConfigurationError: If network or url cannot be determined
        """
        definition = normalize_source(source)
        if not definition.network:
            raise ConfigurationError(
                "Unspecified network in Resolution ZNS configuration",
                details={"url": definition.url},
            )
        if not definition.url:
            raise ConfigurationError(
                "Unspecified url in Resolution ZNS configuration",
                details={"network": definition.network},
            )

        registry = definition.registry or REGISTRY_MAP.get(definition.network)
        if registry and registry.startswith("0x"):
            registry = to_bech32_address(registry)

        self._network = definition.network
        self._url = definition.url
        self._registry_address = registry
        self._logger = logger or NullLogger()
        client_config = client_config or ClientConfig()
        self._gateway = gateway or ZilliqaRPCClient(
            self._url,
            timeout=client_config.timeout_seconds,
            logger=self._logger,
        )
        self._pipeline = ResolutionPipeline(
            gateway=self._gateway,
            registry_address=self._registry_address,
            tld=SUPPORTED_TLD,
            service=self.name,
            logger=self._logger,
        )

    @property
    def network(self) -> str:
        return self._network

    @property
    def url(self) -> str:
        return self._url

    @property
    def registry_address(self) -> Optional[str]:
        return self._registry_address

    async def __aenter__(self) -> "Zns":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the gateway's HTTP client, if it has one."""
        close = getattr(self._gateway, "close", None)
        if close is not None:
            await close()

    async def resolve(self, domain: str) -> ResolutionResponse:
        """
        Resolve a domain to its owner, ttl and crypto addresses.

        Unsupported, unregistered and unowned domains all produce the
        unclaimed response instead of an error.
        """
        context = await self._pipeline.run(domain)
        return context.response

    async def address(self, domain: str, currency_ticker: str) -> str:
        """
        Crypto address of ``currency_ticker`` (case-insensitive) for a domain.

        Raises:
            UnregisteredDomainError: If the domain has no owner
            UnspecifiedCurrencyError: If no address is set for the ticker
        """
        data = await self.resolve(domain)
        if not data.meta.owner or is_null_address(data.meta.owner):
            raise UnregisteredDomainError(domain)
        address = data.addresses.get(currency_ticker.upper())
        if address is None:
            wanted = currency_ticker.casefold()
            address = next(
                (value for ticker, value in data.addresses.items() if ticker.casefold() == wanted),
                None,
            )
        if not address:
            raise UnspecifiedCurrencyError(domain, currency_ticker)
        return address

    async def owner(self, domain: str) -> Optional[str]:
        """Owner of the domain in display form, or None."""
        return (await self.resolve(domain)).meta.owner

    async def records(self, domain: str) -> dict[str, str]:
        """Resolver records in plain key-value form."""
        context = await self._pipeline.run(domain, stop_at=ResolutionState.EXTRACT)
        return dict(context.records)

    async def resolution(self, domain: str) -> Tree:
        """Everything stored on the domain's resolver, as a nested tree."""
        context = await self._pipeline.run(domain, stop_at=ResolutionState.EXTRACT)
        return context.tree

    async def record(self, domain: str, field: str) -> str:
        """
        A single resolver record by its dotted key.

        Raises:
            RecordNotFoundError: If the record is missing or empty
        """
        records = await self.records(domain)
        value = records.get(field)
        if not value:
            raise RecordNotFoundError(domain, field)
        return value

    async def ipfs_hash(self, domain: str) -> str:
        return await self.record(domain, "ipfs.html.value")

    async def http_url(self, domain: str) -> str:
        return await self.record(domain, "ipfs.redirect_domain.value")

    async def email(self, domain: str) -> str:
        return await self.record(domain, "whois.email.value")

    async def resolver(self, domain: str) -> str:
        """
        Resolver contract address of a domain.

        Raises:
            UnregisteredDomainError: If there is no registry entry or owner
            UnspecifiedResolverError: If no resolver is configured
        """
        context = await self._pipeline.run(domain, stop_at=ResolutionState.OWNER_NORMALIZE)
        record = context.registry_record
        if record is None or not record.owner:
            raise UnregisteredDomainError(domain)
        if is_null_address(record.resolver):
            raise UnspecifiedResolverError(domain)
        return record.resolver

    def is_supported_domain(self, domain: str) -> bool:
        """Checks if the domain's top-level label is 'zil'."""
        return self._pipeline.is_supported_domain(domain)

    def is_supported_network(self) -> bool:
        """Checks if a registry is configured for the active network."""
        return self._pipeline.is_supported_network()

    def namehash(self, domain: str) -> str:
        """
        ZNS namehash of a domain as 0x-prefixed hex.

        Raises:
            UnsupportedDomainError: If the domain is not a .zil domain
        """
        if not self.is_supported_domain(domain):
            raise UnsupportedDomainError(domain)
        return node_to_hex(namehash(domain))

    def childhash(self, parent: NodeLike, label: str) -> str:
        """Namehash of ``label`` under the node ``parent``, as hex."""
        return node_to_hex(childhash(parent, label))
