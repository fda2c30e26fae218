"""
Shared fixtures: an in-memory contract store standing in for the RPC gateway.
"""

from typing import Any, Optional

import pytest

from zns_resolution.namehash import namehash, node_to_hex
from zns_resolution.zns import Zns

REGISTRY_HEX = "0x1d19918a737306218b5cbb3241fcdcbd998c3a72"
REGISTRY_BECH32 = "zil1r5verznnwvrzrz6uhveyrlxuhkvccwnju4aehf"

OWNER_HEX = "0x2f2bd0d4a6c4e3c7b1e9f0f1a2b3c4d5e6f70819"
OWNER_BECH32 = "zil19u4ap49xcn3u0v0f7rc69v7y6hn0wzqev26pyz"

RESOLVER_HEX = "0xa1b2c3d4e5f60718293a4b5c6d7e8f9012345678"
RESOLVER_CHECKSUM = "0xa1b2C3D4e5F60718293A4B5c6D7E8f9012345678"

NULL_HEX = "0x0000000000000000000000000000000000000000"

BRAD_RECORDS = {
    "crypto.ETH.address": "0x45b31e01AA6f42F0549aD482BE81635ED3149abb",
    "crypto.BTC.address": "1NZKHwpfqprxzcaijy9yt8PJ3c9ZVw9ZVz",
    "crypto.ZIL.address": OWNER_BECH32,
    "ipfs.html.value": "QmVaAtQbi3EtsfpKoLzALm6vXphdi2KjMgxEDKeGg6wHuK",
    "ipfs.redirect_domain.value": "www.unstoppabledomains.com",
    "whois.email.value": "brad@example.zil",
    "ttl": "300",
}


class FakeGateway:
    """
    Serves GetSmartContractSubState reads from dictionaries.

    Contracts are keyed by lowercase hex address without 0x.
    """

    def __init__(self) -> None:
        self.contracts: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str, list[str]]] = []
        self.closed = False

    @staticmethod
    def _key(address: str) -> str:
        return address.lower().replace("0x", "")

    def set_field(self, address: str, field: str, value: Any) -> None:
        self.contracts.setdefault(self._key(address), {})[field] = value

    def register(self, domain: str, owner: Optional[str], resolver: Optional[str]) -> None:
        registry = self.contracts.setdefault(self._key(REGISTRY_HEX), {}).setdefault("records", {})
        registry[node_to_hex(namehash(domain))] = {
            "argtypes": [],
            "arguments": [owner, resolver],
            "constructor": "Record",
        }

    async def fetch_sub_state(
        self,
        contract_address: str,
        field: str,
        keys: Optional[list[str]] = None,
    ) -> Optional[dict[str, Any]]:
        self.calls.append((contract_address, field, list(keys or [])))
        contract = self.contracts.get(self._key(contract_address))
        if contract is None or field not in contract:
            return None
        value = contract[field]
        if keys:
            selected = {k: value[k] for k in keys if k in value}
            return {field: selected} if selected else None
        return {field: value}

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def gateway() -> FakeGateway:
    fake = FakeGateway()
    fake.register("brad.zil", OWNER_HEX, RESOLVER_HEX)
    fake.set_field(RESOLVER_HEX, "records", dict(BRAD_RECORDS))
    fake.register("noresolver.zil", OWNER_HEX, NULL_HEX)
    fake.register("nullowner.zil", NULL_HEX, NULL_HEX)
    fake.register("empty.zil", OWNER_HEX, "0x" + "11" * 20)
    return fake


@pytest.fixture
def zns(gateway: FakeGateway) -> Zns:
    return Zns(source={"url": "https://api.zilliqa.com", "registry": REGISTRY_HEX}, gateway=gateway)
