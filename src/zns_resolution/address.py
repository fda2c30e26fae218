"""
Address codec adapter for Zilliqa addresses.

Contract storage holds raw 0x-prefixed hex addresses. Owners are surfaced
in their Bech32 ``zil1...`` display form, and contract addresses handed to
the RPC gateway are canonical checksummed hex. The Bech32 primitives come
from the ``bech32`` library; the checksum follows Zilliqa's scheme
(SHA-256 over the address bytes, one hash bit per hex letter).
"""

import hashlib
import re
from typing import Optional

from bech32 import bech32_decode, bech32_encode, convertbits

from .exceptions import MalformedAddressError

HRP = "zil"
ADDRESS_BYTES = 20
NULL_ADDRESS = "0x" + "0" * (ADDRESS_BYTES * 2)

_HEX_ADDRESS_PATTERN = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")


def is_hex_address(address: object) -> bool:
    """Check for a 20-byte hex address, with or without 0x prefix."""
    return isinstance(address, str) and bool(_HEX_ADDRESS_PATTERN.match(address))


def is_bech32_address(address: object) -> bool:
    """Check for a decodable ``zil1`` Bech32 address."""
    if not isinstance(address, str) or not address.lower().startswith(HRP + "1"):
        return False
    hrp, data = bech32_decode(address)
    if hrp != HRP or data is None:
        return False
    decoded = convertbits(data, 5, 8, False)
    return decoded is not None and len(decoded) == ADDRESS_BYTES


def _strip_hex(address: str) -> str:
    return address[2:] if address[:2].lower() == "0x" else address


def to_checksum_address(address: str) -> str:
    """
    Produce the checksummed 0x form of a hex address.

    Raises:
        MalformedAddressError: If the input is not a 20-byte hex address
    """
    if not is_hex_address(address):
        raise MalformedAddressError(address, "not a 20-byte hex address")

    lowered = _strip_hex(address).lower()
    digest = int.from_bytes(hashlib.sha256(bytes.fromhex(lowered)).digest(), "big")

    chars = []
    for i, char in enumerate(lowered):
        if char.isdigit():
            chars.append(char)
        elif digest & (1 << (255 - 6 * i)):
            chars.append(char.upper())
        else:
            chars.append(char)
    return "0x" + "".join(chars)


def is_valid_checksum_address(address: str) -> bool:
    """True if ``address`` is hex and already carries the correct checksum."""
    return is_hex_address(address) and to_checksum_address(address) == "0x" + _strip_hex(address)


def to_bech32_address(address: str) -> str:
    """
    Encode a hex address in its ``zil1`` display form.

    Mixed-case input must carry a valid checksum; all-lower and all-upper
    input is accepted as is.

    Raises:
        MalformedAddressError: On wrong length or invalid checksum
    """
    if not is_hex_address(address):
        raise MalformedAddressError(address, "not a 20-byte hex address")
    body = _strip_hex(address)
    if body != body.lower() and body != body.upper() and not is_valid_checksum_address(address):
        raise MalformedAddressError(address, "invalid checksum")

    data = convertbits(bytes.fromhex(body), 8, 5)
    if data is None:
        raise MalformedAddressError(address, "could not convert to 5-bit groups")
    return bech32_encode(HRP, data)


def from_bech32_address(address: str) -> str:
    """
    Decode a ``zil1`` address into checksummed hex.

    Raises:
        MalformedAddressError: On a bad checksum, prefix or payload length
    """
    if not isinstance(address, str):
        raise MalformedAddressError(address, "not a string")
    hrp, data = bech32_decode(address)
    if hrp is None or data is None:
        raise MalformedAddressError(address, "invalid bech32 checksum")
    if hrp != HRP:
        raise MalformedAddressError(address, f"expected '{HRP}' prefix, got '{hrp}'")

    decoded = convertbits(data, 5, 8, False)
    if decoded is None or len(decoded) != ADDRESS_BYTES:
        raise MalformedAddressError(address, "payload is not 20 bytes")
    return to_checksum_address(bytes(decoded).hex())


def to_display_address(address: str) -> str:
    """Owner addresses in raw hex become Bech32; anything else passes through."""
    if isinstance(address, str) and address.startswith("0x"):
        return to_bech32_address(address)
    return address


def to_canonical_address(address: str) -> str:
    """
    Canonical checksummed hex for a Bech32 or hex contract address.

    Raises:
        MalformedAddressError: If the address is neither form
    """
    if isinstance(address, str) and address.lower().startswith(HRP + "1"):
        return from_bech32_address(address)
    return to_checksum_address(address)


def is_null_address(address: Optional[str]) -> bool:
    """True for missing, empty, or all-zero addresses in either encoding."""
    if not address:
        return True
    if is_hex_address(address):
        return int(_strip_hex(address), 16) == 0
    if is_bech32_address(address):
        return int(_strip_hex(from_bech32_address(address)), 16) == 0
    return False
