"""
ZNS namehash engine.

Derives the 32-byte node identifier the registry contract is keyed by.
A domain is folded label by label from the top-level label down, starting
from the root node:

    node(root)   = 32 zero bytes
    node(L.rest) = sha256(node(rest) || sha256(L))

Labels are hashed exactly as given (UTF-8, no case folding or Unicode
normalization). Empty labels produced by leading, trailing or doubled dots
are skipped, which is how the registry keys themselves are computed.
"""

import hashlib
from functools import reduce
from typing import Union

NODE_SIZE = 32
ROOT_NODE = bytes(NODE_SIZE)

NodeLike = Union[bytes, str]


def _hash(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def labelhash(label: str) -> bytes:
    """Hash a single label."""
    return _hash(label.encode("utf-8"))


def labels_of(domain: str) -> list[str]:
    """Split a domain into its non-empty labels, leftmost first."""
    return [label for label in domain.split(".") if label]


def to_node(node: NodeLike) -> bytes:
    """
    Coerce a node given as bytes or (optionally 0x-prefixed) hex to bytes.

    Raises:
        ValueError: If the value is not exactly 32 bytes long
    """
    if isinstance(node, str):
        text = node[2:] if node[:2].lower() == "0x" else node
        node = bytes.fromhex(text)
    if len(node) != NODE_SIZE:
        raise ValueError(f"Node must be {NODE_SIZE} bytes, got {len(node)}")
    return bytes(node)


def node_to_hex(node: bytes, prefix: bool = True) -> str:
    """Render a node as lowercase hex, 0x-prefixed by default."""
    return ("0x" if prefix else "") + node.hex()


def childhash(parent: NodeLike, label: str) -> bytes:
    """
    Compute the node of ``label`` directly under ``parent``.

    Exactly one step: ``label`` is hashed whole, dots included.
    """
    return _hash(to_node(parent) + labelhash(label))


def namehash(domain: str) -> bytes:
    """Compute the node of a full domain; the empty domain is the root."""
    return reduce(childhash, reversed(labels_of(domain)), ROOT_NODE)
