"""
Record structurer.

Resolver contracts store a flat mapping of dotted-path keys such as
``crypto.ETH.address`` to string values. This module turns that mapping
into a nested tree and back.

Keys are processed in sorted order and the last write wins on a colliding
segment. A key always sorts before any key it is a prefix of, so a deeper
key replaces a scalar stored at one of its prefixes, and a scalar never
replaces a subtree. The result does not depend on input order.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

Tree = dict[str, Union[str, "Tree"]]


@dataclass(frozen=True)
class StructureConflict:
    """A key whose path ran into a value already stored by another key."""

    key: str
    segment: str
    replaced: Union[str, dict]


ConflictHandler = Callable[[StructureConflict], None]


def structure_records(
    flat: dict[str, str],
    on_conflict: Optional[ConflictHandler] = None,
) -> Tree:
    """
    Build a nested tree from a flat dotted-path mapping.

    Args:
        flat: Mapping of dotted-path keys to string values
        on_conflict: Called for every prefix/scalar collision

    Returns:
        The nested tree; leaves are the original values
    """
    result: Tree = {}
    for key in sorted(flat):
        segments = key.split(".")
        node = result
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                if child is not None and on_conflict:
                    on_conflict(StructureConflict(key=key, segment=segment, replaced=child))
                child = {}
                node[segment] = child
            node = child

        leaf = segments[-1]
        existing = node.get(leaf)
        if existing is not None and on_conflict:
            on_conflict(StructureConflict(key=key, segment=leaf, replaced=existing))
        node[leaf] = flat[key]
    return result


def flatten_records(tree: Tree, prefix: str = "") -> dict[str, str]:
    """Inverse of structure_records for maps without prefix collisions."""
    flat: dict[str, str] = {}
    for segment, value in tree.items():
        key = f"{prefix}.{segment}" if prefix else segment
        if isinstance(value, dict):
            flat.update(flatten_records(value, key))
        else:
            flat[key] = value
    return flat


def get_path(tree: Tree, dotted: str) -> Optional[Union[str, Tree]]:
    """Walk a dotted path through a tree; None when any segment is missing."""
    node: Union[str, Tree] = tree
    for segment in dotted.split("."):
        if not isinstance(node, dict) or segment not in node:
            return None
        node = node[segment]
    return node
