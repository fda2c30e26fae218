"""
Property-based tests for the namehash engine.

Uses Hypothesis to check that namehash is exactly iterated childhash from
the root and that distinct domains do not collide.
"""

import hashlib
import string
from functools import reduce

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from zns_resolution.namehash import (
    ROOT_NODE,
    childhash,
    labelhash,
    labels_of,
    namehash,
    node_to_hex,
    to_node,
)

ZIL_NODE = "0x9915d0456b878862e822e2361da37232f626a2e47505c8795134a95d36138ed3"
BRAD_ZIL_NODE = "0x5fc604da00f502da70bfbc618088c0ce468ec9d18d05540935ae4118e8f50787"


def label_strategy() -> st.SearchStrategy[str]:
    return st.text(alphabet=string.ascii_lowercase + string.digits + "-", min_size=1, max_size=12)


class TestKnownNodes:
    """Nodes the ZNS registry is actually keyed by."""

    def test_root_is_zero_bytes(self) -> None:
        assert ROOT_NODE == bytes(32)
        assert namehash("") == ROOT_NODE

    def test_zil(self) -> None:
        assert node_to_hex(namehash("zil")) == ZIL_NODE

    def test_brad_zil(self) -> None:
        assert node_to_hex(namehash("brad.zil")) == BRAD_ZIL_NODE

    def test_single_step_matches_definition(self) -> None:
        expected = hashlib.sha256(ROOT_NODE + hashlib.sha256(b"zil").digest()).digest()
        assert childhash(ROOT_NODE, "zil") == expected
        assert labelhash("zil") == hashlib.sha256(b"zil").digest()

    def test_child_of_zil_node(self) -> None:
        assert node_to_hex(childhash(ZIL_NODE, "brad")) == BRAD_ZIL_NODE
        assert node_to_hex(childhash(bytes.fromhex(ZIL_NODE[2:]), "brad")) == BRAD_ZIL_NODE


class TestFoldProperty:
    """
    namehash(d) == fold(childhash, reversed(labels(d)), ROOT).
    """

    @given(labels=st.lists(label_strategy(), min_size=1, max_size=4))
    @settings(max_examples=100)
    def test_namehash_is_iterated_childhash(self, labels: list[str]) -> None:
        domain = ".".join(labels)
        folded = reduce(childhash, reversed(labels), ROOT_NODE)
        assert namehash(domain) == folded

    @given(labels=st.lists(label_strategy(), min_size=2, max_size=4))
    @settings(max_examples=100)
    def test_subdomain_derives_from_parent(self, labels: list[str]) -> None:
        parent = ".".join(labels[1:])
        assert namehash(".".join(labels)) == childhash(namehash(parent), labels[0])

    @given(labels=st.lists(label_strategy(), min_size=1, max_size=4))
    @settings(max_examples=50)
    def test_deterministic(self, labels: list[str]) -> None:
        domain = ".".join(labels)
        assert namehash(domain) == namehash(domain)
        assert len(namehash(domain)) == 32


class TestInjectivity:
    def test_corpus_has_no_collisions(self) -> None:
        corpus = [
            "zil", "brad.zil", "alice.zil", "bob.zil", "www.brad.zil",
            "brad.brad.zil", "zil.brad", "a.zil", "b.zil", "a.b.zil",
            "b.a.zil", "mail.alice.zil", "alice.mail.zil", "Brad.zil",
            "brad-1.zil", "1.2.3.zil",
        ]
        nodes = {namehash(domain) for domain in corpus}
        assert len(nodes) == len(corpus)

    @given(
        first=st.lists(label_strategy(), min_size=1, max_size=3),
        second=st.lists(label_strategy(), min_size=1, max_size=3),
    )
    @settings(max_examples=100)
    def test_distinct_domains_distinct_nodes(self, first: list[str], second: list[str]) -> None:
        if first != second:
            assert namehash(".".join(first)) != namehash(".".join(second))


class TestLabelPolicy:
    def test_case_is_preserved(self) -> None:
        assert namehash("Brad.zil") != namehash("brad.zil")

    def test_empty_labels_are_skipped(self) -> None:
        assert labels_of(".brad..zil.") == ["brad", "zil"]
        assert namehash(".brad..zil.") == namehash("brad.zil")

    def test_childhash_is_a_single_step(self) -> None:
        for label in ("", "brad.zil"):
            expected = hashlib.sha256(ROOT_NODE + hashlib.sha256(label.encode()).digest()).digest()
            assert childhash(ROOT_NODE, label) == expected
        assert childhash(ROOT_NODE, "") != ROOT_NODE
        assert childhash(ROOT_NODE, "brad.zil") != namehash("brad.zil")

    @given(parent=st.binary(min_size=32, max_size=32), label=st.text(max_size=20))
    @settings(max_examples=50)
    def test_childhash_matches_definition(self, parent: bytes, label: str) -> None:
        expected = hashlib.sha256(parent + hashlib.sha256(label.encode("utf-8")).digest()).digest()
        assert childhash(parent, label) == expected


class TestNodeCoercion:
    def test_hex_with_and_without_prefix(self) -> None:
        assert to_node(ZIL_NODE) == to_node(ZIL_NODE[2:])
        assert node_to_hex(to_node(ZIL_NODE), prefix=False) == ZIL_NODE[2:]

    def test_wrong_length_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_node(b"\x00" * 31)
        with pytest.raises(ValueError):
            to_node("0x1234")
