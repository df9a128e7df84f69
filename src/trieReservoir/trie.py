"""Fixed-depth prefix trie over a byte alphabet.

Nodes live in an arena (a list) and refer to their children by integer id.
A parent exclusively owns its children; no node is shared and there are no
back-references, so the arena never contains cycles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple

from .config import MAX_CHILDREN, MAX_DEPTH
from .errors import AllocationFailure
from .utils import to_bytes

logger = logging.getLogger(__name__)


@dataclass
class TrieNode:
    """One trie node: its depth, terminal flag and sparse child table."""

    depth: int
    is_terminal: bool = False
    children: Dict[int, int] = field(default_factory=dict)  # byte -> node id


class PrefixTrie:
    """Trie mapping each prefix of an input (up to ``max_depth`` bytes) to a node."""

    ROOT = 0

    def __init__(self, *, max_depth: int = MAX_DEPTH, alphabet_size: int = MAX_CHILDREN):
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        if not (1 <= alphabet_size <= MAX_CHILDREN):
            raise ValueError(f"alphabet_size must be in [1, {MAX_CHILDREN}]")
        self.max_depth = int(max_depth)
        self.alphabet_size = int(alphabet_size)
        self._nodes: List[TrieNode] = []
        self._new_node(0)

    @classmethod
    def from_corpus(cls, corpus: Iterable[str | bytes], **kwargs) -> "PrefixTrie":
        trie = cls(**kwargs)
        for text in corpus:
            trie.insert(text)
        return trie

    def _new_node(self, depth: int) -> int:
        try:
            self._nodes.append(TrieNode(depth=depth))
        except MemoryError as exc:
            raise AllocationFailure(f"could not allocate trie node at depth {depth}") from exc
        return len(self._nodes) - 1

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, text: object) -> bool:
        if not isinstance(text, (str, bytes, bytearray)):
            return False
        data = to_bytes(text)[: self.max_depth]
        node_id, matched = self.find(data)
        return matched == len(data) and self._nodes[node_id].is_terminal

    def node(self, node_id: int) -> TrieNode:
        return self._nodes[node_id]

    def iter_nodes(self) -> Iterator[Tuple[int, TrieNode]]:
        return iter(enumerate(self._nodes))

    @property
    def height(self) -> int:
        """Depth of the deepest node currently in the trie."""
        return max(n.depth for n in self._nodes)

    def depth_of_node(self, node_id: int) -> int:
        return self._nodes[node_id].depth

    def insert(self, text: str | bytes) -> int:
        """Insert ``text`` and return the id of the node marked terminal.

        Inputs longer than ``max_depth`` bytes are silently truncated.
        """
        data = to_bytes(text)
        for byte in data[: self.max_depth]:
            if byte >= self.alphabet_size:
                raise ValueError(
                    f"byte {byte} outside alphabet of size {self.alphabet_size}"
                )
        cur = self.ROOT
        for byte in data[: self.max_depth]:
            nxt = self._nodes[cur].children.get(byte)
            if nxt is None:
                nxt = self._new_node(self._nodes[cur].depth + 1)
                self._nodes[cur].children[byte] = nxt
            cur = nxt
        self._nodes[cur].is_terminal = True
        if len(data) > self.max_depth:
            logger.debug("truncated %d-byte input to depth %d", len(data), self.max_depth)
        return cur

    def walk(self, text: str | bytes) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(node_id, depth, byte)`` for every edge the input follows.

        ``node_id`` and ``depth`` describe the node *before* descending along
        ``byte``. The walk ends quietly at the first byte with no matching
        child or after ``max_depth`` steps.
        """
        cur = self.ROOT
        for byte in to_bytes(text)[: self.max_depth]:
            nxt = self._nodes[cur].children.get(byte)
            if nxt is None:
                return
            yield cur, self._nodes[cur].depth, byte
            cur = nxt

    def find(self, text: str | bytes) -> Tuple[int, int]:
        """Return the deepest node matching a prefix of ``text`` and the matched length."""
        cur = self.ROOT
        matched = 0
        for _, _, byte in self.walk(text):
            cur = self._nodes[cur].children[byte]
            matched += 1
        return cur, matched


__all__ = ["TrieNode", "PrefixTrie"]
