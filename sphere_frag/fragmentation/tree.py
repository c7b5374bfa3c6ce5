"""
Connection tree: a rooted spanning tree over part of a molecule graph plus the
ring-closure (cycle) edges the spanning tree leaves out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..errors import TreeIntegrityError
from ..graph import Atom, Bond, MoleculeGraph


@dataclass(eq=False)
class ConnectionTreeNode:
    key: int
    atom: Atom
    sphere: int
    parent: Optional["ConnectionTreeNode"] = None
    bond_to_parent: Optional[Bond] = None
    is_placeholder: bool = False
    children: List[int] = field(default_factory=list)
    ring_partners: Set[int] = field(default_factory=set)

    @property
    def is_root(self) -> bool:
        return self.parent is None and self.sphere == 0

    def __repr__(self) -> str:
        kind = "placeholder" if self.is_placeholder else self.atom.symbol
        parent = self.parent.key if self.parent is not None else None
        return f"ConnectionTreeNode(key={self.key}, {kind}, sphere={self.sphere}, parent={parent})"


@dataclass(frozen=True)
class CycleEdge:
    """A graph bond between two tree nodes that is not a parent-child link."""
    first: int
    second: int
    bond: Bond

    def keys(self) -> Tuple[int, int]:
        return self.first, self.second


class ConnectionTree:
    """
    Tree grown breadth-first from a root atom of ``source``.

    Real nodes are keyed by their source atom index. Placeholder nodes get keys
    at or above ``source.atom_count()`` so the two ranges never meet.
    """

    def __init__(self, source: MoleculeGraph, root_index: int):
        self.source = source
        self._nodes: Dict[int, ConnectionTreeNode] = {}
        self._cycle_edges: List[CycleEdge] = []
        self.root = ConnectionTreeNode(key=root_index, atom=source.atom_at(root_index), sphere=0)
        self._nodes[root_index] = self.root

    # ---------------- mutation --------------------------------------------
    def add_node(
        self,
        atom: Atom,
        key: int,
        parent_key: int,
        bond: Bond,
        is_placeholder: bool = False,
    ) -> ConnectionTreeNode:
        if key in self._nodes:
            raise TreeIntegrityError("DUPLICATE_KEY", f"tree already holds a node with key {key}")
        parent = self._nodes.get(parent_key)
        if parent is None:
            raise TreeIntegrityError("UNKNOWN_PARENT", f"parent key {parent_key} is not in the tree")
        if parent.is_placeholder:
            raise TreeIntegrityError("PLACEHOLDER_PARENT", f"placeholder {parent_key} can not have children")
        if bond is None:
            raise TreeIntegrityError("MISSING_BOND", f"node {key} needs a bond to its parent")

        node = ConnectionTreeNode(
            key=key,
            atom=atom,
            sphere=parent.sphere + 1,
            parent=parent,
            bond_to_parent=bond,
            is_placeholder=is_placeholder,
        )
        self._nodes[key] = node
        parent.children.append(key)
        return node

    def add_cycle_edge(self, first: int, second: int, bond: Bond) -> bool:
        """
        Record a ring-closure bond between two existing nodes.

        Returns False without changing anything when the pair is a self-pair, a
        tree edge or already recorded.
        """
        for key in (first, second):
            if key not in self._nodes:
                raise TreeIntegrityError("UNKNOWN_NODE", f"cycle edge endpoint {key} is not in the tree")
        if first == second or self.is_tree_edge(first, second) or self.has_cycle_edge(first, second):
            return False
        self._cycle_edges.append(CycleEdge(first, second, bond))
        self._nodes[first].ring_partners.add(second)
        self._nodes[second].ring_partners.add(first)
        return True

    # ---------------- queries ---------------------------------------------
    def get_node(self, key: int) -> Optional[ConnectionTreeNode]:
        return self._nodes.get(key)

    def keys(self) -> List[int]:
        return list(self._nodes)

    def nodes(self, include_placeholders: bool = True) -> List[ConnectionTreeNode]:
        return [n for n in self._nodes.values() if include_placeholders or not n.is_placeholder]

    def placeholders(self) -> List[ConnectionTreeNode]:
        return [n for n in self._nodes.values() if n.is_placeholder]

    def nodes_in_sphere(self, sphere: int, include_placeholders: bool = True) -> List[ConnectionTreeNode]:
        return [n for n in self.nodes(include_placeholders) if n.sphere == sphere]

    def max_sphere(self, include_placeholders: bool = True) -> int:
        return max(n.sphere for n in self.nodes(include_placeholders))

    @property
    def cycle_edges(self) -> List[CycleEdge]:
        return list(self._cycle_edges)

    def is_tree_edge(self, first: int, second: int) -> bool:
        a, b = self._nodes.get(first), self._nodes.get(second)
        if a is None or b is None:
            return False
        return a.parent is b or b.parent is a

    def has_cycle_edge(self, first: int, second: int) -> bool:
        node = self._nodes.get(first)
        return node is not None and second in node.ring_partners

    def bond_between(self, first: int, second: int) -> Optional[Bond]:
        """Bond linking two nodes in the tree, whether tree edge or cycle edge."""
        a, b = self._nodes.get(first), self._nodes.get(second)
        if a is None or b is None:
            return None
        if a.parent is b:
            return a.bond_to_parent
        if b.parent is a:
            return b.bond_to_parent
        for edge in self._cycle_edges:
            if {edge.first, edge.second} == {first, second}:
                return edge.bond
        return None

    def edge_count(self) -> int:
        """Tree edges plus cycle edges."""
        return len(self._nodes) - 1 + len(self._cycle_edges)

    def __contains__(self, key: int) -> bool:
        return key in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ConnectionTreeNode]:
        return iter(list(self._nodes.values()))

    def __repr__(self) -> str:
        return (
            f"ConnectionTree(root={self.root.key}, nodes={len(self._nodes)}, "
            f"cycle_edges={len(self._cycle_edges)}, max_sphere={self.max_sphere()})"
        )
