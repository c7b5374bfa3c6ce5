"""Tests for rebuilding molecule graphs from connection trees."""

# PIP3 modules
import pytest

# local repo modules
from sphere_frag.errors import PreconditionError, TreeIntegrityError
from sphere_frag.fragmentation import build_fragment, extend, materialize, traverse
from sphere_frag.graph import Atom, Bond, MolGraph

import graphs


#============================================
def test_triangle_round_trip():
    fragment = build_fragment(graphs.triangle(), 0, 2)
    assert fragment.atom_count() == 3
    assert fragment.bond_count() == 3
    assert all(len(fragment.neighbors_of(i)) == 2 for i in range(3))


#============================================
def test_chain_cut_gives_two_atoms():
    fragment = build_fragment(graphs.carbon_chain(4), 0, 1)
    assert fragment.atom_count() == 2
    assert fragment.bond_count() == 1


#============================================
def test_root_is_first_atom_of_output():
    fragment = build_fragment(graphs.hetero_chain(), 2, 0)
    assert fragment.atom_at(0).symbol == "O"
    assert fragment.symbols() == ["O", "N"]


#============================================
def test_output_is_same_kind_as_source():
    fragment = build_fragment(graphs.triangle(), 0, 1)
    assert isinstance(fragment, MolGraph)


#============================================
def test_bond_attributes_are_copied():
    graph = graphs.naphthalene()
    fragment = build_fragment(graph, 0, 10)
    for _, _, bond in fragment.bonds():
        assert bond == Bond(order=1.5, in_ring=True, aromatic=True)


#============================================
def test_placeholders_become_atoms():
    fragment = build_fragment(graphs.carbon_chain(4), 0, 1, with_placeholders=True)
    assert fragment.atom_count() == 3
    assert fragment.bond_count() == 2
    placeholder = fragment.atom_at(2)
    assert placeholder.is_placeholder
    assert placeholder.symbol == "R"
    assert fragment.neighbors_of(2) == [1]


#============================================
def test_atom_and_bond_counts_match_tree():
    graph = graphs.pyridine_ester()
    tree = traverse(graph, 3, 2, with_placeholders=True)
    fragment = materialize(tree)
    assert fragment.atom_count() == len(tree)
    assert fragment.bond_count() == tree.edge_count()


#============================================
def test_materialize_into_given_target():
    tree = traverse(graphs.triangle(), 0, 2)
    target = MolGraph()
    assert materialize(tree, target) is target
    assert target.bond_count() == 3


#============================================
def test_extend_links_root_to_anchor():
    tree = traverse(graphs.methyl_acetate(), 1, 0)
    target = MolGraph.from_edges(["N", "C"], [(0, 1)])
    anchor_bond = Bond(order=2.0, in_ring=True, aromatic=False)
    placed = extend(tree, target, anchor_index=1, anchor_bond=anchor_bond)
    assert placed[1] == 2
    assert target.atom_count() == 2 + len(tree)
    assert target.bond_between(1, 2) == anchor_bond
    assert target.bond_count() == 1 + 1 + tree.edge_count()


#============================================
def test_extend_without_anchor_bond_adds_no_link():
    tree = traverse(graphs.triangle(), 0, 2)
    target = MolGraph.from_edges(["O"], [])
    placed = extend(tree, target, anchor_index=0)
    assert sorted(placed) == [0, 1, 2]
    assert target.neighbors_of(0) == []
    assert target.bond_count() == 3


#============================================
def test_extend_rejects_unknown_anchor():
    tree = traverse(graphs.triangle(), 0, 2)
    with pytest.raises(PreconditionError) as info:
        extend(tree, MolGraph(), anchor_index=0, anchor_bond=Bond())
    assert info.value.code == "ANCHOR_OUT_OF_RANGE"


#============================================
class SharedAtomGraph(MolGraph):
    """Reuses the atom already placed for a source index, like a merged fragment."""

    def __init__(self):
        super().__init__()
        self.by_source = {}

    def add_atom(self, atom):
        if atom.index in self.by_source:
            return self.by_source[atom.index]
        index = super().add_atom(atom)
        self.by_source[atom.index] = index
        return index


#============================================
def test_existing_ring_bond_is_not_added_twice():
    target = SharedAtomGraph()
    b = target.add_atom(Atom("C", index=1))
    c = target.add_atom(Atom("C", index=2))
    target.add_bond(b, c, Bond())
    tree = traverse(graphs.triangle(), 0, 2)
    assert [sorted(e.keys()) for e in tree.cycle_edges] == [[1, 2]]
    placed = extend(tree, target)
    assert placed == {0: 2, 1: b, 2: c}
    assert target.atom_count() == 3
    assert target.bond_count() == 3
    assert target.neighbors_of(b) == [c, 2]


#============================================
def test_node_without_bond_to_parent_fails_loudly():
    tree = traverse(graphs.carbon_chain(3), 0, 2)
    tree.get_node(2).bond_to_parent = None
    with pytest.raises(TreeIntegrityError) as info:
        materialize(tree)
    assert info.value.code == "ORPHAN_NODE"


#============================================
def test_node_without_parent_fails_loudly():
    tree = traverse(graphs.carbon_chain(3), 0, 2)
    tree.get_node(1).parent = None
    with pytest.raises(TreeIntegrityError):
        materialize(tree)


#============================================
def test_atoms_are_copied_not_shared():
    graph = graphs.hetero_chain()
    fragment = build_fragment(graph, 0, 3)
    fragment.atom_at(0).charge = 1
    assert graph.atom_at(0).charge == 0
    assert isinstance(fragment.atom_at(0), Atom)
