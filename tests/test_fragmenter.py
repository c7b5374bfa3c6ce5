"""Tests for the configured Fragmenter facade."""

# Standard Library
import logging

# PIP3 modules
from rdkit import Chem

# local repo modules
from sphere_frag.fragmentation import DEFAULT_MAX_SPHERE, Fragmenter
from sphere_frag.graph import Bond, MolGraph

import graphs


#============================================
def test_defaults():
    fragmenter = Fragmenter()
    assert fragmenter.max_sphere == DEFAULT_MAX_SPHERE == 2
    assert not fragmenter.with_placeholders
    assert fragmenter.placeholder_symbol == "R"
    assert fragmenter.exclude == frozenset()


#============================================
def test_configuration_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="sphere_frag"):
        Fragmenter(max_sphere=3, with_placeholders=True)
    assert "max_sphere=3" in caplog.text


#============================================
def test_tree_uses_configuration():
    fragmenter = Fragmenter(max_sphere=1, with_placeholders=True, placeholder_symbol="*")
    tree = fragmenter.tree(graphs.carbon_chain(4), 0)
    assert sorted(n.key for n in tree.nodes(include_placeholders=False)) == [0, 1]
    assert [n.atom.symbol for n in tree.placeholders()] == ["*"]


#============================================
def test_fragment_all_skips_excluded_and_hydrogens():
    graph = MolGraph.from_edges(["C", "O", "H", "C"], [(0, 1), (1, 2), (0, 3)])
    fragments = Fragmenter(max_sphere=1, exclude={3}).fragment_all(graph)
    assert sorted(fragments) == [0, 1]
    assert fragments[0].symbols() == ["C", "O"]
    assert fragments[1].symbols() == ["O", "C", "H"]


#============================================
def test_fragment_all_can_root_on_hydrogens():
    graph = MolGraph.from_edges(["C", "H"], [(0, 1)])
    fragments = Fragmenter(max_sphere=1).fragment_all(graph, skip_hydrogens=False)
    assert sorted(fragments) == [0, 1]


#============================================
def test_attach_onto_anchor():
    fragmenter = Fragmenter(max_sphere=0)
    target = MolGraph.from_edges(["C"], [])
    placed = fragmenter.attach(graphs.hetero_chain(), 1, target, anchor_index=0, anchor_bond=Bond())
    assert placed == {1: 1, 2: 2}
    assert target.symbols() == ["C", "N", "O"]
    assert target.bond_count() == 2


#============================================
def test_fragment_smiles_from_string_and_mol():
    fragmenter = Fragmenter(max_sphere=1)
    assert fragmenter.fragment_smiles("CCO", 1) == "CCO"
    assert fragmenter.fragment_smiles(Chem.MolFromSmiles("CCCC"), 0) == "CC"


#============================================
def test_fragment_smiles_with_placeholders():
    fragmenter = Fragmenter(max_sphere=1, with_placeholders=True)
    smiles = fragmenter.fragment_smiles("CC(=O)OC", 0)
    assert "*" in smiles
    assert Chem.MolFromSmiles(smiles, sanitize=False).GetNumAtoms() == 5
