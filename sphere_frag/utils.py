from rdkit import Chem
from rdkit.Chem import Draw
import numpy as np
import matplotlib.pyplot as plt

from .graph import MoleculeGraph
from .rdkit_graph import RDKitGraph

def mol_to_smiles(mol):
    """Convert RDKit molecule to SMILES string."""
    if mol is None:
        return None
    return Chem.MolToSmiles(mol)

def smiles_to_mol(smiles):
    """Convert SMILES string to RDKit molecule."""
    if not smiles:
        return None
    return Chem.MolFromSmiles(smiles)

def to_rdkit(graph: MoleculeGraph) -> RDKitGraph:
    """Copy any molecule graph into an RDKitGraph, keeping atom order."""
    if isinstance(graph, RDKitGraph):
        return graph
    out = RDKitGraph()
    for index in range(graph.atom_count()):
        out.add_atom(graph.atom_at(index))
    for i, j, bond in graph.bonds():
        out.add_bond(i, j, bond)
    return out

def fragment_to_smiles(graph):
    """SMILES of a fragment graph; placeholders are written as dummy atoms."""
    if graph is None:
        return None
    return Chem.MolToSmiles(to_rdkit(graph).to_mol())

def visualize_fragments(fragments, labels=None, filename=None):
    """Draw fragment graphs (or RDKit molecules) on a grid."""
    mols = [f if isinstance(f, Chem.Mol) else to_rdkit(f).to_mol() for f in fragments]
    if labels is None:
        labels = [f'Fragment {i+1}' for i in range(len(mols))]

    img = Draw.MolsToGridImage(mols, molsPerRow=4, subImgSize=(250, 250), legends=labels)

    if filename:
        img.save(filename)

    return img

def plot_fragment_sizes(records, filename=None):
    """Bar chart of fragment atom counts per root atom."""
    labels = [f"{r.root_symbol}{r.root_index}" for r in records]
    atoms = np.array([r.atom_count for r in records])
    placeholders = np.array([r.placeholder_count for r in records])

    x = np.arange(len(labels))

    fig, ax = plt.subplots(figsize=(max(6, len(labels) * 0.5), 4))
    ax.bar(x, atoms - placeholders, label='Atoms')
    ax.bar(x, placeholders, bottom=atoms - placeholders, label='Placeholders')

    ax.set_ylabel('Fragment size')
    ax.set_title('Fragment sizes by root atom')
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=90)
    ax.legend()

    if filename:
        plt.savefig(filename)

    return fig
