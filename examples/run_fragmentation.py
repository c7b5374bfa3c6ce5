import os
import sys
import argparse
import logging

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sphere_frag.main import FragmentGenerator
from sphere_frag.utils import smiles_to_mol, plot_fragment_sizes

def parse_args():
    parser = argparse.ArgumentParser(description='Build sphere fragments for every atom of a molecule')
    parser.add_argument('--smiles', type=str, default="CC(=O)Oc1ccccc1C(=O)O",
                        help='SMILES string of the molecule to fragment (default: aspirin)')
    parser.add_argument('--example', type=str, default='aspirin',
                        help='Predefined example (aspirin, paracetamol, ibuprofen, caffeine, ...)')
    parser.add_argument('--max_sphere', type=int, default=2,
                        help='Sphere limit for bonds the retention policy does not keep')
    parser.add_argument('--placeholders', action='store_true',
                        help='Mark cut bonds with placeholder atoms')
    parser.add_argument('--output_dir', type=str, default='results',
                        help='Output directory')
    parser.add_argument('--verbose', action='store_true',
                        help='Show debug logging')

    return parser.parse_args()

def get_example_smiles(example_name):
    examples = {
        'aspirin': "CC(=O)Oc1ccccc1C(=O)O",
        'paracetamol': "CC(=O)Nc1ccc(O)cc1",
        'ibuprofen': "CC(C)Cc1ccc(C(C)C(=O)O)cc1",
        'caffeine': "Cn1c(=O)c2c(ncn2C)n(C)c1=O",
        'morphine': "CN1CCC23C4C1CC5=C2C(=C(C=C5)O)OC3C(C=C4)O",
        'cocaine': "COC(=O)C1C(CC2CCC1N2C)OC(=O)c3ccccc3"
    }
    return examples.get(example_name.lower(), examples['aspirin'])

def main():
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='[%(levelname)s] %(name)s: %(message)s')

    # Use example if specified
    if args.example and args.example != 'aspirin':
        args.smiles = get_example_smiles(args.example)

    mol = smiles_to_mol(args.smiles)
    if mol is None:
        print(f"Error: Invalid SMILES string: {args.smiles}")
        return

    generator = FragmentGenerator(max_sphere=args.max_sphere, with_placeholders=args.placeholders)

    print(f"Building fragments for: {args.smiles}")
    records = generator.generate(mol)

    print(f"\nResults:")
    for record in records:
        print(f"  {record.root_symbol}{record.root_index:<3} {record.atom_count:>3} atoms  "
              f"{record.bond_count:>3} bonds  {record.smiles}")

    output_path = generator.save_results(mol, records, args.output_dir)
    print(f"\nResults saved to: {output_path}")

    if records:
        img_path = os.path.join(args.output_dir, 'fragments.png')
        generator.visualize_results(records, img_path)
        plot_path = os.path.join(args.output_dir, 'fragment_sizes.png')
        plot_fragment_sizes(records, plot_path)
        print(f"Visualizations saved to: {img_path}, {plot_path}")

    print(f"\nDone!")

if __name__ == '__main__':
    main()
