#!/usr/bin/env python
"""
LXCat Cross-Section Summary Script
==================================

Load an LXCat/BOLSIG cross-section file and report what it contains.

Usage:
    # Table of processes
    python scripts/summarize_lxcat.py data/Ar_Biagi.txt

    # Total cross section at a few energies
    python scripts/summarize_lxcat.py data/Ar_Biagi.txt --energy 1 10 100

    # Ionization only, with a plot
    python scripts/summarize_lxcat.py data/Ar_Biagi.txt --process IONIZATION --plot ar.png

Author: LXCat-XS Team
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lxcat_xs import ProcessType, load_collection
from lxcat_xs.errors import LXCatFormatError


def main():
    parser = argparse.ArgumentParser(
        description="Summarize an LXCat/BOLSIG electron cross-section file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/summarize_lxcat.py data/N2_Phelps.txt
  python scripts/summarize_lxcat.py data/N2_Phelps.txt --energy 5 15.6 50 --surplus
"""
    )

    parser.add_argument(
        'path',
        type=str,
        help='Path to the LXCat text file'
    )
    parser.add_argument(
        '--process',
        type=str,
        default=None,
        choices=[p.value for p in ProcessType],
        help='Restrict the report to one process type'
    )
    parser.add_argument(
        '--energy',
        type=float,
        nargs='+',
        default=None,
        help='Energies (eV) at which to print the total cross section'
    )
    parser.add_argument(
        '--surplus',
        action='store_true',
        default=False,
        help='Print the surplus (majorant) cross section'
    )
    parser.add_argument(
        '--plot',
        type=str,
        default=None,
        help='Write a cross-section plot to this path (PNG, PDF, SVG)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        default=False,
        help='Debug logging'
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    try:
        collection = load_collection(args.path)
    except (OSError, LXCatFormatError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    process = ProcessType(args.process) if args.process else None
    selected = collection.of_kind(process) if process else collection

    print("=" * 70)
    print(f"{args.path}: {len(collection)} processes, species {collection.species}")
    print("=" * 70)
    print(selected.summary().to_string(index=False))

    if args.energy:
        print()
        for energy in args.energy:
            if process is None:
                total = collection.total_cross_section_at(energy)
            else:
                total = collection.total_cross_section_of_kind_at(process, energy)
            print(f"  sigma_total({energy:g} eV) = {total:.6e} m^2")

    if args.surplus:
        print(f"\n  Surplus cross section = {selected.surplus_cross_section():.6e} m^2")

    if args.plot:
        import matplotlib
        matplotlib.use('Agg')
        from lxcat_xs.visualization import plot_collection

        fig = plot_collection(collection, process=process, surplus=args.surplus,
                              save_path=args.plot)
        fig.close()
        print(f"\n[OK] Plot saved to {args.plot}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
