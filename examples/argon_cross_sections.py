"""
Example: Loading and Evaluating LXCat Cross Sections
====================================================

Demonstrates the typical workflow of a collision code's input stage:

1. **Load** an LXCat/BOLSIG file into a Collection
2. **Inspect** the processes (summary table, block metadata)
3. **Evaluate** individual and total cross sections on an energy grid
4. **Bound** the total with the surplus cross section (null-collision majorant)
5. **Plot** everything on log-log axes

Run from the repository root:
    python examples/argon_cross_sections.py [path/to/lxcat.txt]
"""

import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from lxcat_xs import ProcessType, load_collection

DEFAULT_FILE = Path(__file__).parent.parent / "tests" / "data" / "LXCat_format_test.txt"


def main(path: Path) -> None:
    collection = load_collection(path)

    print("=" * 70)
    print(f"Loaded {len(collection)} processes from {path.name}")
    print("=" * 70)
    print(collection.summary().to_string(index=False))

    print("\nBlock metadata:")
    for collision in collection:
        print(f"  {collision.describe()}")
        process_line = collision.info.get('PROCESS')
        if process_line:
            print(f"      {process_line}")

    energies = np.array([0.1, 1.0, 12.0, 20.0, 100.0, 1000.0])
    total = collection.total_cross_section_at(energies)
    ionization = collection.total_cross_section_of_kind_at(ProcessType.IONIZATION, energies)

    print(f"\n{'E (eV)':>10} {'total (m^2)':>14} {'ionization (m^2)':>18}")
    for e, t, i in zip(energies, total, ionization):
        print(f"{e:>10g} {t:>14.4e} {i:>18.4e}")

    surplus = collection.surplus_cross_section()
    grid = np.logspace(-3, 4, 1000)
    print(f"\nSurplus cross section: {surplus:.4e} m^2")
    print(f"Max total on grid:     {collection.total_cross_section_at(grid).max():.4e} m^2")

    import matplotlib
    matplotlib.use('Agg')
    from lxcat_xs.visualization import plot_collection

    out = Path('lxcat_cross_sections.png')
    plot_collection(collection, surplus=True, save_path=out).close()
    print(f"\n[OK] Plot saved to {out}")


if __name__ == '__main__':
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_FILE)
